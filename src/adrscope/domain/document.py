"""Document — one parsed decision record.

Constructed once per source file per run and immutable thereafter.
The id is derived from the file stem and is unique within a run.
"""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Any

from pydantic import BaseModel, Field

from adrscope.domain.frontmatter import Frontmatter
from adrscope.domain.status import Status

_MARKDOWN_SUFFIX = ".md"


class MalformedDocumentError(ValueError):
    """The header block is absent or cannot be decoded into :class:`Frontmatter`."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


def document_id_from_path(path: str | PurePath) -> str:
    """Derive a document id from a file path (the file stem)."""
    return PurePath(path).stem


def reference_to_id(reference: str) -> str:
    """Resolve a filename-style ``related`` entry to a candidate document id.

    ``0003-use-postgres.md`` -> ``0003-use-postgres``; a directory prefix is
    dropped so ``../other/0004.md`` -> ``0004``.
    """
    name = reference.strip().replace("\\", "/").rsplit("/", 1)[-1]
    if name.lower().endswith(_MARKDOWN_SUFFIX):
        name = name[: -len(_MARKDOWN_SUFFIX)]
    return name


class Document(BaseModel):
    """A parsed decision record.

    Attributes:
        id: Stable identifier derived from the filename.
        filename: Original file name (used for links in summary pages).
        frontmatter: Typed header metadata.
        body_narrative: Plain-text extraction of the body, for search.
        body_markup: Rendered HTML form of the body, for display.
        body_markdown: Raw markdown body (not serialized).
        source_path: Path the document was read from (not serialized).
    """

    model_config = {"frozen": True}

    id: str
    filename: str
    frontmatter: Frontmatter = Field(default_factory=Frontmatter)
    body_narrative: str = ""
    body_markup: str = ""
    body_markdown: str = Field(default="", exclude=True)
    source_path: Path | None = Field(default=None, exclude=True)

    # --- Convenience accessors used throughout the pipeline ---

    @property
    def title(self) -> str:
        return self.frontmatter.title or ""

    @property
    def status(self) -> Status:
        return self.frontmatter.status

    @property
    def description(self) -> str:
        return self.frontmatter.description or ""

    @property
    def category(self) -> str:
        return self.frontmatter.category or ""

    def related_ids(self) -> list[str]:
        """Candidate target ids for every ``related`` entry, in declared order."""
        return [reference_to_id(ref) for ref in self.frontmatter.related if ref.strip()]

    def to_record(self) -> dict[str, Any]:
        """Serialize as a presentation-model record."""
        return {
            "id": self.id,
            "filename": self.filename,
            "frontmatter": self.frontmatter.to_dict(),
            "body_markup": self.body_markup,
            "body_narrative": self.body_narrative,
        }
