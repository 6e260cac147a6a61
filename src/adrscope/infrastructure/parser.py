"""Document parser — header split, typed frontmatter, and body rendering.

The header block must open on the first line with ``---`` and close with a
second ``---`` line.  Anything else is a :class:`MalformedDocumentError`
for that one document; callers decide whether to continue with siblings.

Bodies are rendered with markdown-it-py (CommonMark plus tables and
strikethrough).  The narrative text used for search is extracted from the
same token stream, skipping code blocks and collapsing whitespace.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from markdown_it import MarkdownIt
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from adrscope.domain.document import Document, MalformedDocumentError, document_id_from_path
from adrscope.domain.frontmatter import STATUS_WARNINGS_KEY, Frontmatter, StatusWarnings
from adrscope.infrastructure.filesystem import read_text

_FRONTMATTER_DELIMITER = "---"
_TEXT_TOKENS = frozenset({"text", "code_inline"})
_BREAK_TOKENS = frozenset({"softbreak", "hardbreak"})


def _new_yaml() -> YAML:
    """Create a fresh safe YAML loader.

    A new instance per call keeps parser state from leaking between
    documents (ruamel.yaml's YAML object is stateful).
    """
    return YAML(typ="safe", pure=True)


def _new_markdown() -> MarkdownIt:
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def split_frontmatter(
    content: str, *, path: str | Path = "<string>"
) -> tuple[dict[str, Any], str]:
    """Split *content* into ``(header_mapping, body)``.

    Handles both ``\\n`` and ``\\r\\n`` line endings.  An empty header
    (``---`` immediately followed by ``---``) yields an empty mapping.

    Raises:
        MalformedDocumentError: header missing, unterminated, not valid
            YAML, or not a mapping.
    """
    normalized = content.replace("\r\n", "\n")
    if normalized.startswith("\ufeff"):
        normalized = normalized[1:]
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        raise MalformedDocumentError(path, "missing frontmatter block")

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        raise MalformedDocumentError(path, "unterminated frontmatter block")

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\n"):
        body = body[1:]

    try:
        data = _new_yaml().load(yaml_block)
    except (YAMLError, ValueError) as exc:
        # ruamel raises a bare ValueError for impossible timestamps (2024-13-45).
        raise MalformedDocumentError(path, f"invalid YAML in frontmatter: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedDocumentError(path, "frontmatter must be a mapping")
    return data, body


def render_markup(markdown: str, md: MarkdownIt | None = None) -> str:
    """Render markdown to HTML."""
    return (md or _new_markdown()).render(markdown)


def extract_narrative(markdown: str, md: MarkdownIt | None = None) -> str:
    """Plain text of *markdown* for search: no code blocks, single spaces."""
    parts: list[str] = []
    for token in (md or _new_markdown()).parse(markdown):
        if token.type != "inline" or not token.children:
            continue
        for child in token.children:
            if child.type in _TEXT_TOKENS:
                parts.append(child.content)
            elif child.type in _BREAK_TOKENS:
                parts.append(" ")
        parts.append(" ")
    return " ".join(" ".join(parts).split())


def _describe(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "frontmatter"
        problems.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "invalid frontmatter (" + "; ".join(problems) + ")"


# ---------------------------------------------------------------------------
# DocumentParser
# ---------------------------------------------------------------------------


class DocumentParser:
    """Parse raw document text into :class:`Document` objects.

    One parser per run: it owns the run's :class:`StatusWarnings`, so an
    unknown status value is reported once no matter how many documents
    carry it.
    """

    def __init__(self, status_warnings: StatusWarnings | None = None) -> None:
        if status_warnings is None:
            status_warnings = StatusWarnings()
        self.status_warnings = status_warnings
        self._md = _new_markdown()

    def parse(self, path: Path, content: str) -> Document:
        raw, body = split_frontmatter(content, path=path)
        try:
            frontmatter = Frontmatter.model_validate(
                raw, context={STATUS_WARNINGS_KEY: self.status_warnings}
            )
        except ValidationError as exc:
            raise MalformedDocumentError(path, _describe(exc)) from exc

        return Document(
            id=document_id_from_path(path),
            filename=path.name,
            frontmatter=frontmatter,
            body_narrative=extract_narrative(body, self._md),
            body_markup=render_markup(body, self._md),
            body_markdown=body,
            source_path=path,
        )

    def parse_file(self, path: Path) -> Document:
        try:
            content = read_text(path)
        except UnicodeDecodeError as exc:
            raise MalformedDocumentError(path, f"not valid UTF-8: {exc.reason}") from exc
        return self.parse(path, content)
