"""Typed frontmatter schema with lenient status handling.

Attributes map 1:1 to YAML header keys.  Extraction succeeds for any
well-formed header: required-field checks are deferred to
:mod:`adrscope.domain.validation`.  The only defaulting applied here is
``status``, which is always one of the four canonical values after
validation.

Unknown status values are normalized to ``proposed``.  The one-warning-per-
value bookkeeping lives in a :class:`StatusWarnings` registry owned by the
caller's run and passed through pydantic's validation context::

    warnings = StatusWarnings()
    fm = Frontmatter.model_validate(data, context={STATUS_WARNINGS_KEY: warnings})
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from adrscope.domain.status import DEFAULT_STATUS, Status

logger = logging.getLogger(__name__)

STATUS_WARNINGS_KEY = "status_warnings"

# Fields whose absence can be reported by validation rules.
FIELD_NAMES: tuple[str, ...] = (
    "title",
    "status",
    "description",
    "type",
    "category",
    "tags",
    "created",
    "updated",
    "author",
    "project",
    "technologies",
    "audience",
    "related",
)


class StatusWarnings:
    """Run-scoped set of unknown status values that were already reported.

    Create one per generation run; never share across runs.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self.messages: list[str] = []

    def __contains__(self, value: object) -> bool:
        return value in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def note(self, value: str) -> bool:
        """Record *value*; return True only the first time it is seen."""
        if value in self._seen:
            return False
        self._seen.add(value)
        msg = f"Unknown status '{value}', defaulting to '{DEFAULT_STATUS}'"
        self.messages.append(msg)
        logger.debug(msg)
        return True


class Frontmatter(BaseModel):
    """Header metadata of a decision record."""

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "coerce_numbers_to_str": True,
    }

    title: str | None = None
    status: Status = DEFAULT_STATUS
    description: str | None = None
    doc_type: str | None = Field(default=None, alias="type")
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    created: date | None = None
    updated: date | None = None
    author: str | None = None
    project: str | None = None
    technologies: list[str] = Field(default_factory=list)
    audience: list[str] = Field(default_factory=list)
    related: list[str] = Field(default_factory=list)

    # Whether the header declared a non-empty status (before normalization).
    status_declared: bool = Field(default=False, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _mark_status_declared(cls, data: Any) -> Any:
        if isinstance(data, dict) and "status_declared" not in data:
            raw = data.get("status")
            data = {**data, "status_declared": raw is not None and str(raw).strip() != ""}
        return data

    @field_validator("status", mode="before")
    @classmethod
    def _lenient_status(cls, value: Any, info: ValidationInfo) -> Status:
        if isinstance(value, Status):
            return value
        if value is None or str(value).strip() == "":
            return DEFAULT_STATUS
        parsed = Status.parse(value)
        if parsed is not None:
            return parsed
        registry = (info.context or {}).get(STATUS_WARNINGS_KEY)
        if registry is None:
            registry = StatusWarnings()
        registry.note(str(value).strip().lower())
        return DEFAULT_STATUS

    @field_validator(
        "title", "description", "doc_type", "category", "author", "project", mode="before"
    )
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        # YAML resolves bare dates and booleans; the header author meant text.
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        if isinstance(value, bool):
            return str(value).lower()
        return value

    @field_validator("created", "updated", mode="before")
    @classmethod
    def _truncate_timestamp(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        if value == "":
            return None
        return value

    @field_validator("tags", "technologies", "audience", "related", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (str, int, float)):
            return [str(value)]
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value if item is not None]
        return value

    def has_value(self, name: str) -> bool:
        """Return whether field *name* carries a non-empty value.

        ``status`` counts as present only when the header declared one;
        the normalized default does not satisfy a required-field check.
        """
        if name == "status":
            return self.status_declared
        attr = "doc_type" if name == "type" else name
        value = getattr(self, attr, None)
        if value is None:
            return False
        if isinstance(value, str):
            return value.strip() != ""
        if isinstance(value, list):
            return len(value) > 0
        return True

    def to_dict(self) -> dict[str, Any]:
        """Serialize with header key names and ISO dates."""
        return self.model_dump(mode="json", by_alias=True)
