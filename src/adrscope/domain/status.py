"""Decision record lifecycle status.

Four canonical values, in the fixed order used by every grouped view:
proposed, accepted, deprecated, superseded.  Parsing is case-insensitive;
anything else is handled leniently by :mod:`adrscope.domain.frontmatter`.
"""

from __future__ import annotations

from enum import StrEnum


class Status(StrEnum):
    """Lifecycle state of a decision record."""

    PROPOSED = "proposed"
    ACCEPTED = "accepted"
    DEPRECATED = "deprecated"
    SUPERSEDED = "superseded"

    @property
    def color(self) -> str:
        """Hex display color used by the viewer."""
        return _STATUS_COLORS[self]

    @property
    def css_class(self) -> str:
        return f"status-{self.value}"

    @classmethod
    def parse(cls, raw: object) -> Status | None:
        """Return the canonical status for *raw*, or None if unrecognized."""
        if raw is None:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


DEFAULT_STATUS = Status.PROPOSED

# Canonical display order (grouped pages, facets, statistics).
STATUS_ORDER: tuple[Status, ...] = (
    Status.PROPOSED,
    Status.ACCEPTED,
    Status.DEPRECATED,
    Status.SUPERSEDED,
)

_STATUS_COLORS: dict[Status, str] = {
    Status.PROPOSED: "#f59e0b",
    Status.ACCEPTED: "#10b981",
    Status.DEPRECATED: "#ef4444",
    Status.SUPERSEDED: "#6b7280",
}
