"""Summary statistics over a document collection."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any

from adrscope.domain.status import STATUS_ORDER

if TYPE_CHECKING:
    from adrscope.domain.document import Document


@dataclass(frozen=True)
class Statistics:
    total_count: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    by_category: dict[str, int] = field(default_factory=dict)
    by_author: dict[str, int] = field(default_factory=dict)
    by_tag: dict[str, int] = field(default_factory=dict)
    by_technology: dict[str, int] = field(default_factory=dict)
    by_project: dict[str, int] = field(default_factory=dict)
    by_year: dict[int, int] = field(default_factory=dict)
    earliest_date: date | None = None
    latest_date: date | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "total_count": self.total_count,
            "by_status": dict(self.by_status),
            "by_category": dict(self.by_category),
            "by_author": dict(self.by_author),
            "by_tag": dict(self.by_tag),
            "by_technology": dict(self.by_technology),
            "by_project": dict(self.by_project),
            "by_year": {str(k): v for k, v in sorted(self.by_year.items())},
        }
        if self.earliest_date is not None:
            data["earliest_date"] = self.earliest_date.isoformat()
        if self.latest_date is not None:
            data["latest_date"] = self.latest_date.isoformat()
        return data


def _inc(counts: dict[Any, int], key: Any) -> None:
    counts[key] = counts.get(key, 0) + 1


def compute_statistics(documents: Sequence[Document]) -> Statistics:
    by_status = {str(s): 0 for s in STATUS_ORDER}
    by_category: dict[str, int] = {}
    by_author: dict[str, int] = {}
    by_tag: dict[str, int] = {}
    by_technology: dict[str, int] = {}
    by_project: dict[str, int] = {}
    by_year: dict[int, int] = {}
    earliest: date | None = None
    latest: date | None = None

    for doc in documents:
        fm = doc.frontmatter
        _inc(by_status, str(fm.status))
        if fm.category:
            _inc(by_category, fm.category)
        if fm.author:
            _inc(by_author, fm.author)
        if fm.project:
            _inc(by_project, fm.project)
        for tag in fm.tags:
            _inc(by_tag, tag)
        for tech in fm.technologies:
            _inc(by_technology, tech)
        if fm.created is not None:
            _inc(by_year, fm.created.year)
            if earliest is None or fm.created < earliest:
                earliest = fm.created
            if latest is None or fm.created > latest:
                latest = fm.created

    return Statistics(
        total_count=len(documents),
        by_status=by_status,
        by_category=by_category,
        by_author=by_author,
        by_tag=by_tag,
        by_technology=by_technology,
        by_project=by_project,
        by_year=by_year,
        earliest_date=earliest,
        latest_date=latest,
    )


def top_n[K](counts: Mapping[K, int], n: int) -> list[tuple[K, int]]:
    """Top *n* entries by count descending; ties keep ascending key order."""
    return sorted(counts.items(), key=lambda kv: (-kv[1], str(kv[0])))[:n]


def _joined(counts: Mapping[str, int], n: int) -> str:
    return ", ".join(f"{k} ({v})" for k, v in top_n(counts, n))


def render_text(stats: Statistics) -> str:
    """Plain-text summary used by ``adrscope stats``."""
    lines = [
        "ADR Statistics",
        "==============",
        f"Total: {stats.total_count} records",
    ]
    status_parts = [
        f"{s} ({stats.by_status.get(str(s), 0)})"
        for s in STATUS_ORDER
        if stats.by_status.get(str(s), 0) > 0
    ]
    if status_parts:
        lines.append(f"By Status: {', '.join(status_parts)}")
    if stats.by_category:
        lines.append(f"By Category: {_joined(stats.by_category, 5)}")
    if stats.by_author:
        lines.append(f"Authors: {_joined(stats.by_author, 5)}")
    if stats.earliest_date and stats.latest_date:
        lines.append(f"Date Range: {stats.earliest_date} -> {stats.latest_date}")
    return "\n".join(lines) + "\n"


def _count_table(header: str, counts: Sequence[tuple[Any, int]]) -> list[str]:
    lines = [f"| {header} | Count |", "|" + "-" * (len(header) + 2) + "|-------|"]
    lines.extend(f"| {k} | {v} |" for k, v in counts)
    return lines


def render_markdown(stats: Statistics) -> str:
    """Markdown rendering with one count table per dimension."""
    lines = ["# ADR Statistics", "", f"**Total ADRs:** {stats.total_count}", ""]
    lines.append("## By Status")
    lines.append("")
    status_rows = [(str(s), stats.by_status.get(str(s), 0)) for s in STATUS_ORDER]
    lines.extend(_count_table("Status", status_rows))

    sections: list[tuple[str, str, Mapping[Any, int]]] = [
        ("By Category", "Category", stats.by_category),
        ("By Author", "Author", stats.by_author),
        ("By Project", "Project", stats.by_project),
        ("By Tag", "Tag", stats.by_tag),
        ("By Technology", "Technology", stats.by_technology),
    ]
    for title, header, counts in sections:
        if counts:
            lines.extend(["", f"## {title}", ""])
            lines.extend(_count_table(header, top_n(counts, len(counts))))

    if stats.by_year:
        lines.extend(["", "## By Year", ""])
        lines.extend(_count_table("Year", sorted(stats.by_year.items())))

    if stats.earliest_date and stats.latest_date:
        lines.extend(["", "## Date Range", ""])
        lines.append(f"- **Earliest:** {stats.earliest_date}")
        lines.append(f"- **Latest:** {stats.latest_date}")

    return "\n".join(lines) + "\n"
