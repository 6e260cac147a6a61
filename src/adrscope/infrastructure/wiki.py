"""Markdown summary pages for a GitHub-style wiki.

Each page is plain field interpolation over the parsed documents; no
templating engine is involved.  Page order and file names are fixed so a
wiki sidebar can link to them.
"""

from __future__ import annotations

import calendar
from collections.abc import Sequence

from adrscope.domain.document import Document
from adrscope.domain.stats import Statistics, compute_statistics, top_n
from adrscope.domain.status import STATUS_ORDER, Status

INDEX_PAGE = "ADR-Index.md"
BY_STATUS_PAGE = "ADR-By-Status.md"
BY_CATEGORY_PAGE = "ADR-By-Category.md"
TIMELINE_PAGE = "ADR-Timeline.md"
STATISTICS_PAGE = "ADR-Statistics.md"

UNCATEGORIZED = "Uncategorized"
DESCRIPTION_LIMIT = 80

_STATUS_EMOJI: dict[Status, str] = {
    Status.PROPOSED: "\U0001f7e1",
    Status.ACCEPTED: "✅",
    Status.DEPRECATED: "\U0001f534",
    Status.SUPERSEDED: "⚪",
}


def status_emoji(status: Status) -> str:
    return _STATUS_EMOJI[status]


def status_badge(status: Status) -> str:
    return f"`{status}`"


def truncate(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """Cut *text* to *limit* characters, ending in ``...`` when shortened."""
    if len(text) <= limit:
        return text
    return text[: max(limit - 3, 0)] + "..."


def _page(lines: list[str]) -> str:
    return "\n".join(lines).rstrip("\n") + "\n"


def render_index(documents: Sequence[Document], pages_url: str | None = None) -> str:
    lines = ["# ADR Index", ""]
    if pages_url:
        lines += [f"> [View Interactive ADRScope Viewer]({pages_url})", ""]
    lines.append("| ID | Title | Status | Category | Created |")
    lines.append("|:---|:------|:------:|:---------|:--------|")
    for doc in documents:
        created = doc.frontmatter.created.isoformat() if doc.frontmatter.created else "-"
        lines.append(
            f"| {doc.id} | [{doc.title}]({doc.filename}) | {status_badge(doc.status)} "
            f"| {doc.category} | {created} |"
        )
    return _page(lines)


def render_by_status(documents: Sequence[Document]) -> str:
    """Groups in fixed status order; empty groups are omitted."""
    lines = ["# ADRs by Status", ""]
    for status in STATUS_ORDER:
        group = [d for d in documents if d.status is status]
        if not group:
            continue
        lines += [f"## {status_emoji(status)} {status}", ""]
        lines.extend(f"- [{d.title}]({d.filename}) - {d.description}" for d in group)
        lines.append("")
    return _page(lines)


def render_by_category(documents: Sequence[Document]) -> str:
    lines = ["# ADRs by Category", ""]
    groups: dict[str, list[Document]] = {}
    for doc in documents:
        groups.setdefault(doc.category or UNCATEGORIZED, []).append(doc)
    for category in sorted(groups):
        lines += [f"## {category}", ""]
        lines.extend(
            f"- [{d.title}]({d.filename}) {status_badge(d.status)} - {truncate(d.description)}"
            for d in groups[category]
        )
        lines.append("")
    return _page(lines)


def render_timeline(documents: Sequence[Document]) -> str:
    """Newest first, one section per month; undated records come last."""
    lines = ["# ADR Timeline", ""]
    dated = [(d.frontmatter.created, d) for d in documents if d.frontmatter.created is not None]
    undated = [d for d in documents if d.frontmatter.created is None]
    dated.sort(key=lambda pair: pair[0], reverse=True)

    current: tuple[int, int] | None = None
    for created, doc in dated:
        month = (created.year, created.month)
        if month != current:
            if current is not None:
                lines.append("")
            current = month
            lines += [f"## {calendar.month_name[created.month]} {created.year}", ""]
        lines.append(
            f"- **{created.isoformat()}** [{doc.title}]({doc.filename}) "
            f"{status_badge(doc.status)}"
        )
    if undated:
        if dated:
            lines.append("")
        lines += ["## Undated", ""]
        lines.extend(f"- [{d.title}]({d.filename}) {status_badge(d.status)}" for d in undated)
    return _page(lines)


def render_statistics(stats: Statistics) -> str:
    lines = ["# ADR Statistics", "", f"**Total ADRs:** {stats.total_count}", ""]
    lines += ["## By Status", ""]
    for status in STATUS_ORDER:
        lines.append(f"- {status_emoji(status)} {status}: {stats.by_status.get(str(status), 0)}")
    lines.append("")

    if stats.by_category:
        lines += ["## By Category", ""]
        lines.extend(f"- {k}: {v}" for k, v in top_n(stats.by_category, len(stats.by_category)))
        lines.append("")

    if stats.by_author:
        lines += ["## By Author", ""]
        lines.extend(f"- {k}: {v}" for k, v in top_n(stats.by_author, 10))
        lines.append("")

    if stats.earliest_date and stats.latest_date:
        lines += ["## Date Range", ""]
        lines.append(f"- **Earliest:** {stats.earliest_date.isoformat()}")
        lines.append(f"- **Latest:** {stats.latest_date.isoformat()}")
    return _page(lines)


def render_pages(
    documents: Sequence[Document], *, pages_url: str | None = None
) -> list[tuple[str, str]]:
    """All summary pages as ``(filename, content)`` pairs, in sidebar order."""
    return [
        (INDEX_PAGE, render_index(documents, pages_url)),
        (BY_STATUS_PAGE, render_by_status(documents)),
        (BY_CATEGORY_PAGE, render_by_category(documents)),
        (TIMELINE_PAGE, render_timeline(documents)),
        (STATISTICS_PAGE, render_statistics(compute_statistics(documents))),
    ]
