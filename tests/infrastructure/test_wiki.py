"""Tests for wiki summary page rendering."""

from adrscope.domain.document import Document
from adrscope.domain.frontmatter import Frontmatter
from adrscope.domain.stats import compute_statistics
from adrscope.domain.status import Status
from adrscope.infrastructure.wiki import (
    BY_CATEGORY_PAGE,
    BY_STATUS_PAGE,
    INDEX_PAGE,
    STATISTICS_PAGE,
    TIMELINE_PAGE,
    render_by_category,
    render_by_status,
    render_index,
    render_pages,
    render_statistics,
    render_timeline,
    status_badge,
    status_emoji,
    truncate,
)


def _doc(doc_id: str, **fields: object) -> Document:
    return Document(
        id=doc_id,
        filename=f"{doc_id}.md",
        frontmatter=Frontmatter.model_validate(fields),
    )


def _docs() -> list[Document]:
    return [
        _doc("A", title="Use PostgreSQL", status="accepted", category="database",
             description="Primary datastore", created="2024-01-15", author="alice"),
        _doc("B", title="Adopt Redis", status="accepted", category="performance",
             description="x" * 100, created="2024-01-20"),
        _doc("C", title="Event sourcing", status="superseded", created="2023-11-05"),
        _doc("D", title="Undated idea"),
    ]


class TestHelpers:
    def test_truncate(self) -> None:
        assert truncate("short") == "short"
        assert truncate("x" * 80) == "x" * 80
        cut = truncate("x" * 81)
        assert len(cut) == 80
        assert cut.endswith("...")

    def test_badge_and_emoji(self) -> None:
        assert status_badge(Status.ACCEPTED) == "`accepted`"
        assert status_emoji(Status.ACCEPTED) == "✅"
        assert all(status_emoji(s) for s in Status)


class TestIndexPage:
    def test_table_rows(self) -> None:
        page = render_index(_docs())
        assert page.startswith("# ADR Index\n")
        assert "| A | [Use PostgreSQL](A.md) | `accepted` | database | 2024-01-15 |" in page
        assert "| D | [Undated idea](D.md) | `proposed` |  | - |" in page

    def test_viewer_link(self) -> None:
        page = render_index(_docs(), "https://example.org/adrs.html")
        assert "> [View Interactive ADRScope Viewer](https://example.org/adrs.html)" in page
        assert "Viewer" not in render_index(_docs())


class TestGroupedPages:
    def test_by_status_omits_empty_groups(self) -> None:
        page = render_by_status(_docs())
        assert "## ✅ accepted" in page
        assert "deprecated" not in page
        assert page.index("proposed") < page.index("accepted") < page.index("superseded")
        assert "- [Use PostgreSQL](A.md) - Primary datastore" in page

    def test_by_category_sorted_with_uncategorized(self) -> None:
        page = render_by_category(_docs())
        headings = [line for line in page.splitlines() if line.startswith("## ")]
        assert headings == ["## Uncategorized", "## database", "## performance"]
        assert ("x" * 77 + "...") in page


class TestTimeline:
    def test_month_sections_newest_first(self) -> None:
        page = render_timeline(_docs())
        headings = [line for line in page.splitlines() if line.startswith("## ")]
        assert headings == ["## January 2024", "## November 2023", "## Undated"]
        assert page.index("Adopt Redis") < page.index("Use PostgreSQL")
        assert "- **2024-01-20** [Adopt Redis](B.md) `accepted`" in page
        assert "- [Undated idea](D.md) `proposed`" in page

    def test_no_undated_section_when_all_dated(self) -> None:
        assert "Undated" not in render_timeline(_docs()[:3])


class TestStatisticsPage:
    def test_sections(self) -> None:
        page = render_statistics(compute_statistics(_docs()))
        assert "**Total ADRs:** 4" in page
        assert "- ✅ accepted: 2" in page
        assert "- database: 1" in page
        assert "- alice: 1" in page
        assert "- **Earliest:** 2023-11-05" in page


class TestRenderPages:
    def test_fixed_names_and_order(self) -> None:
        names = [name for name, _ in render_pages(_docs())]
        assert names == [
            INDEX_PAGE,
            BY_STATUS_PAGE,
            BY_CATEGORY_PAGE,
            TIMELINE_PAGE,
            STATISTICS_PAGE,
        ]

    def test_pages_end_with_single_newline(self) -> None:
        for _, content in render_pages(_docs()):
            assert content.endswith("\n")
            assert not content.endswith("\n\n")
