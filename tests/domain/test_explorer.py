"""Tests for the explorer engine: filters, sorting, layout, debounce, selection."""

import itertools
import math

import pytest

from adrscope.domain.document import Document
from adrscope.domain.explorer import (
    EMPTY_STATE_MESSAGE,
    LAYOUT_RADIUS,
    NODE_RADIUS,
    SEARCH_DEBOUNCE_SECONDS,
    ExplorerState,
    FilterSpec,
    Point,
    SearchDebouncer,
    SortDirection,
    SortField,
    SortSpec,
    ViewMode,
    apply_filters,
    circular_layout,
    layout_segments,
    sort_documents,
)
from adrscope.domain.frontmatter import Frontmatter
from adrscope.domain.graph import Edge


def _doc(doc_id: str, body: str = "", **fields: object) -> Document:
    return Document(
        id=doc_id,
        filename=f"{doc_id}.md",
        frontmatter=Frontmatter.model_validate(fields),
        body_narrative=body,
    )


def _docs() -> list[Document]:
    return [
        _doc("A", "relational store", title="Use PostgreSQL", status="accepted",
             category="database", author="alice", project="core", tags=["sql", "storage"],
             technologies=["postgres"], created="2024-01-15", updated="2024-03-01"),
        _doc("B", "cache layer", title="adopt Redis", status="accepted",
             category="performance", author="bob", project="core", tags=["cache"],
             technologies=["redis", "postgres"], created="2024-02-20"),
        _doc("C", "ledger", title="Event sourcing", status="proposed",
             category="architecture", author="alice", project="billing",
             tags=["events", "storage"], created="2023-11-05"),
        _doc("D", "no dates here", title="Draft idea", status="deprecated"),
    ]


def _ids(docs: list[Document] | tuple[Document, ...]) -> list[str]:
    return [d.id for d in docs]


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


# ── Filtering ────────────────────────────────────────────────────────


class TestFilters:
    def test_empty_spec_matches_everything(self) -> None:
        assert FilterSpec().is_empty()
        assert _ids(apply_filters(_docs(), FilterSpec())) == ["A", "B", "C", "D"]

    @pytest.mark.parametrize(
        ("search", "expected"),
        [
            ("postgres", ["A", "B"]),  # title and technologies
            ("LEDGER", ["C"]),  # body, case-insensitive
            ("storage", ["A", "C"]),  # tags
            ("  redis ", ["B"]),
            ("nothing-matches", []),
        ],
    )
    def test_search(self, search: str, expected: list[str]) -> None:
        assert _ids(apply_filters(_docs(), FilterSpec(search=search))) == expected

    def test_status_any_of(self) -> None:
        spec = FilterSpec(statuses=frozenset({"proposed", "deprecated"}))
        assert _ids(apply_filters(_docs(), spec)) == ["C", "D"]

    def test_exact_single_valued(self) -> None:
        assert _ids(apply_filters(_docs(), FilterSpec(category="database"))) == ["A"]
        assert _ids(apply_filters(_docs(), FilterSpec(author="alice"))) == ["A", "C"]
        assert _ids(apply_filters(_docs(), FilterSpec(project="billing"))) == ["C"]
        assert _ids(apply_filters(_docs(), FilterSpec(category="Database"))) == []

    def test_tags_require_all_selected(self) -> None:
        spec = FilterSpec(tags=frozenset({"sql", "storage"}))
        assert _ids(apply_filters(_docs(), spec)) == ["A"]

    def test_technologies(self) -> None:
        spec = FilterSpec(technologies=frozenset({"postgres"}))
        assert _ids(apply_filters(_docs(), spec)) == ["A", "B"]

    def test_date_range_inclusive(self) -> None:
        spec = FilterSpec(date_from="2024-01-15", date_to="2024-02-20")
        assert _ids(apply_filters(_docs(), spec)) == ["A", "B"]

    def test_undated_excluded_by_any_bound(self) -> None:
        assert "D" not in _ids(apply_filters(_docs(), FilterSpec(date_from="1900-01-01")))
        assert "D" not in _ids(apply_filters(_docs(), FilterSpec(date_to="2999-12-31")))

    def test_idempotent(self) -> None:
        spec = FilterSpec(search="storage", author="alice")
        once = apply_filters(_docs(), spec)
        assert _ids(apply_filters(once, spec)) == _ids(once)

    def test_conjunction_is_order_independent(self) -> None:
        docs = _docs()
        single = [
            FilterSpec(search="storage"),
            FilterSpec(author="alice"),
            FilterSpec(statuses=frozenset({"accepted"})),
        ]
        combined = FilterSpec(
            search="storage", author="alice", statuses=frozenset({"accepted"})
        )
        expected = _ids(apply_filters(docs, combined))
        assert expected == ["A"]
        for order in itertools.permutations(single):
            result = docs
            for spec in order:
                result = apply_filters(result, spec)
            assert _ids(result) == expected

    def test_to_dict_only_active(self) -> None:
        spec = FilterSpec(search=" Foo ", tags=frozenset({"b", "a"}), author="x")
        assert spec.to_dict() == {"search": "foo", "tags": ["a", "b"], "author": "x"}


# ── Sorting ──────────────────────────────────────────────────────────


class TestSorting:
    def test_default_is_updated_desc(self) -> None:
        # updated falls back to created; undated sorts as ""
        assert _ids(sort_documents(_docs(), SortSpec())) == ["A", "B", "C", "D"]

    def test_title_is_case_insensitive(self) -> None:
        spec = SortSpec(SortField.TITLE, SortDirection.ASC)
        assert _ids(sort_documents(_docs(), spec)) == ["B", "D", "C", "A"]

    def test_created_asc_missing_first(self) -> None:
        spec = SortSpec(SortField.CREATED, SortDirection.ASC)
        assert _ids(sort_documents(_docs(), spec)) == ["D", "C", "A", "B"]

    def test_stable_for_equal_keys(self) -> None:
        spec = SortSpec(SortField.STATUS, SortDirection.ASC)
        assert _ids(sort_documents(_docs(), spec)) == ["A", "B", "D", "C"]

    def test_parse_and_str(self) -> None:
        spec = SortSpec.parse("title-desc")
        assert spec == SortSpec(SortField.TITLE, SortDirection.DESC)
        assert str(spec) == "title-desc"
        assert SortSpec.parse("author").direction is SortDirection.ASC

    def test_parse_rejects_unknown_field(self) -> None:
        with pytest.raises(ValueError):
            SortSpec.parse("colour-asc")


# ── Layout ───────────────────────────────────────────────────────────


class TestCircularLayout:
    def test_constants(self) -> None:
        assert LAYOUT_RADIUS == 200.0
        assert NODE_RADIUS == 20.0

    def test_evenly_spaced_on_circle(self) -> None:
        positions = circular_layout(["a", "b", "c", "d"])
        assert positions["a"].x == pytest.approx(200.0)
        assert positions["a"].y == pytest.approx(0.0)
        assert positions["b"].x == pytest.approx(0.0, abs=1e-9)
        assert positions["b"].y == pytest.approx(200.0)
        assert positions["c"].x == pytest.approx(-200.0)
        for p in positions.values():
            assert math.hypot(p.x, p.y) == pytest.approx(LAYOUT_RADIUS)

    def test_center_offset(self) -> None:
        positions = circular_layout(["only"], center=Point(300, 250))
        assert positions["only"] == Point(500.0, 250.0)

    def test_empty(self) -> None:
        assert circular_layout([]) == {}

    def test_segments_skip_unplaced(self) -> None:
        positions = circular_layout(["a", "b"])
        segments = layout_segments([Edge("a", "b"), Edge("a", "z")], positions)
        assert len(segments) == 1
        assert segments[0][1] == positions["a"]


# ── Debounce ─────────────────────────────────────────────────────────


class TestSearchDebouncer:
    def test_default_delay(self) -> None:
        assert SEARCH_DEBOUNCE_SECONDS == 0.3

    def test_commits_after_quiet_period(self) -> None:
        clock = FakeClock()
        debouncer = SearchDebouncer(clock=clock)
        debouncer.keystroke("Post")
        clock.now = 0.29
        assert debouncer.poll() is None
        clock.now = 0.3
        assert debouncer.poll() == "post"
        assert not debouncer.pending

    def test_keystroke_restarts_timer(self) -> None:
        clock = FakeClock()
        debouncer = SearchDebouncer(clock=clock)
        debouncer.keystroke("p")
        clock.now = 0.2
        debouncer.keystroke("po")
        clock.now = 0.4
        assert debouncer.poll() is None
        clock.now = 0.6
        assert debouncer.poll() == "po"

    def test_poll_without_input(self) -> None:
        assert SearchDebouncer(clock=FakeClock()).poll() is None


# ── State + selection ────────────────────────────────────────────────


class TestExplorerState:
    def test_initial_state(self) -> None:
        state = ExplorerState(documents=tuple(_docs()))
        assert state.mode is ViewMode.NO_SELECTION
        assert state.result_count_label() == "4 records"
        assert state.empty_message is None

    def test_filtered_label(self) -> None:
        state = ExplorerState(documents=tuple(_docs()))
        state.update_filters(author="alice")
        assert state.result_count_label() == "2 of 4 records"

    def test_empty_state_message(self) -> None:
        state = ExplorerState(documents=tuple(_docs()))
        state.update_filters(search="zzz")
        assert state.results == ()
        assert state.empty_message == EMPTY_STATE_MESSAGE

    def test_select_and_navigate(self) -> None:
        state = ExplorerState(documents=tuple(_docs()))
        assert state.select("B")
        assert state.mode is ViewMode.DETAIL_OPEN
        assert state.selected is not None and state.selected.id == "B"
        assert state.navigate_next()
        assert state.selected.id == "C"
        assert state.navigate_prev()
        assert state.navigate_prev()
        assert state.selected.id == "A"
        assert not state.can_prev()
        assert not state.navigate_prev()

    def test_select_unknown(self) -> None:
        state = ExplorerState(documents=tuple(_docs()))
        assert not state.select("nope")
        assert state.mode is ViewMode.NO_SELECTION

    def test_last_record_cannot_go_next(self) -> None:
        state = ExplorerState(documents=tuple(_docs()))
        state.select("D")
        assert not state.can_next()
        assert not state.navigate_next()

    def test_close(self) -> None:
        state = ExplorerState(documents=tuple(_docs()))
        state.select("A")
        state.close()
        assert state.mode is ViewMode.NO_SELECTION
        assert state.selected is None
        assert not state.can_next()

    def test_selection_reresolved_after_sort(self) -> None:
        state = ExplorerState(documents=tuple(_docs()))
        state.select("A")
        state.set_sort(SortSpec(SortField.TITLE, SortDirection.ASC))
        assert state.selected_index == 3
        assert state.selected is not None and state.selected.id == "A"

    def test_selection_survives_filtering_out(self) -> None:
        state = ExplorerState(documents=tuple(_docs()))
        state.select("A")
        state.update_filters(author="bob")
        assert state.mode is ViewMode.DETAIL_OPEN
        assert state.selected_index == -1
        assert state.selected is None
        state.clear_filters()
        assert state.selected is not None and state.selected.id == "A"

    def test_debounced_search(self) -> None:
        clock = FakeClock()
        state = ExplorerState(documents=tuple(_docs()), debouncer=SearchDebouncer(clock=clock))
        state.type_search("Ledger")
        assert not state.tick()
        assert len(state.results) == 4
        clock.now = 1.0
        assert state.tick()
        assert _ids(state.results) == ["C"]
        assert state.filters.search == "ledger"
