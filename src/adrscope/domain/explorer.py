"""Explorer engine — filtering, sorting, graph layout, and selection.

The same semantics ship inside the generated viewer script; this module is
the reference implementation used by ``adrscope query`` and the tests.

State is explicit: an :class:`ExplorerState` owns the active filter and
sort specifications plus the selection pointer, and every event handler
ends in a single :meth:`ExplorerState.recompute` so no partial state is
ever observable.

Filtering is conjunctive.  Each active predicate is independent, so the
result equals the intersection of every predicate's matches whatever the
evaluation order, and re-applying a specification changes nothing.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from adrscope.domain.document import Document
    from adrscope.domain.graph import Edge

SEARCH_DEBOUNCE_SECONDS = 0.3
LAYOUT_RADIUS = 200.0
NODE_RADIUS = 20.0
EMPTY_STATE_MESSAGE = "No ADRs match the current filters"

type Predicate = Callable[[Document], bool]


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


def searchable_text(document: Document) -> str:
    """Lower-cased haystack for free-text search."""
    fm = document.frontmatter
    parts = [
        fm.title or "",
        fm.description or "",
        " ".join(fm.tags),
        " ".join(fm.technologies),
        document.body_narrative,
    ]
    return " ".join(parts).lower()


def _created_iso(document: Document) -> str | None:
    created = document.frontmatter.created
    return created.isoformat() if created is not None else None


@dataclass(frozen=True)
class FilterSpec:
    """Independently-specified filter predicates; empty values are no-ops.

    Dates are ISO ``YYYY-MM-DD`` strings compared inclusively against
    ``created``.  A document without ``created`` never satisfies a bound.
    """

    search: str = ""
    statuses: frozenset[str] = frozenset()
    category: str = ""
    author: str = ""
    project: str = ""
    tags: frozenset[str] = frozenset()
    technologies: frozenset[str] = frozenset()
    date_from: str = ""
    date_to: str = ""

    @property
    def query(self) -> str:
        return self.search.strip().lower()

    def is_empty(self) -> bool:
        return not self.predicates()

    def predicates(self) -> list[Predicate]:
        """The active predicates, one per non-empty filter."""
        preds: list[Predicate] = []
        if query := self.query:
            preds.append(lambda d: query in searchable_text(d))
        if self.statuses:
            statuses = self.statuses
            preds.append(lambda d: str(d.status) in statuses)
        if self.category:
            category = self.category
            preds.append(lambda d: d.frontmatter.category == category)
        if self.author:
            author = self.author
            preds.append(lambda d: d.frontmatter.author == author)
        if self.project:
            project = self.project
            preds.append(lambda d: d.frontmatter.project == project)
        if self.tags:
            tags = self.tags
            preds.append(lambda d: tags.issubset(d.frontmatter.tags))
        if self.technologies:
            techs = self.technologies
            preds.append(lambda d: techs.issubset(d.frontmatter.technologies))
        if self.date_from:
            lower = self.date_from
            preds.append(lambda d: (c := _created_iso(d)) is not None and c >= lower)
        if self.date_to:
            upper = self.date_to
            preds.append(lambda d: (c := _created_iso(d)) is not None and c <= upper)
        return preds

    def matches(self, document: Document) -> bool:
        return all(pred(document) for pred in self.predicates())

    def to_dict(self) -> dict[str, Any]:
        """Non-empty filters only, in a JSON-friendly form."""
        data: dict[str, Any] = {}
        if self.query:
            data["search"] = self.query
        for key in ("statuses", "tags", "technologies"):
            values = getattr(self, key)
            if values:
                data[key] = sorted(values)
        for key in ("category", "author", "project", "date_from", "date_to"):
            value = getattr(self, key)
            if value:
                data[key] = value
        return data


def apply_filters(documents: Sequence[Document], spec: FilterSpec) -> list[Document]:
    """Documents matching every active predicate, in input order."""
    preds = spec.predicates()
    return [d for d in documents if all(pred(d) for pred in preds)]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


class SortField(StrEnum):
    TITLE = "title"
    STATUS = "status"
    CATEGORY = "category"
    AUTHOR = "author"
    CREATED = "created"
    UPDATED = "updated"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    field: SortField = SortField.UPDATED
    direction: SortDirection = SortDirection.DESC

    @classmethod
    def parse(cls, value: str) -> SortSpec:
        """Parse the viewer's ``<field>-<direction>`` form, e.g. ``title-asc``."""
        name, _, direction = value.partition("-")
        return cls(
            field=SortField(name),
            direction=SortDirection(direction) if direction else SortDirection.ASC,
        )

    def __str__(self) -> str:
        return f"{self.field}-{self.direction}"


def sort_key(document: Document, sort_field: SortField) -> str:
    """Comparable string for *sort_field*; missing values sort as ``""``."""
    fm = document.frontmatter
    match sort_field:
        case SortField.TITLE:
            return (fm.title or "").lower()
        case SortField.STATUS:
            return str(fm.status)
        case SortField.CATEGORY:
            return fm.category or ""
        case SortField.AUTHOR:
            return fm.author or ""
        case SortField.CREATED:
            return _created_iso(document) or ""
        case SortField.UPDATED:
            stamp = fm.updated or fm.created
            return stamp.isoformat() if stamp is not None else ""


def sort_documents(documents: Sequence[Document], spec: SortSpec) -> list[Document]:
    """Single-key stable sort; equal keys keep collection order."""
    return sorted(
        documents,
        key=lambda d: sort_key(d, spec.field),
        reverse=spec.direction == SortDirection.DESC,
    )


# ---------------------------------------------------------------------------
# Graph layout
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Point:
    x: float
    y: float


def circular_layout(
    node_ids: Sequence[str],
    *,
    center: Point = Point(0.0, 0.0),
    radius: float = LAYOUT_RADIUS,
) -> dict[str, Point]:
    """Place nodes evenly on a circle: node *i* sits at angle ``2*pi*i/N``."""
    count = len(node_ids)
    positions: dict[str, Point] = {}
    for i, node_id in enumerate(node_ids):
        angle = 2 * math.pi * i / count
        positions[node_id] = Point(
            center.x + math.cos(angle) * radius,
            center.y + math.sin(angle) * radius,
        )
    return positions


def layout_segments(
    edges: Sequence[Edge], positions: dict[str, Point]
) -> list[tuple[Edge, Point, Point]]:
    """Straight segments for edges whose endpoints are both placed."""
    return [
        (edge, positions[edge.source], positions[edge.target])
        for edge in edges
        if edge.source in positions and edge.target in positions
    ]


# ---------------------------------------------------------------------------
# Debounced search input
# ---------------------------------------------------------------------------


class SearchDebouncer:
    """Commit a search query only after *delay* seconds without keystrokes.

    Cooperative: nothing runs in the background.  The event loop calls
    :meth:`poll` and applies whatever it returns.  Each keystroke cancels
    and restarts the timer.
    """

    def __init__(
        self,
        delay: float = SEARCH_DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.delay = delay
        self._clock = clock
        self._pending: str | None = None
        self._deadline: float = 0.0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def keystroke(self, text: str) -> None:
        self._pending = text
        self._deadline = self._clock() + self.delay

    def poll(self) -> str | None:
        """Return the committed query once the delay has elapsed, else None."""
        if self._pending is None or self._clock() < self._deadline:
            return None
        return self.flush()

    def flush(self) -> str | None:
        text, self._pending = self._pending, None
        return text.strip().lower() if text is not None else None


# ---------------------------------------------------------------------------
# Explorer state + selection state machine
# ---------------------------------------------------------------------------


class ViewMode(StrEnum):
    NO_SELECTION = "no-selection"
    DETAIL_OPEN = "detail-open"


@dataclass
class ExplorerState:
    """Mutable view state over an immutable document list.

    Selection is held by id.  After any filter or sort change the id is
    re-resolved against the new result list; the detail view stays open
    even if the id dropped out of the results (``selected_index == -1``).
    """

    documents: tuple[Document, ...]
    filters: FilterSpec = field(default_factory=FilterSpec)
    sort: SortSpec = field(default_factory=SortSpec)
    selected_id: str | None = None
    results: tuple[Document, ...] = ()
    selected_index: int = -1
    debouncer: SearchDebouncer = field(default_factory=SearchDebouncer)

    def __post_init__(self) -> None:
        self.documents = tuple(self.documents)
        self.recompute()

    # --- derived view ---

    @property
    def mode(self) -> ViewMode:
        return ViewMode.NO_SELECTION if self.selected_id is None else ViewMode.DETAIL_OPEN

    @property
    def selected(self) -> Document | None:
        if self.selected_index < 0:
            return None
        return self.results[self.selected_index]

    @property
    def empty_message(self) -> str | None:
        return EMPTY_STATE_MESSAGE if not self.results else None

    def result_count_label(self) -> str:
        total, shown = len(self.documents), len(self.results)
        if shown == total:
            return f"{total} records"
        return f"{shown} of {total} records"

    def can_prev(self) -> bool:
        return self.mode == ViewMode.DETAIL_OPEN and self.selected_index > 0

    def can_next(self) -> bool:
        if self.mode != ViewMode.DETAIL_OPEN:
            return False
        return 0 <= self.selected_index < len(self.results) - 1

    # --- the single recompute step ---

    def recompute(self) -> None:
        filtered = apply_filters(self.documents, self.filters)
        self.results = tuple(sort_documents(filtered, self.sort))
        self.selected_index = self._index_of(self.selected_id)

    def _index_of(self, doc_id: str | None) -> int:
        if doc_id is None:
            return -1
        for idx, doc in enumerate(self.results):
            if doc.id == doc_id:
                return idx
        return -1

    # --- event handlers ---

    def set_filters(self, filters: FilterSpec) -> None:
        self.filters = filters
        self.recompute()

    def update_filters(self, **changes: Any) -> None:
        self.set_filters(replace(self.filters, **changes))

    def clear_filters(self) -> None:
        self.set_filters(FilterSpec())

    def set_sort(self, sort: SortSpec) -> None:
        self.sort = sort
        self.recompute()

    def type_search(self, text: str) -> None:
        """Keystroke in the search box; applied later by :meth:`tick`."""
        self.debouncer.keystroke(text)

    def tick(self) -> bool:
        """Apply a debounced search if due; return whether results changed."""
        query = self.debouncer.poll()
        if query is None:
            return False
        self.update_filters(search=query)
        return True

    def select(self, doc_id: str) -> bool:
        """Open the detail view for *doc_id* if it is in the current results."""
        idx = self._index_of(doc_id)
        if idx < 0:
            return False
        self.selected_id = doc_id
        self.selected_index = idx
        return True

    def navigate_prev(self) -> bool:
        if not self.can_prev():
            return False
        return self.select(self.results[self.selected_index - 1].id)

    def navigate_next(self) -> bool:
        if not self.can_next():
            return False
        return self.select(self.results[self.selected_index + 1].id)

    def close(self) -> None:
        self.selected_id = None
        self.selected_index = -1
