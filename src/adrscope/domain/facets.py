"""Facet aggregation — value -> count distributions for filter controls.

Counts are computed once over the full, unfiltered document list.  Values
keep discovery order; the status facet is seeded with all four canonical
values (count 0) in canonical order so the viewer always offers them.
Empty single-valued fields are skipped.  Multi-valued fields increment
once per distinct value per document.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from adrscope.domain.status import STATUS_ORDER

if TYPE_CHECKING:
    from adrscope.domain.document import Document

FACET_FIELDS: tuple[str, ...] = (
    "statuses",
    "categories",
    "tags",
    "authors",
    "projects",
    "technologies",
)


@dataclass(frozen=True)
class FacetValue:
    value: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "count": self.count}


def _ordered(counts: dict[str, int]) -> tuple[FacetValue, ...]:
    return tuple(FacetValue(value=k, count=v) for k, v in counts.items())


@dataclass(frozen=True)
class Facets:
    statuses: tuple[FacetValue, ...] = ()
    categories: tuple[FacetValue, ...] = ()
    tags: tuple[FacetValue, ...] = ()
    authors: tuple[FacetValue, ...] = ()
    projects: tuple[FacetValue, ...] = ()
    technologies: tuple[FacetValue, ...] = ()

    def get(self, name: str) -> tuple[FacetValue, ...]:
        if name not in FACET_FIELDS:
            msg = f"Unknown facet: {name!r}"
            raise KeyError(msg)
        return getattr(self, name)

    def count_of(self, name: str, value: str) -> int:
        for fv in self.get(name):
            if fv.value == value:
                return fv.count
        return 0

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {name: [fv.to_dict() for fv in self.get(name)] for name in FACET_FIELDS}


def _bump(counts: dict[str, int], value: str | None) -> None:
    if value is None or not value.strip():
        return
    counts[value] = counts.get(value, 0) + 1


def _bump_each(counts: dict[str, int], values: Iterable[str]) -> None:
    # dict.fromkeys keeps first-seen order while dropping repeats in one document
    for value in dict.fromkeys(values):
        _bump(counts, value)


def aggregate_facets(documents: Sequence[Document]) -> Facets:
    """Compute every facet in a single pass over *documents*."""
    statuses: dict[str, int] = {str(s): 0 for s in STATUS_ORDER}
    categories: dict[str, int] = {}
    tags: dict[str, int] = {}
    authors: dict[str, int] = {}
    projects: dict[str, int] = {}
    technologies: dict[str, int] = {}

    for doc in documents:
        fm = doc.frontmatter
        statuses[str(fm.status)] += 1
        _bump(categories, fm.category)
        _bump(authors, fm.author)
        _bump(projects, fm.project)
        _bump_each(tags, fm.tags)
        _bump_each(technologies, fm.technologies)

    return Facets(
        statuses=_ordered(statuses),
        categories=_ordered(categories),
        tags=_ordered(tags),
        authors=_ordered(authors),
        projects=_ordered(projects),
        technologies=_ordered(technologies),
    )


def sorted_by_count(values: Iterable[FacetValue]) -> list[FacetValue]:
    """Re-sort facet values by count descending, then value ascending."""
    return sorted(values, key=lambda fv: (-fv.count, fv.value))
