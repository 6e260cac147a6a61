"""Command: filter and sort records the way the viewer does."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from adrscope.commands._base import ScopeCommand, input_options
from adrscope.domain.explorer import FilterSpec, SortDirection, SortField, SortSpec
from adrscope.domain.status import STATUS_ORDER

if TYPE_CHECKING:
    from adrscope.commands._context import AppContext

_DATE = click.DateTime(formats=["%Y-%m-%d"])

# Text fields read naturally A-Z; date fields newest first.
_DATE_FIELDS = frozenset({SortField.CREATED, SortField.UPDATED})


def build_sort(field: str | None, ascending: bool | None) -> SortSpec:
    """Resolve ``--sort`` and ``--asc/--desc`` into a SortSpec."""
    if field is None and ascending is None:
        return SortSpec()
    sort_field = SortField(field) if field else SortField.UPDATED
    if ascending is None:
        ascending = sort_field not in _DATE_FIELDS
    direction = SortDirection.ASC if ascending else SortDirection.DESC
    return SortSpec(field=sort_field, direction=direction)


def _iso(value: datetime | None) -> str:
    return value.date().isoformat() if value else ""


@click.command(
    cls=ScopeCommand,
    examples="""\
  adrscope query --search postgres
  adrscope query --status accepted --status proposed --sort title
  adrscope query --tag security --from 2024-01-01 --to 2024-12-31
  adrscope query --category database --select adr-0003
  adrscope -q query --author alice""",
)
@input_options
@click.option("-s", "--search", default="", help="Case-insensitive full-text search.")
@click.option(
    "--status",
    "statuses",
    multiple=True,
    type=click.Choice([str(s) for s in STATUS_ORDER], case_sensitive=False),
    help="Keep records with any of these statuses (repeatable).",
)
@click.option("--category", default="", help="Exact category.")
@click.option("--author", default="", help="Exact author.")
@click.option("--project", default="", help="Exact project.")
@click.option("--tag", "tags", multiple=True, help="Require tag (repeatable, all must match).")
@click.option(
    "--tech",
    "technologies",
    multiple=True,
    help="Require technology (repeatable, all must match).",
)
@click.option("--from", "date_from", type=_DATE, default=None, help="Created on or after.")
@click.option("--to", "date_to", type=_DATE, default=None, help="Created on or before.")
@click.option(
    "--sort",
    "sort_field",
    type=click.Choice([str(f) for f in SortField], case_sensitive=False),
    default=None,
    help="Sort field (default: updated, newest first).",
)
@click.option("--asc/--desc", "ascending", default=None, help="Sort direction.")
@click.option("--select", "select_id", default=None, help="Show one record in detail.")
@click.pass_obj
def query(
    app: AppContext,
    input_dir: str | None,
    pattern: str | None,
    search: str,
    statuses: tuple[str, ...],
    category: str,
    author: str,
    project: str,
    tags: tuple[str, ...],
    technologies: tuple[str, ...],
    date_from: datetime | None,
    date_to: datetime | None,
    sort_field: str | None,
    ascending: bool | None,
    select_id: str | None,
) -> None:
    """List records matching every given filter."""
    from adrscope.services.query import QueryService

    filters = FilterSpec(
        search=search,
        statuses=frozenset(s.lower() for s in statuses),
        category=category,
        author=author,
        project=project,
        tags=frozenset(tags),
        technologies=frozenset(technologies),
        date_from=_iso(date_from),
        date_to=_iso(date_to),
    )
    sort = build_sort(sort_field.lower() if sort_field else None, ascending)
    svc = QueryService(app.settings)
    app.emit(
        svc.query(
            filters,
            sort,
            input_dir=input_dir,
            pattern=pattern,
            select=select_id,
        )
    )
