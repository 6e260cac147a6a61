"""Command: collection statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from adrscope.commands._base import ScopeCommand, input_options

if TYPE_CHECKING:
    from adrscope.commands._context import AppContext


@click.command(
    cls=ScopeCommand,
    examples="""\
  adrscope stats
  adrscope stats --format markdown > STATS.md
  adrscope stats --format json""",
)
@input_options
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice(["text", "json", "markdown"], case_sensitive=False),
    default=None,
    help="Output format (default: text).",
)
@click.pass_obj
def stats(
    app: AppContext,
    input_dir: str | None,
    pattern: str | None,
    fmt: str | None,
) -> None:
    """Show counts by status, category, author, and date range."""
    from adrscope.services.stats import StatsService

    svc = StatsService(app.settings)
    app.emit(
        svc.stats(
            input_dir=input_dir,
            pattern=pattern,
            fmt=fmt.lower() if fmt else None,  # type: ignore[arg-type]
        )
    )
