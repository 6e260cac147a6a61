"""Command: write wiki summary pages."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from adrscope.commands._base import ScopeCommand, input_options

if TYPE_CHECKING:
    from adrscope.commands._context import AppContext


@click.command(
    cls=ScopeCommand,
    examples="""\
  adrscope wiki
  adrscope wiki -o wiki --pages-url https://example.github.io/adrs.html""",
)
@input_options
@click.option(
    "-o",
    "--output",
    "output_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Output directory (default: wiki).",
)
@click.option("--pages-url", default=None, help="Link to the hosted HTML viewer.")
@click.pass_obj
def wiki(
    app: AppContext,
    input_dir: str | None,
    pattern: str | None,
    output_dir: str | None,
    pages_url: str | None,
) -> None:
    """Generate index, by-status, by-category, timeline, and statistics pages."""
    from adrscope.services.wiki import WikiService

    svc = WikiService(app.settings, app.plugins)
    app.emit(
        svc.wiki(
            input_dir=input_dir,
            output_dir=output_dir,
            pages_url=pages_url,
            pattern=pattern,
        )
    )
