"""Command: build the self-contained HTML viewer."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from adrscope.commands._base import ScopeCommand, input_options

if TYPE_CHECKING:
    from adrscope.commands._context import AppContext


@click.command(
    cls=ScopeCommand,
    examples="""\
  adrscope generate
  adrscope generate -i docs/adr -o site/adrs.html
  adrscope generate --title "Platform Decisions" --theme dark
  adrscope generate --pattern 'adr-*.md'""",
)
@input_options
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output HTML file (default: adrs.html).",
)
@click.option("--title", default=None, help="Page title.")
@click.option(
    "--theme",
    type=click.Choice(["auto", "light", "dark"], case_sensitive=False),
    default=None,
    help="Initial color theme.",
)
@click.pass_obj
def generate(
    app: AppContext,
    input_dir: str | None,
    pattern: str | None,
    output: str | None,
    title: str | None,
    theme: str | None,
) -> None:
    """Generate a single-file interactive HTML viewer."""
    from adrscope.services.generate import GenerateService

    svc = GenerateService(app.settings, app.plugins)
    app.emit(
        svc.generate(
            input_dir=input_dir,
            output=output,
            title=title,
            theme=theme.lower() if theme else None,  # type: ignore[arg-type]
            pattern=pattern,
        )
    )
