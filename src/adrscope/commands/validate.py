"""Command: validate decision record frontmatter."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from adrscope.commands._base import ScopeCommand, input_options

if TYPE_CHECKING:
    from adrscope.commands._context import AppContext


@click.command(
    cls=ScopeCommand,
    examples="""\
  adrscope validate
  adrscope validate --strict
  adrscope validate --check-relationships
  adrscope --json validate -i docs/adr""",
)
@input_options
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail on warnings as well as errors.",
)
@click.option(
    "--check-relationships/--no-check-relationships",
    default=None,
    help="Warn about related entries that point at missing documents.",
)
@click.pass_obj
def validate(
    app: AppContext,
    input_dir: str | None,
    pattern: str | None,
    strict: bool | None,
    check_relationships: bool | None,
) -> None:
    """Validate every document; exit 1 on failure."""
    from adrscope.services.validate import ValidateService

    svc = ValidateService(app.settings, app.plugins)
    app.emit(
        svc.validate(
            input_dir=input_dir,
            pattern=pattern,
            strict=strict,
            check_relationships=check_relationships,
        )
    )
