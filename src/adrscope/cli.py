"""Root CLI group for adrscope with global flags and command registration."""

from __future__ import annotations

import click

from adrscope import __version__
from adrscope.commands import register_commands
from adrscope.commands._base import ScopeGroup
from adrscope.commands._context import AppContext
from adrscope.config.settings import ScopeSettings


@click.group(
    cls=ScopeGroup,
    invoke_without_command=True,
    examples="""\
  adrscope generate -i docs/decisions -o adrs.html
  adrscope validate --strict
  adrscope wiki --pages-url https://example.github.io/adrs.html
  adrscope query --status accepted --sort title
  adrscope --json stats""",
)
@click.version_option(version=__version__, prog_name="adrscope")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """adrscope — browse, validate, and summarize Architecture Decision Records."""
    settings = ScopeSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
