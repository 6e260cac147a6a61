"""Subcommand modules for adrscope.

register_commands() uses deferred imports to keep ``adrscope --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every command on the root CLI group."""
    from adrscope.commands.generate import generate
    from adrscope.commands.graph import graph
    from adrscope.commands.query import query
    from adrscope.commands.stats import stats
    from adrscope.commands.validate import validate
    from adrscope.commands.wiki import wiki

    cli.add_command(generate)
    cli.add_command(wiki)
    cli.add_command(validate)
    cli.add_command(stats)
    cli.add_command(query)
    cli.add_command(graph)
