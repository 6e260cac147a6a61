"""Custom Click base classes with --examples support, plus shared options.

ScopeCommand and ScopeGroup accept an ``examples`` parameter.  When
``--examples`` is passed, the command prints usage examples and exits,
which keeps ``--help`` short.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class ScopeCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class ScopeGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = ScopeCommand`` so subcommands accept
    ``examples`` without an explicit ``cls=``.
    """

    command_class = ScopeCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def input_options[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """``--input`` and ``--pattern``, shared by every command that reads documents."""
    func = click.option(
        "--pattern",
        default=None,
        help="Glob for decision records (default from config: **/*.md).",
    )(func)
    func = click.option(
        "-i",
        "--input",
        "input_dir",
        type=click.Path(file_okay=False),
        default=None,
        help="Directory containing decision records (default: docs/decisions).",
    )(func)
    return func
