"""Rich Console factory and theme for adrscope output.

Consoles render into a StringIO buffer so renderers return plain strings.
Rich drops color codes when output is not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from adrscope.domain.status import Status

ADRSCOPE_THEME = Theme(
    {
        "adr.ok": "bold green",
        "adr.error": "bold red",
        "adr.warning": "bold yellow",
        "adr.op": "bold cyan",
        "adr.key": "dim",
        "adr.id": "bold blue",
        "adr.path": "dim",
        "adr.title": "bold",
        "adr.status.proposed": Status.PROPOSED.color,
        "adr.status.accepted": Status.ACCEPTED.color,
        "adr.status.deprecated": Status.DEPRECATED.color,
        "adr.status.superseded": Status.SUPERSEDED.color,
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (stable output in tests).
    """
    return Console(
        file=StringIO(),
        theme=ADRSCOPE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Rich style name for a status value ("" when unknown)."""
    parsed = Status.parse(status)
    return f"adr.status.{parsed}" if parsed else ""
