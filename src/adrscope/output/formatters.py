"""Output-mode dispatch for ServiceResult.

Three modes: ``--json`` (the full result, machine-readable), ``-q``
(minimal), and the default Rich rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from adrscope.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from adrscope.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    ``json_output=True`` is shorthand for ``OutputSettings(json_output=True)``.
    JSON takes precedence over quiet, and quiet over verbose.
    """
    settings = settings or OutputSettings(json_output=json_output)
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
