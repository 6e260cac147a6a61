"""Pluggy hook specifications for adrscope.

One setup-time hook lets plugins contribute validation rules; two
notification hooks fire after generation and validation runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from adrscope.domain.validation import ValidationRule

hookspec = pluggy.HookspecMarker("adrscope")
hookimpl = pluggy.HookimplMarker("adrscope")


class AdrscopeHookSpec:
    """Hook specifications for the adrscope plugin system."""

    @hookspec
    def register_validation_rules(self) -> list[ValidationRule] | None:
        """Return extra rules appended to the validator after the built-ins."""

    @hookspec
    def post_generate(self, output_path: str, record_count: int) -> None:
        """Called after the HTML viewer is written."""

    @hookspec
    def post_validate(self, errors: int, warnings: int, passed: bool) -> None:
        """Called after a validation run."""
