"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Provides lazy plugin loading and centralized result
emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from adrscope.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from adrscope.config.settings import ScopeSettings
    from adrscope.plugins.manager import PluginManager
    from adrscope.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Plugins are discovered on first use so ``--help`` and ``--version``
    never import third-party plugin code.
    """

    def __init__(self, settings: ScopeSettings) -> None:
        self.settings = settings
        self._plugins: PluginManager | None = None

        from adrscope.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from adrscope.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (entry points plus ``.adrscope/plugins``), loaded lazily."""
        if self._plugins is None:
            from adrscope.plugins.manager import LOCAL_PLUGIN_DIR, PluginManager

            manager = PluginManager()
            manager.discover_and_load(local_dir=self.settings.project_root / LOCAL_PLUGIN_DIR)
            self._plugins = manager
        return self._plugins

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout.  Warnings go to stderr so they never
          pollute piped output (in JSON mode they are part of the payload).
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
