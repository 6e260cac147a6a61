"""Extension layer — plugin system via pluggy.

Discovery: entry points (pip-installed) plus ``.adrscope/plugins/*.py``.
INVARIANT: Plugin failures are warnings, never errors.
"""

from adrscope.plugins.hookspecs import hookimpl
from adrscope.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
