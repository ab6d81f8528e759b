"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) in the ``handlerdoc.plugins`` group.
"""

from handlerdoc.plugins.hookspecs import hookimpl
from handlerdoc.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
