"""Plugin discovery and bundled plugins.

* :class:`PluginManager` -- loads executor plugins from the
  ``hookpipe.plugins`` entry-point group and installs them on executors.
* :class:`LoggingPlugin` -- logs each call's lifecycle and duration.
"""

from hookpipe.plugins.logger import LoggingPlugin
from hookpipe.plugins.manager import ENTRY_POINT_GROUP, PluginManager

__all__ = ["ENTRY_POINT_GROUP", "LoggingPlugin", "PluginManager"]
