"""Plugin manager -- entry-point discovery and installation on executors.

Third-party packages publish executor plugins under the
``hookpipe.plugins`` entry-point group::

    [project.entry-points."hookpipe.plugins"]
    audit = "my_package.audit:AuditPlugin"

An entry point may name a plugin class (instantiated with no arguments), a
plugin instance, or a hook mapping. :meth:`PluginManager.discover` loads
them in entry-point order, honouring the enabled/disabled lists of
:class:`~hookpipe.models.PluginsConfig`, and
:meth:`PluginManager.install` registers them on an executor.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any, Optional

from hookpipe.exceptions import PluginError
from hookpipe.executor.executor import BaseExecutor
from hookpipe.executor.plugin import HookTable, PluginLike, as_hook_table
from hookpipe.models import GlobalConfig

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "hookpipe.plugins"


class PluginManager:
    """Loads executor plugins by name and installs them on executors.

    With a non-empty ``plugins.enabled`` list only those names load;
    otherwise every discovered plugin not in ``plugins.disabled`` loads.

    Example::

        manager = PluginManager()
        manager.discover(resolve_config())
        executor = manager.install(AsyncExecutor())
    """

    def __init__(self) -> None:
        self._tables: dict[str, HookTable] = {}

    def discover(self, config: Optional[GlobalConfig] = None) -> list[str]:
        """Load plugins from the ``hookpipe.plugins`` entry-point group.

        Plugins that fail to import or instantiate are logged and skipped.

        Returns:
            Names of the plugins loaded by this call.
        """
        config = config or GlobalConfig()
        enabled = set(config.plugins.enabled)
        disabled = set(config.plugins.disabled)

        loaded: list[str] = []
        entry_points = importlib.metadata.entry_points().select(group=ENTRY_POINT_GROUP)
        for entry_point in entry_points:
            name = entry_point.name
            if enabled and name not in enabled:
                logger.debug("Plugin '%s' not in enabled list, skipping", name)
                continue
            if name in disabled:
                logger.debug("Plugin '%s' is disabled, skipping", name)
                continue
            try:
                target = entry_point.load()
                plugin = target() if isinstance(target, type) else target
                self.load_plugin(name, plugin, config)
            except Exception as exc:
                logger.warning("Failed to load plugin '%s': %s", name, exc)
                continue
            loaded.append(name)
        return loaded

    def load_plugin(
        self, name: str, plugin: PluginLike, config: Optional[GlobalConfig] = None
    ) -> HookTable:
        """Register *plugin* under *name*.

        A plugin with a ``setup(config)`` method has it called once here.

        Raises:
            PluginError: If *name* is already loaded.
        """
        if name in self._tables:
            raise PluginError(f"Plugin '{name}' is already loaded")

        setup = getattr(plugin, "setup", None)
        if callable(setup):
            setup(config or GlobalConfig())

        table = as_hook_table(plugin)
        self._tables[name] = table
        logger.info("Loaded plugin '%s' (%s)", name, table.plugin_name)
        return table

    def get_plugin(self, name: str) -> Any:
        try:
            return self._tables[name].plugin
        except KeyError:
            raise PluginError(f"Plugin '{name}' is not loaded") from None

    def list_plugins(self) -> list[dict[str, Any]]:
        """Describe loaded plugins in load order.

        Returns:
            One dict per plugin with ``name``, ``plugin_name`` and sorted
            ``hooks``.
        """
        return [
            {"name": name, "plugin_name": table.plugin_name, "hooks": sorted(table.hooks)}
            for name, table in self._tables.items()
        ]

    def install(self, executor: BaseExecutor) -> BaseExecutor:
        """Register every loaded plugin on *executor*, in load order."""
        return executor.use(list(self._tables.values()))

    def cleanup(self) -> None:
        """Call ``close()`` on plugins that define it and forget them all."""
        for name, table in self._tables.items():
            close = getattr(table.plugin, "close", None)
            if not callable(close):
                continue
            try:
                close()
            except Exception as exc:
                logger.warning("Error closing plugin '%s': %s", name, exc)
        self._tables.clear()
