"""Plugin shapes and the capability table built when a plugin is registered.

A plugin is a named bundle of optional hooks. Three shapes are accepted:

1. A subclass of :class:`ExecutorPlugin` (or any plain object) whose hook
   methods are named after the hook they implement. Both spellings work::

       class AuditPlugin(ExecutorPlugin):
           plugin_name = "audit"

           def on_before(self, context): ...        # -> "onBefore"
           def onLoginSuccess(self, context): ...   # -> "onLoginSuccess"

           @hook("onGetUserInfoBefore")
           def user_info(self, context): ...

2. A :class:`FunctionPlugin` built from a mapping of hook name to callable.
3. A bare ``dict`` of hook name to callable (optionally with a
   ``"plugin_name"`` key).

:func:`as_hook_table` inspects a plugin once and returns a
:class:`HookTable` -- an explicit ``hook name -> callback`` map -- so the
runner never has to probe attribute names at call time.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar, Union

from hookpipe.names import to_hook_name

HookCallback = Callable[..., Any]
EnabledPredicate = Callable[[str, Any], bool]

_HOOK_ATTR = "__hookpipe_hook__"

F = TypeVar("F", bound=Callable[..., Any])


def hook(name: str) -> Callable[[F], F]:
    """Register the decorated method under an explicit hook *name*."""

    def decorator(func: F) -> F:
        setattr(func, _HOOK_ATTR, name)
        return func

    return decorator


class ExecutorPlugin:
    """Optional base class for class-based plugins.

    Subclassing is not required -- any object with ``on...`` methods is a
    valid plugin -- but the base class documents the recognised attributes:

    Attributes:
        plugin_name: Informational name used in logs and
            :attr:`~hookpipe.executor.context.HookRuntimes.plugin_name`.
            Defaults to the class name. Names are not required to be unique.
        only_one: When ``True`` the executor refuses to register a second
            plugin with the same identity, name, or class.
    """

    plugin_name: str = ""
    only_one: bool = False

    def enabled(self, hook_name: str, context: Any) -> bool:
        """Return ``False`` to skip this plugin for *hook_name* on this call."""
        return True


class FunctionPlugin(ExecutorPlugin):
    """A plugin assembled from plain callables.

    Args:
        plugin_name: Informational plugin name.
        hooks: Mapping of hook name to callback.
        **more_hooks: Additional hooks given as keyword arguments.

    Example::

        FunctionPlugin("trace", onBefore=lambda ctx: print("before"))
    """

    def __init__(
        self,
        plugin_name: str = "FunctionPlugin",
        hooks: Optional[Mapping[str, HookCallback]] = None,
        **more_hooks: HookCallback,
    ) -> None:
        self.plugin_name = plugin_name
        self.hooks: dict[str, HookCallback] = {**(hooks or {}), **more_hooks}


PluginLike = Union[ExecutorPlugin, Mapping[str, Any], Any]


@dataclass
class HookTable:
    """Capability map of one registered plugin.

    Attributes:
        plugin: The original plugin object.
        plugin_name: Name reported in hook runtimes.
        hooks: Hook name to callback.
        enabled: Optional per-call predicate ``(hook_name, context) -> bool``.
        only_one: Whether duplicate registration must be rejected.
    """

    plugin: Any
    plugin_name: str
    hooks: dict[str, HookCallback] = field(default_factory=dict)
    enabled: Optional[EnabledPredicate] = None
    only_one: bool = False

    def get(self, hook_name: str) -> Optional[HookCallback]:
        return self.hooks.get(hook_name)

    def has(self, hook_name: str) -> bool:
        return hook_name in self.hooks

    def should_skip(self, hook_name: str, context: Any) -> bool:
        if hook_name not in self.hooks:
            return True
        return self.enabled is not None and not self.enabled(hook_name, context)


def _mapping_hooks(mapping: Mapping[str, Any]) -> dict[str, HookCallback]:
    return {name: value for name, value in mapping.items() if callable(value)}


def _object_hooks(plugin: Any) -> dict[str, HookCallback]:
    hooks: dict[str, HookCallback] = {}
    for attr in dir(plugin):
        if attr.startswith("_"):
            continue
        static = inspect.getattr_static(plugin, attr, None)
        explicit = getattr(getattr(static, "__func__", static), _HOOK_ATTR, None)
        name = explicit or to_hook_name(attr)
        if name is None:
            continue
        value = getattr(plugin, attr)
        if callable(value):
            hooks[name] = value
    return hooks


def as_hook_table(plugin: PluginLike) -> HookTable:
    """Build the :class:`HookTable` for *plugin*.

    Passing an existing :class:`HookTable` returns it unchanged.

    Raises:
        TypeError: If *plugin* is ``None`` or a non-mapping primitive.
    """
    if isinstance(plugin, HookTable):
        return plugin
    if plugin is None or isinstance(plugin, (str, bytes, int, float, bool)):
        raise TypeError(f"Plugin must be an object or a mapping, got {plugin!r}")

    if isinstance(plugin, FunctionPlugin):
        hooks = _mapping_hooks(plugin.hooks)
    elif isinstance(plugin, Mapping):
        hooks = _mapping_hooks(plugin)
        return HookTable(
            plugin=plugin,
            plugin_name=str(plugin.get("plugin_name") or "anonymous"),
            hooks=hooks,
        )
    else:
        hooks = _object_hooks(plugin)

    enabled = getattr(plugin, "enabled", None)
    return HookTable(
        plugin=plugin,
        plugin_name=getattr(plugin, "plugin_name", "") or type(plugin).__name__,
        hooks=hooks,
        enabled=enabled if callable(enabled) else None,
        only_one=bool(getattr(plugin, "only_one", False)),
    )
