"""Hook runner -- executes one hook name, or a sequence of them, across plugins.

A *pass* runs a single hook name over the plugin list in registration order:

1. The context's :class:`~hookpipe.executor.context.HookRuntimes` is reset
   for the hook name.
2. Plugins without the hook (or whose ``enabled`` predicate declines) are
   skipped and not counted.
3. Every other plugin is called with ``(context, *args)``. A non-``None``
   return value becomes the provisional pass result.
4. After each call the break flags are checked. ``return_break_chain``
   stops the pass and makes that call's value the result (even ``None``);
   ``break_chain`` stops the pass and keeps the last non-``None`` value.
5. Exceptions propagate immediately.

Hooks signal a break either by setting the flags through
``context.runtimes(...)`` or by returning :data:`BREAK` /
:class:`BreakWith`. Both routes end up in the same runtime flags.

The ``*_async`` variants await each callback before moving on; no two
callbacks of a pass ever run concurrently.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Union

from hookpipe.executor.context import ExecutionContext
from hookpipe.executor.plugin import HookTable, PluginLike, as_hook_table

logger = logging.getLogger(__name__)

HookNames = Union[str, Sequence[str]]


class _Break:
    def __repr__(self) -> str:
        return "BREAK"


BREAK = _Break()
"""Return this from a hook to stop the pass, keeping the previous result."""


@dataclass(frozen=True)
class BreakWith:
    """Return this from a hook to stop the pass with ``value`` as its result."""

    value: Any = None


async def maybe_await(value: Any) -> Any:
    """Await *value* when it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


def _tables(plugins: Iterable[PluginLike]) -> list[HookTable]:
    return [as_hook_table(plugin) for plugin in plugins]


def _names(hook_names: HookNames) -> list[str]:
    if isinstance(hook_names, str):
        return [hook_names]
    return list(hook_names)


def _enter(context: ExecutionContext, table: HookTable, index: int) -> None:
    context.runtimes(
        plugin_name=table.plugin_name,
        plugin_index=index,
        times=context.hooks_runtimes.times + 1,
    )


def _settle(context: ExecutionContext, result: Any, current: Any) -> tuple[bool, Any]:
    """Fold one callback result into the pass state.

    Returns:
        ``(stop, pass_result)``.
    """
    if result is BREAK:
        context.runtimes(break_chain=True)
        result = None
    elif isinstance(result, BreakWith):
        context.runtimes(return_break_chain=True)
        result = result.value

    if result is not None:
        current = result
        context.runtimes(return_value=result)

    if context.should_break_chain_on_return():
        return True, result
    if context.should_break_chain():
        return True, current
    return False, current


def run_hook_sync(
    plugins: Iterable[PluginLike],
    hook_name: str,
    context: ExecutionContext,
    *args: Any,
) -> Any:
    """Run one pass of *hook_name* without suspending.

    Args:
        plugins: Plugins (or prebuilt hook tables) in registration order.
        hook_name: The hook to run, e.g. ``"onBefore"``.
        context: The call's execution context.
        *args: Extra positional arguments passed to each callback after
            the context.

    Returns:
        The pass result, or ``None`` when no plugin returned a value.
    """
    context.reset_hooks_runtimes(hook_name)
    tables = _tables(plugins)
    logger.debug("Running hook '%s' across %d plugins", hook_name, len(tables))

    current: Any = None
    for index, table in enumerate(tables):
        if table.should_skip(hook_name, context):
            continue
        _enter(context, table, index)
        result = table.hooks[hook_name](context, *args)
        stop, current = _settle(context, result, current)
        if stop:
            logger.debug(
                "Hook '%s' chain broken by plugin '%s'", hook_name, table.plugin_name
            )
            break
    return current


async def run_hook_async(
    plugins: Iterable[PluginLike],
    hook_name: str,
    context: ExecutionContext,
    *args: Any,
) -> Any:
    """Run one pass of *hook_name*, awaiting each callback in turn.

    Callbacks may be coroutine functions or plain functions; awaitable
    results are awaited, anything else is used as-is.

    See :func:`run_hook_sync` for the arguments and return value.
    """
    context.reset_hooks_runtimes(hook_name)
    tables = _tables(plugins)
    logger.debug("Running hook '%s' across %d plugins", hook_name, len(tables))

    current: Any = None
    for index, table in enumerate(tables):
        if table.should_skip(hook_name, context):
            continue
        _enter(context, table, index)
        result = await maybe_await(table.hooks[hook_name](context, *args))
        stop, current = _settle(context, result, current)
        if stop:
            logger.debug(
                "Hook '%s' chain broken by plugin '%s'", hook_name, table.plugin_name
            )
            break
    return current


def run_hooks_sync(
    plugins: Iterable[PluginLike],
    hook_names: HookNames,
    context: ExecutionContext,
    *args: Any,
) -> Any:
    """Run several hook names in order, one pass each.

    ``return_break_chain`` only ends the pass that set it. A pass that ends
    with ``break_chain`` set stops the whole sequence: later hook names are
    not run.

    Args:
        plugins: Plugins (or prebuilt hook tables) in registration order.
        hook_names: A single hook name or a sequence of them.
        context: The call's execution context.
        *args: Extra positional arguments for every callback.

    Returns:
        The last non-``None`` pass result, or ``None``.
    """
    tables = _tables(plugins)
    last: Any = None
    for hook_name in _names(hook_names):
        result = run_hook_sync(tables, hook_name, context, *args)
        if result is not None:
            last = result
        if context.should_break_chain():
            break
    return last


async def run_hooks_async(
    plugins: Iterable[PluginLike],
    hook_names: HookNames,
    context: ExecutionContext,
    *args: Any,
) -> Any:
    """Async twin of :func:`run_hooks_sync`."""
    tables = _tables(plugins)
    last: Any = None
    for hook_name in _names(hook_names):
        result = await run_hook_async(tables, hook_name, context, *args)
        if result is not None:
            last = result
        if context.should_break_chain():
            break
    return last
