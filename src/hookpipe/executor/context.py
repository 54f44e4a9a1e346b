"""Per-call execution context threaded through every hook of one ``exec``.

This module provides two components:

* :class:`HookRuntimes` -- an immutable record of the bookkeeping for the
  hook-name pass currently running (which plugin, how many calls, whether
  the chain was broken).
* :class:`ExecutionContext` -- the mutable carrier of ``parameters``,
  ``return_value`` and ``error`` for one call, plus its current
  :class:`HookRuntimes`.

Hooks may mutate ``context.parameters`` in place. Everything else is
read-only by convention; the only sanctioned write path for plugins is
:meth:`ExecutionContext.runtimes`, used to signal a chain break::

    def on_before(context):
        if context.parameters.get("cached"):
            context.runtimes(break_chain=True)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Generic, Optional, TypeVar

ParamsT = TypeVar("ParamsT")


@dataclass(frozen=True)
class HookRuntimes:
    """Runtime state of the hook-name pass currently executing.

    A fresh record is installed at the start of every pass, so nothing
    carries over from one hook name to the next or from one call to another.

    Attributes:
        plugin_name: Name of the plugin whose hook ran most recently.
        hook_name: The hook name of the current pass.
        plugin_index: Registration index of the plugin that ran most
            recently, or ``None`` before any plugin ran.
        times: Number of plugins invoked so far in this pass. Plugins that
            do not implement the hook are not counted.
        break_chain: When set by a hook, stops the remaining plugins of
            the pass.
        return_break_chain: When set by a hook, stops the remaining plugins
            and makes that hook's return value the pass result.
        return_value: Last non-``None`` value returned in this pass.
    """

    plugin_name: str = ""
    hook_name: str = ""
    plugin_index: Optional[int] = None
    times: int = 0
    break_chain: bool = False
    return_break_chain: bool = False
    return_value: Any = None


class ExecutionContext(Generic[ParamsT]):
    """Carrier of parameters, result, error, and runtime bookkeeping.

    Created once per ``exec`` call and discarded afterwards. Concurrent
    calls on the same executor never share a context.

    Args:
        parameters: The call's parameters. Stored by reference so that
            hooks mutating them in place are visible to the task.
    """

    def __init__(self, parameters: ParamsT) -> None:
        self.parameters: ParamsT = parameters
        self._return_value: Any = None
        self._error: Optional[BaseException] = None
        self._runtimes = HookRuntimes()

    def __repr__(self) -> str:
        return (
            f"ExecutionContext(parameters={self.parameters!r}, "
            f"hook={self._runtimes.hook_name!r}, times={self._runtimes.times})"
        )

    @property
    def return_value(self) -> Any:
        """The task's result, available to success hooks."""
        return self._return_value

    @property
    def error(self) -> Optional[BaseException]:
        """The exception being handled, available to error hooks."""
        return self._error

    @property
    def hooks_runtimes(self) -> HookRuntimes:
        """Snapshot of the current pass's :class:`HookRuntimes`."""
        return self._runtimes

    def set_return_value(self, value: Any) -> None:
        self._return_value = value

    def set_error(self, error: Optional[BaseException]) -> None:
        self._error = error

    def runtimes(self, **updates: Any) -> None:
        """Shallow-merge *updates* into :attr:`hooks_runtimes`.

        Args:
            **updates: Any :class:`HookRuntimes` field, e.g.
                ``break_chain=True``.

        Raises:
            TypeError: If a key is not a :class:`HookRuntimes` field.
        """
        self._runtimes = replace(self._runtimes, **updates)

    def reset_hooks_runtimes(self, hook_name: Optional[str] = None) -> None:
        """Install a fresh :class:`HookRuntimes` for a new pass.

        Args:
            hook_name: The hook name about to run. ``None`` performs a full
                reset to the initial state.
        """
        self._runtimes = HookRuntimes(hook_name=hook_name or "")

    def should_break_chain(self) -> bool:
        return self._runtimes.break_chain

    def should_break_chain_on_return(self) -> bool:
        return self._runtimes.return_break_chain
