"""Hook-execution pipeline -- contexts, plugins, runners, and executors.

Key classes:

* :class:`ExecutionContext` -- per-call carrier of parameters, result,
  error, and :class:`HookRuntimes`.
* :class:`ExecutorPlugin` / :class:`FunctionPlugin` -- plugin shapes;
  :func:`as_hook_table` turns any plugin into a :class:`HookTable`.
* :func:`run_hook_sync`, :func:`run_hooks_sync` and their async twins --
  run hook passes across a plugin list.
* :class:`SyncExecutor` / :class:`AsyncExecutor` -- the
  ``before -> exec -> success | error`` lifecycle.

Example::

    from hookpipe.executor import AsyncExecutor

    executor = AsyncExecutor()
    executor.use({"onBefore": lambda ctx: ctx.parameters.setdefault("page", 1)})
    items = await executor.exec({"q": "hooks"}, search)
"""

from hookpipe.executor.context import ExecutionContext, HookRuntimes
from hookpipe.executor.executor import (
    AsyncExecutor,
    BaseExecutor,
    DirectExecStage,
    ExecStage,
    PluginExecStage,
    SyncExecutor,
)
from hookpipe.executor.plugin import (
    ExecutorPlugin,
    FunctionPlugin,
    HookTable,
    as_hook_table,
    hook,
)
from hookpipe.executor.runner import (
    BREAK,
    BreakWith,
    run_hook_async,
    run_hook_sync,
    run_hooks_async,
    run_hooks_sync,
)

__all__ = [
    "AsyncExecutor",
    "BaseExecutor",
    "BREAK",
    "BreakWith",
    "DirectExecStage",
    "ExecStage",
    "ExecutionContext",
    "ExecutorPlugin",
    "FunctionPlugin",
    "HookRuntimes",
    "HookTable",
    "PluginExecStage",
    "SyncExecutor",
    "as_hook_table",
    "hook",
    "run_hook_async",
    "run_hook_sync",
    "run_hooks_async",
    "run_hooks_sync",
]
