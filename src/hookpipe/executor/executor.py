"""Task executors -- the fixed ``before -> exec -> success | error`` lifecycle.

An executor owns an append-only list of plugins and runs one task per
:meth:`~SyncExecutor.exec` call:

1. The *before* hook names (``onBefore`` by default) run across all plugins.
2. The *exec stage* produces the task's result. Which strategy is used is
   fixed when the executor is built -- see :class:`PluginExecStage` and
   :class:`DirectExecStage`.
3. On success the result is written to ``context.return_value`` and the
   *after* hook names (``onSuccess`` by default) run.
4. If stage 1 or 2 raises, the exception is written to ``context.error``,
   the error hook (``onError``) runs once, and the original exception is
   re-raised unchanged.

An exception raised by an after hook propagates to the caller without
entering the error pass: by then the task has already succeeded and error
hooks have nothing to undo.

:meth:`~SyncExecutor.exec_no_error` returns the exception instead of
raising it.

:class:`SyncExecutor` never suspends and suits call sites that cannot
await. :class:`AsyncExecutor` awaits each hook and the task; both sync and
async callables are accepted.

Example::

    executor = AsyncExecutor()
    executor.use(AuditPlugin())
    result = await executor.exec({"user": "ada"}, fetch_profile)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Callable, Optional, Union

from hookpipe.exceptions import InvalidTaskError, PluginError
from hookpipe.executor.context import ExecutionContext
from hookpipe.executor.plugin import HookTable, PluginLike, as_hook_table
from hookpipe.executor.runner import (
    HookNames,
    maybe_await,
    run_hook_async,
    run_hook_sync,
    run_hooks_async,
    run_hooks_sync,
)
from hookpipe.models import ExecutorConfig

logger = logging.getLogger(__name__)

Task = Callable[[ExecutionContext], Any]


# ------------------------------------------------------------------
# Exec stages
# ------------------------------------------------------------------


class ExecStage(ABC):
    """Strategy for stage 2 of the lifecycle: turning a task into a result."""

    @abstractmethod
    def run_sync(
        self, executor: "SyncExecutor", context: ExecutionContext, task: Task
    ) -> Any:
        """Produce the task result without suspending."""

    @abstractmethod
    async def run_async(
        self, executor: "AsyncExecutor", context: ExecutionContext, task: Task
    ) -> Any:
        """Produce the task result, awaiting where needed."""


class PluginExecStage(ExecStage):
    """Let plugins intercept the task through the exec hook.

    The exec hook (``onExec`` by default) runs with the task as its extra
    argument. When no plugin implements it the task is called directly.
    Otherwise a callable pass result replaces the task and is called with
    the context; any other pass result *is* the task's result, so a plugin
    that wants to wrap the task can also call it itself::

        def on_exec(self, context, task):
            cached = cache.get(context.parameters["key"])
            return cached if cached is not None else task(context)
    """

    def run_sync(
        self, executor: "SyncExecutor", context: ExecutionContext, task: Task
    ) -> Any:
        result = executor.run_hook(executor.config.exec_hook, context, task)
        if not context.hooks_runtimes.times:
            return task(context)
        if callable(result):
            return result(context)
        return result

    async def run_async(
        self, executor: "AsyncExecutor", context: ExecutionContext, task: Task
    ) -> Any:
        result = await executor.run_hook(executor.config.exec_hook, context, task)
        if not context.hooks_runtimes.times:
            return await maybe_await(task(context))
        if callable(result):
            return await maybe_await(result(context))
        return result


class DirectExecStage(ExecStage):
    """Always call the task itself; exec hooks are never consulted."""

    def run_sync(
        self, executor: "SyncExecutor", context: ExecutionContext, task: Task
    ) -> Any:
        return task(context)

    async def run_async(
        self, executor: "AsyncExecutor", context: ExecutionContext, task: Task
    ) -> Any:
        return await maybe_await(task(context))


# ------------------------------------------------------------------
# Executors
# ------------------------------------------------------------------


class BaseExecutor:
    """Plugin registry and configuration shared by both executors.

    Args:
        config: Hook names for each lifecycle stage. Defaults to
            :class:`~hookpipe.models.ExecutorConfig`.
        exec_stage: Strategy for the exec stage. Defaults to
            :class:`PluginExecStage`.
    """

    def __init__(
        self,
        config: Optional[ExecutorConfig] = None,
        exec_stage: Optional[ExecStage] = None,
    ) -> None:
        self._config = config or ExecutorConfig()
        self._exec_stage = exec_stage or PluginExecStage()
        self._plugins: list[HookTable] = []

    @property
    def config(self) -> ExecutorConfig:
        return self._config

    @property
    def plugins(self) -> tuple[HookTable, ...]:
        """Registered plugins' hook tables, in registration order."""
        return tuple(self._plugins)

    def use(self, plugin: Union[PluginLike, Sequence[PluginLike]]) -> "BaseExecutor":
        """Append one plugin, or a list of plugins, to the registry.

        Registration is append-only and keeps order. Registering the same
        object twice produces two entries, unless the plugin declares
        ``only_one``.

        Returns:
            The executor, for chaining.

        Raises:
            PluginError: If an ``only_one`` plugin is already registered.
            TypeError: If *plugin* is not an object or mapping.
        """
        candidates = plugin if isinstance(plugin, (list, tuple)) else [plugin]
        for candidate in candidates:
            table = as_hook_table(candidate)
            self._check_duplicate(table)
            self._plugins.append(table)
            logger.debug(
                "Registered plugin '%s' with hooks %s",
                table.plugin_name,
                sorted(table.hooks),
            )
        return self

    def _check_duplicate(self, table: HookTable) -> None:
        if not table.only_one:
            return
        for existing in self._plugins:
            if (
                existing.plugin is table.plugin
                or existing.plugin_name == table.plugin_name
                or type(existing.plugin) is type(table.plugin)
            ):
                raise PluginError(f"Plugin '{table.plugin_name}' is already used")

    def create_context(self, parameters: Any) -> ExecutionContext:
        return ExecutionContext(parameters)

    def _prepare(self, parameters: Any, task: Optional[Task]) -> tuple[ExecutionContext, Task]:
        if task is None:
            parameters, task = None, parameters
        if not callable(task):
            raise InvalidTaskError("Task must be callable")
        if isinstance(parameters, ExecutionContext):
            return parameters, task
        return self.create_context({} if parameters is None else parameters), task


class SyncExecutor(BaseExecutor):
    """Executor whose hooks and task run without ever suspending.

    Example::

        executor = SyncExecutor().use({"onBefore": validate})
        value = executor.exec({"n": 2}, lambda ctx: ctx.parameters["n"] * 2)
    """

    def run_hook(self, hook_name: str, context: ExecutionContext, *args: Any) -> Any:
        return run_hook_sync(self._plugins, hook_name, context, *args)

    def run_hooks(self, hook_names: HookNames, context: ExecutionContext, *args: Any) -> Any:
        return run_hooks_sync(self._plugins, hook_names, context, *args)

    def exec(self, parameters: Any, task: Optional[Task] = None) -> Any:
        """Run *task* through the plugin lifecycle.

        Args:
            parameters: The call's parameters, or an
                :class:`~hookpipe.executor.context.ExecutionContext` to
                reuse. May be omitted (``exec(task)``).
            task: ``(context) -> result``.

        Returns:
            The task result (``context.return_value``).

        Raises:
            InvalidTaskError: If the task is not callable.
            Exception: Whatever a hook or the task raised, unchanged.
        """
        context, actual_task = self._prepare(parameters, task)
        return self.run(context, actual_task)

    def exec_no_error(self, parameters: Any, task: Optional[Task] = None) -> Any:
        """Like :meth:`exec`, but return a raised exception instead of raising it."""
        try:
            return self.exec(parameters, task)
        except Exception as exc:
            return exc

    def run(self, context: ExecutionContext, task: Task) -> Any:
        try:
            self.run_hooks(self._config.before_hooks, context)
            context.set_return_value(self._exec_stage.run_sync(self, context, task))
        except Exception as exc:
            self.handle_error(context, exc)
            raise
        self.run_hooks(self._config.after_hooks, context)
        return context.return_value

    def handle_error(self, context: ExecutionContext, error: Exception) -> None:
        context.set_error(error)
        logger.debug("Task failed with %r, running '%s'", error, self._config.error_hook)
        self.run_hook(self._config.error_hook, context)


class AsyncExecutor(BaseExecutor):
    """Executor that awaits every hook and the task in sequence.

    Hooks and tasks may be coroutine functions or plain callables.

    Example::

        executor = AsyncExecutor()
        result = await executor.exec({"id": 7}, load_user)
    """

    async def run_hook(self, hook_name: str, context: ExecutionContext, *args: Any) -> Any:
        return await run_hook_async(self._plugins, hook_name, context, *args)

    async def run_hooks(
        self, hook_names: HookNames, context: ExecutionContext, *args: Any
    ) -> Any:
        return await run_hooks_async(self._plugins, hook_names, context, *args)

    async def exec(self, parameters: Any, task: Optional[Task] = None) -> Any:
        """Async twin of :meth:`SyncExecutor.exec`."""
        context, actual_task = self._prepare(parameters, task)
        return await self.run(context, actual_task)

    async def exec_no_error(self, parameters: Any, task: Optional[Task] = None) -> Any:
        """Like :meth:`exec`, but return a raised exception instead of raising it."""
        try:
            return await self.exec(parameters, task)
        except Exception as exc:
            return exc

    async def run(self, context: ExecutionContext, task: Task) -> Any:
        try:
            await self.run_hooks(self._config.before_hooks, context)
            context.set_return_value(
                await self._exec_stage.run_async(self, context, task)
            )
        except Exception as exc:
            await self.handle_error(context, exc)
            raise
        await self.run_hooks(self._config.after_hooks, context)
        return context.return_value

    async def handle_error(self, context: ExecutionContext, error: Exception) -> None:
        context.set_error(error)
        logger.debug("Task failed with %r, running '%s'", error, self._config.error_hook)
        await self.run_hook(self._config.error_hook, context)
