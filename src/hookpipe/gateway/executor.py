"""Gateway executor -- the action hook extension of the async lifecycle.

:class:`GatewayExecutor` adds two sub-stages around the task, keyed by an
*action* string:

* after the general ``onBefore`` pass, the action's before pass
  (``get_hook_name(action, "before")``, e.g. ``onLoginBefore``) runs;
* after the task succeeds, the action's success pass (``onLoginSuccess``)
  runs before the general ``onSuccess`` pass.

So for ``action="login"`` the order is::

    onBefore(all) -> onLoginBefore(all) -> task -> onLoginSuccess(all) -> onSuccess(all)

There is no action-specific error stage: every failure goes through the
single ``onError`` pass, and hooks that need per-action handling branch on
``context.parameters.action_name``. The action sub-stages run inside the
exec stage, so an exception from ``onLoginBefore`` or ``onLoginSuccess``
does reach ``onError``.

The executor is always built with
:class:`~hookpipe.executor.executor.DirectExecStage`: plugins cannot
replace the task through ``onExec``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from hookpipe.exceptions import InvalidUsageError
from hookpipe.executor.context import ExecutionContext
from hookpipe.executor.executor import AsyncExecutor, DirectExecStage
from hookpipe.executor.runner import maybe_await
from hookpipe.models import ExecutorConfig
from hookpipe.names import ActionStage, get_hook_name

ParamsT = TypeVar("ParamsT")

ActionTask = Callable[[ExecutionContext], Any]


class GatewayExecutorOptions(Generic[ParamsT]):
    """Parameters object for one gateway action call.

    ``params`` is the only mutable field: before hooks may replace or edit
    it. Everything else identifies the call and is read-only.

    Args:
        action_name: The action being executed (e.g. ``"login"``).
        params: Parameters passed to the gateway method.
        service_name: Name of the service running the action.
        store: The service's store, if any.
        gateway: The collaborator object whose methods implement actions.
        logger: Logger for hooks that want to report on the call.
    """

    def __init__(
        self,
        action_name: str,
        params: ParamsT = None,
        service_name: str = "",
        store: Any = None,
        gateway: Any = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._action_name = str(action_name)
        self._service_name = service_name
        self._store = store
        self._gateway = gateway
        self._logger = logger
        self.params = params

    def __repr__(self) -> str:
        return (
            f"GatewayExecutorOptions(action_name={self._action_name!r}, "
            f"service_name={self._service_name!r}, params={self.params!r})"
        )

    @property
    def action_name(self) -> str:
        return self._action_name

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def store(self) -> Any:
        return self._store

    @property
    def gateway(self) -> Any:
        return self._gateway

    @property
    def logger(self) -> Optional[logging.Logger]:
        return self._logger


class GatewayExecutor(AsyncExecutor):
    """Async executor with ``on{Action}Before`` / ``on{Action}Success`` stages.

    Args:
        config: Hook names for the general stages. The exec stage is fixed
            and cannot be configured.

    Example::

        executor = GatewayExecutor()
        executor.use({"onLoginBefore": check_rate_limit})
        token = await executor.exec_action("login", {"user": "ada"}, do_login)
    """

    def __init__(self, config: Optional[ExecutorConfig] = None) -> None:
        super().__init__(config=config, exec_stage=DirectExecStage())

    @staticmethod
    def get_hook_name(action: str, stage: ActionStage) -> str:
        return get_hook_name(action, stage)

    async def run_before_action(self, context: ExecutionContext) -> Any:
        hook_name = self.get_hook_name(context.parameters.action_name, "before")
        return await self.run_hook(hook_name, context)

    async def run_success_action(self, context: ExecutionContext) -> Any:
        hook_name = self.get_hook_name(context.parameters.action_name, "success")
        return await self.run_hook(hook_name, context)

    def wrap_action(self, task: ActionTask) -> ActionTask:
        """Wrap *task* with the action before/success passes."""

        async def run_action(context: ExecutionContext) -> Any:
            await self.run_before_action(context)
            result = await maybe_await(task(context))
            context.set_return_value(result)
            await self.run_success_action(context)
            return result

        return run_action

    def _options(self, action: str, params: Any, fields: dict[str, Any]) -> GatewayExecutorOptions:
        if isinstance(params, GatewayExecutorOptions):
            if params.action_name != action:
                raise InvalidUsageError(
                    f"Action {action!r} does not match options for {params.action_name!r}"
                )
            return params
        return GatewayExecutorOptions(action_name=action, params=params, **fields)

    async def exec_action(
        self, action: str, params: Any, task: ActionTask, **fields: Any
    ) -> Any:
        """Run *task* for *action* through the full gateway lifecycle.

        Args:
            action: Action identifier used to derive hook names.
            params: Call parameters, exposed as ``context.parameters.params``.
                A prebuilt :class:`GatewayExecutorOptions` is used as-is; its
                ``action_name`` must equal *action*.
            task: ``(context) -> result``, sync or async.
            **fields: Extra :class:`GatewayExecutorOptions` fields
                (``service_name``, ``store``, ``gateway``, ``logger``).

        Returns:
            The task result.

        Raises:
            InvalidUsageError: *params* is a :class:`GatewayExecutorOptions`
                built for a different action.
            Exception: Whatever a hook or the task raised, unchanged.
        """
        options = self._options(action, params, fields)
        return await self.exec(options, self.wrap_action(task))

    async def exec_action_no_error(
        self, action: str, params: Any, task: ActionTask, **fields: Any
    ) -> Any:
        """Like :meth:`exec_action`, but return a raised exception instead."""
        options = self._options(action, params, fields)
        return await self.exec_no_error(options, self.wrap_action(task))
