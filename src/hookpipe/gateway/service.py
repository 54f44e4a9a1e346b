"""Gateway service -- runs gateway actions through a :class:`GatewayExecutor`.

A *gateway* is any object whose methods implement actions: calling
``service.execute("login", params)`` calls ``gateway.login(params)``
through the hook lifecycle, with the service's store and logger available
to plugins via ``context.parameters``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Awaitable, Callable, Optional, Union

from hookpipe.executor.context import ExecutionContext
from hookpipe.executor.plugin import PluginLike
from hookpipe.executor.runner import maybe_await
from hookpipe.gateway.executor import GatewayExecutor, GatewayExecutorOptions
from hookpipe.storage.base import KeyValueStorage
from hookpipe.store.async_store import AsyncStore

ExecuteFn = Callable[[Any, Any, str], Union[Any, Awaitable[Any]]]


class GatewayAction:
    """Action names used by the bundled services."""

    LOGIN = "login"
    LOGOUT = "logout"
    REGISTER = "register"
    GET_USER_INFO = "getUserInfo"
    REFRESH_USER_INFO = "refreshUserInfo"


class GatewayService:
    """Base class for services backed by a gateway object and a store.

    Args:
        service_name: Name reported to plugins as
            ``context.parameters.service_name``.
        gateway: Object implementing the actions, or ``None``.
        store: Store to drive. Built with :meth:`create_store` when omitted.
        logger: Logger exposed to plugins.
        executor: Executor to run actions on. A fresh
            :class:`GatewayExecutor` when omitted.
        storage: Storage backend for the default store.
        storage_key: Storage key for the default store.
    """

    def __init__(
        self,
        service_name: str,
        gateway: Any = None,
        store: Optional[AsyncStore] = None,
        logger: Optional[logging.Logger] = None,
        executor: Optional[GatewayExecutor] = None,
        storage: Optional[KeyValueStorage] = None,
        storage_key: Optional[str] = None,
    ) -> None:
        self.service_name = service_name
        self._gateway = gateway
        self._logger = logger
        self._store = store if store is not None else self.create_store(storage, storage_key)
        self._executor = executor or GatewayExecutor()

    def create_store(
        self, storage: Optional[KeyValueStorage], storage_key: Optional[str]
    ) -> AsyncStore:
        return AsyncStore(storage=storage, storage_key=storage_key)

    @property
    def executor(self) -> GatewayExecutor:
        return self._executor

    @property
    def logger(self) -> Optional[logging.Logger]:
        return self._logger

    def get_store(self) -> AsyncStore:
        return self._store.get_store()

    def get_gateway(self) -> Any:
        return self._gateway

    def use(self, plugin: Union[PluginLike, Sequence[PluginLike]]) -> "GatewayService":
        """Register one or more plugins on the service's executor.

        Returns:
            The service, for chaining.
        """
        self._executor.use(plugin)
        return self

    def create_default_fn(self, action: str) -> ExecuteFn:
        """Build the task used when :meth:`execute` gets no *fn*.

        When the gateway has a callable attribute named exactly *action*, the
        task calls it with the params. Otherwise the task returns ``None``.
        """
        method = getattr(self._gateway, action, None) if self._gateway is not None else None
        if not callable(method):
            return lambda params, gateway, action_name: None

        async def call_gateway(params: Any, gateway: Any, action_name: str) -> Any:
            return await maybe_await(getattr(gateway, action_name)(params))

        return call_gateway

    def create_service_options(self, action: str, params: Any) -> GatewayExecutorOptions:
        return GatewayExecutorOptions(
            action_name=action,
            params=params,
            service_name=self.service_name,
            store=self._store,
            gateway=self._gateway,
            logger=self._logger,
        )

    async def execute(self, action: str, params: Any = None, fn: Optional[ExecuteFn] = None) -> Any:
        """Run *action* through the executor.

        Args:
            action: The action name, e.g. ``GatewayAction.LOGIN``.
            params: Parameters for the gateway call. Before hooks may replace
                them through ``context.parameters.params``.
            fn: ``(params, gateway, action) -> result``, sync or async.
                Defaults to :meth:`create_default_fn`.

        Returns:
            The result of *fn*.
        """
        options = self.create_service_options(action, params)
        task_fn = fn or self.create_default_fn(action)

        async def task(context: ExecutionContext) -> Any:
            call_params = context.parameters.params
            return await maybe_await(task_fn(call_params, self._gateway, action))

        return await self._executor.exec_action(action, options, task)
