"""Ready-made gateway services for login, registration, and user info.

Gateways implement the actions as snake_case methods::

    class AuthGateway:
        async def login(self, params): ...
        async def logout(self, params=None): ...
        async def register(self, params): ...
        async def get_user_info(self, params): ...
        async def refresh_user_info(self, params): ...

Hook names are derived from the camelCase action names in
:class:`~hookpipe.gateway.service.GatewayAction`, so a plugin hooking into
user-info fetches implements ``on_get_user_info_before`` (or
``onGetUserInfoBefore``).

The single-purpose services (:class:`LoginService`, :class:`RegisterService`,
:class:`UserInfoService`) keep their store in sync through
:class:`~hookpipe.gateway.plugin.GatewayStorePlugin`, which they install
on construction. :class:`UserService` manages its
:class:`~hookpipe.store.UserStore` directly.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from hookpipe.executor.runner import maybe_await
from hookpipe.gateway.executor import GatewayExecutor
from hookpipe.gateway.plugin import GatewayStorePlugin
from hookpipe.gateway.service import GatewayAction, GatewayService
from hookpipe.models import AsyncStoreStatus
from hookpipe.storage.base import KeyValueStorage
from hookpipe.store.async_store import AsyncStore
from hookpipe.store.user_store import UserStore


async def _call(gateway: Any, method: str, params: Any) -> Any:
    if gateway is None:
        return None
    return await maybe_await(getattr(gateway, method)(params))


class _StoreBackedService(GatewayService):
    def __init__(self, service_name: str, **kwargs: Any) -> None:
        super().__init__(service_name, **kwargs)
        self.use(GatewayStorePlugin())


class LoginService(_StoreBackedService):
    """Obtain and hold a credential.

    The credential is the store's result, so with a storage backend it
    survives restarts via :meth:`AsyncStore.restore`.
    """

    def __init__(self, service_name: str = "LoginService", **kwargs: Any) -> None:
        super().__init__(service_name, **kwargs)

    def get_credential(self) -> Any:
        return self.get_store().get_result()

    async def login(self, params: Any) -> Any:
        return await self.execute(GatewayAction.LOGIN, params)

    async def logout(self, params: Any = None) -> Any:
        """Log out through the gateway and always reset local state."""
        try:
            return await _call(self.get_gateway(), "logout", params)
        finally:
            self.get_store().reset()


class RegisterService(_StoreBackedService):
    """Register a user and keep the registration result in the store."""

    def __init__(self, service_name: str = "RegisterService", **kwargs: Any) -> None:
        super().__init__(service_name, **kwargs)

    def get_user(self) -> Any:
        return self.get_store().get_result()

    async def register(self, params: Any) -> Any:
        return await self.execute(GatewayAction.REGISTER, params)


class UserInfoService(_StoreBackedService):
    """Fetch and cache the current user's information."""

    def __init__(self, service_name: str = "UserInfoService", **kwargs: Any) -> None:
        super().__init__(service_name, **kwargs)

    def get_user(self) -> Any:
        return self.get_store().get_result()

    async def get_user_info(self, params: Any = None) -> Any:
        return await self.execute(
            GatewayAction.GET_USER_INFO,
            params,
            lambda call_params, gateway, action: _call(gateway, "get_user_info", call_params),
        )

    async def refresh_user_info(self, params: Any = None) -> Any:
        return await self.execute(
            GatewayAction.REFRESH_USER_INFO,
            params,
            lambda call_params, gateway, action: _call(gateway, "refresh_user_info", call_params),
        )


class UserService(GatewayService):
    """Login, logout, registration, and user info on one :class:`UserStore`.

    The store's result is the user and its ``credential`` is the login
    credential. A user is authenticated when the store is successful and
    holds a credential.

    Args:
        gateway: Object implementing the five user actions.
        store: Existing :class:`UserStore`. Built from the storage
            arguments when omitted.
        storage: Backend used to persist the credential.
        storage_key: Key for user info.
        credential_storage_key: Dedicated credential key.
        persist_user_info: Also persist user info.
        service_name: Name reported to plugins.
        logger: Logger for plugins and login warnings.
        executor: Executor to run actions on.

    Example::

        service = UserService(gateway=AuthGateway(), storage=MemoryStorage(),
                              credential_storage_key="token")
        await service.login({"email": "ada@example.com", "password": "..."})
        assert service.is_authenticated()
    """

    def __init__(
        self,
        gateway: Any = None,
        store: Optional[UserStore] = None,
        storage: Optional[KeyValueStorage] = None,
        storage_key: Optional[str] = None,
        credential_storage_key: Optional[str] = None,
        persist_user_info: bool = False,
        service_name: str = "UserService",
        logger: Optional[logging.Logger] = None,
        executor: Optional[GatewayExecutor] = None,
    ) -> None:
        self._credential_storage_key = credential_storage_key
        self._persist_user_info = persist_user_info
        super().__init__(
            service_name,
            gateway=gateway,
            store=store,
            logger=logger,
            executor=executor,
            storage=storage,
            storage_key=storage_key,
        )

    def create_store(
        self, storage: Optional[KeyValueStorage], storage_key: Optional[str]
    ) -> AsyncStore:
        return UserStore(
            storage=storage,
            storage_key=storage_key,
            credential_storage_key=self._credential_storage_key,
            persist_user_info=self._persist_user_info,
        )

    def get_store(self) -> UserStore:
        return self._store

    async def login(self, params: Any) -> Any:
        """Log in, then fetch user info with the new credential.

        A failed user-info fetch does not fail the login: the credential is
        kept and the user stays ``None`` until :meth:`get_user_info` succeeds.

        Returns:
            The credential, or ``None`` when the gateway returned none.
        """
        store = self.get_store()

        async def run_login(call_params: Any, gateway: Any, action: str) -> Any:
            store.start()
            try:
                credential = await _call(gateway, "login", call_params)
                if not credential:
                    store.failed(RuntimeError("Login failed"))
                    return None

                user = None
                try:
                    user = await _call(gateway, "get_user_info", credential)
                except Exception as exc:
                    if self.logger is not None:
                        self.logger.warning("Failed to fetch user info after login: %s", exc)
                store.success(user, credential)
                return credential
            except Exception as exc:
                store.failed(exc)
                raise

        return await self.execute(GatewayAction.LOGIN, params, run_login)

    async def logout(self, params: Any = None) -> Any:
        """Log out through the gateway and reset the store.

        When the gateway call fails the store is marked failed and keeps
        its credential.
        """
        store = self.get_store()

        async def run_logout(call_params: Any, gateway: Any, action: str) -> Any:
            try:
                result = await _call(gateway, "logout", call_params)
            except Exception as exc:
                store.failed(exc)
                raise
            store.reset()
            return result

        return await self.execute(GatewayAction.LOGOUT, params, run_logout)

    async def register(self, params: Any) -> Any:
        """Register a user. Authentication state is left unchanged."""
        store = self.get_store()

        async def run_register(call_params: Any, gateway: Any, action: str) -> Any:
            user = await _call(gateway, "register", call_params)
            if not user:
                return None
            store.set_user(user)
            return user

        return await self.execute(GatewayAction.REGISTER, params, run_register)

    def _user_fetch(self, method: str):
        store = self.get_store()

        async def fetch(call_params: Any, gateway: Any, action: str) -> Any:
            if call_params is None:
                call_params = store.get_credential()
            user = await _call(gateway, method, call_params)
            if not user:
                return None
            store.set_user(user)
            return user

        return fetch

    async def get_user_info(self, params: Any = None) -> Any:
        """Fetch user info, using the stored credential when *params* is ``None``."""
        return await self.execute(
            GatewayAction.GET_USER_INFO, params, self._user_fetch("get_user_info")
        )

    async def refresh_user_info(self, params: Any = None) -> Any:
        return await self.execute(
            GatewayAction.REFRESH_USER_INFO, params, self._user_fetch("refresh_user_info")
        )

    def is_authenticated(self) -> bool:
        store = self.get_store()
        return store.get_status() == AsyncStoreStatus.SUCCESS and bool(store.get_credential())

    def get_user(self) -> Any:
        return self.get_store().get_user()

    def get_credential(self) -> Any:
        return self.get_store().get_credential()
