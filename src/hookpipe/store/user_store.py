"""Store for user services: the user as the result, plus a credential.

The credential is persisted under its own key
(``credential_storage_key``, falling back to ``storage_key``). User info is
only persisted when ``persist_user_info`` is enabled *and* the two keys
differ, so the credential never overwrites the user record.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from hookpipe.models import UserState
from hookpipe.storage.base import KeyValueStorage
from hookpipe.store.async_store import AsyncStore

logger = logging.getLogger(__name__)


class UserStore(AsyncStore[UserState]):
    """:class:`AsyncStore` holding a user and the credential that fetched it.

    When a storage backend is given, a persisted credential (and user info,
    if enabled) is restored on construction.

    Args:
        storage: Optional backend for credential persistence.
        storage_key: Key for user info (and the credential, when no
            dedicated credential key is given).
        credential_storage_key: Dedicated key for the credential.
        persist_user_info: Also persist the user under *storage_key*.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        storage_key: Optional[str] = None,
        credential_storage_key: Optional[str] = None,
        persist_user_info: bool = False,
    ) -> None:
        super().__init__(storage=storage, storage_key=storage_key, default_state=UserState)
        self.credential_storage_key = credential_storage_key or storage_key
        self.persist_user_info = persist_user_info
        if storage is not None:
            self.restore()

    def _persists_user(self) -> bool:
        return bool(
            self.persist_user_info
            and self.storage_key
            and self.credential_storage_key
            and self.credential_storage_key != self.storage_key
        )

    def get_credential(self) -> Any:
        return self.get_state().credential

    def set_credential(self, credential: Any) -> None:
        self.update_state(credential=credential)

    def get_user(self) -> Any:
        return self.get_result()

    def set_user(self, user: Any) -> None:
        self.update_state(result=user)

    def start(self, result: Any = None, credential: Any = None) -> None:
        super().start(result)
        if credential is not None:
            self.set_credential(credential)

    def success(self, result: Any, credential: Any = None) -> None:
        super().success(result)
        if credential is not None:
            self.set_credential(credential)

    def persist(self) -> None:
        storage = self.get_storage()
        if storage is None or not self.credential_storage_key:
            return
        credential = self.get_credential()
        if credential is not None:
            storage.set_item(self.credential_storage_key, credential)
        else:
            storage.remove_item(self.credential_storage_key)

        if self._persists_user():
            user = self.get_user()
            if user is not None:
                storage.set_item(self.storage_key, user)
            else:
                storage.remove_item(self.storage_key)

    def restore(self) -> Any:
        """Load the persisted credential (and user info) without persisting back.

        Returns:
            The restored credential, or ``None``.
        """
        storage = self.get_storage()
        if storage is None or not self.credential_storage_key:
            return None

        changes: dict[str, Any] = {}
        credential = storage.get_item(self.credential_storage_key)
        if credential is not None:
            changes["credential"] = credential
        if self._persists_user():
            user = storage.get_item(self.storage_key)
            if user is not None:
                changes["result"] = user

        if changes:
            logger.debug("Restored user state keys %s", sorted(changes))
            self.update_state(persist=False, **changes)
        return credential
