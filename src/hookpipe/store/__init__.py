"""Observable state stores for asynchronous operations.

* :class:`AsyncStore` -- tracks one operation's status, result, error, and
  timing, optionally persisting the result through a
  :class:`~hookpipe.storage.KeyValueStorage`.
* :class:`UserStore` -- an :class:`AsyncStore` for user services that also
  holds (and persists) a credential.
"""

from hookpipe.models import AsyncStoreState, AsyncStoreStatus, UserState
from hookpipe.store.async_store import AsyncStore, StoreListener
from hookpipe.store.user_store import UserStore

__all__ = [
    "AsyncStore",
    "AsyncStoreState",
    "AsyncStoreStatus",
    "StoreListener",
    "UserState",
    "UserStore",
]
