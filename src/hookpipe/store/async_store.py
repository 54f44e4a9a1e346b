"""State store for a single asynchronous operation.

:class:`AsyncStore` records the lifecycle of an operation as an immutable
:class:`~hookpipe.models.AsyncStoreState`: every transition
(:meth:`~AsyncStore.start`, :meth:`~AsyncStore.success`,
:meth:`~AsyncStore.failed`, :meth:`~AsyncStore.stopped`,
:meth:`~AsyncStore.reset`) installs a new state object, notifies
subscribers, and persists the result when a storage backend is configured.

Gateway services drive a store through
:class:`~hookpipe.gateway.plugin.GatewayStorePlugin`::

    store = AsyncStore(storage=MemoryStorage(), storage_key="profile")
    store.start()
    store.success({"name": "ada"})
    assert store.is_success() and store.get_result() == {"name": "ada"}
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any, Callable, Generic, Optional, TypeVar

from hookpipe.models import AsyncStoreState, AsyncStoreStatus
from hookpipe.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=AsyncStoreState)
StoreListener = Callable[[Any], None]


def _now_ms() -> float:
    return time.time() * 1000


class AsyncStore(Generic[StateT]):
    """Status, result, error, and timing of one asynchronous operation.

    Args:
        storage: Optional backend used by :meth:`persist` and :meth:`restore`.
        storage_key: Key under which the result is persisted. Persistence is
            disabled unless both *storage* and *storage_key* are given.
        default_state: Factory for the initial (and post-:meth:`reset`) state.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        storage_key: Optional[str] = None,
        default_state: Optional[Callable[[], StateT]] = None,
    ) -> None:
        self._storage = storage
        self.storage_key = storage_key
        self._default_state = default_state or AsyncStoreState
        self._state: StateT = self._default_state()
        self._listeners: list[StoreListener] = []

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def get_store(self) -> "AsyncStore[StateT]":
        return self

    def get_storage(self) -> Optional[KeyValueStorage]:
        return self._storage

    def get_state(self) -> StateT:
        return self._state

    def get_loading(self) -> bool:
        return self._state.loading

    def get_result(self) -> Any:
        return self._state.result

    def get_error(self) -> Any:
        return self._state.error

    def get_status(self) -> AsyncStoreStatus:
        return self._state.status

    def get_duration(self) -> float:
        """Milliseconds between start and end, or ``0`` when not measurable."""
        start, end = self._state.start_time, self._state.end_time
        if start is None or end is None:
            return 0
        if not (math.isfinite(start) and math.isfinite(end)):
            return 0
        if start < 0 or end < start:
            return 0
        return end - start

    def is_success(self) -> bool:
        return not self.get_loading() and self.get_status() == AsyncStoreStatus.SUCCESS

    def is_failed(self) -> bool:
        return not self.get_loading() and self.get_status() == AsyncStoreStatus.FAILED

    def is_stopped(self) -> bool:
        return not self.get_loading() and self.get_status() == AsyncStoreStatus.STOPPED

    def is_completed(self) -> bool:
        return self.is_success() or self.is_failed() or self.is_stopped()

    def is_pending(self) -> bool:
        return self.get_loading() and self.get_status() == AsyncStoreStatus.PENDING

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def update_state(self, persist: bool = True, **changes: Any) -> None:
        """Install a copy of the state with *changes* applied and notify listeners.

        Args:
            persist: Write through to storage after the update.
            **changes: State fields to replace.
        """
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            listener(self._state)
        if persist:
            self.persist()

    def start(self, result: Any = None) -> None:
        self.update_state(
            loading=True,
            result=result,
            status=AsyncStoreStatus.PENDING,
            start_time=_now_ms(),
            end_time=None,
        )

    def success(self, result: Any) -> None:
        self.update_state(
            loading=False,
            result=result,
            error=None,
            status=AsyncStoreStatus.SUCCESS,
            end_time=_now_ms(),
        )

    def failed(self, error: Any, result: Any = None) -> None:
        self.update_state(
            loading=False,
            error=error,
            result=result,
            status=AsyncStoreStatus.FAILED,
            end_time=_now_ms(),
        )

    def stopped(self, error: Any = None, result: Any = None) -> None:
        self.update_state(
            loading=False,
            error=error,
            result=result,
            status=AsyncStoreStatus.STOPPED,
            end_time=_now_ms(),
        )

    def reset(self) -> None:
        """Return to the default state and clear persisted data."""
        self._state = self._default_state()
        for listener in list(self._listeners):
            listener(self._state)
        self.persist()

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Call *listener* with the new state after every transition.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def persist(self) -> None:
        """Write the current result to storage (or remove it when ``None``)."""
        if self._storage is None or not self.storage_key:
            return
        result = self._state.result
        if self._state.status == AsyncStoreStatus.SUCCESS and result is not None:
            self._storage.set_item(self.storage_key, result)
        elif self._state.status == AsyncStoreStatus.DRAFT:
            self._storage.remove_item(self.storage_key)

    def restore(self) -> Any:
        """Mark the store successful with the persisted result, if any.

        Returns:
            The restored value, or ``None`` when nothing was stored.
        """
        if self._storage is None or not self.storage_key:
            return None
        value = self._storage.get_item(self.storage_key)
        if value is not None:
            logger.debug("Restored '%s' from storage", self.storage_key)
            self.success(value)
        return value
