"""Tests for hookpipe.store.async_store -- status transitions and persistence."""

from __future__ import annotations

from typing import Any

import pytest

from hookpipe.models import AsyncStoreState, AsyncStoreStatus
from hookpipe.storage import MemoryStorage
from hookpipe.store import AsyncStore


class TestTransitions:
    def test_initial_state_is_draft(self) -> None:
        store = AsyncStore()
        assert store.get_status() == AsyncStoreStatus.DRAFT
        assert store.get_loading() is False
        assert store.get_result() is None
        assert store.is_completed() is False
        assert store.get_store() is store

    def test_start_is_pending(self) -> None:
        store = AsyncStore()
        store.start()
        assert store.is_pending() is True
        assert store.get_state().start_time is not None
        assert store.get_state().end_time is None

    def test_success(self) -> None:
        store = AsyncStore()
        store.start()
        store.success({"id": 1})
        assert store.is_success() is True
        assert store.is_completed() is True
        assert store.get_result() == {"id": 1}
        assert store.get_error() is None
        assert store.get_duration() >= 0

    def test_failed(self) -> None:
        store = AsyncStore()
        error = RuntimeError("nope")
        store.start()
        store.failed(error)
        assert store.is_failed() is True
        assert store.get_error() is error
        assert store.get_result() is None

    def test_stopped(self) -> None:
        store = AsyncStore()
        store.start()
        store.stopped()
        assert store.is_stopped() is True
        assert store.is_completed() is True

    def test_reset_returns_to_default_state(self) -> None:
        store = AsyncStore()
        store.start()
        store.success("x")
        store.reset()
        assert store.get_state() == AsyncStoreState()

    def test_states_are_replaced_not_mutated(self) -> None:
        store = AsyncStore()
        before = store.get_state()
        store.start()
        assert before.status == AsyncStoreStatus.DRAFT
        assert store.get_state() is not before


class TestDuration:
    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            (100.0, 250.0, 150.0),
            (None, 250.0, 0),
            (100.0, None, 0),
            (250.0, 100.0, 0),
            (-5.0, 10.0, 0),
            (float("nan"), 10.0, 0),
            (0.0, float("inf"), 0),
        ],
    )
    def test_duration(self, start: Any, end: Any, expected: float) -> None:
        store = AsyncStore()
        store.update_state(persist=False, start_time=start, end_time=end)
        assert store.get_duration() == expected


class TestSubscribe:
    def test_listeners_see_each_new_state(self) -> None:
        store = AsyncStore()
        seen: list[AsyncStoreStatus] = []
        unsubscribe = store.subscribe(lambda state: seen.append(state.status))

        store.start()
        store.success(1)
        unsubscribe()
        store.reset()

        assert seen == [AsyncStoreStatus.PENDING, AsyncStoreStatus.SUCCESS]

    def test_unsubscribe_twice_is_harmless(self) -> None:
        store = AsyncStore()
        unsubscribe = store.subscribe(lambda state: None)
        unsubscribe()
        unsubscribe()


class TestPersistence:
    def test_success_result_is_written(self) -> None:
        storage = MemoryStorage()
        store = AsyncStore(storage=storage, storage_key="profile")
        store.start()
        store.success({"name": "ada"})
        assert storage.get_item("profile") == {"name": "ada"}

    def test_failure_keeps_previous_value(self) -> None:
        storage = MemoryStorage()
        storage.set_item("profile", "old")
        store = AsyncStore(storage=storage, storage_key="profile")
        store.start()
        store.failed(RuntimeError("x"))
        assert storage.get_item("profile") == "old"

    def test_reset_removes_value(self) -> None:
        storage = MemoryStorage()
        store = AsyncStore(storage=storage, storage_key="profile")
        store.success("v")
        store.reset()
        assert storage.get_item("profile") is None

    def test_restore(self) -> None:
        storage = MemoryStorage()
        storage.set_item("profile", {"name": "ada"})
        store = AsyncStore(storage=storage, storage_key="profile")
        assert store.restore() == {"name": "ada"}
        assert store.is_success() is True
        assert store.get_result() == {"name": "ada"}

    def test_restore_without_value(self) -> None:
        store = AsyncStore(storage=MemoryStorage(), storage_key="profile")
        assert store.restore() is None
        assert store.get_status() == AsyncStoreStatus.DRAFT

    def test_no_key_disables_persistence(self) -> None:
        storage = MemoryStorage()
        store = AsyncStore(storage=storage)
        store.success("v")
        assert len(storage) == 0
        assert store.restore() is None
