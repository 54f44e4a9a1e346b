"""Tests for the key/value storage adapters."""

from __future__ import annotations

import stat
import time
from pathlib import Path

import pytest

from hookpipe.storage import DiskCacheStorage, JSONFileStorage, KeyValueStorage, MemoryStorage


@pytest.fixture(params=["memory", "json", "diskcache"])
def storage(request: pytest.FixtureRequest, tmp_path: Path) -> KeyValueStorage:
    if request.param == "memory":
        yield MemoryStorage()
    elif request.param == "json":
        yield JSONFileStorage(tmp_path / "store.json")
    else:
        backend = DiskCacheStorage(tmp_path / "cache")
        yield backend
        backend.close()


class TestKeyValueContract:
    def test_missing_key_returns_default(self, storage: KeyValueStorage) -> None:
        assert storage.get_item("missing") is None
        assert storage.get_item("missing", "fallback") == "fallback"

    def test_set_get_remove(self, storage: KeyValueStorage) -> None:
        storage.set_item("token", {"value": "abc", "scopes": ["read"]})
        assert storage.get_item("token") == {"value": "abc", "scopes": ["read"]}
        storage.remove_item("token")
        assert storage.get_item("token") is None

    def test_remove_missing_key_is_not_an_error(self, storage: KeyValueStorage) -> None:
        storage.remove_item("never-set")

    def test_clear(self, storage: KeyValueStorage) -> None:
        storage.set_item("a", 1)
        storage.set_item("b", 2)
        storage.clear()
        assert storage.get_item("a") is None
        assert storage.get_item("b") is None


class TestJSONFileStorage:
    def test_file_is_private(self, tmp_path: Path) -> None:
        storage = JSONFileStorage(tmp_path / "nested" / "store.json")
        storage.set_item("token", "abc")
        mode = stat.S_IMODE(storage.path.stat().st_mode)
        assert mode == 0o600

    def test_values_survive_new_instance(self, tmp_path: Path) -> None:
        JSONFileStorage(tmp_path / "store.json").set_item("k", [1, 2])
        assert JSONFileStorage(tmp_path / "store.json").get_item("k") == [1, 2]

    def test_corrupt_file_reads_as_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        storage = JSONFileStorage(path)
        assert storage.get_item("k") is None
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"

    def test_non_object_document_reads_as_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert JSONFileStorage(path).get_item("0") is None


class TestDiskCacheStorage:
    def test_ttl_is_applied(self, tmp_path: Path) -> None:
        storage = DiskCacheStorage(tmp_path / "cache", ttl_seconds=60)
        storage.set_item("k", "v")
        value, expire_time = storage._cache.get("k", expire_time=True)
        assert value == "v"
        assert expire_time is not None
        assert expire_time > time.time()
        storage.close()

    def test_no_ttl_never_expires(self, tmp_path: Path) -> None:
        storage = DiskCacheStorage(tmp_path / "cache")
        storage.set_item("k", "v")
        assert storage._cache.get("k", expire_time=True) == ("v", None)
        storage.close()

    def test_directory_property(self, tmp_path: Path) -> None:
        storage = DiskCacheStorage(tmp_path / "cache")
        assert storage.directory == tmp_path / "cache"
        storage.close()
