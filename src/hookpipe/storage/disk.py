"""Disk-backed storage using :mod:`diskcache`.

Values are pickled by :class:`diskcache.Cache`, so anything picklable can
be stored. When ``ttl_seconds`` is set every write expires after that many
seconds; expired keys read as missing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import diskcache

from hookpipe.storage.base import KeyValueStorage


class DiskCacheStorage(KeyValueStorage):
    """Key/value storage in a :class:`diskcache.Cache` directory.

    Args:
        directory: Cache directory. Created if it does not exist.
        ttl_seconds: Optional expiry applied to every :meth:`set_item`.

    Example::

        storage = DiskCacheStorage("/tmp/hookpipe-store", ttl_seconds=3600)
        storage.set_item("token", "abc")
    """

    def __init__(self, directory: str | Path, ttl_seconds: Optional[int] = None) -> None:
        self._directory = Path(directory)
        self._ttl = ttl_seconds
        self._cache = diskcache.Cache(str(self._directory))

    @property
    def directory(self) -> Path:
        return self._directory

    def get_item(self, key: str, default: Optional[Any] = None) -> Any:
        return self._cache.get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        self._cache.set(key, value, expire=self._ttl)

    def remove_item(self, key: str) -> None:
        self._cache.delete(key)

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        self._cache.close()
