"""Key/value storage adapters used to persist store state.

* :class:`KeyValueStorage` -- the synchronous storage interface.
* :class:`MemoryStorage` -- process-local dict storage.
* :class:`JSONFileStorage` -- a single JSON document on disk, written
  atomically with ``0o600`` permissions.
* :class:`DiskCacheStorage` -- :mod:`diskcache`-backed storage with an
  optional TTL.
"""

from hookpipe.storage.base import KeyValueStorage
from hookpipe.storage.disk import DiskCacheStorage
from hookpipe.storage.json_file import JSONFileStorage
from hookpipe.storage.memory import MemoryStorage

__all__ = ["DiskCacheStorage", "JSONFileStorage", "KeyValueStorage", "MemoryStorage"]
