"""Abstract base class for key/value storage adapters.

Stores such as :class:`~hookpipe.store.AsyncStore` persist their result
through this interface, so any backend that can get, set, and remove a
JSON-compatible value by string key can be plugged in.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class KeyValueStorage(ABC):
    """Synchronous key/value storage.

    ``get_item`` returns ``None`` for a missing key rather than raising, so
    callers can treat "absent" and "stored None" alike.
    """

    @abstractmethod
    def get_item(self, key: str, default: Optional[Any] = None) -> Any:
        """Return the value stored under *key*, or *default*."""
        ...

    @abstractmethod
    def set_item(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any previous value."""
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete *key*. A missing key is not an error."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
        ...
