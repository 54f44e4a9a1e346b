"""In-process storage backed by a dict."""

from __future__ import annotations

from typing import Any, Optional

from hookpipe.storage.base import KeyValueStorage


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage. Contents vanish with the process."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def __len__(self) -> int:
        return len(self._data)

    def get_item(self, key: str, default: Optional[Any] = None) -> Any:
        return self._data.get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()
