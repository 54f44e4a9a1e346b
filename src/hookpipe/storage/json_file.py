"""Storage in a single JSON document on disk.

The whole document is rewritten on every change through
:func:`hookpipe.config.atomic_write`, with ``0o600`` permissions since
stores commonly persist credentials.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from hookpipe.config import atomic_write
from hookpipe.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)


class JSONFileStorage(KeyValueStorage):
    """Key/value storage persisted as one JSON object.

    Values must be JSON-serialisable. An unreadable or corrupt file is
    treated as empty (and logged) rather than failing every read.

    Args:
        path: Location of the JSON file. Parent directories are created on
            first write.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """The filesystem path of the backing JSON file."""
        return self._path

    def get_item(self, key: str, default: Optional[Any] = None) -> Any:
        return self._load().get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def clear(self) -> None:
        if self._path.is_file():
            self._path.unlink()

    def _load(self) -> dict[str, Any]:
        if not self._path.is_file():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        atomic_write(self._path, json.dumps(data, indent=2) + "\n", mode=0o600)
