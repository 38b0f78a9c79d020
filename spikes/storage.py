"""Key-value persistence for recorded data.

Values are JSON documents stored under string keys. ``load_from_storage``,
``save_to_storage`` and ``clear_storage`` are the only entry points the
stores use; they never raise, failures are logged and the caller keeps
working with its default or in-memory state.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Dict-backed storage, lost when the process exits."""

    def __init__(self):
        self._items: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """One JSON file per key inside ``directory``."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return self.directory / f"{safe}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()


def load_from_storage(
    storage,
    key: str,
    default: Any,
    decode: Optional[Callable[[Any], Any]] = None,
) -> Any:
    """Read and decode ``key``; return ``default`` if absent or unreadable.

    ``decode`` turns the parsed JSON into the caller's type and may raise
    on malformed content, which is treated like a corrupt value.
    """
    try:
        raw = storage.get(key)
        if raw is None:
            return default
        data = json.loads(raw)
        value = decode(data) if decode else data
    except Exception:
        logger.exception("Error loading %s from storage, using default", key)
        return default

    logger.debug("Loaded %s from storage", key)
    return value


def save_to_storage(storage, key: str, value: Any) -> bool:
    """Serialize and write ``value``. Returns False if the write failed."""
    try:
        storage.set(key, json.dumps(value, indent=2))
    except Exception:
        logger.exception("Error saving %s to storage", key)
        return False
    return True


def clear_storage(storage, key: str) -> None:
    try:
        storage.remove(key)
    except Exception:
        logger.exception("Error clearing %s from storage", key)
