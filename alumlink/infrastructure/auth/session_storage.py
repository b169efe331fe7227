"""Concrete SessionStorage implementations.

FileSessionStorage mirrors a browser's local storage with a JSON object on
disk; InMemorySessionStorage is used by tests and embedded callers. The
same store keeps the operator's saved API mode between CLI runs.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from alumlink.domain.interfaces.auth import SessionStorage

logger = logging.getLogger(__name__)


class InMemorySessionStorage(SessionStorage):
    """Dict-backed storage."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class FileSessionStorage(SessionStorage):
    """Reads and writes items in a JSON object stored at path.

    A missing file means an empty store. Malformed content raises so the
    caller can decide how to degrade.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.is_file():
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Session file {self.path} does not contain a JSON object")
        return data

    def get_item(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        if value is None:
            return None
        # Local storage only holds strings; structured values are re-serialized.
        return value if isinstance(value, str) else json.dumps(value, separators=(',', ':'))

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        logger.debug(f"Saved session item '{key}' to {self.path}")


API_MODE_KEY = "api-mode"
_MODE_VALUES = {"real": True, "mock": False}


def load_mode_preference(storage: SessionStorage) -> Optional[bool]:
    """Returns the saved use_real choice, or None when nothing usable is stored."""
    try:
        value = storage.get_item(API_MODE_KEY)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read saved API mode: {e}")
        return None
    if value is None:
        return None
    if value not in _MODE_VALUES:
        logger.warning(f"Ignoring unknown saved API mode: {value!r}")
        return None
    return _MODE_VALUES[value]


def save_mode_preference(storage: SessionStorage, use_real: bool) -> None:
    storage.set_item(API_MODE_KEY, "real" if use_real else "mock")
    logger.info(f"Saved API mode preference: {'real' if use_real else 'mock'}")
