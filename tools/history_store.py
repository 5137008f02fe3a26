"""Small key-value stores used to persist client data between sessions.

Both stores expose the same ``get_item`` / ``set_item`` / ``remove_item``
interface and only deal in strings; callers serialize their own values.
"""
from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

load_dotenv()
WORD_HISTORY_PATH = os.environ.get("WORD_HISTORY_PATH", "data/word_history.json")

logger = logging.getLogger(__name__)


class MemoryStore:
    """In-process store, nothing survives the interpreter."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStore:
    """
    Stores every key in a single JSON object on disk.
    A missing file reads as an empty store.
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or WORD_HISTORY_PATH)
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            try:
                items = self._read()
            except ValueError as e:
                logger.warning("Overwriting unreadable store %s: %s", self.path, e)
                items = {}
            items[key] = value
            self._write(items)

    def remove_item(self, key: str) -> None:
        with self._lock:
            items = self._read()
            if items.pop(key, None) is not None:
                self._write(items)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return data

    def _write(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(items, f, indent=2, ensure_ascii=False)


def get_history_store(path: str | Path | None = None) -> JsonFileStore:
    """Return the file store used for the word history."""
    return JsonFileStore(path)
