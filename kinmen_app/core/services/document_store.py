"""In-memory single-table key-value document store."""

from __future__ import annotations

import copy
from threading import Lock
from typing import Any, Iterable


def progress_key(username: str) -> str:
    return f"PROGRESS#{username}"


def class_key(class_id: str) -> str:
    return f"CLASS#{class_id}"


def invite_key(invite_code: str) -> str:
    return f"INVITE#{invite_code}"


def teacher_key(username: str) -> str:
    return f"TEACHER#{username}"


class DocumentStore:
    """Stores JSON-like documents under string keys.

    Documents are deep-copied on write and read so callers never share
    mutable state with the store.
    """

    def __init__(self) -> None:
        self._items: dict[str, dict[str, Any]] = {}
        self._lock = Lock()

    def get(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            item = self._items.get(key)
            return copy.deepcopy(item) if item is not None else None

    def put(self, key: str, item: dict[str, Any]) -> None:
        with self._lock:
            self._items[key] = copy.deepcopy(item)

    def batch_get(self, keys: Iterable[str]) -> list[dict[str, Any]]:
        """Return the documents that exist for ``keys``, in key order."""
        with self._lock:
            return [copy.deepcopy(self._items[key]) for key in keys if key in self._items]

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._items
