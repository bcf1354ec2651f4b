"""A dictionary guarded by a lock for use across threads."""

from __future__ import annotations

import threading
from typing import Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LockedMap(Generic[K, V]):
    """Thread-safe mapping; missing keys read as None."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: dict[K, V] = {}

    def put(self, key: K, value: V) -> None:
        with self._lock:
            self._data[key] = value

    def get(self, key: K) -> V | None:
        with self._lock:
            return self._data.get(key)

    def has(self, key: K) -> bool:
        with self._lock:
            return key in self._data

    def delete(self, key: K) -> None:
        with self._lock:
            self._data.pop(key, None)

    def to_list(self) -> list[V]:
        with self._lock:
            return list(self._data.values())