"""Bounded in-memory icon cache."""

from __future__ import annotations

from collections import OrderedDict
import threading
from typing import Callable, Generic, Hashable, TypeVar

from doseer.icons.models import Icon

K = TypeVar("K", bound=Hashable)


class IconCache(Generic[K]):
    """A size-bound least-recently-used map of keys to icons.

    Lookups and inserts are serialized by a lock so one cache can be shared
    between threads. Resolution in :meth:`get_or_resolve` runs outside the
    lock; two threads missing the same key may both resolve it, and the
    later insert simply refreshes the entry.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = max(1, int(capacity))
        self._store: OrderedDict[K, Icon] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K) -> Icon | None:
        """Return the cached icon and mark it as recently used."""
        with self._lock:
            icon = self._store.get(key)
            if icon is not None:
                self._store.move_to_end(key)
            return icon

    def put(self, key: K, icon: Icon) -> None:
        """Insert or refresh an entry, evicting the least recently used ones."""
        with self._lock:
            self._store[key] = icon
            self._store.move_to_end(key)
            while len(self._store) > self._capacity:
                self._store.popitem(last=False)

    def get_or_resolve(self, key: K, resolve: Callable[[], Icon | None]) -> Icon | None:
        """Return the cached icon for ``key`` or resolve and cache it.

        A ``None`` result is returned as-is and never cached.
        """
        icon = self.get(key)
        if icon is not None:
            return icon
        icon = resolve()
        if icon is not None:
            self.put(key, icon)
        return icon

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def keys(self) -> list[K]:
        """Return the cached keys, least recently used first."""
        with self._lock:
            return list(self._store)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
