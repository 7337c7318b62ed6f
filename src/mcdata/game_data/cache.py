"""
Process-wide cache of built stores.

Stores are immutable once published, so readers never lock. Building is
serialized per key: concurrent requests for the same key wait for the
in-flight build instead of starting their own.
"""

import logging
import threading
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class StoreCache(Generic[K, V]):
    """Lazily populated map of key -> built value.

    A failing build publishes nothing; the exception reaches every caller
    that was waiting on it and the next request tries again.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._entries: Dict[K, V] = {}
        self._key_locks: Dict[K, threading.Lock] = {}
        self._lock = threading.Lock()

    def get(self, key: K) -> Optional[V]:
        """Return the published value for ``key`` or None."""
        return self._entries.get(key)

    def get_or_build(self, key: K, build: Callable[[], V]) -> V:
        """Return the cached value, building it once if needed.

        Args:
            key: Cache key
            build: Zero-argument factory, called at most once per successful key

        Returns:
            The value published for ``key``
        """
        value = self._entries.get(key)
        if value is not None:
            return value

        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            # Another thread may have finished while we waited
            value = self._entries.get(key)
            if value is not None:
                return value

            self.logger.debug(f"Cache miss for {key!r}, building")
            value = build()
            with self._lock:
                self._entries[key] = value
            return value

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Drop every published value.

        Key locks are kept so a build still in flight keeps serializing
        requests for its key.
        """
        with self._lock:
            self._entries.clear()
        self.logger.debug("Store cache cleared")
