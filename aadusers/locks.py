"""Named locks used to serialise changes to the same resource."""

from __future__ import annotations

import logging
import threading

log = logging.getLogger(__name__)


class MutexKV:
    """A store of locks keyed by arbitrary strings."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._store: dict[str, threading.Lock] = {}

    def _get(self, key: str) -> threading.Lock:
        with self._guard:
            return self._store.setdefault(key, threading.Lock())

    def lock(self, key: str) -> None:
        """Acquire the lock for ``key``; the caller must later unlock it."""
        log.debug("Locking %r", key)
        self._get(key).acquire()
        log.debug("Locked %r", key)

    def unlock(self, key: str) -> None:
        """Release the lock for ``key``; raises RuntimeError if not held."""
        log.debug("Unlocking %r", key)
        self._get(key).release()
        log.debug("Unlocked %r", key)

    def locked(self, key: str) -> bool:
        """Whether the lock for ``key`` is currently held."""
        return self._get(key).locked()


_mutex = MutexKV()


def lock_by_name(resource_type: str, name: str) -> None:
    """Lock a name within a resource type."""
    _mutex.lock(f"{resource_type}.{name}")


def unlock_by_name(resource_type: str, name: str) -> None:
    """Unlock a name within a resource type."""
    _mutex.unlock(f"{resource_type}.{name}")