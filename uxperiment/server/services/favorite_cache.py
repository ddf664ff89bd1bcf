"""Process-wide favorite state cache.

Every consumer that needs to know whether a user has favorited a component
reads through this cache, and every consumer that changes the state writes
through it. Listeners registered with ``subscribe`` observe each effective
change, so UI pushers, analytics hooks and tests all see the same sequence of
transitions.
"""

import asyncio
from collections import OrderedDict
from typing import Callable, List, Optional, Tuple

from uxperiment.core.logging_config import get_logger

logger = get_logger(__name__)

FavoriteKey = Tuple[int, int]
FavoriteListener = Callable[[int, int, bool], None]


class FavoriteStateCache:
    """Cache of ``(user_id, component_id) -> is_favorite``.

    This cache handles:
    - Read-through of persisted favorite state
    - Change notification to subscribed listeners
    - Eviction of every entry of a deleted component or user

    Attributes:
        max_size: Maximum number of entries to keep (0 = unlimited)
    """

    def __init__(self, max_size: int = 0) -> None:
        self._entries: "OrderedDict[FavoriteKey, bool]" = OrderedDict()
        self._listeners: List[FavoriteListener] = []
        self._max_size = max_size
        self._lock = asyncio.Lock()

    async def get(self, user_id: int, component_id: int) -> Optional[bool]:
        """Get the cached state, or None when it has not been loaded yet."""
        async with self._lock:
            return self._entries.get((user_id, component_id))

    async def set(self, user_id: int, component_id: int, is_favorite: bool) -> bool:
        """Record a favorite state change.

        Writing the value that is already cached is a no-op and notifies nobody.

        Returns:
            True when the cached value changed
        """
        key = (user_id, component_id)
        async with self._lock:
            if self._entries.get(key) is is_favorite:
                return False
            self._store(key, is_favorite)
            listeners = list(self._listeners)

        self._notify(listeners, user_id, component_id, is_favorite)
        return True

    async def prime(self, user_id: int, component_id: int, is_favorite: bool) -> None:
        """Populate the cache from storage without notifying listeners."""
        async with self._lock:
            self._store((user_id, component_id), is_favorite)

    async def evict_component(self, component_id: int) -> int:
        """Drop every entry of a component; returns how many were removed."""
        async with self._lock:
            stale = [key for key in self._entries if key[1] == component_id]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug(f"Evicted {len(stale)} favorite entries of component {component_id}")
        return len(stale)

    async def evict_user(self, user_id: int) -> int:
        """Drop every entry of a user; returns how many were removed."""
        async with self._lock:
            stale = [key for key in self._entries if key[0] == user_id]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug(f"Evicted {len(stale)} favorite entries of user {user_id}")
        return len(stale)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def subscribe(self, listener: FavoriteListener) -> Callable[[], None]:
        """Register a change listener.

        Args:
            listener: Called with ``(user_id, component_id, is_favorite)``

        Returns:
            A callable that unregisters the listener; calling it twice is harmless
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def size(self) -> int:
        """Get the current cache size."""
        return len(self._entries)

    def _store(self, key: FavoriteKey, is_favorite: bool) -> None:
        if key in self._entries:
            self._entries.move_to_end(key)
        elif self._max_size > 0 and len(self._entries) >= self._max_size:
            # Remove oldest entry (simple FIFO)
            self._entries.popitem(last=False)
        self._entries[key] = is_favorite

    @staticmethod
    def _notify(listeners: List[FavoriteListener], user_id: int, component_id: int, is_favorite: bool) -> None:
        for listener in listeners:
            try:
                listener(user_id, component_id, is_favorite)
            except Exception:
                # One broken listener must not hide the change from the others
                logger.exception(f"Favorite listener {listener!r} failed for ({user_id}, {component_id})")


_favorite_cache: Optional[FavoriteStateCache] = None


def get_favorite_cache() -> FavoriteStateCache:
    """Return the process-wide cache instance."""
    global _favorite_cache
    if _favorite_cache is None:
        _favorite_cache = FavoriteStateCache()
    return _favorite_cache


def reset_favorite_cache() -> None:
    """Drop the process-wide cache so the next call starts empty."""
    global _favorite_cache
    _favorite_cache = None


__all__ = [
    "FavoriteListener",
    "FavoriteStateCache",
    "get_favorite_cache",
    "reset_favorite_cache",
]
