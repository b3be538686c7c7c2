"""Per-resource save serialization."""

import asyncio
from weakref import WeakValueDictionary


class ResourceLocks:
    """In-process asyncio locks keyed by resource id.

    A lock lives as long as some coroutine holds or waits on it.
    """

    def __init__(self) -> None:
        self._locks: WeakValueDictionary[str, asyncio.Lock] = WeakValueDictionary()

    def get(self, resource_id: str) -> asyncio.Lock:
        lock = self._locks.get(resource_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[resource_id] = lock
        return lock
