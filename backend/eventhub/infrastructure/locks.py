"""
Keyed asyncio locks.

Booking admission reads the current bookings for an event, checks capacity
and then inserts. Holding `KeyedLock.hold(event_id)` across that sequence
serializes bookings per event while bookings for different events still run
concurrently.

Locks are kept in a WeakValueDictionary: an entry lives only while some
coroutine holds or waits on it, so deleted events do not leak locks.
"""

import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, Hashable


class KeyedLock:
    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[Hashable, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._lock_for(key)
        async with lock:
            yield

    def locked(self, key: Hashable) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()
