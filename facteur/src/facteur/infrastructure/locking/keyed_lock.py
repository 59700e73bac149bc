"""
Per-key asyncio locks.
"""

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Dict, Hashable, Tuple


class KeyedLock:
    """
    Hands out one asyncio.Lock per key.

    Entries are reference counted and dropped once no task holds or waits
    on them, so the table only contains keys in active use.

    Example:
        locks = KeyedLock()
        async with locks.hold_many("alice", "bob"):
            ...
    """

    def __init__(self):
        self._locks: Dict[Hashable, Tuple[asyncio.Lock, int]] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock, refs = self._locks.get(key, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[key] = (lock, refs + 1)

        try:
            async with lock:
                yield
        finally:
            lock, refs = self._locks[key]
            if refs <= 1:
                del self._locks[key]
            else:
                self._locks[key] = (lock, refs - 1)

    @asynccontextmanager
    async def hold_many(self, *keys: str) -> AsyncIterator[None]:
        """
        Hold the locks of several keys at once.

        Keys are acquired in sorted order so two callers sharing any key
        never wait on each other in a cycle. Duplicates are held once.
        """
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                await stack.enter_async_context(self.hold(key))
            yield

    def __len__(self) -> int:
        return len(self._locks)
