"""
Per-resource asyncio locks for serialising work on a single queue.

The admission workflow also takes a row lock on the queue record
(``SELECT ... FOR UPDATE``). SQLite ignores that clause, so this in-process
lock gives the same ordering guarantee for joiners handled by one worker.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

logger = logging.getLogger(__name__)


class QueueLockManager:
    """
    Hands out one asyncio.Lock per resource key and drops it again once no
    task holds or waits for it.
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}
        self._registry_lock = asyncio.Lock()

    async def _get_lock(self, resource: str) -> asyncio.Lock:
        async with self._registry_lock:
            lock = self._locks.get(resource)
            if lock is None:
                lock = asyncio.Lock()
                self._locks[resource] = lock
            self._waiters[resource] = self._waiters.get(resource, 0) + 1
            return lock

    async def _release_reference(self, resource: str) -> None:
        async with self._registry_lock:
            remaining = self._waiters.get(resource, 1) - 1
            if remaining <= 0:
                self._waiters.pop(resource, None)
                self._locks.pop(resource, None)
            else:
                self._waiters[resource] = remaining

    @asynccontextmanager
    async def hold(self, resource: str) -> AsyncIterator[None]:
        """
        Usage:
            async with lock_manager.hold(f"queue:{queue_id}"):
                # Critical section
                ...
        """
        lock = await self._get_lock(resource)
        try:
            async with lock:
                logger.debug(f"Acquired lock for {resource}")
                yield
        finally:
            await self._release_reference(resource)
            logger.debug(f"Released lock for {resource}")

    def is_locked(self, resource: str) -> bool:
        lock = self._locks.get(resource)
        return lock is not None and lock.locked()

    @property
    def active_resources(self) -> int:
        return len(self._locks)


# Module-level instance shared by request handlers in this process
queue_lock_manager = QueueLockManager()
