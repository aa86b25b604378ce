"""
In-memory implementation of the StateStore interface.

Holds the last-known classification of every target for the lifetime of the
process. Updates to one target are serialized by a lock owned by that target;
different targets never contend with each other.
"""

import asyncio
import logging
from typing import Dict, Iterable, Optional

from uptime_monitor.contracts import StateStore

# Module logger
logger = logging.getLogger(__name__)


class InMemoryStateStore(StateStore):
    """
    A process-local StateStore sharded by target id.

    Each target id gets its own asyncio.Lock, created lazily. The registry lock
    guarding the lock table is only held while looking a lock up, never across
    an await on a target's own lock.
    """

    def __init__(self) -> None:
        self._states: Dict[str, bool] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._registry_lock = asyncio.Lock()

    async def _lock_for(self, target_id: str) -> asyncio.Lock:
        async with self._registry_lock:
            lock = self._locks.get(target_id)
            if lock is None:
                lock = asyncio.Lock()
                self._locks[target_id] = lock
            return lock

    async def compare_and_set(self, target_id: str, is_up: bool) -> Optional[bool]:
        """
        Atomically replaces the stored classification of one target.

        Args:
            target_id: The identifier of the target.
            is_up: The newly observed classification.

        Returns:
            Optional[bool]: The previous classification, or None on first observation.
        """
        lock = await self._lock_for(target_id)
        async with lock:
            previous = self._states.get(target_id)
            self._states[target_id] = is_up
            return previous

    async def revert(self, target_id: str, expected: bool, previous: bool) -> bool:
        lock = await self._lock_for(target_id)
        async with lock:
            if self._states.get(target_id) != expected:
                return False
            self._states[target_id] = previous
            return True

    async def retain(self, target_ids: Iterable[str]) -> None:
        """
        Drops state for every target that is no longer registered.

        Args:
            target_ids: Identifiers of the targets that are still registered.
        """
        keep = set(target_ids)
        async with self._registry_lock:
            stale = [target_id for target_id in self._states if target_id not in keep]
            for target_id in stale:
                self._states.pop(target_id, None)
                self._locks.pop(target_id, None)

        if stale:
            logger.info(f"Discarded state of {len(stale)} unregistered target(s).")
