"""
State tracking for the uptime monitoring system.

The tracker decides, for every probe, whether it is the first observation of a
target (a baseline that never fires) or a genuine flip relative to the last
observation.
"""

import logging
from typing import Iterable, Optional

from uptime_monitor.contracts import StateStore
from uptime_monitor.domain import Transition

# Module logger
logger = logging.getLogger(__name__)


class StateTracker:
    """
    Detects up/down transitions on top of a StateStore.

    The transition algorithm lives here; where and how state is kept is up to
    the store, so a shared store can replace the in-memory one without
    changing how transitions are detected.
    """

    def __init__(self, store: StateStore) -> None:
        self._store: StateStore = store

    async def observe(self, target_id: str, is_up: bool) -> Optional[Transition]:
        """
        Records a classification and reports whether it flipped.

        Args:
            target_id: The identifier of the probed target.
            is_up: The classification of the latest probe.

        Returns:
            Optional[Transition]: The transition to 'is_up', or None if this is the
                first observation of the target or the classification is unchanged.
        """
        previous = await self._store.compare_and_set(target_id, is_up)

        if previous is None:
            logger.debug(f"Baseline for target {target_id}: {'up' if is_up else 'down'}")
            return None

        if previous == is_up:
            return None

        logger.info(f"Target {target_id} changed state: {'down -> up' if is_up else 'up -> down'}")
        return Transition(target_id=target_id, is_up=is_up)

    async def revert(self, transition: Transition) -> None:
        """
        Undoes a transition whose notification could not be stored.

        The next probe with the same classification then reports the same
        transition again. Nothing is restored if a newer observation of the
        target was stored in the meantime.
        """
        restored = await self._store.revert(
            transition.target_id, expected=transition.is_up, previous=not transition.is_up
        )
        if restored:
            logger.info(f"Reverted transition of target {transition.target_id}, it will be reported again.")

    async def retain(self, target_ids: Iterable[str]) -> None:
        """Stops tracking every target not in 'target_ids'."""
        await self._store.retain(target_ids)
