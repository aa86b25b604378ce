"""
Unit tests for the InMemoryStateStore class.

The tests follow the Arrange-Act-Assert (AAA) pattern.
"""

import pytest

from uptime_monitor.state.memory_state_store import InMemoryStateStore


@pytest.mark.asyncio
async def test_compare_and_set_should_return_none_then_previous_value() -> None:
    """
    Tests that compare_and_set returns the value stored before the update.
    """
    # Arrange
    store = InMemoryStateStore()

    # Act
    first = await store.compare_and_set("site-1", True)
    second = await store.compare_and_set("site-1", False)

    # Assert
    assert first is None
    assert second is True
    assert store._states["site-1"] is False


@pytest.mark.asyncio
async def test_revert_should_restore_previous_value_when_unchanged() -> None:
    """
    Tests that a transition is undone while it is still the latest observation.
    """
    # Arrange
    store = InMemoryStateStore()
    await store.compare_and_set("site-1", True)
    await store.compare_and_set("site-1", False)

    # Act
    restored = await store.revert("site-1", expected=False, previous=True)

    # Assert
    assert restored is True
    assert store._states["site-1"] is True


@pytest.mark.asyncio
async def test_revert_should_keep_newer_observation() -> None:
    """
    Tests that revert never overwrites a classification stored after the transition.
    """
    # Arrange
    store = InMemoryStateStore()
    await store.compare_and_set("site-1", True)

    # Act
    restored = await store.revert("site-1", expected=False, previous=True)
    restored_unknown = await store.revert("missing", expected=False, previous=True)

    # Assert
    assert restored is False
    assert restored_unknown is False
    assert store._states == {"site-1": True}


@pytest.mark.asyncio
async def test_retain_should_drop_unlisted_targets() -> None:
    """
    Tests that retain keeps exactly the listed targets, together with their locks.
    """
    # Arrange
    store = InMemoryStateStore()
    for target_id in ("a", "b", "c"):
        await store.compare_and_set(target_id, True)

    # Act
    await store.retain(iter(["a", "c", "unknown"]))

    # Assert
    assert store._states == {"a": True, "c": True}
    assert set(store._locks) == {"a", "c"}


@pytest.mark.asyncio
async def test_lock_for_should_reuse_lock_per_target() -> None:
    """
    Tests that one target always maps to the same lock and different targets don't share one.
    """
    # Arrange
    store = InMemoryStateStore()

    # Act
    first = await store._lock_for("a")
    again = await store._lock_for("a")
    other = await store._lock_for("b")

    # Assert
    assert first is again
    assert first is not other
