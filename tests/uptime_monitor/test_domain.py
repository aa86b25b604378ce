"""
Unit tests for the domain models.
"""

from uptime_monitor.domain import NotificationKind, NotificationSettings, Transition


def test_transition_kind_should_follow_new_classification() -> None:
    """
    Tests that the direction of a transition is derived from its new state.
    """
    # Act & Assert
    assert Transition("site-1", is_up=False).kind is NotificationKind.DOWN
    assert Transition("site-1", is_up=True).kind is NotificationKind.UP


def test_notification_kind_should_compare_equal_to_plain_strings() -> None:
    """
    Tests that kinds can be written to and read from the database as text.
    """
    # Act & Assert
    assert NotificationKind.DOWN == "down"
    assert NotificationKind("up") is NotificationKind.UP


def test_disabled_settings_should_turn_every_channel_off() -> None:
    """
    Tests the snapshot used when settings cannot be read.
    """
    # Act
    settings = NotificationSettings.disabled()

    # Assert
    assert settings.email_enabled is False
    assert settings.sms_enabled is False
    assert settings.sms_to is None
