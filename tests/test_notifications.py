"""Tests for the notification feed."""

from work_clock.services.notifications import NotificationFeed


def test_drain_returns_and_clears() -> None:
    feed = NotificationFeed()
    feed.notify("Clocked in", "Started at 09:00:00")
    feed.notify("Failed to save session", "boom", level="error")

    drained = feed.drain()

    assert [item.title for item in drained] == ["Clocked in", "Failed to save session"]
    assert drained[1].level == "error"
    assert feed.drain() == []


def test_feed_is_bounded() -> None:
    feed = NotificationFeed(max_items=2)
    for index in range(3):
        feed.notify(f"n{index}")

    assert [item.title for item in feed.drain()] == ["n1", "n2"]
