"""User-facing notification feed."""

import logging
from collections import deque
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

NotificationLevel = Literal["info", "error"]


@dataclass(frozen=True)
class Notification:
    """A short message shown to the user."""

    title: str
    description: str | None
    level: NotificationLevel
    created_at: datetime


class Notifier(Protocol):
    """Interface for posting user-facing notifications."""

    def notify(
        self,
        title: str,
        description: str | None = None,
        level: NotificationLevel = "info",
    ) -> None:
        """Post a notification."""


class NotificationFeed(Notifier):
    """Bounded in-memory notification queue drained by the UI."""

    def __init__(self, max_items: int = 50) -> None:
        self._items: deque[Notification] = deque(maxlen=max_items)

    def notify(
        self,
        title: str,
        description: str | None = None,
        level: NotificationLevel = "info",
    ) -> None:
        """Queue a notification and log it."""
        log_level = logging.WARNING if level == "error" else logging.INFO
        logger.log(log_level, "%s%s", title, f": {description}" if description else "")
        self._items.append(
            Notification(
                title=title,
                description=description,
                level=level,
                created_at=datetime.now(tz=UTC),
            )
        )

    def drain(self) -> list[Notification]:
        """Return and clear queued notifications."""
        items = list(self._items)
        self._items.clear()
        return items
