"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo

from work_clock.adapters.key_value_storage import JsonFileKeyValueStorage
from work_clock.adapters.local_entry_store import LocalEntryStore
from work_clock.adapters.sheet_entry_store import HttpxSheetEntryStore
from work_clock.config import Settings
from work_clock.services.entries import EntryStore
from work_clock.services.notifications import NotificationFeed
from work_clock.services.tracker import TimeTracker


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entry_store: EntryStore
    notifications: NotificationFeed
    tracker: TimeTracker
    close_resources: Callable[[], Awaitable[None]]


def build_entry_store(settings: Settings, tz: ZoneInfo) -> EntryStore:
    """Create the backing store selected by ``settings``."""
    if settings.storage_backend == "local":
        storage = JsonFileKeyValueStorage(Path(settings.local_storage_path))
        return LocalEntryStore(storage)
    if settings.storage_backend == "remote":
        if not settings.sheet_api_url:
            raise ValueError("sheet_api_url is required for the remote backend")
        return HttpxSheetEntryStore.create(
            api_url=settings.sheet_api_url,
            tz=tz,
            timeout=settings.http_timeout_seconds,
        )
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    tz = ZoneInfo(resolved_settings.timezone)
    entry_store = build_entry_store(resolved_settings, tz)
    notifications = NotificationFeed()
    tracker = TimeTracker(
        store=entry_store,
        notifier=notifications,
        tz=tz,
        tick_interval=resolved_settings.tick_interval_seconds,
        history_limit=resolved_settings.history_limit,
    )

    async def close_resources() -> None:
        await tracker.close()
        await entry_store.close()

    return AppContainer(
        settings=resolved_settings,
        entry_store=entry_store,
        notifications=notifications,
        tracker=tracker,
        close_resources=close_resources,
    )
