"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from work_clock.config import Settings
from work_clock.containers import AppContainer
from work_clock.domain.sessions import StoreSnapshot, WorkSession
from work_clock.adapters.key_value_storage import KeyValueStorage
from work_clock.services.entries import EntryStore, EntryStoreError
from work_clock.services.notifications import NotificationFeed
from work_clock.services.tracker import TimeTracker

TZ = ZoneInfo("Asia/Jerusalem")


@dataclass
class FakeClock:
    """Mutable time source for deterministic tests."""

    current: datetime = field(
        default_factory=lambda: datetime(2025, 7, 22, 9, 0, tzinfo=TZ)
    )

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current = self.current + timedelta(seconds=seconds)


@dataclass
class InMemoryEntryStore(EntryStore):
    """In-memory entry store that can be told to fail."""

    entries: list[WorkSession] = field(default_factory=list)
    active_session: WorkSession | None = None
    fail_load: bool = False
    fail_append: bool = False
    fail_start: bool = False
    fail_update: bool = False
    started: list[WorkSession] = field(default_factory=list)
    updates: list[WorkSession] = field(default_factory=list)
    closed: bool = False

    async def load(self) -> StoreSnapshot:
        if self.fail_load:
            raise EntryStoreError("load failed")
        return StoreSnapshot(
            entries=list(self.entries), active_session=self.active_session
        )

    async def start(self, session: WorkSession) -> None:
        if self.fail_start:
            raise OSError("disk full")
        self.started.append(session)
        self.active_session = session

    async def append(self, entry: WorkSession) -> None:
        if self.fail_append:
            raise EntryStoreError("append failed")
        self.entries.append(entry)
        self.active_session = None

    async def update(self, entry: WorkSession) -> None:
        if self.fail_update:
            raise EntryStoreError("update failed")
        self.updates.append(entry)
        self.entries = [entry if e.id == entry.id else e for e in self.entries]

    async def close(self) -> None:
        self.closed = True


@dataclass
class InMemoryKeyValueStorage(KeyValueStorage):
    """Process-local key-value storage."""

    items: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

def make_entry(
    entry_id: str, clock_in: datetime, seconds: int | None
) -> WorkSession:
    """Build a completed entry lasting ``seconds``."""
    if seconds is None:
        return WorkSession(id=entry_id, clock_in=clock_in)
    return WorkSession(
        id=entry_id,
        clock_in=clock_in,
        clock_out=clock_in + timedelta(seconds=seconds),
        duration=seconds,
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        storage_backend="local",
        local_storage_path=str(tmp_path / "storage.json"),
        timezone="Asia/Jerusalem",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def entry_store() -> InMemoryEntryStore:
    return InMemoryEntryStore()


@pytest.fixture
def notifications() -> NotificationFeed:
    return NotificationFeed()


@pytest.fixture
def tracker(
    entry_store: InMemoryEntryStore,
    notifications: NotificationFeed,
    clock: FakeClock,
) -> TimeTracker:
    return TimeTracker(
        store=entry_store, notifier=notifications, tz=TZ, clock=clock, tick_interval=60
    )


@pytest.fixture
def container(
    settings: Settings,
    entry_store: InMemoryEntryStore,
    notifications: NotificationFeed,
    tracker: TimeTracker,
) -> AppContainer:
    async def close_resources() -> None:
        await tracker.close()
        await entry_store.close()

    return AppContainer(
        settings=settings,
        entry_store=entry_store,
        notifications=notifications,
        tracker=tracker,
        close_resources=close_resources,
    )
