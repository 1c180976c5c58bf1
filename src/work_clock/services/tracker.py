"""Work clock state machine."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo

from work_clock.domain.sessions import WorkSession, elapsed_seconds, new_session_id
from work_clock.domain.stats import TrackerSummary
from work_clock.services.edit import EditForm, apply_edit
from work_clock.services.entries import EntryStore, EntryStoreError
from work_clock.services.notifications import Notifier
from work_clock.services.stats import compute_totals, format_duration, recent_history
from work_clock.services.ticker import Ticker

logger = logging.getLogger(__name__)


class ClockStateError(RuntimeError):
    """Raised when a clock transition is not allowed in the current state."""


class EntryNotFoundError(LookupError):
    """Raised when an edit targets an entry that is not loaded."""


@dataclass
class TimeTracker:
    """Tracks the active session, completed entries and the live counter."""

    store: EntryStore
    notifier: Notifier
    tz: ZoneInfo
    clock: Callable[[], datetime] | None = None
    tick_interval: float = 1.0
    history_limit: int = 10
    entries: list[WorkSession] = field(default_factory=list)
    current_session: WorkSession | None = None
    work_time: int = 0
    ticker: Ticker = field(init=False)

    def __post_init__(self) -> None:
        self.ticker = Ticker(interval=self.tick_interval, callback=self.tick)

    @property
    def is_working(self) -> bool:
        """Return True while a session is in progress."""
        return self.current_session is not None

    def now(self) -> datetime:
        """Return the current time from the injected clock or the system."""
        if self.clock is not None:
            return self.clock()
        return datetime.now(tz=self.tz)

    async def load(self) -> None:
        """Load entries and any in-progress session from the store."""
        try:
            snapshot = await self.store.load()
        except EntryStoreError as exc:
            logger.exception("Failed to load work sessions")
            self.notifier.notify("Failed to load sessions", str(exc), level="error")
            return
        self.entries = list(snapshot.entries)
        if snapshot.active_session is not None and not self.is_working:
            self.current_session = snapshot.active_session
            self.tick()
            self.ticker.start()
        logger.info("Loaded %d work sessions", len(self.entries))

    async def clock_in(self) -> WorkSession:
        """Start a new session."""
        if self.is_working:
            raise ClockStateError("Already clocked in")
        now = self.now()
        session = WorkSession(id=new_session_id(now), clock_in=now)
        await self.store.start(session)
        self.current_session = session
        self.work_time = 0
        self.ticker.start()
        self.notifier.notify(
            "Clocked in", f"Started at {now.astimezone(self.tz):%H:%M:%S}"
        )
        return session

    async def clock_out(self) -> WorkSession:
        """Complete the active session and persist it."""
        if self.current_session is None:
            raise ClockStateError("Not clocked in")
        entry = self.current_session.complete(self.now())
        self.entries.append(entry)
        self.current_session = None
        self.work_time = 0
        await self.ticker.stop()
        self.notifier.notify(
            "Clocked out", f"You worked {format_duration(entry.duration or 0)}"
        )
        try:
            await self.store.append(entry)
        except EntryStoreError as exc:
            logger.exception(
                "Failed to save work session", extra={"entry_id": entry.id}
            )
            self.notifier.notify("Failed to save session", str(exc), level="error")
        return entry

    def tick(self) -> None:
        """Refresh the live counter from the active session."""
        if self.current_session is None:
            return
        self.work_time = elapsed_seconds(self.current_session.clock_in, self.now())

    def get_entry(self, entry_id: str) -> WorkSession | None:
        """Return a completed entry by id."""
        return next((entry for entry in self.entries if entry.id == entry_id), None)

    async def submit_edit(self, form: EditForm) -> WorkSession | None:
        """Apply an edit form, persist it and reload entries.

        Returns the updated entry, or ``None`` when the store rejected it.
        """
        entry = self.get_entry(form.entry_id)
        if entry is None:
            raise EntryNotFoundError(form.entry_id)
        updated = apply_edit(entry, form, self.tz)
        try:
            await self.store.update(updated)
        except EntryStoreError as exc:
            logger.exception(
                "Failed to update work session", extra={"entry_id": entry.id}
            )
            self.notifier.notify("Failed to update session", str(exc), level="error")
            return None
        self.notifier.notify("Updated")
        await self.reload()
        return self.get_entry(updated.id) or updated

    async def reload(self) -> None:
        """Replace completed entries with the store's current contents."""
        try:
            snapshot = await self.store.load()
        except EntryStoreError as exc:
            logger.exception("Failed to reload work sessions")
            self.notifier.notify("Failed to load sessions", str(exc), level="error")
            return
        self.entries = list(snapshot.entries)

    def summary(self) -> TrackerSummary:
        """Return the working state, totals and recent history."""
        in_progress = self.work_time if self.is_working else 0
        return TrackerSummary(
            is_working=self.is_working,
            current_session=self.current_session,
            work_time=in_progress,
            totals=compute_totals(self.entries, self.now(), self.tz, in_progress),
            history=recent_history(self.entries, self.history_limit),
        )

    async def close(self) -> None:
        """Cancel the live counter."""
        await self.ticker.stop()
