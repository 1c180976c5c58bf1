"""Domain models for work sessions."""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass(frozen=True)
class WorkSession:
    """One contiguous work interval from clock-in to clock-out."""

    id: str
    clock_in: datetime
    clock_out: datetime | None = None
    duration: int | None = None

    @property
    def is_active(self) -> bool:
        """Return True while the session has not been clocked out."""
        return self.clock_out is None

    def complete(self, clock_out: datetime) -> "WorkSession":
        """Return a completed copy ending at ``clock_out``."""
        return replace(
            self,
            clock_out=clock_out,
            duration=elapsed_seconds(self.clock_in, clock_out),
        )


@dataclass(frozen=True)
class StoreSnapshot:
    """Entries and in-progress session as read from a backing store."""

    entries: list[WorkSession] = field(default_factory=list)
    active_session: WorkSession | None = None


def new_session_id(now: datetime) -> str:
    """Build a time-based session id."""
    return f"session_{int(now.timestamp() * 1000)}"


def elapsed_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds between two instants, never negative."""
    return max(0, math.floor((end - start).total_seconds()))
