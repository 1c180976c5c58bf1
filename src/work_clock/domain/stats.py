"""Domain models for derived work statistics."""

from dataclasses import dataclass

from work_clock.domain.sessions import WorkSession


@dataclass(frozen=True)
class TrackerTotals:
    """Aggregate work time in seconds."""

    today: int
    week: int
    all_time: int


@dataclass(frozen=True)
class TrackerSummary:
    """Everything the status view renders."""

    is_working: bool
    current_session: WorkSession | None
    work_time: int
    totals: TrackerTotals
    history: list[WorkSession]
