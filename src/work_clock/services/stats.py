"""Statistics and formatting over completed work sessions."""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from work_clock.domain.sessions import WorkSession
from work_clock.domain.stats import TrackerTotals

SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60
SECONDS_PER_DAY = 86400
DAYS_PER_WEEK = 7


def format_duration(seconds: int) -> str:
    """Format seconds as ``H:MM:SS``, or ``M:SS`` under an hour."""
    hours = seconds // SECONDS_PER_HOUR
    minutes = (seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    secs = seconds % SECONDS_PER_MINUTE
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_time(value: datetime, tz: ZoneInfo) -> str:
    """Format a timestamp as a 24-hour ``HH:MM`` local time."""
    return value.astimezone(tz).strftime("%H:%M")


def format_date(value: datetime, tz: ZoneInfo) -> str:
    """Format a timestamp as a ``DD.MM.YYYY`` local date."""
    return value.astimezone(tz).strftime("%d.%m.%Y")


def week_start(now: datetime) -> datetime:
    """Return ``now`` minus 86400 seconds per weekday elapsed since Sunday.

    The subtraction is on absolute time and the result keeps the time of
    day of ``now``, so the boundary moves forward as the day goes on rather
    than sitting at midnight.
    """
    days_since_sunday = now.isoweekday() % DAYS_PER_WEEK
    offset = timedelta(seconds=days_since_sunday * SECONDS_PER_DAY)
    return (now.astimezone(UTC) - offset).astimezone(now.tzinfo)


def today_total(
    entries: Iterable[WorkSession], now: datetime, tz: ZoneInfo, in_progress: int = 0
) -> int:
    """Sum durations of entries started on today's local date."""
    today = now.astimezone(tz).date()
    total = sum(
        entry.duration or 0
        for entry in entries
        if entry.clock_in.astimezone(tz).date() == today
    )
    return total + in_progress


def week_total(
    entries: Iterable[WorkSession], now: datetime, in_progress: int = 0
) -> int:
    """Sum durations of entries started since :func:`week_start`."""
    boundary = week_start(now).astimezone(UTC)
    total = sum(
        entry.duration or 0
        for entry in entries
        if entry.clock_in.astimezone(UTC) >= boundary
    )
    return total + in_progress


def all_time_total(entries: Iterable[WorkSession], in_progress: int = 0) -> int:
    """Sum every recorded duration."""
    return sum(entry.duration or 0 for entry in entries) + in_progress


def compute_totals(
    entries: list[WorkSession], now: datetime, tz: ZoneInfo, in_progress: int = 0
) -> TrackerTotals:
    """Return today, week and all-time totals."""
    return TrackerTotals(
        today=today_total(entries, now, tz, in_progress),
        week=week_total(entries, now, in_progress),
        all_time=all_time_total(entries, in_progress),
    )


def recent_history(entries: list[WorkSession], limit: int = 10) -> list[WorkSession]:
    """Return the last ``limit`` entries, most recent first."""
    if limit <= 0:
        return []
    return list(reversed(entries[-limit:]))
