"""Edit form handling for completed work sessions."""

from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from work_clock.domain.sessions import WorkSession, elapsed_seconds

DATETIME_LOCAL_FORMAT = "%Y-%m-%dT%H:%M"


class EditInputError(ValueError):
    """Raised when edit form values cannot be applied."""


@dataclass(frozen=True)
class EditForm:
    """Values of the edit form for a single entry."""

    entry_id: str
    clock_in: str
    clock_out: str

    @property
    def can_submit(self) -> bool:
        """Return True when both timestamps are filled in."""
        return bool(self.clock_in.strip()) and bool(self.clock_out.strip())


def to_datetime_local_value(value: datetime, tz: ZoneInfo) -> str:
    """Render a timestamp as a ``YYYY-MM-DDTHH:MM`` local input value."""
    return value.astimezone(tz).strftime(DATETIME_LOCAL_FORMAT)


def parse_datetime_local(value: str, tz: ZoneInfo) -> datetime:
    """Parse a local input value into an aware timestamp."""
    cleaned = value.strip()
    if not cleaned:
        raise EditInputError("Timestamp is required")
    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError as exc:
        raise EditInputError(f"Invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed.astimezone(tz)


def open_edit_form(entry: WorkSession, tz: ZoneInfo) -> EditForm:
    """Build an edit form pre-filled from an entry's timestamps."""
    return EditForm(
        entry_id=entry.id,
        clock_in=to_datetime_local_value(entry.clock_in, tz),
        clock_out=(
            to_datetime_local_value(entry.clock_out, tz) if entry.clock_out else ""
        ),
    )


def apply_edit(entry: WorkSession, form: EditForm, tz: ZoneInfo) -> WorkSession:
    """Return ``entry`` rewritten with the form's timestamps."""
    if not form.can_submit:
        raise EditInputError("Both clock-in and clock-out are required")
    clock_in = parse_datetime_local(form.clock_in, tz)
    clock_out = parse_datetime_local(form.clock_out, tz)
    if clock_out < clock_in:
        raise EditInputError("Clock-out must not be earlier than clock-in")
    return WorkSession(
        id=entry.id,
        clock_in=clock_in,
        clock_out=clock_out,
        duration=elapsed_seconds(clock_in, clock_out),
    )
