"""Pydantic models for the work clock HTTP API."""

from datetime import datetime
from zoneinfo import ZoneInfo

from pydantic import BaseModel

from work_clock.domain.sessions import WorkSession
from work_clock.domain.stats import TrackerSummary, TrackerTotals
from work_clock.services.edit import EditForm
from work_clock.services.notifications import Notification
from work_clock.services.stats import format_date, format_duration, format_time


class SessionModel(BaseModel):
    """A work session as rendered in the history list."""

    id: str
    clock_in: datetime
    clock_out: datetime | None = None
    duration: int | None = None
    date_display: str
    clock_in_display: str
    clock_out_display: str | None = None
    duration_display: str | None = None

    @classmethod
    def from_session(cls, session: WorkSession, tz: ZoneInfo) -> "SessionModel":
        return cls(
            id=session.id,
            clock_in=session.clock_in,
            clock_out=session.clock_out,
            duration=session.duration,
            date_display=format_date(session.clock_in, tz),
            clock_in_display=format_time(session.clock_in, tz),
            clock_out_display=(
                format_time(session.clock_out, tz) if session.clock_out else None
            ),
            duration_display=(
                format_duration(session.duration)
                if session.duration is not None
                else None
            ),
        )


class TotalsModel(BaseModel):
    """Aggregate totals in seconds and display form."""

    today: int
    week: int
    all_time: int
    today_display: str
    week_display: str
    all_time_display: str

    @classmethod
    def from_totals(cls, totals: TrackerTotals) -> "TotalsModel":
        return cls(
            today=totals.today,
            week=totals.week,
            all_time=totals.all_time,
            today_display=format_duration(totals.today),
            week_display=format_duration(totals.week),
            all_time_display=format_duration(totals.all_time),
        )


class NotificationModel(BaseModel):
    """User-facing notification."""

    title: str
    description: str | None = None
    level: str

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationModel":
        return cls(
            title=notification.title,
            description=notification.description,
            level=notification.level,
        )


class TrackerStatus(BaseModel):
    """Full status view of the work clock."""

    is_working: bool
    current_session: SessionModel | None = None
    work_time: int
    work_time_display: str
    totals: TotalsModel
    history: list[SessionModel]
    notifications: list[NotificationModel]

    @classmethod
    def from_summary(
        cls,
        summary: TrackerSummary,
        notifications: list[Notification],
        tz: ZoneInfo,
    ) -> "TrackerStatus":
        return cls(
            is_working=summary.is_working,
            current_session=(
                SessionModel.from_session(summary.current_session, tz)
                if summary.current_session
                else None
            ),
            work_time=summary.work_time,
            work_time_display=format_duration(summary.work_time),
            totals=TotalsModel.from_totals(summary.totals),
            history=[SessionModel.from_session(entry, tz) for entry in summary.history],
            notifications=[
                NotificationModel.from_notification(item) for item in notifications
            ],
        )


class EditFormModel(BaseModel):
    """Pre-filled values for the edit form."""

    entry_id: str
    clock_in: str
    clock_out: str
    can_submit: bool

    @classmethod
    def from_form(cls, form: EditForm) -> "EditFormModel":
        return cls(
            entry_id=form.entry_id,
            clock_in=form.clock_in,
            clock_out=form.clock_out,
            can_submit=form.can_submit,
        )


class EditRequest(BaseModel):
    """Submitted edit form values in ``YYYY-MM-DDTHH:MM`` local time."""

    clock_in: str = ""
    clock_out: str = ""
