"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import HTMLResponse

from work_clock.api.models import (
    EditFormModel,
    EditRequest,
    SessionModel,
    TrackerStatus,
)
from work_clock.api.ui import TRACKER_UI_HTML
from work_clock.app_logging import configure_logging
from work_clock.containers import AppContainer
from work_clock.services.edit import EditForm, EditInputError, open_edit_form
from work_clock.services.tracker import ClockStateError, EntryNotFoundError

HTTP_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await app.state.container.tracker.load()
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def tracker_ui() -> HTMLResponse:
        """Minimal page that drives the tracker API."""
        return HTMLResponse(TRACKER_UI_HTML)

    @app.get("/tracker")
    async def tracker_status(request: Request) -> TrackerStatus:
        """Return the working state, totals, history and notifications."""
        state_container: AppContainer = request.app.state.container
        return _status(state_container)

    @app.post("/tracker/clock-in")
    async def clock_in(request: Request) -> TrackerStatus:
        """Start a work session."""
        state_container: AppContainer = request.app.state.container
        try:
            await state_container.tracker.clock_in()
        except ClockStateError as exc:
            raise HTTPException(status.HTTP_409_CONFLICT, str(exc)) from exc
        return _status(state_container)

    @app.post("/tracker/clock-out")
    async def clock_out(request: Request) -> TrackerStatus:
        """Finish the active work session."""
        state_container: AppContainer = request.app.state.container
        try:
            await state_container.tracker.clock_out()
        except ClockStateError as exc:
            raise HTTPException(status.HTTP_409_CONFLICT, str(exc)) from exc
        return _status(state_container)

    @app.get("/entries/{entry_id}/edit")
    async def edit_form(entry_id: str, request: Request) -> EditFormModel:
        """Return the edit form pre-filled from an entry."""
        state_container: AppContainer = request.app.state.container
        tracker = state_container.tracker
        entry = tracker.get_entry(entry_id)
        if entry is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Entry not found")
        return EditFormModel.from_form(open_edit_form(entry, tracker.tz))

    @app.put("/entries/{entry_id}")
    async def update_entry(
        entry_id: str, payload: EditRequest, request: Request
    ) -> SessionModel:
        """Apply edited clock-in and clock-out values to an entry."""
        state_container: AppContainer = request.app.state.container
        tracker = state_container.tracker
        form = EditForm(
            entry_id=entry_id, clock_in=payload.clock_in, clock_out=payload.clock_out
        )
        if not form.can_submit:
            raise HTTPException(
                HTTP_UNPROCESSABLE,
                "Both clock-in and clock-out are required",
            )
        try:
            updated = await tracker.submit_edit(form)
        except EntryNotFoundError as exc:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Entry not found") from exc
        except EditInputError as exc:
            raise HTTPException(HTTP_UNPROCESSABLE, str(exc)) from exc
        if updated is None:
            logger.warning(
                "Edit rejected by backing store", extra={"entry_id": entry_id}
            )
            raise HTTPException(status.HTTP_502_BAD_GATEWAY, "Failed to update entry")
        return SessionModel.from_session(updated, tracker.tz)

    return app


def _status(container: AppContainer) -> TrackerStatus:
    tracker = container.tracker
    return TrackerStatus.from_summary(
        tracker.summary(), container.notifications.drain(), tracker.tz
    )
