"""Tests for the HTTP API."""

from datetime import datetime

from fastapi.testclient import TestClient

from tests.conftest import TZ, FakeClock, InMemoryEntryStore, make_entry
from work_clock.api.app import create_app
from work_clock.containers import AppContainer


def test_health(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        response = client.get("/health")

    assert response.json() == {"status": "ok"}


def test_ui_page_served(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert "Work Clock" in response.text


def test_status_after_startup_load(
    container: AppContainer, entry_store: InMemoryEntryStore
) -> None:
    entry_store.entries = [
        make_entry("session_1", datetime(2025, 7, 22, 7, 0, tzinfo=TZ), 3661)
    ]

    with TestClient(create_app(container)) as client:
        data = client.get("/tracker").json()

    assert data["is_working"] is False
    assert data["totals"]["today"] == 3661
    assert data["totals"]["today_display"] == "1:01:01"
    assert data["history"][0]["id"] == "session_1"
    assert data["history"][0]["date_display"] == "22.07.2025"
    assert data["history"][0]["clock_in_display"] == "07:00"


def test_clock_in_and_out_flow(
    container: AppContainer, entry_store: InMemoryEntryStore, clock: FakeClock
) -> None:
    with TestClient(create_app(container)) as client:
        started = client.post("/tracker/clock-in")
        conflict = client.post("/tracker/clock-in")
        clock.advance(65)
        container.tracker.tick()
        live = client.get("/tracker").json()
        stopped = client.post("/tracker/clock-out")
        second_stop = client.post("/tracker/clock-out")

    assert started.status_code == 200
    assert started.json()["is_working"] is True
    assert started.json()["notifications"][0]["title"] == "Clocked in"
    assert conflict.status_code == 409
    assert live["work_time_display"] == "1:05"
    assert live["totals"]["all_time"] == 65
    assert stopped.json()["is_working"] is False
    assert stopped.json()["totals"]["all_time"] == 65
    assert second_stop.status_code == 409
    assert [entry.duration for entry in entry_store.entries] == [65]
    assert not container.tracker.ticker.running


def test_edit_form_and_update(
    container: AppContainer, entry_store: InMemoryEntryStore
) -> None:
    entry = make_entry("session_1", datetime(2025, 7, 22, 9, 0, tzinfo=TZ), 3600)
    entry_store.entries = [entry]

    with TestClient(create_app(container)) as client:
        form = client.get("/entries/session_1/edit")
        missing = client.get("/entries/nope/edit")
        updated = client.put(
            "/entries/session_1",
            json={"clock_in": "2025-07-22T08:00", "clock_out": "2025-07-22T10:30"},
        )

    assert form.json() == {
        "entry_id": "session_1",
        "clock_in": "2025-07-22T09:00",
        "clock_out": "2025-07-22T10:00",
        "can_submit": True,
    }
    assert missing.status_code == 404
    assert updated.status_code == 200
    assert updated.json()["duration"] == 9000
    assert entry_store.entries[0].duration == 9000


def test_update_rejects_incomplete_or_invalid_input(
    container: AppContainer, entry_store: InMemoryEntryStore
) -> None:
    entry = make_entry("session_1", datetime(2025, 7, 22, 9, 0, tzinfo=TZ), 3600)
    entry_store.entries = [entry]

    with TestClient(create_app(container)) as client:
        blank = client.put("/entries/session_1", json={"clock_in": "2025-07-22T08:00"})
        reversed_times = client.put(
            "/entries/session_1",
            json={"clock_in": "2025-07-22T10:00", "clock_out": "2025-07-22T08:00"},
        )
        unknown = client.put(
            "/entries/nope",
            json={"clock_in": "2025-07-22T08:00", "clock_out": "2025-07-22T09:00"},
        )

    assert blank.status_code == 422
    assert reversed_times.status_code == 422
    assert unknown.status_code == 404
    assert entry_store.updates == []


def test_update_store_failure_returns_bad_gateway(
    container: AppContainer, entry_store: InMemoryEntryStore
) -> None:
    entry = make_entry("session_1", datetime(2025, 7, 22, 9, 0, tzinfo=TZ), 3600)
    entry_store.entries = [entry]
    entry_store.fail_update = True

    with TestClient(create_app(container)) as client:
        response = client.put(
            "/entries/session_1",
            json={"clock_in": "2025-07-22T08:00", "clock_out": "2025-07-22T09:00"},
        )
        status = client.get("/tracker").json()

    assert response.status_code == 502
    assert status["notifications"][0]["level"] == "error"
    assert status["history"][0]["duration"] == 3600


def test_shutdown_closes_resources(
    container: AppContainer, entry_store: InMemoryEntryStore
) -> None:
    with TestClient(create_app(container)) as client:
        client.post("/tracker/clock-in")

    assert entry_store.closed
    assert not container.tracker.ticker.running
