"""Entry store backed by local key-value storage."""

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from work_clock.adapters.key_value_storage import KeyValueStorage
from work_clock.domain.sessions import StoreSnapshot, WorkSession
from work_clock.services.entries import EntryStore

logger = logging.getLogger(__name__)

ENTRIES_KEY = "timeEntries"
CURRENT_SESSION_KEY = "currentSession"
IS_WORKING_KEY = "isWorking"


@dataclass
class LocalEntryStore(EntryStore):
    """Keeps entries and the in-progress session in key-value storage."""

    storage: KeyValueStorage

    async def load(self) -> StoreSnapshot:
        """Read entries and the in-progress session."""
        entries = self._read_entries()
        active = None
        if self.storage.get_item(IS_WORKING_KEY) == "true":
            raw_session = _loads(self.storage.get_item(CURRENT_SESSION_KEY))
            if isinstance(raw_session, dict):
                active = _session_from_dict(raw_session)
        return StoreSnapshot(entries=entries, active_session=active)

    async def start(self, session: WorkSession) -> None:
        """Write the in-progress session marker."""
        self.storage.set_item(
            CURRENT_SESSION_KEY, json.dumps(_session_to_dict(session))
        )
        self.storage.set_item(IS_WORKING_KEY, "true")

    async def append(self, entry: WorkSession) -> None:
        """Rewrite the entry list with ``entry`` added and clear the marker."""
        entries = self._read_entries()
        entries.append(entry)
        self._write_entries(entries)
        self.storage.remove_item(CURRENT_SESSION_KEY)
        self.storage.set_item(IS_WORKING_KEY, "false")

    async def update(self, entry: WorkSession) -> None:
        """Rewrite the entry list with ``entry`` replacing its stored copy."""
        entries = [
            entry if stored.id == entry.id else stored
            for stored in self._read_entries()
        ]
        self._write_entries(entries)

    async def close(self) -> None:
        return None

    def _read_entries(self) -> list[WorkSession]:
        raw_entries = _loads(self.storage.get_item(ENTRIES_KEY))
        if not isinstance(raw_entries, list):
            return []
        entries = []
        for raw in raw_entries:
            if not isinstance(raw, dict):
                continue
            entry = _session_from_dict(raw)
            if entry is not None:
                entries.append(entry)
        return entries

    def _write_entries(self, entries: list[WorkSession]) -> None:
        self.storage.set_item(
            ENTRIES_KEY, json.dumps([_session_to_dict(entry) for entry in entries])
        )


def _loads(raw: str | None) -> object | None:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Ignoring malformed stored value")
        return None


def _session_to_dict(session: WorkSession) -> dict[str, object]:
    return {
        "id": session.id,
        "clockIn": session.clock_in.isoformat(),
        "clockOut": session.clock_out.isoformat() if session.clock_out else None,
        "duration": session.duration,
    }


def _session_from_dict(raw: dict[str, object]) -> WorkSession | None:
    clock_in = _parse_timestamp(raw.get("clockIn"))
    if clock_in is None or not raw.get("id"):
        logger.debug("Dropping stored session with unreadable clock-in")
        return None
    duration = raw.get("duration")
    return WorkSession(
        id=str(raw["id"]),
        clock_in=clock_in,
        clock_out=_parse_timestamp(raw.get("clockOut")),
        duration=int(duration) if isinstance(duration, int | float) else None,
    )


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
