"""Entry store backed by a spreadsheet row API (SheetDB-style)."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

import httpx

from work_clock.domain.sessions import StoreSnapshot, WorkSession, elapsed_seconds
from work_clock.services.entries import EntryStore, EntryStoreError

logger = logging.getLogger(__name__)

ID_FIELD = "ID"
DATE_FIELD = "Date"
CLOCK_IN_FIELD = "Clock In"
CLOCK_OUT_FIELD = "Clock Out"
DURATION_FIELD = "Duration (sec)"

_DATE_FORMAT = "%d/%m/%Y"
_TIME_FORMAT = "%H:%M:%S"
_TIME_INPUT_FORMATS = ("%H:%M:%S", "%H:%M")


@dataclass
class HttpxSheetEntryStore(EntryStore):
    """Reads and writes entries as rows of a remote sheet."""

    api_url: str
    tz: ZoneInfo
    http_client: httpx.AsyncClient
    timeout: float = 10

    @classmethod
    def create(
        cls, api_url: str, tz: ZoneInfo, timeout: float = 10
    ) -> "HttpxSheetEntryStore":
        """Create a sheet store with a managed httpx session."""
        return cls(
            api_url=api_url.rstrip("/"),
            tz=tz,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def load(self) -> StoreSnapshot:
        """Fetch all rows and parse them into entries."""
        try:
            response = await self.http_client.get(self.api_url, timeout=self.timeout)
            response.raise_for_status()
            rows = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise EntryStoreError(f"Failed to load rows: {exc}") from exc
        if not isinstance(rows, list):
            raise EntryStoreError("Unexpected sheet response")
        entries = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            entry = parse_row(row, self.tz)
            if entry is not None:
                entries.append(entry)
        return StoreSnapshot(entries=entries)

    async def start(self, session: WorkSession) -> None:
        """Active sessions are not stored remotely."""
        return None

    async def append(self, entry: WorkSession) -> None:
        """Create a row for a completed entry."""
        await self._send("POST", self.api_url, entry)
        logger.info("Saved session to sheet", extra={"entry_id": entry.id})

    async def update(self, entry: WorkSession) -> None:
        """Overwrite the row whose ID matches ``entry``."""
        await self._send("PUT", f"{self.api_url}/ID/{entry.id}", entry)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _send(self, method: str, url: str, entry: WorkSession) -> None:
        payload = {"data": [format_row(entry, self.tz)]}
        try:
            response = await self.http_client.request(
                method, url, json=payload, timeout=self.timeout
            )
        except httpx.HTTPError as exc:
            raise EntryStoreError(f"Network error: {exc}") from exc
        if response.is_error:
            raise EntryStoreError(
                f"Sheet rejected {method} ({response.status_code}): {response.text}"
            )


def format_row(entry: WorkSession, tz: ZoneInfo) -> dict[str, str]:
    """Encode an entry as a sheet row."""
    clock_in = entry.clock_in.astimezone(tz)
    clock_out = entry.clock_out.astimezone(tz) if entry.clock_out else None
    return {
        ID_FIELD: entry.id,
        DATE_FIELD: clock_in.strftime(_DATE_FORMAT),
        CLOCK_IN_FIELD: clock_in.strftime(_TIME_FORMAT),
        CLOCK_OUT_FIELD: clock_out.strftime(_TIME_FORMAT) if clock_out else "",
        DURATION_FIELD: str(entry.duration if entry.duration is not None else ""),
    }


def parse_row(row: dict[str, object], tz: ZoneInfo) -> WorkSession | None:
    """Decode a sheet row, or return ``None`` if its clock-in is unreadable."""
    day = parse_sheet_date(row.get(DATE_FIELD))
    clock_in = _combine(day, row.get(CLOCK_IN_FIELD), tz)
    if clock_in is None:
        logger.debug("Dropping sheet row without clock-in", extra={"row": row})
        return None
    clock_out = _combine(day, row.get(CLOCK_OUT_FIELD), tz)
    if clock_out is not None and clock_out < clock_in:
        # Rows carry only the clock-in date; the session ran past midnight.
        clock_out = clock_out + timedelta(days=1)
    duration = _parse_duration(row.get(DURATION_FIELD))
    if duration is None and clock_out is not None:
        duration = elapsed_seconds(clock_in, clock_out)
    return WorkSession(
        id=str(row.get(ID_FIELD) or ""),
        clock_in=clock_in,
        clock_out=clock_out,
        duration=duration,
    )


def parse_sheet_date(value: object) -> date | None:
    """Parse ``D/M/YYYY`` or ``D.M.YYYY`` into a date."""
    if not isinstance(value, str) or not value.strip():
        return None
    parts = value.strip().replace(".", "/").split("/")
    if len(parts) != 3 or not all(part.strip() for part in parts):  # noqa: PLR2004
        return None
    day, month, year = (part.strip() for part in parts)
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def parse_sheet_time(value: object) -> time | None:
    """Parse ``H:MM`` or ``H:MM:SS`` into a time."""
    if not isinstance(value, str) or not value.strip():
        return None
    for fmt in _TIME_INPUT_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).time()
        except ValueError:
            continue
    return None


def _combine(day: date | None, value: object, tz: ZoneInfo) -> datetime | None:
    if day is None:
        return None
    parsed = parse_sheet_time(value)
    if parsed is None:
        return None
    return datetime.combine(day, parsed, tzinfo=tz)


def _parse_duration(value: object) -> int | None:
    if isinstance(value, int | float):
        return int(value)
    if not isinstance(value, str):
        return None
    try:
        return int(float(value.strip()))
    except ValueError:
        return None
