"""Backing store interface for work sessions."""

from typing import Protocol

from work_clock.domain.sessions import StoreSnapshot, WorkSession


class EntryStoreError(RuntimeError):
    """Raised when a backing store cannot load or persist entries."""


class EntryStore(Protocol):
    """Persistence interface shared by the local and remote stores."""

    async def load(self) -> StoreSnapshot:
        """Return stored entries and any in-progress session."""

    async def start(self, session: WorkSession) -> None:
        """Record that ``session`` is in progress."""

    async def append(self, entry: WorkSession) -> None:
        """Persist a newly completed entry."""

    async def update(self, entry: WorkSession) -> None:
        """Persist changes to an existing entry."""

    async def close(self) -> None:
        """Release any held resources."""
