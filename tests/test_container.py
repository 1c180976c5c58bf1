"""Tests for container wiring."""

import asyncio

import pytest

from work_clock.adapters.local_entry_store import LocalEntryStore
from work_clock.adapters.sheet_entry_store import HttpxSheetEntryStore
from work_clock.config import Settings
from work_clock.containers import build_container


def test_build_container_uses_local_store(settings: Settings) -> None:
    container = build_container(settings)

    assert isinstance(container.entry_store, LocalEntryStore)
    assert container.tracker.store is container.entry_store
    assert container.tracker.history_limit == 10
    asyncio.run(container.close_resources())


def test_build_container_uses_sheet_store(settings: Settings) -> None:
    remote = settings.model_copy(
        update={"storage_backend": "remote", "sheet_api_url": "https://sheet.test"}
    )

    container = build_container(remote)

    assert isinstance(container.entry_store, HttpxSheetEntryStore)
    assert container.entry_store.api_url == "https://sheet.test"
    asyncio.run(container.close_resources())


def test_remote_store_requires_url(settings: Settings) -> None:
    remote = settings.model_copy(update={"storage_backend": "remote"})

    with pytest.raises(ValueError, match="sheet_api_url"):
        build_container(remote)
