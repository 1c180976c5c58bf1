"""Text key-value storage backends for the local entry store."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class KeyValueStorage(Protocol):
    """String-to-string storage with browser local storage semantics."""

    def get_item(self, key: str) -> str | None:
        """Return the stored text for ``key``, if any."""

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""

    def remove_item(self, key: str) -> None:
        """Remove ``key`` if present."""


@dataclass
class JsonFileKeyValueStorage(KeyValueStorage):
    """Storage kept as a single JSON object on disk.

    Each write replaces the whole file via a temporary sibling.
    """

    path: Path

    def get_item(self, key: str) -> str | None:
        """Return the stored text for ``key``, if any."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        """Remove ``key`` if present."""
        items = self._read()
        if items.pop(key, None) is not None:
            self._write(items)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        return data if isinstance(data, dict) else {}

    def _write(self, items: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(items, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)
