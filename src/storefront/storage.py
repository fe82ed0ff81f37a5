"""Local persistent storage for the storefront.

``LocalStorage`` mirrors the browser Web Storage API: string keys, string
values, and ``None`` for a missing key. Callers serialize to JSON themselves.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


class LocalStorage(ABC):
    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored string, or None if the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``; a missing key is not an error."""


class MemoryStorage(LocalStorage):
    """Process-local storage; what a fresh browser profile looks like."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStorage(LocalStorage):
    """Storage persisted as one JSON object on disk.

    The file is re-read on every access so separate instances pointing at the
    same path see each other's writes; the last writer wins.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        return json.loads(self.path.read_text(encoding="utf-8"))

    def _dump(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items, ensure_ascii=False, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._dump(items)
        logger.debug("storage_item_written", path=str(self.path), key=key)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._dump(items)


def storage_from_settings(settings) -> LocalStorage:
    if settings.storage_path:
        return JsonFileStorage(settings.storage_path)
    return MemoryStorage()
