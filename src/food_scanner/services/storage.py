"""Local key-value storage abstractions."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

_logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when local storage cannot be read or written."""


class KeyValueStorage(Protocol):
    """Device-local storage holding string values under string keys."""

    async def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key is unset."""

    async def set_item(self, key: str, value: str) -> None:
        """Replace the value stored under a key."""

    async def remove_item(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""


@dataclass
class InMemoryStorage(KeyValueStorage):
    """In-memory storage, lost when the process exits."""

    _items: dict[str, str]

    def __init__(self) -> None:
        self._items = {}

    async def get_item(self, key: str) -> str | None:
        """Return the stored value if present."""
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        """Store a value."""
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        """Delete a value."""
        self._items.pop(key, None)


async def read_json_list(storage: KeyValueStorage, key: str) -> list[object]:
    """Read a JSON array from storage.

    Missing keys and malformed content both read as an empty list.
    ``StorageError`` from the storage itself propagates.
    """
    raw = await storage.get_item(key)
    if raw is None:
        return []
    try:
        payload = json.loads(raw)
    except ValueError:
        _logger.debug("Ignoring unparsable content under %s", key)
        return []
    if not isinstance(payload, list):
        _logger.debug("Ignoring non-list content under %s", key)
        return []
    return payload


async def write_json_list(
    storage: KeyValueStorage, key: str, items: list[dict[str, object]]
) -> None:
    """Replace the JSON array stored under a key in a single write."""
    await storage.set_item(key, json.dumps(items, ensure_ascii=False))
