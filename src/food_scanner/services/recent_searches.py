"""Recent-search history kept in local storage."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from food_scanner.domain.foods import FoodRecord, RecentSearchEntry, parse_recent_entry
from food_scanner.services.notices import NoticeBoard
from food_scanner.services.storage import (
    KeyValueStorage,
    StorageError,
    read_json_list,
    write_json_list,
)

RECENT_SEARCHES_KEY = "recent_searches"

_logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class RecentSearchesService:
    """Bounded, deduplicated, most-recent-first search history.

    Every mutation rewrites the whole stored collection, since other
    components may have written the same key since this one last read it.
    """

    storage: KeyValueStorage
    notices: NoticeBoard
    limit: int = 10
    clock: Callable[[], int] = _now_ms

    async def load(self) -> list[RecentSearchEntry]:
        """Return valid entries, newest first."""
        try:
            return await self._read()
        except StorageError:
            _logger.exception("Failed to load recent searches")
            self.notices.post("Error", "Could not load recent searches")
            return []

    async def record(self, food: FoodRecord) -> list[RecentSearchEntry] | None:
        """Move a food to the front of the history.

        Returns the stored entries, or None when nothing was written.
        """
        if not food.is_valid():
            _logger.warning("Ignoring invalid food for recent searches: %r", food)
            return None
        try:
            current = await self._read()
            entry = RecentSearchEntry(food=food, timestamp=self.clock())
            entries = [
                entry,
                *(item for item in current if item.food.id != food.id),
            ][: self.limit]
            await self._write(entries)
        except StorageError:
            _logger.exception("Failed to save recent search %s", food.id)
            self.notices.post("Error", "Could not save the recent search")
            return None
        return entries

    async def remove(self, food_id: str) -> list[RecentSearchEntry] | None:
        """Remove one food from the history. Absent ids are not an error."""
        try:
            current = await self._read()
            entries = [item for item in current if item.food.id != food_id]
            await self._write(entries)
        except StorageError:
            _logger.exception("Failed to remove recent search %s", food_id)
            self.notices.post("Error", "Could not remove the item from history")
            return None
        return entries

    async def clear(self) -> bool:
        """Delete the whole history."""
        try:
            await self.storage.remove_item(RECENT_SEARCHES_KEY)
        except StorageError:
            _logger.exception("Failed to clear recent searches")
            self.notices.post("Error", "Could not clear the search history")
            return False
        return True

    async def _read(self) -> list[RecentSearchEntry]:
        rows = await read_json_list(self.storage, RECENT_SEARCHES_KEY)
        entries = []
        for row in rows:
            entry = parse_recent_entry(row)
            if entry is None:
                _logger.debug("Dropping corrupt recent search: %r", row)
                continue
            entries.append(entry)
        newest_first = sorted(entries, key=lambda item: item.timestamp, reverse=True)
        unique: list[RecentSearchEntry] = []
        seen: set[str] = set()
        for entry in newest_first:
            if entry.food.id in seen:
                continue
            seen.add(entry.food.id)
            unique.append(entry)
        return unique[: self.limit]

    async def _write(self, entries: list[RecentSearchEntry]) -> None:
        await write_json_list(
            self.storage, RECENT_SEARCHES_KEY, [item.to_row() for item in entries]
        )
