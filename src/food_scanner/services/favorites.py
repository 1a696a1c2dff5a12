"""Favorite foods kept in local storage."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from food_scanner.domain.foods import FoodRecord, parse_cached_food
from food_scanner.services.notices import NoticeBoard
from food_scanner.services.storage import (
    KeyValueStorage,
    StorageError,
    read_json_list,
    write_json_list,
)

FAVORITES_KEY = "favorites"

_logger = logging.getLogger(__name__)


@dataclass
class FavoritesService:
    """Membership set of favorite foods, in insertion order."""

    storage: KeyValueStorage
    notices: NoticeBoard

    async def load(self) -> list[FoodRecord]:
        """Return favorites in storage order."""
        try:
            return await self._read()
        except StorageError:
            _logger.exception("Failed to load favorites")
            self.notices.post("Error", "Could not load favorites")
            return []

    @staticmethod
    def is_favorite(food: FoodRecord, favorites: Iterable[FoodRecord]) -> bool:
        """Return True when a loaded favorites sequence holds the food."""
        return any(item.id == food.id for item in favorites)

    async def toggle(self, food: FoodRecord) -> bool:
        """Add or remove a favorite and return the new membership state."""
        if not food.is_valid():
            _logger.warning("Ignoring invalid food for favorites: %r", food)
            return False
        was_favorite = False
        try:
            current = await self._read()
            was_favorite = self.is_favorite(food, current)
            if was_favorite:
                updated = [item for item in current if item.id != food.id]
            else:
                updated = [*current, food]
            await write_json_list(
                self.storage, FAVORITES_KEY, [item.to_row() for item in updated]
            )
        except StorageError:
            _logger.exception("Failed to toggle favorite %s", food.id)
            self.notices.post("Error", "Could not update favorites")
            return was_favorite
        return not was_favorite

    async def _read(self) -> list[FoodRecord]:
        rows = await read_json_list(self.storage, FAVORITES_KEY)
        favorites: list[FoodRecord] = []
        for row in rows:
            food = parse_cached_food(row)
            if food is None:
                _logger.debug("Dropping corrupt favorite: %r", row)
                continue
            if self.is_favorite(food, favorites):
                continue
            favorites.append(food)
        return favorites
