"""Screen-owned snapshots of the local caches.

Several screens read and write the same storage keys. A snapshot is only
refreshed by ``on_focus()``, so a change made on one screen shows up on
another after that screen next gains focus.
"""

from dataclasses import dataclass, field

from food_scanner.domain.foods import FoodRecord, RecentSearchEntry
from food_scanner.services.favorites import FavoritesService
from food_scanner.services.recent_searches import RecentSearchesService


@dataclass
class RecentSearchesScreen:
    """In-memory history shown by a screen."""

    service: RecentSearchesService
    entries: list[RecentSearchEntry] = field(default_factory=list)

    async def on_focus(self) -> None:
        """Reload the history from storage."""
        self.entries = await self.service.load()

    async def record(self, food: FoodRecord) -> None:
        """Record a food, keeping the snapshot when the write fails."""
        entries = await self.service.record(food)
        if entries is not None:
            self.entries = entries

    async def remove(self, food_id: str) -> None:
        """Remove a food from the history."""
        entries = await self.service.remove(food_id)
        if entries is not None:
            self.entries = entries

    async def clear(self) -> None:
        """Clear the history."""
        if await self.service.clear():
            self.entries = []


@dataclass
class FavoritesScreen:
    """In-memory favorites shown by a screen."""

    service: FavoritesService
    favorites: list[FoodRecord] = field(default_factory=list)

    async def on_focus(self) -> None:
        """Reload favorites from storage."""
        self.favorites = await self.service.load()

    def is_favorite(self, food: FoodRecord) -> bool:
        """Check membership against the snapshot without I/O."""
        return self.service.is_favorite(food, self.favorites)

    async def toggle(self, food: FoodRecord) -> bool:
        """Toggle a favorite and mirror the change when it was stored."""
        before = self.is_favorite(food)
        after = await self.service.toggle(food)
        if after == before:
            return after
        if after:
            self.favorites = [*self.favorites, food]
        else:
            self.favorites = [item for item in self.favorites if item.id != food.id]
        return after
