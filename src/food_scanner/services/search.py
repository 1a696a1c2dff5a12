"""Search orchestration over the remote food table."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from food_scanner.domain.foods import FoodRecord
from food_scanner.services.notices import NoticeBoard
from food_scanner.services.recent_searches import RecentSearchesService

_logger = logging.getLogger(__name__)


class FoodRepositoryError(RuntimeError):
    """Raised when the remote food table cannot be reached."""


class FoodRepository(Protocol):
    """Remote persistence interface for foods."""

    def get_food_by_barcode(self, barcode: str) -> FoodRecord | None:
        """Return the food with a barcode, or None for unregistered products."""

    def add_food(self, payload: dict[str, object]) -> FoodRecord | None:
        """Insert a food and return it, or None on failure."""

    def search_foods(self, query: str, limit: int = 10) -> list[FoodRecord]:
        """Search foods whose name contains the query, ordered by name."""

    def update_food(
        self, food_id: str, payload: dict[str, object]
    ) -> FoodRecord | None:
        """Update a food and return it, or None on failure."""


@dataclass(frozen=True)
class ScanResult:
    """Outcome of a barcode scan."""

    barcode: str
    food: FoodRecord | None

    @property
    def can_register(self) -> bool:
        """Unregistered barcodes may be added by the user."""
        return self.food is None


@dataclass
class SearchService:
    """Runs name searches and barcode scans, seeding the search history."""

    repository: FoodRepository
    recent_searches: RecentSearchesService
    notices: NoticeBoard
    limit: int = 10
    min_length: int = 2
    debounce_seconds: float = 0.8
    _pending: "asyncio.Task[list[FoodRecord]] | None" = field(
        default=None, init=False, repr=False
    )

    async def search(self, query: str) -> list[FoodRecord]:
        """Search by name and record the top match in the history."""
        cleaned = query.strip()
        if len(cleaned) < self.min_length:
            return []
        try:
            results = self.repository.search_foods(cleaned, limit=self.limit)
        except FoodRepositoryError:
            _logger.exception("Food search failed: query=%s", cleaned)
            self.notices.post("Error", "Could not load results")
            return []
        if results:
            await self.recent_searches.record(results[0])
        return results

    async def search_as_you_type(self, query: str) -> list[FoodRecord] | None:
        """Search once the input has been stable for the debounce interval.

        Returns None when a newer query superseded this one.
        """
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        task = asyncio.ensure_future(self._debounced(query))
        self._pending = task
        try:
            return await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            superseded = self._pending is not task
            if superseded and current is not None and not current.cancelling():
                return None
            raise

    async def _debounced(self, query: str) -> list[FoodRecord]:
        await asyncio.sleep(self.debounce_seconds)
        return await self.search(query)

    async def scan(self, barcode: str) -> ScanResult:
        """Look up a scanned barcode and record the product when found."""
        food = self.repository.get_food_by_barcode(barcode)
        if food is None:
            _logger.info("Barcode not registered: %s", barcode)
            return ScanResult(barcode=barcode, food=None)
        await self.recent_searches.record(food)
        return ScanResult(barcode=barcode, food=food)

    def register(self, payload: dict[str, object]) -> FoodRecord | None:
        """Add a new food, typically after an unregistered scan."""
        return self.repository.add_food(payload)

    def update(self, food_id: str, payload: dict[str, object]) -> FoodRecord | None:
        """Apply a partial update to a food."""
        return self.repository.update_food(food_id, payload)
