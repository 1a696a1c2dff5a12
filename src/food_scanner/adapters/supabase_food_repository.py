"""Supabase implementation for the remote food table."""

import logging
from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from food_scanner.domain.foods import FoodRecord, parse_food
from food_scanner.services.search import FoodRepository, FoodRepositoryError

FOODS_TABLE = "alimentos"

SEARCH_COLUMNS = (
    "id, nombre, codigo, calorias, proteinas, carbohidratos, grasas, "
    "azucares, fibra, sodio, imagen_url, created_at"
)

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for the ``alimentos`` table."""

    client: Client

    def get_food_by_barcode(self, barcode: str) -> FoodRecord | None:
        """Return the food with a barcode, if registered."""
        try:
            response = (
                self.client.table(FOODS_TABLE)
                .select("*")
                .eq("codigo", barcode)
                .limit(1)
                .execute()
            )
        except APIError as exc:
            raise FoodRepositoryError("Failed to fetch food by barcode") from exc
        if not response.data:
            return None
        return parse_food(response.data[0])

    def add_food(self, payload: dict[str, object]) -> FoodRecord | None:
        """Insert a food and return it."""
        row = {
            key: value
            for key, value in payload.items()
            if key not in {"id", "created_at"}
        }
        try:
            response = self.client.table(FOODS_TABLE).insert(row).execute()
        except APIError:
            _logger.exception("Failed to add food")
            return None
        if not response.data:
            _logger.error("Insert returned no rows for food %s", row.get("nombre"))
            return None
        return parse_food(response.data[0])

    def search_foods(self, query: str, limit: int = 10) -> list[FoodRecord]:
        """Search foods by name, ordered alphabetically."""
        try:
            response = (
                self.client.table(FOODS_TABLE)
                .select(SEARCH_COLUMNS)
                .ilike("nombre", f"%{query}%")
                .order("nombre")
                .limit(limit)
                .execute()
            )
        except APIError as exc:
            raise FoodRepositoryError("Failed to search foods") from exc
        return [parse_food(row) for row in response.data or []]

    def update_food(
        self, food_id: str, payload: dict[str, object]
    ) -> FoodRecord | None:
        """Update a food and return it."""
        try:
            response = (
                self.client.table(FOODS_TABLE)
                .update(payload)
                .eq("id", food_id)
                .execute()
            )
        except APIError:
            _logger.exception("Failed to update food %s", food_id)
            return None
        if not response.data:
            _logger.error("Update matched no rows for food %s", food_id)
            return None
        return parse_food(response.data[0])
