"""Domain models for food records and cached entries."""

import math
from dataclasses import dataclass, fields

_COLUMNS = {
    "id": "id",
    "barcode": "codigo",
    "name": "nombre",
    "calories": "calorias",
    "protein": "proteinas",
    "fat": "grasas",
    "saturated_fat": "grasas_saturadas",
    "carbohydrates": "carbohidratos",
    "sugars": "azucares",
    "fiber": "fibra",
    "sodium": "sodio",
    "vitamin_a": "vitamina_a",
    "vitamin_c": "vitamina_c",
    "calcium": "calcio",
    "iron": "hierro",
    "image_url": "imagen_url",
    "created_at": "created_at",
}

_NUTRIENT_FIELDS = (
    "protein",
    "fat",
    "saturated_fat",
    "carbohydrates",
    "sugars",
    "fiber",
    "sodium",
    "vitamin_a",
    "vitamin_c",
    "calcium",
    "iron",
)


@dataclass(frozen=True)
class FoodRecord:
    """Represents one row of the ``alimentos`` table."""

    id: str
    name: str
    calories: float
    barcode: str | None = None
    protein: float | None = None
    fat: float | None = None
    saturated_fat: float | None = None
    carbohydrates: float | None = None
    sugars: float | None = None
    fiber: float | None = None
    sodium: float | None = None
    vitamin_a: float | None = None
    vitamin_c: float | None = None
    calcium: float | None = None
    iron: float | None = None
    image_url: str | None = None
    created_at: str | None = None

    def is_valid(self) -> bool:
        """Return True when the record can be cached locally."""
        return bool(self.id) and bool(self.name)

    def to_row(self) -> dict[str, object]:
        """Serialize to the column names shared by Supabase and local storage."""
        row: dict[str, object] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            row[_COLUMNS[item.name]] = value
        return row


@dataclass(frozen=True)
class RecentSearchEntry:
    """A food record stamped with the time it entered the search history."""

    food: FoodRecord
    timestamp: int

    def to_row(self) -> dict[str, object]:
        """Serialize as the food row plus its timestamp."""
        return {**self.food.to_row(), "timestamp": self.timestamp}


def parse_food(row: dict[str, object]) -> FoodRecord:
    """Parse a food row into a domain model.

    Raises ``ValueError`` or ``TypeError`` for rows that cannot be read as a
    food record.
    """
    identifier = row.get("id")
    name = row.get("nombre")
    return FoodRecord(
        id="" if identifier is None else str(identifier),
        name="" if name is None else str(name),
        calories=_number(row.get("calorias", 0)),
        barcode=_optional_str(row.get("codigo")),
        image_url=_optional_str(row.get("imagen_url")),
        created_at=_optional_str(row.get("created_at")),
        **{
            attribute: _optional_number(row.get(_COLUMNS[attribute]))
            for attribute in _NUTRIENT_FIELDS
        },
    )


def parse_recent_entry(row: object) -> RecentSearchEntry | None:
    """Parse a stored history item, returning None for corrupt items."""
    if not isinstance(row, dict):
        return None
    timestamp = row.get("timestamp")
    if isinstance(timestamp, bool) or not isinstance(timestamp, int | float):
        return None
    if not math.isfinite(timestamp) or timestamp <= 0:
        return None
    food = parse_cached_food(row)
    if food is None:
        return None
    return RecentSearchEntry(food=food, timestamp=int(timestamp))


def parse_cached_food(row: object) -> FoodRecord | None:
    """Parse a locally cached food, returning None for invalid items."""
    if not isinstance(row, dict):
        return None
    try:
        food = parse_food(row)
    except (TypeError, ValueError):
        return None
    if not food.is_valid():
        return None
    return food


def _number(value: object) -> float:
    if isinstance(value, bool):
        raise TypeError("boolean is not a nutrient value")
    if isinstance(value, int | float):
        return value
    return float(value)  # type: ignore[arg-type]


def _optional_number(value: object) -> float | None:
    if value is None:
        return None
    return _number(value)


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)
