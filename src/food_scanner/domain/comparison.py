"""Side-by-side food comparison."""

from dataclasses import dataclass, field

from food_scanner.domain.foods import FoodRecord

COMPARISON_ROWS = (
    ("Calories", "calories", "kcal"),
    ("Protein", "protein", "g"),
    ("Fat", "fat", "g"),
    ("Carbohydrates", "carbohydrates", "g"),
    ("Sugars", "sugars", "g"),
    ("Fiber", "fiber", "g"),
    ("Sodium", "sodium", "mg"),
)

MISSING_VALUE = "-"


@dataclass(frozen=True)
class ComparisonRow:
    """One nutrient across every compared food."""

    label: str
    unit: str
    values: list[str]


@dataclass
class FoodComparison:
    """Holds up to ``limit`` foods selected for comparison."""

    limit: int = 3
    foods: list[FoodRecord] = field(default_factory=list)

    def add(self, food: FoodRecord) -> bool:
        """Add a food unless the selection is full or already holds it."""
        if len(self.foods) >= self.limit:
            return False
        if any(item.id == food.id for item in self.foods):
            return False
        self.foods.append(food)
        return True

    def remove(self, food_id: str) -> None:
        """Drop a food from the selection."""
        self.foods = [item for item in self.foods if item.id != food_id]

    def rows(self) -> list[ComparisonRow]:
        """Render the nutrient table."""
        return [
            ComparisonRow(
                label=label,
                unit=unit,
                values=[_render(getattr(food, attribute)) for food in self.foods],
            )
            for label, attribute, unit in COMPARISON_ROWS
        ]


def _render(value: float | None) -> str:
    if value is None:
        return MISSING_VALUE
    return f"{value}"
