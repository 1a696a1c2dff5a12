"""Request models for the food API."""

from pydantic import BaseModel, ConfigDict, Field

from food_scanner.domain.foods import FoodRecord, parse_food


class FoodNutrients(BaseModel):
    """Optional nutrient columns shared by every food payload."""

    model_config = ConfigDict(extra="ignore")

    codigo: str | None = None
    proteinas: float | None = None
    grasas: float | None = None
    grasas_saturadas: float | None = None
    carbohidratos: float | None = None
    azucares: float | None = None
    fibra: float | None = None
    sodio: float | None = None
    vitamina_a: float | None = None
    vitamina_c: float | None = None
    calcio: float | None = None
    hierro: float | None = None
    imagen_url: str | None = None


class FoodPayload(FoodNutrients):
    """A complete food record sent back by a client."""

    id: str
    nombre: str
    calorias: float
    created_at: str | None = None

    def to_record(self) -> FoodRecord:
        """Convert to the domain model."""
        return parse_food(self.model_dump(exclude_none=True))


class FoodCreate(FoodNutrients):
    """A new food to register, usually for a scanned barcode."""

    nombre: str = Field(min_length=1)
    calorias: float


class FoodUpdate(FoodNutrients):
    """Partial update of a food."""

    nombre: str | None = Field(default=None, min_length=1)
    calorias: float | None = None


class CompareRequest(BaseModel):
    """Foods to compare side by side."""

    foods: list[FoodPayload]
