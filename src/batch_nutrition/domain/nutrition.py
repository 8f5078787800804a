"""Nutrition domain models."""

import math
from dataclasses import dataclass, field, fields
from datetime import datetime

DEFAULT_YIELD_LOSS_PERCENT = 5.0
DEFAULT_OVERRUN_PERCENT = 50.0
DEFAULT_SERVING_SIZE_G = 95.0
DEFAULT_SERVING_SIZE_DESCRIPTION = "2/3 cup (95g)"

MAX_YIELD_LOSS_PERCENT = 100.0
MIN_OVERRUN_PERCENT = -100.0


class InvalidCalculationOptionsError(ValueError):
    """Raised when calculation options fall outside their usable range."""


@dataclass(frozen=True)
class NutrientTotals:
    """Nutrient vector, either per 100 g, per ingredient, per batch or per serving."""

    calories: float = 0.0
    total_fat_g: float = 0.0
    saturated_fat_g: float = 0.0
    trans_fat_g: float = 0.0
    polyunsaturated_fat_g: float = 0.0
    monounsaturated_fat_g: float = 0.0
    cholesterol_mg: float = 0.0
    sodium_mg: float = 0.0
    total_carbohydrate_g: float = 0.0
    dietary_fiber_g: float = 0.0
    total_sugars_g: float = 0.0
    added_sugars_g: float = 0.0
    protein_g: float = 0.0
    vitamin_d_mcg: float = 0.0
    calcium_mg: float = 0.0
    iron_mg: float = 0.0
    potassium_mg: float = 0.0
    vitamin_a_mcg: float = 0.0
    vitamin_c_mg: float = 0.0

    def __add__(self, other: "NutrientTotals") -> "NutrientTotals":
        return NutrientTotals(
            **{
                name: getattr(self, name) + getattr(other, name)
                for name in NUTRIENT_FIELDS
            }
        )

    def scaled(self, factor: float) -> "NutrientTotals":
        """Return a copy with every nutrient multiplied by factor."""
        return NutrientTotals(
            **{name: getattr(self, name) * factor for name in NUTRIENT_FIELDS}
        )

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in NUTRIENT_FIELDS}


NUTRIENT_FIELDS: tuple[str, ...] = tuple(item.name for item in fields(NutrientTotals))


@dataclass(frozen=True)
class MaterialNutritionRecord:
    """Nutrition facts for one material, per 100 g."""

    material_id: str
    nutrients: NutrientTotals


@dataclass(frozen=True)
class IngredientContribution:
    """Nutrients one recipe item contributes at its batch quantity."""

    material_id: str
    material_name: str
    material_code: str
    quantity_g: float
    has_nutrition_data: bool
    nutrients: NutrientTotals


@dataclass(frozen=True)
class CalculationOptions:
    """Tunable parameters for a nutrition calculation."""

    yield_loss_percent: float = DEFAULT_YIELD_LOSS_PERCENT
    overrun_percent: float = DEFAULT_OVERRUN_PERCENT
    serving_size_g: float = DEFAULT_SERVING_SIZE_G
    serving_size_description: str = DEFAULT_SERVING_SIZE_DESCRIPTION

    def __post_init__(self) -> None:
        for name in ("yield_loss_percent", "overrun_percent", "serving_size_g"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidCalculationOptionsError(
                    f"{name} must be a finite number, got {value}"
                )
        if not 0 <= self.yield_loss_percent < MAX_YIELD_LOSS_PERCENT:
            raise InvalidCalculationOptionsError(
                "yield_loss_percent must be at least 0 and below 100, "
                f"got {self.yield_loss_percent}"
            )
        if self.overrun_percent <= MIN_OVERRUN_PERCENT:
            raise InvalidCalculationOptionsError(
                f"overrun_percent must be above -100, got {self.overrun_percent}"
            )
        if self.serving_size_g <= 0:
            raise InvalidCalculationOptionsError(
                f"serving_size_g must be positive, got {self.serving_size_g}"
            )


@dataclass(frozen=True)
class CalculatedNutrition:
    """Result of aggregating a recipe into batch and per-serving nutrition."""

    batch_totals: NutrientTotals
    batch_weight_g: float
    per_serving: NutrientTotals
    serving_size_g: float
    serving_size_description: str
    servings_per_batch: float
    ingredients: list[IngredientContribution] = field(default_factory=list)
    missing_nutrition_count: int = 0
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ProductNutrition:
    """Saved per-serving nutrition for a product."""

    id: str
    product_id: str
    serving_size_g: float | None
    serving_size_description: str | None
    servings_per_container: float | None
    per_serving: NutrientTotals
    yield_loss_percent: float | None
    overrun_percent: float | None
    calculation_date: datetime | None
    is_verified: bool
