"""Nutrition Facts label builder."""

from batch_nutrition.domain.labels import LabelLine, NutritionFactsLabel
from batch_nutrition.domain.nutrition import CalculatedNutrition, ProductNutrition
from batch_nutrition.services.nutrition import round_half_up

# FDA daily values, 2020 label update.
DAILY_VALUES: dict[str, float] = {
    "total_fat_g": 78,
    "saturated_fat_g": 20,
    "cholesterol_mg": 300,
    "sodium_mg": 2300,
    "total_carbohydrate_g": 275,
    "dietary_fiber_g": 28,
    "added_sugars_g": 50,
    "protein_g": 50,
    "vitamin_d_mcg": 20,
    "calcium_mg": 1300,
    "iron_mg": 18,
    "potassium_mg": 4700,
    "vitamin_a_mcg": 900,
    "vitamin_c_mg": 90,
}

# (field, label, unit, indent)
_REQUIRED_LINES: tuple[tuple[str, str, str, int], ...] = (
    ("total_fat_g", "Total Fat", "g", 0),
    ("saturated_fat_g", "Saturated Fat", "g", 1),
    ("trans_fat_g", "Trans Fat", "g", 1),
    ("cholesterol_mg", "Cholesterol", "mg", 0),
    ("sodium_mg", "Sodium", "mg", 0),
    ("total_carbohydrate_g", "Total Carbohydrate", "g", 0),
    ("dietary_fiber_g", "Dietary Fiber", "g", 1),
    ("total_sugars_g", "Total Sugars", "g", 1),
    ("added_sugars_g", "Added Sugars", "g", 2),
    ("protein_g", "Protein", "g", 0),
    ("vitamin_d_mcg", "Vitamin D", "mcg", 0),
    ("calcium_mg", "Calcium", "mg", 0),
    ("iron_mg", "Iron", "mg", 0),
    ("potassium_mg", "Potassium", "mg", 0),
)

_OPTIONAL_LINES: tuple[tuple[str, str, str, int], ...] = (
    ("vitamin_a_mcg", "Vitamin A", "mcg", 0),
    ("vitamin_c_mg", "Vitamin C", "mg", 0),
)


def percent_daily_value(field_name: str, amount: float) -> int | None:
    """Return the rounded % Daily Value, or None when the nutrient has none."""
    daily_value = DAILY_VALUES.get(field_name)
    if daily_value is None:
        return None
    return int(round_half_up(amount / daily_value * 100))


def build_label(
    nutrition: CalculatedNutrition | ProductNutrition,
    *,
    include_optional: bool = False,
) -> NutritionFactsLabel:
    """Build a Nutrition Facts label from calculated or saved nutrition."""
    if isinstance(nutrition, CalculatedNutrition):
        serving_size = nutrition.serving_size_description
        servings = nutrition.servings_per_batch
    else:
        serving_size = nutrition.serving_size_description or _grams_text(
            nutrition.serving_size_g
        )
        servings = nutrition.servings_per_container or 0.0
    per_serving = nutrition.per_serving

    rows = _REQUIRED_LINES + (_OPTIONAL_LINES if include_optional else ())
    lines = []
    for field_name, label, unit, indent in rows:
        amount = round_half_up(getattr(per_serving, field_name), 1)
        lines.append(
            LabelLine(
                label=label,
                amount=amount,
                unit=unit,
                percent_dv=percent_daily_value(field_name, amount),
                indent=indent,
            )
        )

    return NutritionFactsLabel(
        serving_size=serving_size,
        servings_per_container=round_half_up(servings, 1),
        calories=int(round_half_up(per_serving.calories)),
        lines=lines,
    )


def _grams_text(grams: float | None) -> str:
    if grams is None:
        return ""
    return f"{grams:g}g"
