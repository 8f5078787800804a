"""Domain models for Nutrition Facts labels."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LabelLine:
    """One nutrient row on a Nutrition Facts label."""

    label: str
    amount: float
    unit: str
    percent_dv: int | None
    indent: int = 0


@dataclass(frozen=True)
class NutritionFactsLabel:
    """Rounded per-serving values ready for label rendering."""

    serving_size: str
    servings_per_container: float
    calories: int
    lines: list[LabelLine]
