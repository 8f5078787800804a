"""Nutrition aggregation from a product's active recipe."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from batch_nutrition.domain.nutrition import (
    CalculatedNutrition,
    CalculationOptions,
    IngredientContribution,
    MaterialNutritionRecord,
    NutrientTotals,
)
from batch_nutrition.domain.recipes import Recipe, RecipeItem, UnitOfMeasure

NO_RECIPE_WARNING = "No active recipe found for this product."

WEIGHT_CONVERSIONS_G: dict[str, float] = {
    "G": 1.0,
    "KG": 1000.0,
    "LB": 453.592,
    "OZ": 28.3495,
    "MG": 0.001,
}

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Read interface for product recipes."""

    def get_active_recipe(self, product_id: str) -> Recipe | None:
        """Return the active recipe for a product, if any."""

    def list_recipe_items(self, recipe_id: str) -> list[RecipeItem]:
        """Return recipe items joined to their materials."""


class MaterialNutritionRepository(Protocol):
    """Read interface for per-100g material nutrition."""

    def list_by_material_ids(
        self, material_ids: list[str]
    ) -> list[MaterialNutritionRecord]:
        """Return nutrition records for the given materials."""


class UnitRepository(Protocol):
    """Read interface for the unit-of-measure table."""

    def list_units(self) -> list[UnitOfMeasure]:
        """Return every unit of measure."""


@dataclass
class NutritionCalculator:
    """Aggregates recipe ingredients into batch and per-serving nutrition."""

    recipe_repository: RecipeRepository
    nutrition_repository: MaterialNutritionRepository
    unit_repository: UnitRepository
    debug: bool = False

    def calculate(
        self, product_id: str, options: CalculationOptions | None = None
    ) -> CalculatedNutrition:
        """Calculate nutrition for a product from its active recipe.

        Missing recipes, unknown units and materials without nutrition data are
        reported as warnings on the result. Repository errors propagate.
        """
        resolved = options or CalculationOptions()
        recipe = self.recipe_repository.get_active_recipe(product_id)
        if recipe is None:
            _logger.info("No active recipe for product %s", product_id)
            return _empty_result(resolved)

        items = self.recipe_repository.list_recipe_items(recipe.id)
        material_ids = sorted(
            {item.material_id for item in items if item.material_id is not None}
        )
        records = (
            self.nutrition_repository.list_by_material_ids(material_ids)
            if material_ids
            else []
        )
        nutrition_map = {record.material_id: record for record in records}
        units = {unit.id: unit for unit in self.unit_repository.list_units()}

        ingredients: list[IngredientContribution] = []
        totals = NutrientTotals()
        total_weight_g = 0.0
        missing_count = 0
        warnings: list[str] = []

        for item in items:
            material = item.material
            if item.material_id is None or material is None:
                _logger.warning(
                    "Skipping recipe item %s without a material (recipe=%s)",
                    item.id,
                    recipe.id,
                )
                continue

            unit = units.get(item.unit_id) if item.unit_id is not None else None
            unit_code = unit.code.upper() if unit and unit.code else ""
            factor = WEIGHT_CONVERSIONS_G.get(unit_code)
            if factor is None:
                label = unit.code if unit and unit.code else item.unit_id
                warnings.append(
                    f'Unknown unit "{label}" for {material.name} - assuming grams'
                )
                quantity_g = item.quantity_required
            else:
                quantity_g = item.quantity_required * factor

            record = nutrition_map.get(material.id)
            if record is None:
                missing_count += 1
                per_100g = NutrientTotals()
            else:
                per_100g = record.nutrients

            contribution = IngredientContribution(
                material_id=material.id,
                material_name=material.name,
                material_code=material.code,
                quantity_g=quantity_g,
                has_nutrition_data=record is not None,
                nutrients=per_100g.scaled(quantity_g / 100),
            )
            ingredients.append(contribution)
            total_weight_g += quantity_g
            totals = totals + contribution.nutrients

        adjusted_weight_g = total_weight_g * (1 - resolved.yield_loss_percent / 100)
        volume_factor = 1 + resolved.overrun_percent / 100
        effective_volume_ml = adjusted_weight_g * volume_factor
        servings_per_batch = effective_volume_ml / resolved.serving_size_g

        # Servings are measured by volume after aeration; nutrients follow mass.
        per_serving_factor = (
            (resolved.serving_size_g / volume_factor) / adjusted_weight_g
            if adjusted_weight_g > 0
            else 0.0
        )

        if missing_count > 0:
            warnings.append(f"{missing_count} ingredient(s) missing nutrition data.")

        for warning in warnings:
            _logger.warning("Product %s: %s", product_id, warning)
        if self.debug:
            _logger.info(
                "Nutrition calculated: product=%s recipe=%s ingredients=%s "
                "weight_g=%.1f servings=%.1f",
                product_id,
                recipe.id,
                len(ingredients),
                adjusted_weight_g,
                servings_per_batch,
            )

        return CalculatedNutrition(
            batch_totals=totals,
            batch_weight_g=adjusted_weight_g,
            per_serving=totals.scaled(per_serving_factor),
            serving_size_g=resolved.serving_size_g,
            serving_size_description=resolved.serving_size_description,
            servings_per_batch=round_half_up(servings_per_batch, 1),
            ingredients=ingredients,
            missing_nutrition_count=missing_count,
            warnings=warnings,
        )


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a nutrition label does, with halves going away from zero."""
    scale = 10**digits
    return math.copysign(math.floor(abs(value) * scale + 0.5) / scale, value)


def _empty_result(options: CalculationOptions) -> CalculatedNutrition:
    return CalculatedNutrition(
        batch_totals=NutrientTotals(),
        batch_weight_g=0.0,
        per_serving=NutrientTotals(),
        serving_size_g=options.serving_size_g,
        serving_size_description=options.serving_size_description,
        servings_per_batch=0.0,
        ingredients=[],
        missing_nutrition_count=0,
        warnings=[NO_RECIPE_WARNING],
    )
