"""Saved product nutrition backed by recipe calculations."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from batch_nutrition.domain.nutrition import (
    CalculatedNutrition,
    CalculationOptions,
    ProductNutrition,
)
from batch_nutrition.services.nutrition import NutritionCalculator

_logger = logging.getLogger(__name__)


class ProductNutritionNotFoundError(LookupError):
    """Raised when a product has no saved nutrition."""


class ProductNutritionRepository(Protocol):
    """Persistence interface for saved product nutrition."""

    def get_by_product(self, product_id: str) -> ProductNutrition | None:
        """Return the saved nutrition row for a product, if any."""

    def insert(self, payload: dict[str, object]) -> ProductNutrition:
        """Insert a nutrition row and return it."""

    def update(self, product_id: str, payload: dict[str, object]) -> ProductNutrition:
        """Update the nutrition row for a product and return it."""


@dataclass
class ProductNutritionService:
    """Calculates product nutrition and keeps the latest result."""

    calculator: NutritionCalculator
    repository: ProductNutritionRepository

    def get(self, product_id: str) -> ProductNutrition | None:
        """Return the saved nutrition for a product."""
        return self.repository.get_by_product(product_id)

    def calculate(
        self, product_id: str, options: CalculationOptions | None = None
    ) -> CalculatedNutrition:
        """Calculate nutrition without saving it."""
        return self.calculator.calculate(product_id, options)

    def calculate_and_save(
        self, product_id: str, options: CalculationOptions | None = None
    ) -> tuple[CalculatedNutrition, ProductNutrition]:
        """Calculate nutrition and store the per-serving values."""
        resolved = options or CalculationOptions()
        result = self.calculator.calculate(product_id, resolved)
        payload: dict[str, object] = {
            "product_id": product_id,
            "serving_size_g": result.serving_size_g,
            "serving_size_description": result.serving_size_description,
            "servings_per_container": result.servings_per_batch,
            **result.per_serving.as_dict(),
            "yield_loss_percent": resolved.yield_loss_percent,
            "overrun_percent": resolved.overrun_percent,
            "calculation_date": datetime.now(tz=UTC).isoformat(),
            "is_verified": False,
        }
        if self.repository.get_by_product(product_id) is None:
            saved = self.repository.insert(payload)
        else:
            saved = self.repository.update(product_id, payload)
        _logger.info("Saved nutrition for product %s", product_id)
        return result, saved

    def mark_verified(self, product_id: str) -> ProductNutrition:
        """Flag the saved nutrition for a product as verified."""
        if self.repository.get_by_product(product_id) is None:
            raise ProductNutritionNotFoundError(product_id)
        return self.repository.update(product_id, {"is_verified": True})
