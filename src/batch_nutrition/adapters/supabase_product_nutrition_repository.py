"""Supabase repository for saved product nutrition."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from batch_nutrition.adapters.supabase_material_nutrition_repository import (
    parse_nutrients,
)
from batch_nutrition.domain.nutrition import ProductNutrition
from batch_nutrition.services.product_nutrition import ProductNutritionRepository


@dataclass
class SupabaseProductNutritionRepository(ProductNutritionRepository):
    """Supabase-backed repository for the product_nutrition table."""

    client: Client

    def get_by_product(self, product_id: str) -> ProductNutrition | None:
        """Return the saved row for a product, if present."""
        response = (
            self.client.table("product_nutrition")
            .select("*")
            .eq("product_id", product_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def insert(self, payload: dict[str, object]) -> ProductNutrition:
        """Insert a row and return it."""
        response = self.client.table("product_nutrition").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create product nutrition")
        return _parse_row(response.data[0])

    def update(self, product_id: str, payload: dict[str, object]) -> ProductNutrition:
        """Update the row for a product and return it."""
        response = (
            self.client.table("product_nutrition")
            .update(payload)
            .eq("product_id", product_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update product nutrition")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> ProductNutrition:
    calculated_raw = row.get("calculation_date")
    calculation_date = (
        datetime.fromisoformat(calculated_raw)
        if isinstance(calculated_raw, str) and calculated_raw
        else None
    )
    return ProductNutrition(
        id=str(row["id"]),
        product_id=str(row["product_id"]),
        serving_size_g=_optional_float(row.get("serving_size_g")),
        serving_size_description=row.get("serving_size_description"),
        servings_per_container=_optional_float(row.get("servings_per_container")),
        per_serving=parse_nutrients(row),
        yield_loss_percent=_optional_float(row.get("yield_loss_percent")),
        overrun_percent=_optional_float(row.get("overrun_percent")),
        calculation_date=calculation_date,
        is_verified=bool(row.get("is_verified")),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
