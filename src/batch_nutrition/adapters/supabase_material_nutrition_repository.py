"""Supabase repository for material nutrition records."""

from dataclasses import dataclass

from supabase import Client

from batch_nutrition.domain.nutrition import (
    NUTRIENT_FIELDS,
    MaterialNutritionRecord,
    NutrientTotals,
)
from batch_nutrition.services.nutrition import MaterialNutritionRepository


@dataclass
class SupabaseMaterialNutritionRepository(MaterialNutritionRepository):
    """Supabase-backed reads for per-100g material nutrition."""

    client: Client

    def list_by_material_ids(
        self, material_ids: list[str]
    ) -> list[MaterialNutritionRecord]:
        """Return nutrition records for all given materials in one query."""
        response = (
            self.client.table("material_nutrition")
            .select("*")
            .in_("material_id", material_ids)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]


def _parse_record(row: dict[str, object]) -> MaterialNutritionRecord:
    return MaterialNutritionRecord(
        material_id=str(row["material_id"]),
        nutrients=parse_nutrients(row),
    )


def parse_nutrients(row: dict[str, object]) -> NutrientTotals:
    """Map nutrient columns to a nutrient vector, treating nulls as zero."""
    return NutrientTotals(
        **{name: float(row.get(name) or 0.0) for name in NUTRIENT_FIELDS}
    )
