"""Supabase repository for units of measure."""

from dataclasses import dataclass

from supabase import Client

from batch_nutrition.domain.recipes import UnitOfMeasure
from batch_nutrition.services.nutrition import UnitRepository


@dataclass
class SupabaseUnitRepository(UnitRepository):
    """Supabase implementation for the unit-of-measure table."""

    client: Client

    def list_units(self) -> list[UnitOfMeasure]:
        """Return all units of measure."""
        response = (
            self.client.table("units_of_measure").select("id, code, name").execute()
        )
        return [
            UnitOfMeasure(
                id=str(row["id"]),
                code=str(row.get("code") or ""),
                name=str(row.get("name") or ""),
            )
            for row in response.data or []
        ]
