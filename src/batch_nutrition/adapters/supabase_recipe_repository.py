"""Supabase repository for product recipes."""

from dataclasses import dataclass

from supabase import Client

from batch_nutrition.domain.recipes import MaterialRef, Recipe, RecipeItem
from batch_nutrition.services.nutrition import RecipeRepository

_RECIPE_ITEM_COLUMNS = (
    "id, material_id, quantity_required, unit_id, "
    "materials (id, code, name, base_unit_id, usage_unit_id, usage_unit_conversion)"
)


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed reads for recipes and their items."""

    client: Client

    def get_active_recipe(self, product_id: str) -> Recipe | None:
        """Return the active recipe for a product, if present."""
        response = (
            self.client.table("product_recipes")
            .select("id, product_id, recipe_name, batch_size, batch_unit_id")
            .eq("product_id", product_id)
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def list_recipe_items(self, recipe_id: str) -> list[RecipeItem]:
        """Return the items of a recipe with their materials."""
        response = (
            self.client.table("product_recipe_items")
            .select(_RECIPE_ITEM_COLUMNS)
            .eq("recipe_id", recipe_id)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]


def _parse_recipe(row: dict[str, object]) -> Recipe:
    return Recipe(
        id=str(row["id"]),
        product_id=str(row.get("product_id", "")),
        recipe_name=row.get("recipe_name"),
        batch_size=_optional_float(row.get("batch_size")),
        batch_unit_id=row.get("batch_unit_id"),
    )


def _parse_item(row: dict[str, object]) -> RecipeItem:
    material_raw = row.get("materials")
    material = (
        _parse_material(material_raw) if isinstance(material_raw, dict) else None
    )
    material_id = row.get("material_id")
    return RecipeItem(
        id=str(row.get("id", "")),
        material_id=str(material_id) if material_id else None,
        quantity_required=float(row.get("quantity_required") or 0.0),
        unit_id=row.get("unit_id"),
        material=material,
    )


def _parse_material(row: dict[str, object]) -> MaterialRef:
    return MaterialRef(
        id=str(row["id"]),
        code=str(row.get("code") or ""),
        name=str(row.get("name") or ""),
        base_unit_id=row.get("base_unit_id"),
        usage_unit_id=row.get("usage_unit_id"),
        usage_unit_conversion=_optional_float(row.get("usage_unit_conversion")),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
