"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from batch_nutrition.adapters.supabase_material_nutrition_repository import (
    SupabaseMaterialNutritionRepository,
)
from batch_nutrition.adapters.supabase_product_nutrition_repository import (
    SupabaseProductNutritionRepository,
)
from batch_nutrition.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from batch_nutrition.adapters.supabase_unit_repository import SupabaseUnitRepository
from batch_nutrition.config import Settings
from batch_nutrition.services.nutrition import NutritionCalculator
from batch_nutrition.services.product_nutrition import ProductNutritionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_calculator: NutritionCalculator
    product_nutrition_service: ProductNutritionService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    nutrition_calculator = NutritionCalculator(
        recipe_repository=SupabaseRecipeRepository(supabase_client),
        nutrition_repository=SupabaseMaterialNutritionRepository(supabase_client),
        unit_repository=SupabaseUnitRepository(supabase_client),
        debug=resolved_settings.debug,
    )
    product_nutrition_service = ProductNutritionService(
        calculator=nutrition_calculator,
        repository=SupabaseProductNutritionRepository(supabase_client),
    )
    return AppContainer(
        settings=resolved_settings,
        nutrition_calculator=nutrition_calculator,
        product_nutrition_service=product_nutrition_service,
    )
