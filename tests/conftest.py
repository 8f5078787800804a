"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import uuid4

import pytest

from batch_nutrition.config import Settings
from batch_nutrition.containers import AppContainer
from batch_nutrition.domain.nutrition import (
    MaterialNutritionRecord,
    NutrientTotals,
    ProductNutrition,
)
from batch_nutrition.domain.recipes import (
    MaterialRef,
    Recipe,
    RecipeItem,
    UnitOfMeasure,
)
from batch_nutrition.services.nutrition import (
    MaterialNutritionRepository,
    NutritionCalculator,
    RecipeRepository,
    UnitRepository,
)
from batch_nutrition.services.product_nutrition import (
    ProductNutritionRepository,
    ProductNutritionService,
)

DEFAULT_UNITS = [
    UnitOfMeasure(id="unit-g", code="G", name="Gram"),
    UnitOfMeasure(id="unit-kg", code="KG", name="Kilogram"),
    UnitOfMeasure(id="unit-lb", code="LB", name="Pound"),
    UnitOfMeasure(id="unit-oz", code="oz", name="Ounce"),
    UnitOfMeasure(id="unit-mg", code="MG", name="Milligram"),
    UnitOfMeasure(id="unit-scoop", code="SCOOP", name="Scoop"),
]


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: dict[str, Recipe] = field(default_factory=dict)
    items: dict[str, list[RecipeItem]] = field(default_factory=dict)

    def get_active_recipe(self, product_id: str) -> Recipe | None:
        return self.recipes.get(product_id)

    def list_recipe_items(self, recipe_id: str) -> list[RecipeItem]:
        return list(self.items.get(recipe_id, []))

    def add_recipe(self, product_id: str, recipe_id: str = "recipe-1") -> Recipe:
        recipe = Recipe(
            id=recipe_id,
            product_id=product_id,
            recipe_name="Vanilla base",
            batch_size=None,
            batch_unit_id=None,
        )
        self.recipes[product_id] = recipe
        self.items.setdefault(recipe_id, [])
        return recipe

    def add_item(
        self,
        recipe_id: str,
        material_id: str,
        quantity: float,
        unit_id: str = "unit-g",
        name: str | None = None,
    ) -> RecipeItem:
        item = RecipeItem(
            id=str(uuid4()),
            material_id=material_id,
            quantity_required=quantity,
            unit_id=unit_id,
            material=MaterialRef(
                id=material_id,
                code=material_id.upper(),
                name=name or material_id.title(),
                base_unit_id=None,
                usage_unit_id=None,
                usage_unit_conversion=None,
            ),
        )
        self.items.setdefault(recipe_id, []).append(item)
        return item


@dataclass
class InMemoryMaterialNutritionRepository(MaterialNutritionRepository):
    """In-memory nutrition repository that records each lookup."""

    records: dict[str, NutrientTotals] = field(default_factory=dict)
    calls: list[list[str]] = field(default_factory=list)

    def list_by_material_ids(
        self, material_ids: list[str]
    ) -> list[MaterialNutritionRecord]:
        self.calls.append(list(material_ids))
        return [
            MaterialNutritionRecord(material_id=material_id, nutrients=nutrients)
            for material_id, nutrients in self.records.items()
            if material_id in material_ids
        ]


@dataclass
class InMemoryUnitRepository(UnitRepository):
    """In-memory unit table."""

    units: list[UnitOfMeasure] = field(default_factory=lambda: list(DEFAULT_UNITS))
    calls: int = 0

    def list_units(self) -> list[UnitOfMeasure]:
        self.calls += 1
        return list(self.units)


@dataclass
class InMemoryProductNutritionRepository(ProductNutritionRepository):
    """In-memory product_nutrition table."""

    rows: dict[str, ProductNutrition] = field(default_factory=dict)
    inserts: int = 0
    updates: int = 0

    def get_by_product(self, product_id: str) -> ProductNutrition | None:
        return self.rows.get(product_id)

    def insert(self, payload: dict[str, object]) -> ProductNutrition:
        self.inserts += 1
        row = _row_from_payload(str(uuid4()), payload)
        self.rows[row.product_id] = row
        return row

    def update(self, product_id: str, payload: dict[str, object]) -> ProductNutrition:
        self.updates += 1
        existing = self.rows[product_id]
        if set(payload) == {"is_verified"}:
            row = replace(existing, is_verified=bool(payload["is_verified"]))
        else:
            row = _row_from_payload(existing.id, payload)
        self.rows[product_id] = row
        return row


def _row_from_payload(row_id: str, payload: dict[str, object]) -> ProductNutrition:
    nutrient_names = NutrientTotals().as_dict().keys()
    return ProductNutrition(
        id=row_id,
        product_id=str(payload["product_id"]),
        serving_size_g=payload.get("serving_size_g"),
        serving_size_description=payload.get("serving_size_description"),
        servings_per_container=payload.get("servings_per_container"),
        per_serving=NutrientTotals(
            **{name: float(payload.get(name, 0.0)) for name in nutrient_names}
        ),
        yield_loss_percent=payload.get("yield_loss_percent"),
        overrun_percent=payload.get("overrun_percent"),
        calculation_date=datetime.fromisoformat(str(payload["calculation_date"])),
        is_verified=bool(payload.get("is_verified")),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
    )


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def nutrition_repository() -> InMemoryMaterialNutritionRepository:
    return InMemoryMaterialNutritionRepository()


@pytest.fixture
def unit_repository() -> InMemoryUnitRepository:
    return InMemoryUnitRepository()


@pytest.fixture
def product_nutrition_repository() -> InMemoryProductNutritionRepository:
    return InMemoryProductNutritionRepository()


@pytest.fixture
def calculator(
    recipe_repository: InMemoryRecipeRepository,
    nutrition_repository: InMemoryMaterialNutritionRepository,
    unit_repository: InMemoryUnitRepository,
) -> NutritionCalculator:
    return NutritionCalculator(
        recipe_repository=recipe_repository,
        nutrition_repository=nutrition_repository,
        unit_repository=unit_repository,
    )


@pytest.fixture
def container(
    settings: Settings,
    calculator: NutritionCalculator,
    product_nutrition_repository: InMemoryProductNutritionRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        nutrition_calculator=calculator,
        product_nutrition_service=ProductNutritionService(
            calculator=calculator,
            repository=product_nutrition_repository,
        ),
    )
