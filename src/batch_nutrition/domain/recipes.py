"""Domain models for product recipes."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Recipe:
    """The active formulation for a product."""

    id: str
    product_id: str
    recipe_name: str | None
    batch_size: float | None
    batch_unit_id: str | None


@dataclass(frozen=True)
class MaterialRef:
    """Material columns joined onto a recipe item."""

    id: str
    code: str
    name: str
    base_unit_id: str | None
    usage_unit_id: str | None
    usage_unit_conversion: float | None


@dataclass(frozen=True)
class RecipeItem:
    """One ingredient line within a recipe."""

    id: str
    material_id: str | None
    quantity_required: float
    unit_id: str | None
    material: MaterialRef | None


@dataclass(frozen=True)
class UnitOfMeasure:
    """Unit-of-measure code table row."""

    id: str
    code: str
    name: str
