"""Tests for Nutrition Facts label values."""

from datetime import UTC, datetime

from batch_nutrition.domain.nutrition import (
    CalculatedNutrition,
    NutrientTotals,
    ProductNutrition,
)
from batch_nutrition.services.labels import build_label, percent_daily_value


def _saved(per_serving: NutrientTotals) -> ProductNutrition:
    return ProductNutrition(
        id="row-1",
        product_id="product-1",
        serving_size_g=95,
        serving_size_description=None,
        servings_per_container=15.04,
        per_serving=per_serving,
        yield_loss_percent=5,
        overrun_percent=50,
        calculation_date=datetime.now(tz=UTC),
        is_verified=False,
    )


def test_percent_daily_value() -> None:
    assert percent_daily_value("total_fat_g", 7.8) == 10
    assert percent_daily_value("sodium_mg", 115) == 5
    assert percent_daily_value("trans_fat_g", 1.0) is None
    assert percent_daily_value("total_sugars_g", 12) is None


def test_build_label_from_saved_nutrition() -> None:
    label = build_label(
        _saved(
            NutrientTotals(
                calories=137.5,
                total_fat_g=7.25,
                saturated_fat_g=4.44,
                sodium_mg=53.2,
                protein_g=2.35,
            )
        )
    )

    lines = {line.label: line for line in label.lines}
    assert label.serving_size == "95g"
    assert label.servings_per_container == 15.0
    assert label.calories == 138
    assert lines["Total Fat"].amount == 7.3
    assert lines["Total Fat"].percent_dv == 9
    assert lines["Saturated Fat"].indent == 1
    assert lines["Trans Fat"].percent_dv is None
    assert lines["Sodium"].amount == 53.2
    assert lines["Protein"].percent_dv == 5
    assert "Vitamin A" not in lines


def test_build_label_from_calculation_with_optional_nutrients() -> None:
    per_serving = NutrientTotals(calories=200, vitamin_a_mcg=90, vitamin_c_mg=9)
    calculation = CalculatedNutrition(
        batch_totals=per_serving,
        batch_weight_g=950,
        per_serving=per_serving,
        serving_size_g=95,
        serving_size_description="2/3 cup (95g)",
        servings_per_batch=15.0,
    )

    label = build_label(calculation, include_optional=True)

    lines = {line.label: line for line in label.lines}
    assert label.serving_size == "2/3 cup (95g)"
    assert label.calories == 200
    assert lines["Vitamin A"].percent_dv == 10
    assert lines["Vitamin C"].percent_dv == 10
    assert [line.label for line in label.lines][:3] == [
        "Total Fat",
        "Saturated Fat",
        "Trans Fat",
    ]
