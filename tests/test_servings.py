"""Tests for serving size scaling."""

import pytest

from nutrient_engine.domain.nutrients import NutrientReading
from nutrient_engine.services.servings import (
    density_for,
    per_100g_from_entry,
    rescale_entry,
    scale_to_serving,
    serving_ratio,
)
from tests.conftest import make_entry


def test_density_for_liquids() -> None:
    assert density_for("Whole Milk") == 1.03
    assert density_for("Honey") == 1.4
    assert density_for("Orange juice") == 1.05
    assert density_for("Rice") == 1.0
    assert density_for(None) == 1.0


def test_serving_ratio_grams_and_millilitres() -> None:
    assert serving_ratio(150) == pytest.approx(1.5)
    assert serving_ratio("250", "ml", "Orange juice") == pytest.approx(2.625)
    assert serving_ratio(200, "ML", "Honey") == pytest.approx(2.8)
    assert serving_ratio(200, "ml", "Water") == pytest.approx(2.0)


def test_serving_ratio_invalid_serving_is_100_grams() -> None:
    assert serving_ratio(0) == 1.0
    assert serving_ratio(-20) == 1.0
    assert serving_ratio("abc") == 1.0


def test_scale_to_serving() -> None:
    per_100g = {
        "name": "Salmon",
        "protein": {"value": 10},
        "carbs": 20,
        "fat": "4",
        "calories": 155,
        "iron": {"value": 2, "unit": "mg"},
        "vitamin_d": 1.5,
        "broken": {"unit": "mg"},
    }

    scaled = scale_to_serving(per_100g, 1.5)

    assert scaled.protein == 15
    assert scaled.carbs == 30
    assert scaled.fat == 6
    assert scaled.calories == 233
    assert scaled.micronutrients == {
        "iron": NutrientReading(3, "mg"),
        "vitamin_d": NutrientReading(2.25, "mcg"),
    }


def test_per_100g_from_entry_uses_stored_serving() -> None:
    entry = make_entry(
        serving=50, micronutrients={"iron": {"value": 2, "unit": "mg"}}
    )

    values = per_100g_from_entry(entry)

    assert values["protein"] == pytest.approx(20)
    assert values["calories"] == pytest.approx(400)
    assert values["iron"] == NutrientReading(4, "mg")


def test_rescale_entry() -> None:
    entry = make_entry(
        serving=50, micronutrients={"iron": {"value": 2, "unit": "mg"}}
    )

    rescaled = rescale_entry(entry, 150)

    assert rescaled.serving == 150
    assert rescaled.protein == 30
    assert rescaled.carbs == 60
    assert rescaled.fat == 0
    assert rescaled.calories == 600
    assert rescaled.micronutrients == {"iron": NutrientReading(6, "mg")}
    assert rescaled.date == entry.date
    assert rescaled.meal_type == entry.meal_type
