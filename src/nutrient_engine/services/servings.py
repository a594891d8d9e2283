"""Scaling of per-100 g food values to a logged serving."""

import logging
import math
from collections.abc import Mapping
from dataclasses import replace

from nutrient_engine.domain.journal import JournalEntry, ServingNutrients
from nutrient_engine.domain.nutrients import (
    MACRO_FIELDS,
    NumberInput,
    NutrientReading,
    ReadingInput,
    TextInput,
)
from nutrient_engine.services.units import (
    canonical_unit,
    coerce_number,
    round_half_up,
    to_nutrient_input,
)

_logger = logging.getLogger(__name__)

# First matching keyword wins.
LIQUID_DENSITIES: dict[str, float] = {
    "water": 1.0,
    "milk": 1.03,
    "cream": 1.0,
    "oil": 0.92,
    "juice": 1.05,
    "soup": 1.0,
    "broth": 1.0,
    "stock": 1.0,
    "coffee": 1.0,
    "tea": 1.0,
    "wine": 0.99,
    "beer": 1.0,
    "yogurt": 1.1,
    "smoothie": 1.1,
    "sauce": 1.1,
    "syrup": 1.3,
    "honey": 1.4,
}
DEFAULT_DENSITY = 1.0
REFERENCE_GRAMS = 100.0
_MICRO_DIGITS = 3


def density_for(food_name: str | None) -> float:
    """Return grams per millilitre for a food, matched by keyword."""
    if not isinstance(food_name, str):
        return DEFAULT_DENSITY
    lowered = food_name.lower()
    for keyword, density in LIQUID_DENSITIES.items():
        if keyword in lowered:
            return density
    return DEFAULT_DENSITY


def serving_ratio(
    serving: object, unit: str | None = "g", food_name: str | None = None
) -> float:
    """Return the multiplier from per-100 g values to the given serving.

    Millilitre servings are converted to grams with the food's density. A
    missing or non-positive serving is treated as 100 g.
    """
    amount = coerce_number(serving)
    if amount <= 0:
        _logger.warning("Invalid serving size %r, using 100 g", serving)
        return 1.0
    if isinstance(unit, str) and unit.strip().lower() == "ml":
        amount *= density_for(food_name)
    return amount / REFERENCE_GRAMS


def scale_to_serving(
    per_100g: Mapping[str, object], ratio: float
) -> ServingNutrients:
    """Scale per-100 g macros and micronutrients by a serving ratio."""
    if not math.isfinite(ratio) or ratio < 0:
        _logger.warning("Invalid serving ratio %r, using 1", ratio)
        ratio = 1.0

    micronutrients = {}
    for key, raw in per_100g.items():
        if key.lower() in MACRO_FIELDS:
            continue
        reading = _scale_reading(key, raw, ratio)
        if reading is not None:
            micronutrients[key] = reading

    return ServingNutrients(
        protein=round_half_up(_macro(per_100g, "protein") * ratio, 1),
        carbs=round_half_up(_macro(per_100g, "carbs") * ratio, 1),
        fat=round_half_up(_macro(per_100g, "fat") * ratio, 1),
        calories=round_half_up(_macro(per_100g, "calories") * ratio),
        micronutrients=micronutrients,
    )


def per_100g_from_entry(entry: JournalEntry) -> dict[str, object]:
    """Back-derive per-100 g values from a stored entry and its serving."""
    ratio = serving_ratio(entry.serving)
    values: dict[str, object] = {
        "protein": coerce_number(entry.protein) / ratio,
        "carbs": coerce_number(entry.carbs) / ratio,
        "fat": coerce_number(entry.fat) / ratio,
        "calories": coerce_number(entry.calories) / ratio,
    }
    for key, raw in (entry.micronutrients or {}).items():
        reading = _scale_reading(key, raw, 1 / ratio)
        if reading is not None:
            values[key] = reading
    return values


def rescale_entry(
    entry: JournalEntry, serving: object, unit: str | None = "g"
) -> JournalEntry:
    """Return the entry with its nutrients recomputed for a new serving."""
    ratio = serving_ratio(serving, unit, entry.name)
    scaled = scale_to_serving(per_100g_from_entry(entry), ratio)
    amount = coerce_number(serving)
    return replace(
        entry,
        protein=scaled.protein,
        carbs=scaled.carbs,
        fat=scaled.fat,
        calories=scaled.calories,
        micronutrients=dict(scaled.micronutrients),
        serving=amount if amount > 0 else REFERENCE_GRAMS,
    )


def _macro(per_100g: Mapping[str, object], key: str) -> float:
    raw = per_100g.get(key)
    if isinstance(raw, Mapping):
        raw = raw.get("value")
    return coerce_number(raw)


def _scale_reading(key: str, raw: object, ratio: float) -> NutrientReading | None:
    parsed = to_nutrient_input(raw)
    if isinstance(parsed, ReadingInput):
        value, unit = coerce_number(parsed.value), parsed.unit
    elif isinstance(parsed, NumberInput):
        value, unit = coerce_number(parsed.value), canonical_unit(key)
    elif isinstance(parsed, TextInput):
        value, unit = coerce_number(parsed.text), canonical_unit(key)
    else:
        return None
    return NutrientReading(round_half_up(value * ratio, _MICRO_DIGITS), unit)
