"""Unit normalization for stored nutrient values."""

import logging
import math
import re
from collections.abc import Mapping

from nutrient_engine.domain.nutrients import (
    BASE_RDA,
    NumberInput,
    NutrientInput,
    NutrientReading,
    ReadingInput,
    TextInput,
)

_logger = logging.getLogger(__name__)

_NUMBER_PREFIX = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

_UNIT_ALIASES = {"μg": "mcg", "µg": "mcg", "ug": "mcg"}

_MASS_FACTORS: dict[tuple[str, str], float] = {
    ("mcg", "mg"): 1 / 1000,
    ("mg", "mcg"): 1000,
    ("g", "mg"): 1000,
}

# IU to mcg RAE (vitamin A) and IU to mcg (vitamin D).
_IU_FACTORS: dict[str, float] = {
    "vitamin_a": 0.3,
    "vitamin_d": 0.025,
}

_INPUT_TYPES = (NumberInput, TextInput, ReadingInput)


def coerce_number(raw: object) -> float:
    """Coerce a stored numeric field to a finite float, falling back to 0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, int | float):
        value = float(raw)
    elif isinstance(raw, str):
        match = _NUMBER_PREFIX.match(raw)
        if match is None:
            return 0.0
        value = float(match.group(0))
    else:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def canonical_unit(nutrient_key: str) -> str:
    """Return the reference unit for a nutrient."""
    entry = BASE_RDA.get(nutrient_key)
    return entry.unit if entry is not None else "mg"


def to_nutrient_input(raw: object) -> NutrientInput:
    """Classify a raw stored value into a nutrient input variant."""
    if raw is None or isinstance(raw, _INPUT_TYPES):
        return raw
    if isinstance(raw, NutrientReading):
        return ReadingInput(value=raw.value, unit=raw.unit)
    if isinstance(raw, bool):
        _logger.warning("Unexpected boolean nutrient value: %r", raw)
        return None
    if isinstance(raw, int | float):
        return NumberInput(value=float(raw))
    if isinstance(raw, str):
        return TextInput(text=raw)
    if isinstance(raw, Mapping):
        value = raw.get("value")
        unit = raw.get("unit")
        if value is not None and isinstance(unit, str) and unit:
            return ReadingInput(value=value, unit=unit)
    _logger.warning("Unexpected nutrient value format: %r", raw)
    return None


def normalize(
    reading: object, reference_unit: str, nutrient_key: str
) -> NutrientReading:
    """Normalize a stored nutrient value into the reference unit.

    Never raises: malformed values degrade to zero, and unit mismatches with
    no known conversion are passed through in their original unit.
    """
    nutrient_input = to_nutrient_input(reading)
    if nutrient_input is None:
        return NutrientReading(value=0.0, unit=reference_unit)
    if isinstance(nutrient_input, NumberInput):
        return NutrientReading(
            value=coerce_number(nutrient_input.value), unit=reference_unit
        )
    if isinstance(nutrient_input, TextInput):
        return NutrientReading(
            value=coerce_number(nutrient_input.text), unit=reference_unit
        )
    return _convert(
        coerce_number(nutrient_input.value),
        nutrient_input.unit,
        reference_unit,
        nutrient_key,
    )


def normalize_map(raw_map: Mapping[str, object]) -> dict[str, NutrientReading]:
    """Normalize every value of a stored micronutrient map to canonical units."""
    return {
        key: normalize(value, canonical_unit(key), key)
        for key, value in raw_map.items()
    }


def _convert(
    value: float, unit: str, reference_unit: str, nutrient_key: str
) -> NutrientReading:
    source = _UNIT_ALIASES.get(unit, unit)
    target = _UNIT_ALIASES.get(reference_unit, reference_unit)
    if source == target:
        return NutrientReading(value=value, unit=reference_unit)

    factor = _MASS_FACTORS.get((source, target))
    if factor is None and source == "IU" and target == "mcg":
        factor = _IU_FACTORS.get(nutrient_key)
    if factor is None:
        _logger.warning(
            "No conversion for %s from %s to %s, keeping value %s",
            nutrient_key,
            unit,
            reference_unit,
            value,
        )
        return NutrientReading(value=value, unit=unit)

    converted = value * factor
    _logger.debug(
        "Converted %s: %s %s -> %s %s",
        nutrient_key,
        value,
        unit,
        converted,
        reference_unit,
    )
    return NutrientReading(value=converted, unit=reference_unit)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up, like JavaScript's ``Math.round``."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale
