"""Time-bucketed aggregation of food journal entries."""

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from nutrient_engine.domain.journal import (
    BucketTotals,
    Bucketing,
    JournalEntry,
    MacroTotals,
)
from nutrient_engine.domain.nutrients import (
    DEFAULT_REASONABLE_MAXIMUM,
    DEFAULT_WARNING_THRESHOLD,
    MACRO_FIELDS,
    REASONABLE_MAXIMUMS,
    WARNING_THRESHOLDS,
    NutrientReading,
)
from nutrient_engine.services.units import canonical_unit, coerce_number, normalize

_logger = logging.getLogger(__name__)

_DATE_PARTS = 3
_SUNDAY_OFFSET = 1  # date.weekday() is Monday=0


def parse_calendar_date(raw: str) -> date | None:
    """Parse ``YYYY-MM-DD`` as a calendar date without any timezone."""
    if not isinstance(raw, str):
        return None
    parts = raw.strip().split("-")
    if len(parts) != _DATE_PARTS:
        return None
    try:
        year, month, day = (int(part) for part in parts)
        return date(year, month, day)
    except ValueError:
        return None


def bucket_key(day: date, bucketing: Bucketing) -> str:
    """Return the bucket key for a calendar date."""
    if bucketing is Bucketing.WEEK:
        start = day - timedelta(days=(day.weekday() + _SUNDAY_OFFSET) % 7)
        return start.isoformat()
    if bucketing is Bucketing.MONTH:
        return day.replace(day=1).isoformat()
    return day.isoformat()


def aggregate(
    entries: Iterable[JournalEntry],
    window_start: date,
    window_end: date,
    bucketing: Bucketing | str = Bucketing.DAY,
) -> dict[str, BucketTotals]:
    """Sum macros and micronutrients per bucket within an inclusive window."""
    mode = Bucketing(bucketing)
    start = _as_calendar_date(window_start)
    end = _as_calendar_date(window_end)

    grouped: dict[str, list[JournalEntry]] = {}
    for entry in entries:
        day = parse_calendar_date(entry.date)
        if day is None:
            _logger.warning("Skipping journal entry with invalid date: %r", entry.date)
            continue
        if day < start or day > end:
            continue
        key = entry.date if mode is Bucketing.DAY else bucket_key(day, mode)
        grouped.setdefault(key, []).append(entry)

    return {key: _total_bucket(key, grouped[key]) for key in sorted(grouped)}


def clamp_reading(nutrient_key: str, value: float) -> tuple[float, bool]:
    """Clamp a per-entry value to its reasonable range.

    Returns the clamped value and whether it was out of range.
    """
    ceiling = REASONABLE_MAXIMUMS.get(nutrient_key, DEFAULT_REASONABLE_MAXIMUM)
    if value < 0:
        return 0.0, True
    if value > ceiling:
        return float(ceiling), True
    return value, False


def _as_calendar_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _total_bucket(key: str, entries: list[JournalEntry]) -> BucketTotals:
    protein = carbs = fat = calories = 0.0
    micros: dict[str, float] = {}
    units: dict[str, str] = {}
    suspicious: list[str] = []

    for entry in entries:
        protein += coerce_number(entry.protein)
        carbs += coerce_number(entry.carbs)
        fat += coerce_number(entry.fat)
        calories += coerce_number(entry.calories)

        for nutrient_key, raw in (entry.micronutrients or {}).items():
            if nutrient_key.lower() in MACRO_FIELDS:
                continue
            unit = canonical_unit(nutrient_key)
            reading = normalize(raw, unit, nutrient_key)
            value, flagged = clamp_reading(nutrient_key, reading.value)
            if flagged:
                _logger.warning(
                    "Suspicious %s value: %s %s (clamped to %s)",
                    nutrient_key,
                    reading.value,
                    reading.unit,
                    value,
                )
                if nutrient_key not in suspicious:
                    suspicious.append(nutrient_key)
            micros[nutrient_key] = micros.get(nutrient_key, 0.0) + value
            units.setdefault(nutrient_key, unit)

    for nutrient_key, total in micros.items():
        threshold = WARNING_THRESHOLDS.get(nutrient_key, DEFAULT_WARNING_THRESHOLD)
        if total > threshold:
            _logger.warning(
                "Unusually high %s total in %s: %s %s (threshold: %s)",
                nutrient_key,
                key,
                total,
                units[nutrient_key],
                threshold,
            )

    return BucketTotals(
        macros=MacroTotals(protein=protein, carbs=carbs, fat=fat, calories=calories),
        micros={
            nutrient_key: NutrientReading(value=total, unit=units[nutrient_key])
            for nutrient_key, total in micros.items()
        },
        entry_count=len(entries),
        suspicious=tuple(suspicious),
    )
