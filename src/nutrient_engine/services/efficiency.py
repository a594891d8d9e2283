"""Metabolic efficiency scoring for logged meals.

The score is computed once when a meal is logged or edited and stored with
the entry. Later profile changes do not rescore historical entries.
"""

import re
from collections.abc import Iterable
from dataclasses import replace
from datetime import date, timedelta

from nutrient_engine.domain.journal import JournalEntry
from nutrient_engine.domain.profiles import CompleteProfile, UserProfile
from nutrient_engine.domain.reports import EnergySplit
from nutrient_engine.services.aggregation import parse_calendar_date
from nutrient_engine.services.profiles import resolve_profile_defaults
from nutrient_engine.services.units import coerce_number, round_half_up

MEAL_TYPE_FACTORS: dict[str, float] = {
    "Breakfast": 1.3,
    "Morning Snack": 0.9,
    "Lunch": 1.1,
    "Afternoon Snack": 0.8,
    "Dinner": 0.9,
    "Late Night Snack": 0.6,
    "Snack": 0.8,
}

LONG_COVID_FACTORS: dict[str, float] = {
    "mild": 0.95,
    "moderate": 0.85,
    "severe": 0.75,
    "very severe": 0.65,
}
DEFAULT_LONG_COVID_FACTOR = 0.85
DEFAULT_EFFICIENCY = 80.0
EXCLUDED_MEAL_TYPES = frozenset({"Pre-workout", "Post-workout"})

_TIME = re.compile(
    r"^\s*(\d{1,2})(?::\d{2}){0,2}\s*(?:([ap])\.?m\.?)?\s*$", re.IGNORECASE
)
_NOON = 12
_MAX_SCORE = 100.0


def parse_hour24(time_text: str | None) -> int:
    """Convert ``h:mm AM/PM`` into a 24-hour hour, defaulting to noon."""
    text = time_text if isinstance(time_text, str) else ""
    match = _TIME.match(text)
    if match is None:
        return _NOON
    hour = int(match.group(1))
    marker = (match.group(2) or "").lower()
    if marker == "p" and hour != _NOON:
        return hour + _NOON
    if marker == "a" and hour == _NOON:
        return 0
    return hour


def time_factor(hour24: int) -> float:
    """Return the meal timing multiplier for an hour of the day."""
    if hour24 < 6 or hour24 > 20:  # noqa: PLR2004
        return 0.7
    if 7 <= hour24 <= 10:  # noqa: PLR2004
        return 1.2
    if 17 <= hour24 <= 19:  # noqa: PLR2004
        return 0.9
    return 1.0


def macro_balance(meal: JournalEntry) -> float:
    """Return the 0-100 macro contribution of a meal."""
    protein = max(coerce_number(meal.protein), 0.0)
    carbs = max(coerce_number(meal.carbs), 0.0)
    fat = max(coerce_number(meal.fat), 0.0)
    contribution = protein * 0.2 + carbs * 0.1 + fat * 0.15
    return min(_MAX_SCORE, contribution * 10)


def score(meal: JournalEntry, profile: UserProfile | CompleteProfile | None) -> float:
    """Estimate metabolic efficiency of a meal, bounded to [0, 100]."""
    resolved = resolve_profile_defaults(profile)
    efficiency = (
        macro_balance(meal)
        * time_factor(parse_hour24(meal.time))
        * MEAL_TYPE_FACTORS.get(meal.meal_type, 1.0)
    )

    if meal.long_covid_adjust and resolved.has_long_covid:
        efficiency *= LONG_COVID_FACTORS.get(
            resolved.severity or "", DEFAULT_LONG_COVID_FACTOR
        )
        if meal.long_covid_benefits:
            efficiency *= 1.1
        if meal.long_covid_cautions:
            efficiency *= 0.9

    return min(_MAX_SCORE, max(0.0, efficiency))


def energy_split(meal: JournalEntry, efficiency: float) -> EnergySplit:
    """Split a meal's calories into usable and lost energy."""
    calories = coerce_number(meal.calories)
    return EnergySplit(
        actual=int(round_half_up(calories * efficiency / 100)),
        wasted=int(round_half_up(calories * (100 - efficiency) / 100)),
    )


def recent_efficiency(
    entries: Iterable[JournalEntry],
    profile: UserProfile | CompleteProfile | None,
    today: date,
    days: int = 7,
) -> list[tuple[JournalEntry, EnergySplit]]:
    """Score meals from the last ``days`` days for the efficiency chart.

    Workout meals are excluded. A zero score falls back to the stored value.
    """
    resolved = resolve_profile_defaults(profile)
    cutoff = today - timedelta(days=days)
    scored: list[tuple[JournalEntry, EnergySplit]] = []
    for entry in entries:
        day = parse_calendar_date(entry.date)
        if day is None or day < cutoff:
            continue
        if entry.meal_type in EXCLUDED_MEAL_TYPES:
            continue
        efficiency = score(entry, resolved)
        if efficiency <= 0:
            efficiency = entry.metabolic_efficiency or DEFAULT_EFFICIENCY
        scored.append(
            (
                replace(entry, metabolic_efficiency=efficiency),
                energy_split(entry, efficiency),
            )
        )
    return scored
