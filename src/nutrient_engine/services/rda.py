"""Personalized RDA computation."""

import logging
import math
from collections.abc import Mapping
from dataclasses import replace

from nutrient_engine.domain.nutrients import (
    COFACTORS,
    IMMUNE_SUPPORT,
    REPAIR_METABOLIC,
    RDAEntry,
)
from nutrient_engine.domain.profiles import CompleteProfile, UserProfile
from nutrient_engine.services.profiles import resolve_profile_defaults
from nutrient_engine.services.units import coerce_number, round_half_up

_logger = logging.getLogger(__name__)

SEVERITY_FACTORS: dict[str, float] = {
    "mild": 1.1,
    "moderate": 1.3,
    "severe": 1.5,
    "very severe": 1.8,
}

# (group, per-severity scale, cap)
_SEVERITY_GROUPS: tuple[tuple[frozenset[str], float, float], ...] = (
    (IMMUNE_SUPPORT, 1.5, 2.5),
    (REPAIR_METABOLIC, 1.3, 2.0),
    (COFACTORS, 1.1, 1.5),
)

_ELDERLY_AGE = 70
_SENIOR_AGE = 50
_YOUTH_AGE = 18

_ELDERLY = {"vitamin_d": 1.2, "vitamin_b12": 1.1, "calcium": 1.15}
_SENIOR = {"vitamin_d": 1.1, "vitamin_b12": 1.05}
_YOUTH = {"calcium": 1.15, "iron": 1.1}


def severity_factor(severity: str | None) -> float:
    """Map a condition severity to its base factor."""
    if not severity:
        return 1.0
    return SEVERITY_FACTORS.get(severity.strip().lower(), 1.0)


def personalize(
    base: Mapping[str, RDAEntry],
    profile: UserProfile | CompleteProfile | None,
) -> dict[str, RDAEntry]:
    """Return an RDA table adjusted for gender, age and condition severity."""
    if not base:
        _logger.error("Base RDA table is empty")
        return {}

    resolved = resolve_profile_defaults(profile)
    return {
        key: _personalize_entry(key, entry, resolved) for key, entry in base.items()
    }


def _personalize_entry(
    key: str, entry: RDAEntry, profile: CompleteProfile
) -> RDAEntry:
    base_value = coerce_number(entry.value)
    value = base_value

    if profile.is_female:
        value *= coerce_number(entry.female_adjust) or 1.0

    value *= _age_multiplier(key, profile.age)

    if profile.has_condition:
        value *= _severity_multiplier(key, severity_factor(profile.severity))

    if not math.isfinite(value) or value <= 0:
        _logger.error(
            "Invalid personalized RDA for %s: %s, resetting to base %s",
            key,
            value,
            base_value,
        )
        value = base_value

    rounded = round_half_up(value, 1)
    return replace(entry, value=rounded, is_adjusted=rounded != base_value)


def _age_multiplier(key: str, age: float | None) -> float:
    if age is None:
        return 1.0
    if age >= _ELDERLY_AGE:
        bracket = _ELDERLY
    elif age >= _SENIOR_AGE:
        bracket = _SENIOR
    elif age <= _YOUTH_AGE:
        bracket = _YOUTH
    else:
        return 1.0
    return bracket.get(key, 1.0)


def _severity_multiplier(key: str, factor: float) -> float:
    for group, scale, cap in _SEVERITY_GROUPS:
        if key in group:
            return min(factor * scale, cap)
    return 1.0
