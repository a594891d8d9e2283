"""Profile default resolution."""

import math

from nutrient_engine.domain.profiles import CompleteProfile, UserProfile

_NO_SEVERITY = {"", "none", "null"}


def resolve_profile_defaults(
    profile: UserProfile | CompleteProfile | None,
) -> CompleteProfile:
    """Resolve optional profile fields once so callers never null-check."""
    if isinstance(profile, CompleteProfile):
        return profile
    if profile is None:
        profile = UserProfile()

    severity = _clean_text(profile.covid_severity)
    if severity in _NO_SEVERITY:
        severity = None

    has_long_covid = profile.has_long_covid
    if has_long_covid is None:
        has_long_covid = severity is not None

    return CompleteProfile(
        age=_positive_or_none(profile.age),
        gender=_clean_text(profile.gender) or None,
        weight=_positive_or_none(profile.weight),
        height=_positive_or_none(profile.height),
        activity_level=_clean_text(profile.activity_level) or None,
        severity=severity,
        medical_conditions=tuple(profile.medical_conditions or ()),
        has_long_covid=bool(has_long_covid),
    )


def _clean_text(value: str | None) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip().lower()


def _positive_or_none(value: float | None) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return float(value)
