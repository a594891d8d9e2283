"""Percent-of-RDA classification and intake reports."""

import logging
from collections.abc import Mapping
from enum import Enum

from nutrient_engine.domain.nutrients import NutrientReading, RDAEntry
from nutrient_engine.domain.reports import (
    Classification,
    NutrientReportRow,
    NutrientStatus,
)
from nutrient_engine.services.units import coerce_number, round_half_up

_logger = logging.getLogger(__name__)

DEFAULT_SUSPICIOUS_PERCENT = 10000

# Inclusive lower bounds, highest first.
STATUS_THRESHOLDS: tuple[tuple[int, NutrientStatus], ...] = (
    (100, NutrientStatus.OPTIMAL),
    (70, NutrientStatus.GOOD),
    (50, NutrientStatus.MODERATE),
    (30, NutrientStatus.LOW),
)

DEFICIENT_BELOW = 70
OPTIMAL_FROM = 100


class ReportMode(Enum):
    """Subset of a report to display."""

    ALL = "all"
    DEFICIENT = "deficient"
    OPTIMAL = "optimal"

    @classmethod
    def _missing_(cls, value: object) -> "ReportMode":
        return _lookup(cls, value)


class ReportCategory(Enum):
    """Nutrient category filter."""

    ALL = "all"
    VITAMINS = "vitamins"
    MINERALS = "minerals"

    @classmethod
    def _missing_(cls, value: object) -> "ReportCategory":
        return _lookup(cls, value)


def _lookup(enum_cls: type[Enum], value: object) -> Enum:
    if isinstance(value, str):
        for member in enum_cls:
            if member.value == value.strip().lower():
                return member
    _logger.warning("Unknown %s %r, using all", enum_cls.__name__, value)
    return enum_cls.ALL


def status_for(percent: float) -> NutrientStatus:
    """Return the status bucket for a percent-of-RDA value."""
    for lower_bound, status in STATUS_THRESHOLDS:
        if percent >= lower_bound:
            return status
    return NutrientStatus.VERY_LOW


def classify(
    intake_value: float,
    rda_value: float,
    suspicious_percent: float = DEFAULT_SUSPICIOUS_PERCENT,
) -> Classification:
    """Classify an intake against its RDA.

    Percentages above 100 are kept so over-consumption stays visible. Values
    above ``suspicious_percent`` are flagged as a likely unit error.
    """
    intake = coerce_number(intake_value)
    rda = coerce_number(rda_value)
    raw_percent = intake / rda * 100 if rda > 0 else 0.0
    percent = int(round_half_up(raw_percent))
    suspicious = raw_percent > suspicious_percent
    if suspicious:
        _logger.warning(
            "Extremely high percentage of RDA: %s%% (intake %s / rda %s), "
            "possible unit error",
            percent,
            intake,
            rda,
        )
    return Classification(
        percent=percent, status=status_for(percent), suspicious=suspicious
    )


def format_nutrient_name(key: str) -> str:
    """Turn ``vitamin_b12`` into ``Vitamin B12``."""
    return " ".join(word[:1].upper() + word[1:] for word in key.split("_"))


def nutrient_category(key: str) -> str:
    """Return ``vitamins`` or ``minerals`` for a nutrient key."""
    return "vitamins" if "vitamin" in key else "minerals"


def build_report(
    intake: Mapping[str, NutrientReading],
    rda_table: Mapping[str, RDAEntry],
    suspicious_percent: float = DEFAULT_SUSPICIOUS_PERCENT,
) -> list[NutrientReportRow]:
    """Compare intake with a personalized RDA table, lowest percent first.

    Only nutrients present in the RDA table are reported.
    """
    rows = []
    for key, rda in rda_table.items():
        reading = intake.get(key)
        intake_value = coerce_number(reading.value) if reading is not None else 0.0
        if reading is not None and reading.unit != rda.unit:
            _logger.warning(
                "Intake unit %s does not match RDA unit %s for %s",
                reading.unit,
                rda.unit,
                key,
            )
        rows.append(
            NutrientReportRow(
                key=key,
                name=format_nutrient_name(key),
                category=nutrient_category(key),
                intake=intake_value,
                rda=rda.value,
                unit=rda.unit,
                is_adjusted_rda=rda.is_adjusted,
                classification=classify(intake_value, rda.value, suspicious_percent),
            )
        )
    rows.sort(key=lambda row: row.percent)
    return rows


def filter_report(
    rows: list[NutrientReportRow],
    mode: ReportMode | str = ReportMode.ALL,
    category: ReportCategory | str = ReportCategory.ALL,
) -> list[NutrientReportRow]:
    """Filter report rows by display mode and category."""
    resolved_mode = ReportMode(mode)
    resolved_category = ReportCategory(category)

    filtered = [
        row
        for row in rows
        if resolved_category is ReportCategory.ALL
        or row.category == resolved_category.value
    ]
    if resolved_mode is ReportMode.DEFICIENT:
        filtered = [row for row in filtered if row.percent < DEFICIENT_BELOW]
    elif resolved_mode is ReportMode.OPTIMAL:
        filtered = [row for row in filtered if row.percent >= OPTIMAL_FROM]
        return sorted(filtered, key=lambda row: row.percent, reverse=True)
    return sorted(filtered, key=lambda row: row.percent)
