"""Food journal domain models."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from nutrient_engine.domain.nutrients import NutrientReading

_logger = logging.getLogger(__name__)


class Bucketing(Enum):
    """Time grouping used when aggregating a journal."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @classmethod
    def _missing_(cls, value: object) -> "Bucketing":
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        _logger.warning("Unknown bucketing %r, using day", value)
        return cls.DAY


@dataclass(frozen=True)
class JournalEntry:
    """A logged meal.

    ``micronutrients`` keeps the raw stored values; they are normalized only
    when aggregated.
    """

    date: str
    time: str
    meal_type: str
    protein: object = 0
    carbs: object = 0
    fat: object = 0
    calories: object = 0
    micronutrients: dict[str, object] = field(default_factory=dict)
    long_covid_adjust: bool = False
    long_covid_benefits: tuple[str, ...] = ()
    long_covid_cautions: tuple[str, ...] = ()
    name: str = ""
    serving: float = 100
    entry_id: str | None = None
    metabolic_efficiency: float | None = None


@dataclass(frozen=True)
class ServingNutrients:
    """Nutrients of a food scaled to one serving."""

    protein: float
    carbs: float
    fat: float
    calories: float
    micronutrients: dict[str, NutrientReading] = field(default_factory=dict)


@dataclass(frozen=True)
class MacroTotals:
    """Summed macronutrients for a bucket."""

    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    calories: float = 0.0


@dataclass(frozen=True)
class BucketTotals:
    """Aggregated intake for one day, week or month."""

    macros: MacroTotals
    micros: dict[str, NutrientReading]
    entry_count: int
    suspicious: tuple[str, ...] = ()
