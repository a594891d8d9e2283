"""Report models handed to the rendering layer."""

from dataclasses import dataclass
from enum import Enum


class NutrientStatus(Enum):
    """Qualitative bucket for a percent-of-RDA value."""

    OPTIMAL = "Optimal"
    GOOD = "Good"
    MODERATE = "Moderate"
    LOW = "Low"
    VERY_LOW = "Very Low"


@dataclass(frozen=True)
class Classification:
    """Percent of RDA with its status."""

    percent: int
    status: NutrientStatus
    suspicious: bool = False


@dataclass(frozen=True)
class NutrientReportRow:
    """One nutrient line of an intake report."""

    key: str
    name: str
    category: str
    intake: float
    rda: float
    unit: str
    is_adjusted_rda: bool
    classification: Classification

    @property
    def percent(self) -> int:
        return self.classification.percent


@dataclass(frozen=True)
class MacroTargets:
    """Personalized daily macronutrient targets."""

    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class EnergySplit:
    """Calories split into usable and lost energy for a meal."""

    actual: int
    wasted: int
