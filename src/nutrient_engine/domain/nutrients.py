"""Nutrient domain models and reference tables."""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class NutrientReading:
    """Amount of a single nutrient in a given unit."""

    value: float
    unit: str


@dataclass(frozen=True)
class NumberInput:
    """Stored nutrient value that is already a number."""

    value: float


@dataclass(frozen=True)
class TextInput:
    """Stored nutrient value kept as text."""

    text: str


@dataclass(frozen=True)
class ReadingInput:
    """Stored nutrient value with an explicit unit."""

    value: object
    unit: str


NutrientInput = NumberInput | TextInput | ReadingInput | None


@dataclass(frozen=True)
class RDAEntry:
    """Recommended daily allowance for one nutrient."""

    value: float
    unit: str
    female_adjust: float = 1.0
    description: str = ""
    is_adjusted: bool = False


BASE_RDA: "MappingProxyType[str, RDAEntry]" = MappingProxyType(
    {
        "vitamin_a": RDAEntry(
            900, "mcg", 0.78, "Supports vision, immune function, and cell growth"
        ),
        "vitamin_c": RDAEntry(
            90,
            "mg",
            0.83,
            "Antioxidant that supports immune function and collagen production",
        ),
        "vitamin_d": RDAEntry(
            15, "mcg", 1.0, "Crucial for calcium absorption and bone health"
        ),
        "vitamin_e": RDAEntry(
            15, "mg", 1.0, "Antioxidant that protects cells from damage"
        ),
        "vitamin_b6": RDAEntry(
            1.3, "mg", 1.0, "Important for metabolism and brain development"
        ),
        "vitamin_b12": RDAEntry(
            2.4, "mcg", 1.0, "Essential for nerve function and blood cell formation"
        ),
        "folate": RDAEntry(
            400, "mcg", 1.0, "Critical for cell division and DNA synthesis"
        ),
        "iron": RDAEntry(8, "mg", 2.25, "Essential for oxygen transport in the blood"),
        "calcium": RDAEntry(
            1000, "mg", 1.0, "Critical for bone health and muscle function"
        ),
        "magnesium": RDAEntry(
            420, "mg", 0.76, "Involved in over 300 biochemical reactions in the body"
        ),
        "zinc": RDAEntry(
            11, "mg", 0.73, "Important for immune function and wound healing"
        ),
        "selenium": RDAEntry(
            55, "mcg", 1.0, "Antioxidant that helps protect cells from damage"
        ),
        "copper": RDAEntry(
            0.9,
            "mg",
            1.0,
            "Important for red blood cell formation and nerve function",
        ),
        "vitamin_b1": RDAEntry(1.2, "mg", 0.92, "Essential for energy metabolism"),
        "vitamin_b2": RDAEntry(
            1.3, "mg", 0.85, "Important for energy production and cell function"
        ),
        "vitamin_b3": RDAEntry(16, "mg", 0.875, "Helps convert food into energy"),
    }
)

IMMUNE_SUPPORT = frozenset({"vitamin_c", "vitamin_d", "zinc", "selenium"})
REPAIR_METABOLIC = frozenset(
    {"vitamin_a", "vitamin_e", "vitamin_b6", "vitamin_b12", "folate", "iron"}
)
COFACTORS = frozenset(
    {"magnesium", "copper", "vitamin_b1", "vitamin_b2", "vitamin_b3"}
)

# Stored micronutrient maps sometimes carry macro fields too.
MACRO_FIELDS = frozenset({"protein", "carbs", "fat", "calories", "name", "unit"})

# Per-entry ceilings; larger values are truncated and flagged.
REASONABLE_MAXIMUMS: "MappingProxyType[str, float]" = MappingProxyType(
    {
        "zinc": 50,
        "selenium": 400,
        "copper": 10,
        "iron": 100,
        "vitamin_c": 2000,
        "vitamin_d": 100,
        "calcium": 3000,
        "magnesium": 1000,
    }
)
DEFAULT_REASONABLE_MAXIMUM = 10000.0

# Per-bucket totals above these are only reported.
WARNING_THRESHOLDS: "MappingProxyType[str, float]" = MappingProxyType(
    {
        "zinc": 100,
        "selenium": 1000,
        "copper": 50,
        "iron": 200,
        "vitamin_c": 5000,
    }
)
DEFAULT_WARNING_THRESHOLD = 1000.0
