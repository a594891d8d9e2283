"""Pydantic models for journal and profile documents as stored."""

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from nutrient_engine.domain.journal import JournalEntry
from nutrient_engine.domain.profiles import UserProfile
from nutrient_engine.services.units import coerce_number

_logger = logging.getLogger(__name__)


class UserProfileDocument(BaseModel):
    """User profile document."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    age: float | None = None
    gender: str | None = None
    weight: float | None = None
    height: float | None = None
    activity_level: str | None = Field(default=None, alias="activityLevel")
    covid_severity: str | None = None
    long_covid_severity: str | None = Field(default=None, alias="longCovidSeverity")
    medical_conditions: list[str] = Field(default_factory=list)
    has_long_covid: bool | None = Field(default=None, alias="hasLongCovid")

    @field_validator("age", "weight", "height", mode="before")
    @classmethod
    def _optional_number(cls, value: object) -> float | None:
        if value is None or value == "":
            return None
        number = coerce_number(value)
        return number or None

    @field_validator(
        "gender",
        "activity_level",
        "covid_severity",
        "long_covid_severity",
        mode="before",
    )
    @classmethod
    def _optional_text(cls, value: object) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("has_long_covid", mode="before")
    @classmethod
    def _optional_flag(cls, value: object) -> bool | None:
        return value if isinstance(value, bool) else None

    @field_validator("medical_conditions", mode="before")
    @classmethod
    def _conditions(cls, value: object) -> list[str]:
        if not isinstance(value, list):
            return []
        return [str(item) for item in value if item]

    def to_domain(self) -> UserProfile:
        """Convert into a domain profile."""
        return UserProfile(
            age=self.age,
            gender=self.gender,
            weight=self.weight,
            height=self.height,
            activity_level=self.activity_level,
            covid_severity=self.covid_severity or self.long_covid_severity,
            medical_conditions=tuple(self.medical_conditions),
            has_long_covid=self.has_long_covid,
        )


class JournalEntryDocument(BaseModel):
    """Food journal entry document."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = None
    name: str = ""
    date: str
    time: str = ""
    meal_type: str = Field(default="", alias="mealType")
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    calories: float = 0.0
    serving: float = 100.0
    micronutrients: dict[str, object] = Field(default_factory=dict)
    long_covid_adjust: bool = Field(default=False, alias="longCovidAdjust")
    long_covid_benefits: list[str] = Field(
        default_factory=list, alias="longCovidBenefits"
    )
    long_covid_cautions: list[str] = Field(
        default_factory=list, alias="longCovidCautions"
    )
    metabolic_efficiency: float | None = Field(
        default=None, alias="metabolicEfficiency"
    )

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value: object) -> str | None:
        return None if value is None else str(value)

    @field_validator("name", "time", "meal_type", mode="before")
    @classmethod
    def _text(cls, value: object) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("protein", "carbs", "fat", "calories", mode="before")
    @classmethod
    def _number(cls, value: object) -> float:
        return coerce_number(value)

    @field_validator("serving", mode="before")
    @classmethod
    def _serving(cls, value: object) -> float:
        return coerce_number(value) or 100.0

    @field_validator("micronutrients", mode="before")
    @classmethod
    def _micronutrients(cls, value: object) -> dict[str, object]:
        return value if isinstance(value, dict) else {}

    @field_validator("long_covid_adjust", mode="before")
    @classmethod
    def _flag(cls, value: object) -> bool:
        return bool(value)

    @field_validator("long_covid_benefits", "long_covid_cautions", mode="before")
    @classmethod
    def _labels(cls, value: object) -> list[str]:
        if not isinstance(value, list):
            return []
        return [str(item) for item in value if item is not None]

    @field_validator("metabolic_efficiency", mode="before")
    @classmethod
    def _efficiency(cls, value: object) -> float | None:
        if value is None:
            return None
        return coerce_number(value)

    def to_domain(self) -> JournalEntry:
        """Convert into a domain journal entry."""
        return JournalEntry(
            date=self.date,
            time=self.time,
            meal_type=self.meal_type,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            calories=self.calories,
            micronutrients=dict(self.micronutrients),
            long_covid_adjust=self.long_covid_adjust,
            long_covid_benefits=tuple(self.long_covid_benefits),
            long_covid_cautions=tuple(self.long_covid_cautions),
            name=self.name,
            serving=self.serving,
            entry_id=self.id,
            metabolic_efficiency=self.metabolic_efficiency,
        )


def parse_profile(raw: dict[str, object] | None) -> UserProfile:
    """Parse a stored profile document; a missing document is an empty profile."""
    if not isinstance(raw, dict) or not raw:
        return UserProfile()
    try:
        return UserProfileDocument.model_validate(raw).to_domain()
    except ValidationError:
        _logger.warning("Invalid profile document, using defaults", exc_info=True)
        return UserProfile()


def parse_entries(raw_entries: list[dict[str, object]]) -> list[JournalEntry]:
    """Parse stored journal documents, keeping only those with a date."""
    entries = []
    for raw in raw_entries:
        if not isinstance(raw, dict) or not isinstance(raw.get("date"), str):
            continue
        try:
            document = JournalEntryDocument.model_validate(raw)
        except ValidationError:
            _logger.warning("Skipping invalid journal document %r", raw.get("id"))
            continue
        entries.append(document.to_domain())
    return entries


def entry_to_document(entry: JournalEntry) -> dict[str, object]:
    """Serialize a journal entry into a stored document."""
    document = JournalEntryDocument(
        id=entry.entry_id,
        name=entry.name,
        date=entry.date,
        time=entry.time,
        meal_type=entry.meal_type,
        protein=entry.protein,
        carbs=entry.carbs,
        fat=entry.fat,
        calories=entry.calories,
        serving=entry.serving,
        micronutrients=entry.micronutrients,
        long_covid_adjust=entry.long_covid_adjust,
        long_covid_benefits=list(entry.long_covid_benefits),
        long_covid_cautions=list(entry.long_covid_cautions),
        metabolic_efficiency=entry.metabolic_efficiency,
    )
    return document.model_dump(by_alias=True, exclude={"id"})
