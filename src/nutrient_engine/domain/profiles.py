"""User profile domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserProfile:
    """User profile as supplied by the host application."""

    age: float | None = None
    gender: str | None = None
    weight: float | None = None
    height: float | None = None
    activity_level: str | None = None
    covid_severity: str | None = None
    medical_conditions: tuple[str, ...] = ()
    has_long_covid: bool | None = None


@dataclass(frozen=True)
class CompleteProfile:
    """Profile with every field resolved to a usable value."""

    age: float | None
    gender: str | None
    weight: float | None
    height: float | None
    activity_level: str | None
    severity: str | None
    medical_conditions: tuple[str, ...]
    has_long_covid: bool

    @property
    def is_female(self) -> bool:
        return self.gender == "female"

    @property
    def has_condition(self) -> bool:
        return self.severity is not None
