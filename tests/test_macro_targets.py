"""Tests for macro target calculation."""

import math

import pytest

from nutrient_engine.domain.profiles import UserProfile
from nutrient_engine.domain.reports import MacroTargets
from nutrient_engine.services.macro_targets import macro_split, macro_targets, tdee

MALE_70KG = UserProfile(
    age=30, gender="male", weight=70, height=175, activity_level="moderate"
)


def test_tdee_defaults_without_body_data() -> None:
    assert tdee(None) == 2000
    assert tdee(UserProfile(age=30, weight=70)) == 2000


def test_tdee_mifflin_male() -> None:
    bmr = 10 * 70 + 6.25 * 175 - 5 * 30 + 5
    assert tdee(MALE_70KG) == math.floor(bmr * 1.55 + 0.5)


def test_tdee_female_with_condition() -> None:
    profile = UserProfile(
        age=30,
        gender="female",
        weight=60,
        height=165,
        activity_level="light",
        covid_severity="moderate",
    )
    bmr = 10 * 60 + 6.25 * 165 - 5 * 30 - 161

    assert tdee(profile) == math.floor(bmr * 1.375 * 1.07 + 0.5)


def test_tdee_bmi_adjustments() -> None:
    underweight = UserProfile(age=30, weight=45, height=180)
    bmr = 10 * 45 + 6.25 * 180 - 5 * 30 + 5

    assert tdee(underweight) == math.floor(bmr * 1.375 * 1.1 + 0.5)


def test_macro_split_variants() -> None:
    default = macro_split(None)
    condition = macro_split(UserProfile(covid_severity="mild"))
    obese = macro_split(UserProfile(weight=100, height=170))
    older = macro_split(UserProfile(age=70))

    assert (default.protein, default.carbs, default.fat) == (0.25, 0.45, 0.30)
    assert (condition.protein, condition.carbs, condition.fat) == (0.30, 0.40, 0.30)
    assert (obese.protein, obese.carbs, obese.fat) == (0.35, 0.35, 0.30)
    assert older.protein == pytest.approx(0.30)
    assert older.carbs == pytest.approx(0.42)
    assert older.fat == pytest.approx(0.28)
    assert older.protein + older.carbs + older.fat == pytest.approx(1.0)


def test_macro_targets_default() -> None:
    assert macro_targets(None) == MacroTargets(
        calories=2000, protein_g=125.0, carbs_g=225.0, fat_g=66.7
    )
