"""Tests for metabolic efficiency scoring."""

import itertools
from datetime import date

import pytest

from nutrient_engine.domain.profiles import UserProfile
from nutrient_engine.domain.reports import EnergySplit
from nutrient_engine.services.efficiency import (
    MEAL_TYPE_FACTORS,
    energy_split,
    parse_hour24,
    recent_efficiency,
    score,
    time_factor,
)
from tests.conftest import make_entry


def test_score_breakfast_is_capped_at_100() -> None:
    meal = make_entry(
        protein=30,
        carbs=40,
        fat=10,
        calories=380,
        time="8:00 AM",
        meal_type="Breakfast",
    )

    assert score(meal, UserProfile(has_long_covid=False)) == 100


def test_score_plain_lunch() -> None:
    assert score(make_entry(), None) == pytest.approx(44.0)


def test_score_long_covid_adjustments() -> None:
    meal = make_entry(long_covid_adjust=True, long_covid_benefits=("omega-3",))

    severe = score(meal, UserProfile(covid_severity="severe"))
    unknown = score(
        make_entry(long_covid_adjust=True), UserProfile(has_long_covid=True)
    )
    cautious = score(
        make_entry(long_covid_adjust=True, long_covid_cautions=("fried",)),
        UserProfile(covid_severity="mild"),
    )

    assert severe == pytest.approx(44 * 0.75 * 1.1)
    assert unknown == pytest.approx(44 * 0.85)
    assert cautious == pytest.approx(44 * 0.95 * 0.9)


def test_score_ignores_long_covid_without_condition() -> None:
    meal = make_entry(long_covid_adjust=True, long_covid_cautions=("soda",))

    assert score(meal, UserProfile()) == pytest.approx(44.0)


def test_score_is_bounded() -> None:
    macros = (-1e6, 0, 3, "abc", 1e9)
    times = ("12:00 AM", "5:59 AM", "8:00 AM", "6:30 PM", "11:00 PM", "bad")
    meal_types = (*MEAL_TYPE_FACTORS, "Brunch")
    profiles = (None, UserProfile(covid_severity="very severe"))

    for protein, time, meal_type, profile in itertools.product(
        macros, times, meal_types, profiles
    ):
        meal = make_entry(
            protein=protein,
            carbs=protein,
            fat=protein,
            time=time,
            meal_type=meal_type,
            long_covid_adjust=True,
            long_covid_benefits=("x",),
        )
        assert 0 <= score(meal, profile) <= 100


def test_parse_hour24() -> None:
    assert parse_hour24("8:00 AM") == 8
    assert parse_hour24("12:30 PM") == 12
    assert parse_hour24("12:15 AM") == 0
    assert parse_hour24("7:45 pm") == 19
    assert parse_hour24("14:00") == 14
    assert parse_hour24("garbage") == 12
    assert parse_hour24(None) == 12


def test_parse_hour24_without_minutes() -> None:
    assert parse_hour24("9am") == 9
    assert parse_hour24("9 AM") == 9
    assert parse_hour24("9 p.m.") == 21
    assert parse_hour24("Sample") == 12
    assert parse_hour24("noon am") == 12


def test_morning_meal_without_minutes_gets_morning_factor() -> None:
    assert time_factor(parse_hour24("9am")) == 1.2


def test_time_factor_boundaries() -> None:
    assert time_factor(5) == 0.7
    assert time_factor(6) == 1.0
    assert time_factor(7) == 1.2
    assert time_factor(10) == 1.2
    assert time_factor(11) == 1.0
    assert time_factor(17) == 0.9
    assert time_factor(19) == 0.9
    assert time_factor(20) == 1.0
    assert time_factor(21) == 0.7


def test_energy_split() -> None:
    assert energy_split(make_entry(calories=500), 80) == EnergySplit(400, 100)
    assert energy_split(make_entry(calories="bad"), 80) == EnergySplit(0, 0)


def test_recent_efficiency_filters_and_falls_back() -> None:
    today = date(2024, 3, 10)
    entries = [
        make_entry(date="2024-03-09", calories=500),
        make_entry(date="2024-03-09", meal_type="Pre-workout"),
        make_entry(date="2024-03-01"),
        make_entry(
            date="2024-03-08",
            protein=0,
            carbs=0,
            fat=0,
            calories=100,
            metabolic_efficiency=60,
        ),
        make_entry(date="2024-03-03", protein=0, carbs=0, fat=0, calories=100),
    ]

    scored = recent_efficiency(entries, None, today)

    assert len(scored) == 3
    efficiencies = [entry.metabolic_efficiency for entry, _ in scored]
    assert efficiencies[0] == pytest.approx(44.0)
    assert efficiencies[1:] == [60, 80]
    assert scored[0][1] == EnergySplit(220, 280)
    assert scored[2][1] == EnergySplit(80, 20)
