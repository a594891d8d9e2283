"""Personalized daily calorie and macronutrient targets."""

from dataclasses import dataclass

from nutrient_engine.domain.profiles import CompleteProfile, UserProfile
from nutrient_engine.domain.reports import MacroTargets
from nutrient_engine.services.profiles import resolve_profile_defaults
from nutrient_engine.services.units import round_half_up

ACTIVITY_FACTORS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "very": 1.725,
    "extreme": 1.9,
}
DEFAULT_ACTIVITY_FACTOR = 1.375
DEFAULT_CALORIES = 2000
CONDITION_TDEE_FACTOR = 1.07

UNDERWEIGHT_BMI = 18.5
OBESE_BMI = 30
OLDER_ADULT_AGE = 65
MAX_PROTEIN_SHARE = 0.40

_KCAL_PER_G_PROTEIN = 4
_KCAL_PER_G_CARBS = 4
_KCAL_PER_G_FAT = 9


@dataclass(frozen=True)
class MacroSplit:
    """Share of daily calories per macronutrient."""

    protein: float
    carbs: float
    fat: float


def bmi(profile: CompleteProfile) -> float | None:
    """Return body mass index, if weight and height are known."""
    if profile.weight is None or profile.height is None:
        return None
    return profile.weight / (profile.height / 100) ** 2


def tdee(profile: UserProfile | CompleteProfile | None) -> int:
    """Estimate total daily energy expenditure (Mifflin-St Jeor)."""
    resolved = resolve_profile_defaults(profile)
    if resolved.age is None or resolved.weight is None or resolved.height is None:
        return DEFAULT_CALORIES

    bmr = 10 * resolved.weight + 6.25 * resolved.height - 5 * resolved.age
    bmr += -161 if resolved.is_female else 5

    factor = ACTIVITY_FACTORS.get(
        resolved.activity_level or "", DEFAULT_ACTIVITY_FACTOR
    )
    energy = bmr * factor
    if resolved.has_condition:
        energy *= CONDITION_TDEE_FACTOR

    body_mass = bmi(resolved)
    if body_mass is not None:
        if body_mass < UNDERWEIGHT_BMI:
            energy *= 1.1
        elif body_mass > OBESE_BMI:
            energy *= 0.9
    return int(round_half_up(energy))


def macro_split(profile: UserProfile | CompleteProfile | None) -> MacroSplit:
    """Return the calorie share of protein, carbs and fat."""
    resolved = resolve_profile_defaults(profile)
    protein, carbs, fat = 0.25, 0.45, 0.30

    if resolved.has_condition:
        protein, carbs, fat = 0.30, 0.40, 0.30

    body_mass = bmi(resolved)
    if body_mass is not None and body_mass < UNDERWEIGHT_BMI:
        protein, carbs, fat = 0.20, 0.45, 0.35
    if body_mass is not None and body_mass > OBESE_BMI:
        protein, carbs, fat = 0.35, 0.35, 0.30

    if resolved.age is not None and resolved.age > OLDER_ADULT_AGE:
        protein = min(protein + 0.05, MAX_PROTEIN_SHARE)
        remaining = 1.0 - protein
        rest = carbs + fat
        carbs, fat = remaining * carbs / rest, remaining * fat / rest

    return MacroSplit(protein=protein, carbs=carbs, fat=fat)


def macro_targets(profile: UserProfile | CompleteProfile | None) -> MacroTargets:
    """Return personalized daily calories and macro grams."""
    resolved = resolve_profile_defaults(profile)
    calories = tdee(resolved)
    split = macro_split(resolved)
    return MacroTargets(
        calories=calories,
        protein_g=round_half_up(calories * split.protein / _KCAL_PER_G_PROTEIN, 1),
        carbs_g=round_half_up(calories * split.carbs / _KCAL_PER_G_CARBS, 1),
        fat_g=round_half_up(calories * split.fat / _KCAL_PER_G_FAT, 1),
    )
