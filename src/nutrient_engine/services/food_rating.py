"""Keyword rating of foods for condition-aware logging."""

from enum import Enum


class FoodRating(Enum):
    """How a food relates to inflammation-sensitive recovery."""

    BENEFICIAL = "beneficial"
    CAUTION = "caution"
    NEUTRAL = "neutral"


BENEFICIAL_FOODS: tuple[str, ...] = (
    "salmon",
    "mackerel",
    "sardines",
    "tuna",
    "trout",
    "blueberries",
    "strawberries",
    "raspberries",
    "blackberries",
    "spinach",
    "kale",
    "broccoli",
    "brussels sprouts",
    "walnuts",
    "almonds",
    "chia seeds",
    "flax seeds",
    "turmeric",
    "ginger",
    "garlic",
    "onion",
    "olive oil",
    "avocado",
    "sweet potato",
    "green tea",
    "dark chocolate",
)

CAUTION_FOODS: tuple[str, ...] = (
    "processed meat",
    "bacon",
    "sausage",
    "hot dog",
    "french fries",
    "fried chicken",
    "fried",
    "white bread",
    "white rice",
    "pastry",
    "candy",
    "soda",
    "sugar",
    "margarine",
    "ice cream",
    "chips",
)


def rate_food(name: str | None) -> FoodRating:
    """Rate a food by name; beneficial keywords take precedence."""
    lowered = (name or "").lower()
    if any(keyword in lowered for keyword in BENEFICIAL_FOODS):
        return FoodRating.BENEFICIAL
    if any(keyword in lowered for keyword in CAUTION_FOODS):
        return FoodRating.CAUTION
    return FoodRating.NEUTRAL
