"""Nutrition facts: numeric macro values and % daily value on a 2000 kcal diet."""

import re
from typing import Union

from recipe_assistant.models.models import NutritionInfo


# Reference daily values (calories in kcal, the rest in grams)
DAILY_VALUES = {
    "calories": 2000,
    "protein": 50,
    "carbs": 300,
    "fat": 65,
    "fiber": 25,
    "sugar": 50,
}

_LEADING_INT = re.compile(r"\d+")


def parse_nutrient_value(value: str) -> int:
    """Whole-number amount from a macro string such as "25g" or "12.5 g".

    Units and other characters are dropped; the fractional part is truncated.
    Strings without a leading number yield 0.
    """
    digits = re.sub(r"[^\d.]", "", value or "")
    match = _LEADING_INT.match(digits)
    return int(match.group()) if match else 0


def daily_value_percentage(nutrient: str, value: Union[int, float]) -> int:
    """Percentage of the daily value, rounded half up; 0 for nutrients without a reference."""
    reference = DAILY_VALUES.get(nutrient)
    if not reference:
        return 0
    return int(value * 100 / reference + 0.5)


def daily_value_percentages(nutrition: NutritionInfo) -> dict[str, int]:
    """% daily value for calories and every macro of one serving."""
    amounts = {
        "calories": nutrition.calories,
        "protein": parse_nutrient_value(nutrition.protein),
        "carbs": parse_nutrient_value(nutrition.carbs),
        "fat": parse_nutrient_value(nutrition.fat),
        "fiber": parse_nutrient_value(nutrition.fiber),
        "sugar": parse_nutrient_value(nutrition.sugar),
    }
    return {nutrient: daily_value_percentage(nutrient, amount) for nutrient, amount in amounts.items()}
