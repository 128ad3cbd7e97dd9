"""Nutrient extraction from loosely structured food entries."""

import re
from collections.abc import Iterable, Mapping

from projhealth.domain.plans import MealTotals
from projhealth.services.numbers import parse_leading_int

_CALORIES = re.compile(r"(\d+(?:\.\d+)?)\s*cal")
_PROTEIN = re.compile(r"(\d+(?:\.\d+)?)g\s*protein")
_CARBS = re.compile(r"(\d+(?:\.\d+)?)g\s*carbs")
_FAT = re.compile(r"(\d+(?:\.\d+)?)g\s*fats?")


def extract_text_nutrients(text: str) -> MealTotals:
    """Pull calories and macros out of a free-text food description.

    ``"1 cup oatmeal, 150 cal, 5g protein, 27g carbs, 3g fat"`` yields
    150/5/27/3. Nutrients that are not mentioned count as zero.
    """
    return MealTotals(
        calories=_first_number(_CALORIES, text),
        protein=_first_number(_PROTEIN, text),
        carbs=_first_number(_CARBS, text),
        fat=_first_number(_FAT, text),
    )


def extract_structured_nutrients(nutrients: Mapping[str, object]) -> MealTotals:
    """Read integer nutrient values from a ``nutrients`` mapping."""
    return MealTotals(
        calories=parse_leading_int(nutrients.get("calories")),
        protein=parse_leading_int(nutrients.get("protein")),
        carbs=parse_leading_int(nutrients.get("carbs")),
        fat=parse_leading_int(nutrients.get("fats") or nutrients.get("fat")),
    )


def extract_food_nutrients(food: object) -> MealTotals:
    """Return nutrients for a single food entry, string or object."""
    if isinstance(food, Mapping):
        nutrients = food.get("nutrients")
        if isinstance(nutrients, Mapping) and nutrients:
            return extract_structured_nutrients(nutrients)
        return MealTotals()
    if isinstance(food, str):
        return extract_text_nutrients(food)
    return MealTotals()


def sum_food_nutrients(foods: Iterable[object]) -> MealTotals:
    """Accumulate nutrients across a meal's foods."""
    totals = MealTotals()
    for food in foods:
        found = extract_food_nutrients(food)
        totals.calories += found.calories
        totals.protein += found.protein
        totals.carbs += found.carbs
        totals.fat += found.fat
    return totals


def _first_number(pattern: re.Pattern[str], text: str) -> float:
    match = pattern.search(text)
    return float(match.group(1)) if match else 0.0
