"""Tests for nutrient extraction."""

import pytest

from projhealth.domain.plans import MealTotals
from projhealth.services.nutrients import (
    extract_food_nutrients,
    extract_structured_nutrients,
    extract_text_nutrients,
    sum_food_nutrients,
)
from tests.conftest import CHICKEN, OATMEAL, RICE


def test_text_nutrients_full_description() -> None:
    assert extract_text_nutrients(OATMEAL) == MealTotals(
        calories=150, protein=5, carbs=27, fat=3
    )


def test_text_nutrients_missing_values_are_zero() -> None:
    assert extract_text_nutrients("2 eggs, 140 cal, 12g protein") == MealTotals(
        calories=140, protein=12, carbs=0, fat=0
    )
    assert extract_text_nutrients("A handful of berries") == MealTotals()


def test_text_nutrients_decimals_and_plural_fats() -> None:
    totals = extract_text_nutrients("Avocado toast, 310.5 cal, 7.5g protein, 9g fats")

    assert totals.calories == pytest.approx(310.5)
    assert totals.protein == pytest.approx(7.5)
    assert totals.fat == 9


def test_structured_nutrients_truncate_to_integers() -> None:
    nutrients = {"calories": "165 cal", "protein": "31g", "carbs": 0, "fats": "3.6g"}

    assert extract_structured_nutrients(nutrients) == MealTotals(
        calories=165, protein=31, carbs=0, fat=3
    )


def test_structured_nutrients_fall_back_to_fat_key() -> None:
    nutrients = {"calories": 90.9, "fats": "", "fat": "4g"}

    totals = extract_structured_nutrients(nutrients)

    assert totals.calories == 90
    assert totals.fat == 4


def test_structured_nutrients_ignore_garbage() -> None:
    nutrients = {"calories": "lots", "protein": None, "carbs": [1], "fat": True}

    assert extract_structured_nutrients(nutrients) == MealTotals()


def test_food_without_nutrient_data_contributes_nothing() -> None:
    assert extract_food_nutrients({"item": "Water"}) == MealTotals()
    assert extract_food_nutrients(42) == MealTotals()
    assert extract_food_nutrients(None) == MealTotals()


def test_sum_mixed_foods() -> None:
    foods = [
        CHICKEN,
        RICE,
        {"item": "Olive oil", "nutrients": {"calories": "120", "fat": "14g"}},
        {"description": "Lemon wedge"},
    ]

    totals = sum_food_nutrients(foods)

    assert totals == MealTotals(calories=615, protein=57, carbs=45, fat=22)
