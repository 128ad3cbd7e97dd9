"""Normalization of generated meal plans into one canonical layout.

Plans arrive from the plan-generation backend in one of three layouts and
with nutrient data that may be numeric, string-encoded or only present in
free-text food descriptions. Every value-level gap falls back to a default;
only a payload without a recognizable day list is rejected.
"""

import copy
import logging
import math
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TypeVar

from projhealth.domain.plans import (
    CanonicalDay,
    CanonicalMeal,
    CanonicalPlan,
    DailyTotals,
    MealTotals,
    PlanShape,
    ResolvedPlan,
    UnrecognizedPlanShapeError,
)
from projhealth.domain.tables import DEFAULT_MEAL_TABLES, MealTables
from projhealth.services.numbers import as_float, non_negative_int, parse_leading_int
from projhealth.services.nutrients import sum_food_nutrients

_QUANTITY_PREFIX = re.compile(r"^[\d/]+([\s\w]+)?\s+")
_AMOUNT_AND_NAME = re.compile(r"([\d/]+\s*[a-zA-Z]+|[\d/]+)\s(.+)")

UNKNOWN_FOOD_ITEM = "Unknown food item"
DEFAULT_MEAL_TYPE = "meal"

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class MealContext:
    """Inputs shared by the per-field resolvers of one meal."""

    meal: Mapping[str, object]
    meal_type: str
    foods: list[object]
    food_texts: list[str]
    tables: MealTables

    @property
    def display_type(self) -> str:
        return capitalize_first(self.meal_type)


@dataclass(frozen=True)
class DayContext:
    """Inputs shared by the day-level resolvers."""

    day: Mapping[str, object]
    meals: list[CanonicalMeal]


def classify_plan_shape(payload: object) -> PlanShape:
    """Return which accepted layout a payload uses; first match wins."""
    if isinstance(payload, Mapping):
        meal_plan = payload.get("meal_plan")
        if isinstance(meal_plan, Mapping) and isinstance(meal_plan.get("days"), list):
            return PlanShape.MEAL_PLAN_DAYS
        if isinstance(meal_plan, list):
            return PlanShape.MEAL_PLAN_LIST
        formatted = payload.get("formatted_plan")
        if isinstance(formatted, Mapping) and isinstance(formatted.get("days"), list):
            return PlanShape.FORMATTED_PLAN_DAYS
    raise UnrecognizedPlanShapeError("Unrecognized meal plan data structure")


def resolve_plan_days(payload: object) -> ResolvedPlan:
    """Classify a payload and extract its list of days."""
    shape = classify_plan_shape(payload)
    if shape is PlanShape.MEAL_PLAN_DAYS:
        days = payload["meal_plan"]["days"]
    elif shape is PlanShape.MEAL_PLAN_LIST:
        days = payload["meal_plan"]
    else:
        days = payload["formatted_plan"]["days"]
    return ResolvedPlan(shape=shape, days=list(days))


def normalize_plan(
    payload: object,
    calorie_target: int | None = None,
    tables: MealTables = DEFAULT_MEAL_TABLES,
) -> CanonicalPlan:
    """Normalize a raw plan payload into a ``day<N>``-keyed canonical plan.

    Raises ``UnrecognizedPlanShapeError`` when no day list can be resolved.
    When ``calorie_target`` is given each day also reports its target and the
    difference between its calories and that target.
    """
    try:
        resolved = resolve_plan_days(payload)
    except UnrecognizedPlanShapeError:
        _logger.warning(
            "Unrecognized meal plan payload: keys=%s", _payload_keys(payload)
        )
        raise

    plan: CanonicalPlan = {}
    for position, raw_day in enumerate(resolved.days, start=1):
        day = raw_day if isinstance(raw_day, Mapping) else {}
        day_number = resolve_day_number(day, position)
        plan[f"day{day_number}"] = build_day(day, day_number, calorie_target, tables)
    return plan


def build_day(
    day: Mapping[str, object],
    day_number: object,
    calorie_target: int | None = None,
    tables: MealTables = DEFAULT_MEAL_TABLES,
) -> CanonicalDay:
    """Assemble one canonical day from its raw mapping."""
    raw_meals = day.get("meals")
    meals: list[CanonicalMeal] = []
    original_foods: dict[str, list[object]] = {}
    for raw_meal in raw_meals if isinstance(raw_meals, list) else []:
        meal = raw_meal if isinstance(raw_meal, Mapping) else {}
        context = meal_context(meal, tables)
        meals.append(build_meal(context))
        original_foods[context.meal_type] = copy.deepcopy(context.foods)

    daily_totals = resolve_first(DAILY_TOTAL_RESOLVERS, DayContext(day, meals))
    calorie_delta = None
    if calorie_target is not None:
        calorie_delta = daily_totals.calories - calorie_target
    return CanonicalDay(
        title=f"Day {day_number}",
        meals=meals,
        daily_totals=daily_totals,
        original_foods=original_foods,
        calorie_target=calorie_target,
        calorie_delta=calorie_delta,
    )


def meal_context(
    meal: Mapping[str, object], tables: MealTables = DEFAULT_MEAL_TABLES
) -> MealContext:
    """Collect the resolved type and foods of a raw meal."""
    meal_type = resolve_meal_type(meal)
    if meal_type is None:
        _logger.debug("Meal missing type: %s", meal)
        meal_type = DEFAULT_MEAL_TYPE
    raw_foods = meal.get("foods")
    foods = list(raw_foods) if isinstance(raw_foods, list) else []
    return MealContext(
        meal=meal,
        meal_type=meal_type,
        foods=foods,
        food_texts=[food_text(food) for food in foods],
        tables=tables,
    )


def build_meal(context: MealContext) -> CanonicalMeal:
    """Assemble one canonical meal from its resolved context."""
    totals = resolve_first(MEAL_TOTAL_RESOLVERS, context)
    return CanonicalMeal(
        type=context.display_type,
        time=resolve_first(TIME_RESOLVERS, context),
        name=resolve_first(NAME_RESOLVERS, context),
        description=meal_description(context),
        calories=non_negative_int(totals.calories),
        protein=non_negative_int(totals.protein),
        carbs=non_negative_int(totals.carbs),
        fat=non_negative_int(totals.fat),
        items=[food_item_label(food) for food in context.foods],
    )


def resolve_first(resolvers: Sequence[Callable[..., T | None]], context: object) -> T:
    """Return the first non-None value produced by an ordered resolver chain."""
    for resolver in resolvers:
        value = resolver(context)
        if value is not None:
            return value
    raise LookupError("Resolver chain produced no value")


def resolve_meal_type(meal: Mapping[str, object]) -> str | None:
    """Return ``type`` or its ``meal_type`` alias."""
    for key in ("type", "meal_type"):
        value = meal.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def resolve_day_number(day: Mapping[str, object], position: int) -> object:
    """Return the day's number, falling back to its 1-based position."""
    value = day.get("day")
    if isinstance(value, bool):
        return position
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value) if value.is_integer() else value
    if isinstance(value, str) and value.strip():
        return value.strip()
    return position


def capitalize_first(text: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def food_text(food: object) -> str:
    """Return the descriptive text of a food entry for name matching."""
    if isinstance(food, str):
        return food
    if isinstance(food, Mapping):
        for key in ("item", "description"):
            value = food.get(key)
            if isinstance(value, str) and value:
                return value
    return ""


def food_item_label(food: object) -> str:
    """Return a readable ``"<name>, <quantity>"`` label for a food entry."""
    if isinstance(food, Mapping):
        label = food_text(food)
        return label or UNKNOWN_FOOD_ITEM
    if isinstance(food, str):
        name = food.split(",")[0].strip()
        match = _AMOUNT_AND_NAME.match(name)
        if match:
            return f"{match.group(2)}, {match.group(1)}"
        return name
    return UNKNOWN_FOOD_ITEM


def strip_quantity(text: str) -> str:
    """Drop a leading quantity such as ``"1 cup "`` from a food name."""
    return _QUANTITY_PREFIX.sub("", text, count=1)


def meal_description(context: MealContext) -> str:
    """Return the fixed description for the meal type."""
    return context.tables.descriptions.get(
        context.meal_type.lower(), context.tables.fallback_description
    )


def _explicit_time(context: MealContext) -> str | None:
    value = context.meal.get("time")
    if isinstance(value, str) and value.strip():
        return value
    return None


def _default_time(context: MealContext) -> str | None:
    tables = context.tables
    meal_type = context.meal_type.lower()
    for keyword, time in tables.default_times:
        if keyword in meal_type:
            return time
    if "snack" in meal_type:
        for keyword, time in tables.snack_times:
            if keyword in meal_type:
                return time
        return tables.default_snack_time
    return tables.fallback_time


def _protein_name(context: MealContext) -> str | None:
    lowered = [text.lower() for text in context.food_texts]
    for protein in context.tables.protein_keywords:
        if any(protein in text for text in lowered):
            return f"{capitalize_first(protein)}-Based {context.display_type}"
    return None


def _first_food_name(context: MealContext) -> str | None:
    if not context.food_texts or not context.food_texts[0]:
        return None
    first_food = context.food_texts[0].split(",")[0].strip()
    ingredient = capitalize_first(strip_quantity(first_food))
    if not ingredient:
        return None
    return f"{ingredient}-Based {context.display_type}"


def _default_name(context: MealContext) -> str | None:
    name = context.tables.default_names.get(context.meal_type.lower())
    return name or f"{context.display_type} Meal"


def _declared_meal_totals(context: MealContext) -> MealTotals | None:
    sources = [
        source
        for source in (context.meal.get("macros"), context.meal.get("nutrients"))
        if isinstance(source, Mapping) and source
    ]
    if not sources:
        return None

    def pick(*keys: str) -> int:
        for source in sources:
            for key in keys:
                value = source.get(key)
                if value:
                    return parse_leading_int(value)
        return 0

    return MealTotals(
        calories=pick("calories"),
        protein=pick("protein"),
        carbs=pick("carbs"),
        fat=pick("fat", "fats"),
    )


def _food_meal_totals(context: MealContext) -> MealTotals | None:
    return sum_food_nutrients(context.foods)


def _declared_daily_totals(context: DayContext) -> DailyTotals | None:
    for key in ("totals", "daily_totals"):
        totals = context.day.get(key)
        if isinstance(totals, Mapping) and totals:
            return DailyTotals(
                calories=non_negative_int(as_float(totals.get("calories"))),
                protein=non_negative_int(as_float(totals.get("protein"))),
                carbs=non_negative_int(as_float(totals.get("carbs"))),
                fats=non_negative_int(
                    as_float(totals.get("fats") or totals.get("fat"))
                ),
            )
    return None


def _summed_daily_totals(context: DayContext) -> DailyTotals | None:
    return DailyTotals(
        calories=sum(meal.calories for meal in context.meals),
        protein=sum(meal.protein for meal in context.meals),
        carbs=sum(meal.carbs for meal in context.meals),
        fats=sum(meal.fat for meal in context.meals),
    )


TIME_RESOLVERS: tuple[Callable[[MealContext], str | None], ...] = (
    _explicit_time,
    _default_time,
)
NAME_RESOLVERS: tuple[Callable[[MealContext], str | None], ...] = (
    _protein_name,
    _first_food_name,
    _default_name,
)
MEAL_TOTAL_RESOLVERS: tuple[Callable[[MealContext], MealTotals | None], ...] = (
    _declared_meal_totals,
    _food_meal_totals,
)
DAILY_TOTAL_RESOLVERS: tuple[Callable[[DayContext], DailyTotals | None], ...] = (
    _declared_daily_totals,
    _summed_daily_totals,
)


def plan_to_dict(plan: CanonicalPlan) -> dict[str, dict[str, object]]:
    """Serialize a canonical plan to its wire mapping."""
    serialized: dict[str, dict[str, object]] = {}
    for key, day in plan.items():
        data = day.model_dump(by_alias=True)
        if day.calorie_target is None:
            data.pop("calorieTarget", None)
            data.pop("calorieDelta", None)
        serialized[key] = data
    return serialized


def _payload_keys(payload: object) -> list[str] | str:
    if isinstance(payload, Mapping):
        return sorted(str(key) for key in payload)
    return type(payload).__name__
