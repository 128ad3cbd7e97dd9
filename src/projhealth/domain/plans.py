"""Canonical meal plan models."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UnrecognizedPlanShapeError(ValueError):
    """Raised when a plan payload matches none of the accepted layouts."""


class PlanShape(StrEnum):
    """Accepted top-level layouts of a generated plan payload."""

    MEAL_PLAN_DAYS = "meal_plan.days"
    MEAL_PLAN_LIST = "meal_plan[]"
    FORMATTED_PLAN_DAYS = "formatted_plan.days"


@dataclass(frozen=True)
class ResolvedPlan:
    """Day list extracted from a payload, tagged with its layout."""

    shape: PlanShape
    days: list[object]


@dataclass
class MealTotals:
    """Running nutrient totals for a meal, before rounding."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


class _CanonicalModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class CanonicalMeal(_CanonicalModel):
    """Display-ready meal."""

    type: str
    time: str
    name: str
    description: str
    calories: int = Field(ge=0)
    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fat: int = Field(ge=0)
    items: list[str]


class DailyTotals(_CanonicalModel):
    """Daily aggregate. Fat is reported as ``fats`` at day level."""

    calories: int = Field(ge=0)
    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fats: int = Field(ge=0)


class CanonicalDay(_CanonicalModel):
    """Display-ready day of a plan."""

    title: str
    meals: list[CanonicalMeal]
    daily_totals: DailyTotals = Field(alias="dailyTotals")
    original_foods: dict[str, list[Any]] = Field(alias="originalFoods")
    calorie_target: int | None = Field(default=None, alias="calorieTarget")
    calorie_delta: int | None = Field(default=None, alias="calorieDelta")


CanonicalPlan = dict[str, CanonicalDay]
