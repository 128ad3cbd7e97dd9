"""Versioned lookup tables for metrics and meal normalization."""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

CURRENT_TABLES_VERSION = "2024.1"


@dataclass(frozen=True)
class MacroSplit:
    """Share of daily calories per macronutrient."""

    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class MetricsTables:
    """Constants used by the metrics engine."""

    version: str
    activity_multipliers: Mapping[str, float]
    goal_calorie_factors: Mapping[str, float]
    goal_macro_splits: Mapping[str, MacroSplit]
    default_activity_multiplier: float
    default_calorie_factor: float
    default_macro_split: MacroSplit

    def activity_multiplier(self, activity_level: str | None) -> float:
        """Return the TDEE multiplier for an activity level."""
        if not activity_level:
            return self.default_activity_multiplier
        return self.activity_multipliers.get(
            activity_level.lower(), self.default_activity_multiplier
        )

    def calorie_factor(self, goal: str | None) -> float:
        """Return the TDEE multiplier for a goal."""
        if not goal:
            return self.default_calorie_factor
        return self.goal_calorie_factors.get(goal.lower(), self.default_calorie_factor)

    def macro_split(self, goal: str | None) -> MacroSplit:
        """Return the macro split for a goal."""
        if not goal:
            return self.default_macro_split
        return self.goal_macro_splits.get(goal.lower(), self.default_macro_split)


@dataclass(frozen=True)
class MealTables:
    """Defaults used when a meal lacks a name, time or description."""

    version: str
    protein_keywords: tuple[str, ...]
    default_names: Mapping[str, str]
    descriptions: Mapping[str, str]
    fallback_description: str
    default_times: tuple[tuple[str, str], ...]
    snack_times: tuple[tuple[str, str], ...]
    default_snack_time: str
    fallback_time: str


_MAINTAIN_SPLIT = MacroSplit(protein=0.30, carbs=0.40, fat=0.30)

METRICS_TABLES_2024_1 = MetricsTables(
    version="2024.1",
    activity_multipliers=MappingProxyType(
        {
            "sedentary": 1.2,
            "lightly_active": 1.375,
            "moderately_active": 1.55,
            "active": 1.725,
            "very_active": 1.9,
        }
    ),
    goal_calorie_factors=MappingProxyType(
        {
            "lose_weight": 0.80,
            "gain_muscle": 1.10,
            "improve_endurance": 1.00,
            "maintain_weight": 1.00,
            "general_wellness": 1.00,
        }
    ),
    goal_macro_splits=MappingProxyType(
        {
            "lose_weight": MacroSplit(protein=0.35, carbs=0.35, fat=0.30),
            "gain_muscle": MacroSplit(protein=0.30, carbs=0.45, fat=0.25),
            "improve_endurance": MacroSplit(protein=0.20, carbs=0.55, fat=0.25),
            "maintain_weight": _MAINTAIN_SPLIT,
            "general_wellness": MacroSplit(protein=0.25, carbs=0.50, fat=0.25),
        }
    ),
    default_activity_multiplier=1.2,
    default_calorie_factor=1.00,
    default_macro_split=_MAINTAIN_SPLIT,
)

MEAL_TABLES_2024_1 = MealTables(
    version="2024.1",
    protein_keywords=("chicken", "beef", "fish", "salmon", "tofu", "eggs", "turkey"),
    default_names=MappingProxyType(
        {
            "breakfast": "Balanced Breakfast",
            "lunch": "Nutrient-Rich Lunch",
            "dinner": "Complete Dinner",
            "snack": "Healthy Snack",
        }
    ),
    descriptions=MappingProxyType(
        {
            "breakfast": (
                "A nutritious morning meal to kickstart your day with energy and focus"
            ),
            "lunch": (
                "Balanced midday meal with protein and complex carbs to sustain "
                "energy levels"
            ),
            "dinner": (
                "Wholesome evening meal with lean protein and vegetables for "
                "recovery and repair"
            ),
            "snack": (
                "Strategic snack to maintain energy and support your fitness goals"
            ),
        }
    ),
    fallback_description="Balanced meal with optimal macronutrient distribution",
    # Substring matches, checked in order.
    default_times=(
        ("breakfast", "8:00 AM"),
        ("lunch", "12:30 PM"),
        ("dinner", "7:00 PM"),
    ),
    snack_times=(
        ("morning", "10:00 AM"),
        ("afternoon", "3:30 PM"),
    ),
    default_snack_time="3:30 PM",
    fallback_time="12:00 PM",
)

METRICS_TABLES: Mapping[str, MetricsTables] = MappingProxyType(
    {METRICS_TABLES_2024_1.version: METRICS_TABLES_2024_1}
)
MEAL_TABLES: Mapping[str, MealTables] = MappingProxyType(
    {MEAL_TABLES_2024_1.version: MEAL_TABLES_2024_1}
)

DEFAULT_METRICS_TABLES = METRICS_TABLES[CURRENT_TABLES_VERSION]
DEFAULT_MEAL_TABLES = MEAL_TABLES[CURRENT_TABLES_VERSION]


def get_metrics_tables(version: str) -> MetricsTables:
    """Return metrics tables for a version."""
    try:
        return METRICS_TABLES[version]
    except KeyError:
        raise ValueError(f"Unknown metrics tables version: {version}") from None


def get_meal_tables(version: str) -> MealTables:
    """Return meal tables for a version."""
    try:
        return MEAL_TABLES[version]
    except KeyError:
        raise ValueError(f"Unknown meal tables version: {version}") from None
