"""Profile and health metrics domain models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Profile:
    """Anthropometric profile supplied by onboarding.

    Heights in ``ft`` or ``in`` are stored as total inches.
    """

    height_value: float
    weight_value: float
    height_unit: str = "cm"
    weight_unit: str = "kg"
    date_of_birth: date | None = None
    biological_sex: str | None = None
    activity_level: str | None = None
    primary_goal: str | None = None


@dataclass(frozen=True)
class BmiCategory:
    """BMI bucket with a presentation color hint."""

    category: str
    color: str


@dataclass(frozen=True)
class MacroGrams:
    """Recommended daily macronutrients in grams."""

    protein_grams: int
    carb_grams: int
    fat_grams: int


@dataclass(frozen=True)
class MetricsResult:
    """Derived health metrics for a profile."""

    bmi: float
    bmi_category: str
    bmi_color: str
    bmr: float
    tdee: float
    calorie_target: int
    macros: MacroGrams
