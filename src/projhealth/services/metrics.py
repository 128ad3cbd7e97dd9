"""Health metrics derived from an anthropometric profile.

All functions are pure and tolerant: missing or non-positive inputs yield a
0.0 sentinel rather than an exception so partial dashboards can still render.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime

from projhealth.domain.profile import BmiCategory, MacroGrams, MetricsResult, Profile
from projhealth.domain.tables import DEFAULT_METRICS_TABLES, MetricsTables
from projhealth.services.numbers import as_float, round_half_up

LBS_PER_KG = 2.205
METERS_PER_INCH = 0.0254
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9

INVALID_METRIC = 0.0

_BMI_THRESHOLDS: tuple[tuple[float, BmiCategory], ...] = (
    (18.5, BmiCategory(category="Underweight", color="text-blue-500")),
    (25.0, BmiCategory(category="Healthy", color="text-emerald-500")),
    (30.0, BmiCategory(category="Overweight", color="text-amber-500")),
)
_BMI_OBESE = BmiCategory(category="Obese", color="text-red-500")

_logger = logging.getLogger(__name__)


def to_meters(height: object, height_unit: str | None = "cm") -> float:
    """Convert a height to meters; ``ft`` and ``in`` values are total inches."""
    value = as_float(height)
    if value <= 0:
        return INVALID_METRIC
    unit = (height_unit or "cm").lower()
    if unit == "cm":
        return value / 100
    if unit in {"in", "ft"}:
        return value * METERS_PER_INCH
    return INVALID_METRIC


def to_centimeters(height: object, height_unit: str | None = "cm") -> float:
    """Convert a height to centimeters."""
    return to_meters(height, height_unit) * 100


def to_kilograms(weight: object, weight_unit: str | None = "kg") -> float:
    """Convert a weight to kilograms."""
    value = as_float(weight)
    if value <= 0:
        return INVALID_METRIC
    unit = (weight_unit or "kg").lower()
    if unit == "kg":
        return value
    if unit in {"lbs", "lb"}:
        return value / LBS_PER_KG
    return INVALID_METRIC


def calculate_bmi(
    height: object,
    weight: object,
    height_unit: str | None = "cm",
    weight_unit: str | None = "kg",
) -> float:
    """Return body mass index, or 0.0 when height or weight is unusable."""
    height_m = to_meters(height, height_unit)
    weight_kg = to_kilograms(weight, weight_unit)
    if height_m <= 0 or weight_kg <= 0:
        return INVALID_METRIC
    return weight_kg / (height_m * height_m)


def get_bmi_category(bmi: float) -> BmiCategory:
    """Return the BMI bucket for a value."""
    for upper_bound, category in _BMI_THRESHOLDS:
        if bmi < upper_bound:
            return category
    return _BMI_OBESE


def calculate_age(date_of_birth: object, today: date | None = None) -> int | None:
    """Return age in whole years, or None if the date is missing or invalid."""
    birth = _parse_date(date_of_birth)
    if birth is None:
        return None
    current = today or date.today()
    had_birthday = (current.month, current.day) >= (birth.month, birth.day)
    return max(0, current.year - birth.year - (0 if had_birthday else 1))


def calculate_bmr(  # noqa: PLR0913
    height: object,
    weight: object,
    sex: str | None,
    date_of_birth: object,
    height_unit: str | None = "cm",
    weight_unit: str | None = "kg",
    *,
    today: date | None = None,
) -> float:
    """Return basal metabolic rate (Mifflin-St Jeor) in kcal/day."""
    height_cm = to_centimeters(height, height_unit)
    weight_kg = to_kilograms(weight, weight_unit)
    age = calculate_age(date_of_birth, today=today)
    if height_cm <= 0 or weight_kg <= 0 or age is None:
        return INVALID_METRIC
    sex_constant = 5 if (sex or "").lower() == "male" else -161
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + sex_constant


def calculate_tdee(
    bmr: float,
    activity_level: str | None,
    tables: MetricsTables = DEFAULT_METRICS_TABLES,
) -> float:
    """Return total daily energy expenditure for an activity level."""
    if bmr <= 0:
        return INVALID_METRIC
    return bmr * tables.activity_multiplier(activity_level)


def calculate_calorie_target(
    tdee: float,
    primary_goal: str | None,
    tables: MetricsTables = DEFAULT_METRICS_TABLES,
) -> int:
    """Return the daily calorie target for a goal."""
    if tdee <= 0:
        return 0
    return round_half_up(tdee * tables.calorie_factor(primary_goal))


def calculate_macros(
    calorie_target: float,
    primary_goal: str | None,
    tables: MetricsTables = DEFAULT_METRICS_TABLES,
) -> MacroGrams:
    """Split a calorie target into protein, carb and fat grams."""
    if calorie_target <= 0:
        return MacroGrams(protein_grams=0, carb_grams=0, fat_grams=0)
    split = tables.macro_split(primary_goal)
    return MacroGrams(
        protein_grams=round_half_up(
            calorie_target * split.protein / KCAL_PER_GRAM_PROTEIN
        ),
        carb_grams=round_half_up(calorie_target * split.carbs / KCAL_PER_GRAM_CARBS),
        fat_grams=round_half_up(calorie_target * split.fat / KCAL_PER_GRAM_FAT),
    )


def macro_calories(macros: MacroGrams) -> int:
    """Return the kcal represented by a macro split."""
    return (
        macros.protein_grams * KCAL_PER_GRAM_PROTEIN
        + macros.carb_grams * KCAL_PER_GRAM_CARBS
        + macros.fat_grams * KCAL_PER_GRAM_FAT
    )


def compute_metrics(
    profile: Profile,
    tables: MetricsTables = DEFAULT_METRICS_TABLES,
    today: date | None = None,
) -> MetricsResult | None:
    """Compute all dashboard metrics, or None when height/weight is unusable."""
    bmi = calculate_bmi(
        profile.height_value,
        profile.weight_value,
        profile.height_unit,
        profile.weight_unit,
    )
    if bmi <= 0:
        return None
    bmr = calculate_bmr(
        profile.height_value,
        profile.weight_value,
        profile.biological_sex,
        profile.date_of_birth,
        profile.height_unit,
        profile.weight_unit,
        today=today,
    )
    tdee = calculate_tdee(bmr, profile.activity_level, tables)
    calorie_target = calculate_calorie_target(tdee, profile.primary_goal, tables)
    macros = calculate_macros(calorie_target, profile.primary_goal, tables)
    category = get_bmi_category(bmi)
    return MetricsResult(
        bmi=bmi,
        bmi_category=category.category,
        bmi_color=category.color,
        bmr=bmr,
        tdee=tdee,
        calorie_target=calorie_target,
        macros=macros,
    )


def profile_from_onboarding(record: Mapping[str, object]) -> Profile:
    """Build a metric-unit profile from a stored onboarding record."""
    return Profile(
        height_value=as_float(record.get("height_in_cm")),
        weight_value=as_float(record.get("weight_in_kg")),
        height_unit="cm",
        weight_unit="kg",
        date_of_birth=_parse_date(record.get("dob")),
        biological_sex=_optional_str(record.get("gender")),
        activity_level=_optional_str(record.get("daily_activity_level")),
        primary_goal=_optional_str(record.get("primary_fitness_goal")),
    )


@dataclass
class MetricsService:
    """Computes metrics with a pinned table version."""

    tables: MetricsTables = DEFAULT_METRICS_TABLES
    debug: bool = False

    def compute(
        self, profile: Profile, today: date | None = None
    ) -> MetricsResult | None:
        """Return metrics for a profile, or None for an unusable profile."""
        result = compute_metrics(profile, self.tables, today=today)
        if result is None:
            _logger.warning("Missing height or weight data for metric calculations")
        elif self.debug:
            _logger.info(
                "Metrics computed: tables=%s bmi=%.1f target=%s",
                self.tables.version,
                result.bmi,
                result.calorie_target,
            )
        return result


def _parse_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _optional_str(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
