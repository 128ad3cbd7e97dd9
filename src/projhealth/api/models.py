"""Pydantic models for API payloads."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from projhealth.domain.profile import MetricsResult, Profile


class ProfilePayload(BaseModel):
    """Profile as submitted by the onboarding wizard."""

    model_config = ConfigDict(populate_by_name=True)

    height_value: float = Field(default=0, alias="heightValue")
    height_unit: str = Field(default="cm", alias="heightUnit")
    weight_value: float = Field(default=0, alias="weightValue")
    weight_unit: str = Field(default="kg", alias="weightUnit")
    date_of_birth: date | None = Field(default=None, alias="dateOfBirth")
    biological_sex: str | None = Field(default=None, alias="biologicalSex")
    activity_level: str | None = Field(default=None, alias="activityLevel")
    primary_goal: str | None = Field(default=None, alias="primaryGoal")

    def to_profile(self) -> Profile:
        """Convert to the domain profile."""
        return Profile(
            height_value=self.height_value,
            weight_value=self.weight_value,
            height_unit=self.height_unit,
            weight_unit=self.weight_unit,
            date_of_birth=self.date_of_birth,
            biological_sex=self.biological_sex,
            activity_level=self.activity_level,
            primary_goal=self.primary_goal,
        )


class MacrosResponse(BaseModel):
    """Macro grams for display."""

    protein_grams: int = Field(serialization_alias="proteinGrams")
    carb_grams: int = Field(serialization_alias="carbGrams")
    fat_grams: int = Field(serialization_alias="fatGrams")


class MetricsResponse(BaseModel):
    """Metrics for display."""

    bmi: float
    bmi_category: str = Field(serialization_alias="bmiCategory")
    bmi_color: str = Field(serialization_alias="bmiColor")
    bmr: float
    tdee: float
    calorie_target: int = Field(serialization_alias="calorieTarget")
    macros: MacrosResponse

    @classmethod
    def from_result(cls, result: MetricsResult) -> "MetricsResponse":
        """Build a response from a metrics result."""
        return cls(
            bmi=result.bmi,
            bmi_category=result.bmi_category,
            bmi_color=result.bmi_color,
            bmr=result.bmr,
            tdee=result.tdee,
            calorie_target=result.calorie_target,
            macros=MacrosResponse(
                protein_grams=result.macros.protein_grams,
                carb_grams=result.macros.carb_grams,
                fat_grams=result.macros.fat_grams,
            ),
        )
