"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from projhealth.adapters.backend_client import BackendClient
from projhealth.config import Settings
from projhealth.containers import AppContainer
from projhealth.services.cache import InMemoryCache
from projhealth.services.diet import DietPlanService
from projhealth.services.metrics import MetricsService
from projhealth.services.workout import WorkoutPlanService

OATMEAL = "1 cup oatmeal, 150 cal, 5g protein, 27g carbs, 3g fat"
CHICKEN = "6 oz grilled chicken breast, 280 cal, 52g protein, 0g carbs, 6g fat"
RICE = "1 cup brown rice, 215 cal, 5g protein, 45g carbs, 2g fat"


def sample_days() -> list[dict[str, object]]:
    """Two days of plan data in the generator's day layout."""
    return [
        {
            "day": 1,
            "meals": [
                {"type": "breakfast", "foods": [OATMEAL]},
                {"type": "lunch", "time": "1:00 PM", "foods": [CHICKEN, RICE]},
            ],
        },
        {
            "day": 2,
            "meals": [
                {
                    "meal_type": "dinner",
                    "foods": [
                        {
                            "item": "Baked salmon",
                            "nutrients": {
                                "calories": "367 cal",
                                "protein": "39g",
                                "carbs": "0g",
                                "fats": "22g",
                            },
                        }
                    ],
                }
            ],
            "daily_totals": {"calories": 367, "protein": 39, "carbs": 0, "fat": 22},
        },
    ]


@dataclass
class FakeBackendClient(BackendClient):
    """Fake backend client returning canned payloads."""

    diet_plan: dict[str, object] = field(
        default_factory=lambda: {"meal_plan": {"days": sample_days()}}
    )
    workout_plan: dict[str, object] = field(
        default_factory=lambda: {"workout_plan": {"days": []}}
    )
    failures: list[Exception] = field(default_factory=list)
    calls: list[tuple[str, dict[str, object] | None, str | None]] = field(
        default_factory=list
    )

    async def get_diet_plan(self, token: str | None) -> dict[str, object]:
        self.calls.append(("get_diet_plan", None, token))
        self._maybe_fail()
        return self.diet_plan

    async def generate_diet_plan(
        self, data: dict[str, object], token: str | None
    ) -> dict[str, object]:
        self.calls.append(("generate_diet_plan", data, token))
        self._maybe_fail()
        return self.diet_plan

    async def get_workout_plan(self, token: str | None) -> dict[str, object]:
        self.calls.append(("get_workout_plan", None, token))
        self._maybe_fail()
        return self.workout_plan

    async def generate_workout_plan(
        self, data: dict[str, object], token: str | None
    ) -> dict[str, object]:
        self.calls.append(("generate_workout_plan", data, token))
        self._maybe_fail()
        return self.workout_plan

    def _maybe_fail(self) -> None:
        if self.failures:
            raise self.failures.pop(0)


@pytest.fixture
def settings() -> Settings:
    return Settings(backend_base_url="https://backend.test")


@pytest.fixture
def backend_client() -> FakeBackendClient:
    return FakeBackendClient()


@pytest.fixture
def container(settings: Settings, backend_client: FakeBackendClient) -> AppContainer:
    diet_plan_service = DietPlanService(
        client=backend_client,
        cache=InMemoryCache(),
        retry_delay_seconds=0,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        backend_client=backend_client,
        metrics_service=MetricsService(),
        diet_plan_service=diet_plan_service,
        workout_plan_service=WorkoutPlanService(backend_client),
        close_resources=close_resources,
    )
