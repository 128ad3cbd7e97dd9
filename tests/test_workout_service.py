"""Tests for the workout plan service."""

import asyncio

import pytest

from projhealth.services.workout import WorkoutPlanService, map_fitness_goal
from tests.conftest import FakeBackendClient


@pytest.mark.parametrize(
    ("goal", "mapped"),
    [
        ("lose weight", "Fat loss and improved conditioning"),
        ("Fat Loss", "Fat loss and improved conditioning"),
        ("build muscle", "Increase strength and improve muscle definition"),
        ("improve fitness", "Improve overall fitness and endurance"),
        ("maintain weight", "General fitness and maintenance"),
        ("maintain", "General fitness and maintenance"),
        ("run a marathon", "General fitness"),
        ("", "General fitness"),
        (None, "General fitness"),
    ],
)
def test_map_fitness_goal(goal: str | None, mapped: str) -> None:
    assert map_fitness_goal(goal) == mapped


def test_generate_plan_maps_goal() -> None:
    client = FakeBackendClient()
    service = WorkoutPlanService(client)

    result = asyncio.run(
        service.generate_plan({"fitness_goal": "build muscle", "days": 3}, "t")
    )

    assert result == {"workout_plan": {"days": []}}
    _, data, token = client.calls[0]
    assert data == {
        "fitness_goal": "Increase strength and improve muscle definition",
        "days": 3,
    }
    assert token == "t"


def test_generate_plan_without_goal_passes_data_through() -> None:
    client = FakeBackendClient()
    service = WorkoutPlanService(client)

    asyncio.run(service.generate_plan({"days": 4}, None))

    assert client.calls[0][1] == {"days": 4}


def test_get_plan_returns_raw_payload() -> None:
    client = FakeBackendClient(workout_plan={"plan": ["Push", "Pull", "Legs"]})

    result = asyncio.run(WorkoutPlanService(client).get_plan("t"))

    assert result == {"plan": ["Push", "Pull", "Legs"]}
