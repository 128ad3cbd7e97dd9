"""Workout plan retrieval."""

from dataclasses import dataclass

from projhealth.adapters.backend_client import BackendClient

_FITNESS_GOALS = {
    "lose weight": "Fat loss and improved conditioning",
    "fat loss": "Fat loss and improved conditioning",
    "build muscle": "Increase strength and improve muscle definition",
    "improve fitness": "Improve overall fitness and endurance",
    "maintain weight": "General fitness and maintenance",
    "maintain": "General fitness and maintenance",
}
DEFAULT_FITNESS_GOAL = "General fitness"


def map_fitness_goal(goal: str | None) -> str:
    """Map a user's primary goal to the wording the plan generator expects."""
    if not goal:
        return DEFAULT_FITNESS_GOAL
    return _FITNESS_GOALS.get(goal.strip().lower(), DEFAULT_FITNESS_GOAL)


@dataclass
class WorkoutPlanService:
    """Passes workout plan requests through to the backend."""

    client: BackendClient

    async def get_plan(self, token: str | None) -> dict[str, object]:
        """Return the user's stored workout plan."""
        return await self.client.get_workout_plan(token)

    async def generate_plan(
        self, data: dict[str, object], token: str | None
    ) -> dict[str, object]:
        """Generate a workout plan, translating ``fitness_goal`` if present."""
        request = dict(data)
        goal = request.get("fitness_goal")
        if isinstance(goal, str):
            request["fitness_goal"] = map_fitness_goal(goal)
        return await self.client.generate_workout_plan(request, token)
