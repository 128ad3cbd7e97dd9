"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from projhealth.adapters.backend_client import BackendClient, HttpxBackendClient
from projhealth.config import Settings
from projhealth.domain.tables import get_meal_tables, get_metrics_tables
from projhealth.services.cache import InMemoryCache
from projhealth.services.diet import DietPlanService
from projhealth.services.metrics import MetricsService
from projhealth.services.workout import WorkoutPlanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    backend_client: BackendClient
    metrics_service: MetricsService
    diet_plan_service: DietPlanService
    workout_plan_service: WorkoutPlanService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    backend_client = HttpxBackendClient.create(
        base_url=resolved_settings.backend_base_url,
        timeout_seconds=resolved_settings.backend_timeout_seconds,
    )
    metrics_service = MetricsService(
        tables=get_metrics_tables(resolved_settings.metrics_tables_version),
        debug=resolved_settings.debug,
    )
    diet_plan_service = DietPlanService(
        client=backend_client,
        cache=InMemoryCache(max_entries=resolved_settings.plan_cache_max_entries),
        tables=get_meal_tables(resolved_settings.meal_tables_version),
        cache_ttl_seconds=resolved_settings.plan_cache_ttl_seconds,
        debug=resolved_settings.debug,
    )
    workout_plan_service = WorkoutPlanService(client=backend_client)

    async def close_resources() -> None:
        await backend_client.close()

    return AppContainer(
        settings=resolved_settings,
        backend_client=backend_client,
        metrics_service=metrics_service,
        diet_plan_service=diet_plan_service,
        workout_plan_service=workout_plan_service,
        close_resources=close_resources,
    )
