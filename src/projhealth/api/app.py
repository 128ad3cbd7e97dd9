"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Request, status

from projhealth.adapters.backend_client import BackendError
from projhealth.api.models import MetricsResponse, ProfilePayload
from projhealth.app_logging import configure_logging
from projhealth.containers import AppContainer
from projhealth.domain.plans import UnrecognizedPlanShapeError
from projhealth.services.plans import plan_to_dict

PLAN_UNAVAILABLE = "Meal plan unavailable"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/metrics")
    async def metrics(payload: ProfilePayload, request: Request) -> dict[str, object]:
        """Compute dashboard metrics for a profile."""
        state_container: AppContainer = request.app.state.container
        result = state_container.metrics_service.compute(payload.to_profile())
        if result is None:
            return {"metrics": None}
        return {
            "metrics": MetricsResponse.from_result(result).model_dump(by_alias=True)
        }

    @app.post("/plans/normalize")
    async def normalize_plan(
        request: Request,
        payload: dict[str, Any] = Body(...),  # noqa: B008
        calorie_target: int | None = None,
    ) -> dict[str, object]:
        """Normalize a raw plan payload into the canonical layout."""
        state_container: AppContainer = request.app.state.container
        try:
            plan = state_container.diet_plan_service.normalize(payload, calorie_target)
        except UnrecognizedPlanShapeError as exc:
            raise _plan_unavailable() from exc
        return plan_to_dict(plan)

    @app.get("/diet/plan")
    async def diet_plan(
        request: Request, calorie_target: int | None = None
    ) -> dict[str, object]:
        """Return the user's stored diet plan in canonical layout."""
        state_container: AppContainer = request.app.state.container
        try:
            plan = await state_container.diet_plan_service.get_plan(
                _authorization(request), calorie_target
            )
        except UnrecognizedPlanShapeError as exc:
            raise _plan_unavailable() from exc
        except BackendError as exc:
            logger.exception("Error fetching diet plan")
            raise _backend_failure(exc) from exc
        return plan_to_dict(plan)

    @app.post("/diet/gen")
    async def generate_diet_plan(
        request: Request,
        data: dict[str, Any] = Body(...),  # noqa: B008
        calorie_target: int | None = None,
    ) -> dict[str, object]:
        """Generate a diet plan and return it in canonical layout."""
        state_container: AppContainer = request.app.state.container
        try:
            plan = await state_container.diet_plan_service.generate_plan(
                data, _authorization(request), calorie_target
            )
        except UnrecognizedPlanShapeError as exc:
            raise _plan_unavailable() from exc
        except BackendError as exc:
            logger.exception("Error generating diet plan")
            raise _backend_failure(exc) from exc
        return plan_to_dict(plan)

    @app.get("/workout/plan")
    async def workout_plan(request: Request) -> dict[str, object]:
        """Return the user's stored workout plan."""
        state_container: AppContainer = request.app.state.container
        try:
            return await state_container.workout_plan_service.get_plan(
                _authorization(request)
            )
        except BackendError as exc:
            logger.exception("Error fetching workout plan")
            raise _backend_failure(exc) from exc

    @app.post("/workout/gen")
    async def generate_workout_plan(
        request: Request,
        data: dict[str, Any] = Body(...),  # noqa: B008
    ) -> dict[str, object]:
        """Generate a workout plan."""
        state_container: AppContainer = request.app.state.container
        try:
            return await state_container.workout_plan_service.generate_plan(
                data, _authorization(request)
            )
        except BackendError as exc:
            logger.exception("Error generating workout plan")
            raise _backend_failure(exc) from exc

    return app


def _authorization(request: Request) -> str | None:
    return request.headers.get("Authorization")


def _plan_unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=PLAN_UNAVAILABLE
    )


def _backend_failure(exc: BackendError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
