"""Diet plan retrieval and normalization."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from projhealth.adapters.backend_client import BackendClient, BackendError
from projhealth.domain.plans import CanonicalPlan
from projhealth.domain.tables import DEFAULT_MEAL_TABLES, MealTables
from projhealth.services.cache import Cache, payload_cache_key
from projhealth.services.plans import normalize_plan

_logger = logging.getLogger(__name__)


@dataclass
class DietPlanService:
    """Fetches generated diet plans and returns them in canonical form."""

    client: BackendClient
    cache: Cache
    tables: MealTables = DEFAULT_MEAL_TABLES
    cache_ttl_seconds: int = 600
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def get_plan(
        self, token: str | None, calorie_target: int | None = None
    ) -> CanonicalPlan:
        """Return the user's stored diet plan, normalized."""
        payload = await self._call_with_retry(
            lambda: self.client.get_diet_plan(token), action="get_diet_plan"
        )
        return self.normalize(payload, calorie_target)

    async def generate_plan(
        self,
        data: dict[str, object],
        token: str | None,
        calorie_target: int | None = None,
    ) -> CanonicalPlan:
        """Generate a new diet plan and return it normalized."""
        payload = await self.client.generate_diet_plan(data, token)
        return self.normalize(payload, calorie_target)

    def normalize(
        self, payload: object, calorie_target: int | None = None
    ) -> CanonicalPlan:
        """Normalize a raw payload, reusing earlier results for equal payloads."""
        cache_key = payload_cache_key(
            f"plan:{self.tables.version}", payload, calorie_target
        )
        cached = self.cache.get(cache_key)
        if isinstance(cached, dict):
            return _fresh_copy(cached)

        plan = normalize_plan(
            payload, calorie_target=calorie_target, tables=self.tables
        )
        self.cache.set(cache_key, plan, ttl_seconds=self.cache_ttl_seconds)
        if self.debug:
            _logger.info("Diet plan normalized: days=%s", len(plan))
        return _fresh_copy(plan)

    async def _call_with_retry(
        self, func: Callable[[], Awaitable[dict[str, object]]], *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                if _is_client_error(exc):
                    raise
                if self.debug:
                    _logger.warning(
                        "Diet %s failed (attempt %s/%s): %s",
                        action,
                        attempt,
                        self.retry_attempts + 1,
                        exc,
                    )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _fresh_copy(plan: CanonicalPlan) -> CanonicalPlan:
    return {key: day.model_copy(deep=True) for key, day in plan.items()}


def _is_client_error(exc: Exception) -> bool:
    """4xx responses won't change on retry."""
    status_code = exc.status_code if isinstance(exc, BackendError) else None
    return status_code is not None and status_code < 500
