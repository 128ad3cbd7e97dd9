"""Client for the plan-generation backend."""

from dataclasses import dataclass
from typing import Protocol

import httpx

NO_RESPONSE_MESSAGE = "No response from server. Please check your connection."


class BackendError(RuntimeError):
    """Raised when the backend cannot serve a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BackendClient(Protocol):
    """Interface for the diet and workout plan endpoints."""

    async def get_diet_plan(self, token: str | None) -> dict[str, object]:
        """Return the stored diet plan payload."""

    async def generate_diet_plan(
        self, data: dict[str, object], token: str | None
    ) -> dict[str, object]:
        """Generate and return a new diet plan payload."""

    async def get_workout_plan(self, token: str | None) -> dict[str, object]:
        """Return the stored workout plan payload."""

    async def generate_workout_plan(
        self, data: dict[str, object], token: str | None
    ) -> dict[str, object]:
        """Generate and return a new workout plan payload."""


@dataclass
class HttpxBackendClient(BackendClient):
    """HTTPX-backed backend client forwarding the caller's bearer token."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 30

    @classmethod
    def create(cls, base_url: str, timeout_seconds: float = 30) -> "HttpxBackendClient":
        """Create a backend client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def get_diet_plan(self, token: str | None) -> dict[str, object]:
        """Fetch the user's diet plan."""
        return await self._request("GET", "/diet/plan", token)

    async def generate_diet_plan(
        self, data: dict[str, object], token: str | None
    ) -> dict[str, object]:
        """Generate a diet plan from user data and preferences."""
        return await self._request("POST", "/diet/gen", token, json=data)

    async def get_workout_plan(self, token: str | None) -> dict[str, object]:
        """Fetch the user's workout plan."""
        return await self._request("GET", "/workout/plan", token)

    async def generate_workout_plan(
        self, data: dict[str, object], token: str | None
    ) -> dict[str, object]:
        """Generate a workout plan from user data and preferences."""
        return await self._request("POST", "/workout/gen", token, json=data)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        token: str | None,
        json: dict[str, object] | None = None,
    ) -> dict[str, object]:
        headers = {"Authorization": token} if token else {}
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                json=json,
                timeout=self.timeout_seconds,
            )
        except httpx.TransportError as exc:
            raise BackendError(NO_RESPONSE_MESSAGE) from exc
        if response.is_error:
            raise BackendError(
                _server_error_message(response), status_code=response.status_code
            )
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            raise BackendError(
                f"Unexpected response from {path}", status_code=response.status_code
            )
        return payload


def _server_error_message(response: httpx.Response) -> str:
    """Format a backend error like ``Server error: 500 - <message>``."""
    detail = response.reason_phrase
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        detail = str(body["message"])
    return f"Server error: {response.status_code} - {detail}"
