"""
HTTP client for the Gym API.

Covers the whole public contract: health check plus list/get/create/update/
delete of workouts. Request bodies are plain dicts shaped like the JSON the
API accepts; responses come back as decoded JSON.

Usage:
    with WorkoutsClient("http://localhost:8080") as api:
        created = api.create_workout({"title": "Push Day", "date": "2026-01-16"})
        api.update_workout(created["id"], {"notes": "felt strong"})
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class WorkoutsClientError(Exception):
    """Base exception for Gym API client errors."""

    pass


class WorkoutsAPIUnavailable(WorkoutsClientError):
    """Raised when the API cannot be reached."""

    pass


class WorkoutsAPIError(WorkoutsClientError):
    """Raised when the API answers with an error status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class WorkoutsClient:
    """
    Synchronous client for the /workouts resource.

    Pass `http` to reuse an existing httpx.Client (FastAPI's TestClient works
    too); otherwise one is created for `base_url` and closed by `close()`.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self._owns_http = http is None
        self._http = http or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "WorkoutsClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        try:
            response = self._http.request(method, path, json=json)
        except httpx.TransportError as e:
            logger.error("Gym API unreachable: %s %s: %s", method, path, e)
            raise WorkoutsAPIUnavailable(f"Gym API unreachable: {e}") from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = (body.get("error") if isinstance(body, dict) else None) or response.text
            logger.warning("Gym API %s %s -> %s: %s", method, path, response.status_code, message)
            raise WorkoutsAPIError(message, response.status_code)
        return response

    def check_health(self) -> dict[str, str]:
        return self._request("GET", "/health").json()

    def list_workouts(self) -> list[dict[str, Any]]:
        return self._request("GET", "/workouts").json()

    def get_workout(self, workout_id: int) -> dict[str, Any]:
        return self._request("GET", f"/workouts/{workout_id}").json()

    def create_workout(self, workout: dict[str, Any]) -> dict[str, Any]:
        """
        Create a workout.

        Args:
            workout: title and date are required; notes and exercises optional

        Raises:
            WorkoutsAPIError: with status 400 and the server's message when
                the workout is rejected
        """
        return self._request("POST", "/workouts", json=workout).json()

    def update_workout(self, workout_id: int, patch: dict[str, Any]) -> dict[str, Any]:
        """Send a partial update; keys left out keep their current value."""
        return self._request("PUT", f"/workouts/{workout_id}", json=patch).json()

    def delete_workout(self, workout_id: int) -> None:
        self._request("DELETE", f"/workouts/{workout_id}")
