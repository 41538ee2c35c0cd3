"""HTTP gateway for the trips API."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from backend.app.config import Settings
from backend.app.models.itinerary import Trip

from .exceptions import (
    GatewayConnectionError,
    GatewayError,
    GatewayResponseError,
    GatewayTimeoutError,
)

logger = logging.getLogger(__name__)

TRIPS_PATH = "/api/trips"


class HttpTripGateway:
    """Loads and saves the trip collection through ``/api/trips``."""

    def __init__(
        self,
        base_url: str,
        profile_id: str,
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize HTTP gateway.

        Args:
            base_url: Base URL of the trips API (e.g., "http://localhost:8000")
            profile_id: Profile whose collection is read and written
            timeout_s: Request timeout in seconds
            transport: Optional transport (mock or ASGI transport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.profile_id = profile_id
        self.timeout_s = timeout_s
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpTripGateway:
        return cls(
            base_url=settings.trips_api_url,
            profile_id=settings.profile_id,
            timeout_s=settings.gateway_timeout_s,
        )

    async def __aenter__(self) -> HttpTripGateway:
        """Async context manager entry."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get HTTP client, creating if needed."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout_s, transport=self._transport
            )
        return self._client

    async def _request(self, method: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._get_client().request(
                method, TRIPS_PATH, params={"profileId": self.profile_id}, **kwargs
            )
            response.raise_for_status()
            return response
        except httpx.TimeoutException as e:
            raise GatewayTimeoutError(f"Trips API request timed out: {e}") from e
        except httpx.ConnectError as e:
            raise GatewayConnectionError(f"Unable to connect to trips API: {e}") from e
        except httpx.HTTPStatusError as e:
            raise GatewayResponseError(
                f"Trips API returned error {e.response.status_code}: {e.response.text}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise GatewayError(f"Unexpected trips API error: {e}") from e

    async def load(self) -> list[Trip]:
        """Fetch the saved trip collection.

        Returns:
            Saved trips; empty list if none were saved yet

        Raises:
            GatewayConnectionError: If unable to connect
            GatewayTimeoutError: If the request times out
            GatewayResponseError: For error statuses or malformed payloads
        """
        response = await self._request("GET")
        try:
            data = response.json()
        except ValueError as e:
            raise GatewayResponseError(f"Trips API returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            logger.warning("Trips API returned a non-list payload, treating as empty")
            return []

        try:
            trips = [Trip.model_validate(item) for item in data]
        except ValidationError as e:
            raise GatewayResponseError(
                f"Trips API returned invalid trips: {e.error_count()} errors"
            ) from e

        logger.info(f"Loaded {len(trips)} trips for profile {self.profile_id}")
        return trips

    async def save(self, trips: Sequence[Trip]) -> None:
        """Replace the saved trip collection.

        Raises:
            GatewayConnectionError: If unable to connect
            GatewayTimeoutError: If the request times out
            GatewayResponseError: For error statuses
        """
        payload = {"data": [trip.to_wire() for trip in trips]}
        await self._request("POST", json=payload)
        logger.debug(f"Saved {len(trips)} trips for profile {self.profile_id}")

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
