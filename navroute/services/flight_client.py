"""Flight API client: fetch and persist flights."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from navroute.config import get_settings
from navroute.contracts.flight import Flight
from navroute.errors import MalformedResponseError

logger = logging.getLogger(__name__)


class FlightClient:
    """Async HTTP client for the ``/Flight`` endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        settings = get_settings()
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=settings.http_timeout)

    async def get_flight(self, user_id: str, flight_id: str) -> Flight | None:
        """Fetch one flight, or None when it does not exist."""
        resp = await self._client.get(f"{self._base_url}/Flight/{user_id}/{flight_id}")
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return _to_flight(resp.json())

    async def create_flight(self, user_id: str, flight: Flight) -> Flight:
        resp = await self._client.post(
            f"{self._base_url}/Flight",
            params={"userId": user_id},
            json=flight.to_wire(),
        )
        resp.raise_for_status()
        created = _to_flight(resp.json())
        logger.info("Created flight %s for user %s", created.id, user_id)
        return created

    async def update_flight(self, user_id: str, flight_id: str, flight: Flight) -> Flight:
        resp = await self._client.patch(
            f"{self._base_url}/Flight/{user_id}/{flight_id}",
            json=flight.to_wire(),
        )
        resp.raise_for_status()
        return _to_flight(resp.json())

    async def aclose(self) -> None:
        await self._client.aclose()


def _to_flight(data: dict) -> Flight:
    try:
        return Flight.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponseError(f"Unexpected flight payload: {exc}") from exc
