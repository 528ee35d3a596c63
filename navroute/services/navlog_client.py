"""Nav-log API client: leg calculation and bearing/distance lookups."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from navroute.config import get_settings
from navroute.contracts.common import GeoPoint
from navroute.contracts.navlog import (
    BearingAndDistance,
    BearingAndDistanceRequest,
    NavlogRequest,
    NavlogResult,
)
from navroute.errors import MalformedResponseError

logger = logging.getLogger(__name__)


class NavlogClient:
    """Async HTTP client for the ``/Navlog`` endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        settings = get_settings()
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=settings.http_timeout)

    async def calculate_navlog(self, request: NavlogRequest) -> NavlogResult:
        """Calculate the legs of a route, including TOC/TOD points."""
        logger.info("Calculating nav-log for %d waypoints", len(request.waypoints))
        resp = await self._client.post(
            f"{self._base_url}/Navlog/CalculateNavlog", json=request.to_wire()
        )
        resp.raise_for_status()
        return _parse(NavlogResult, resp.json())

    async def calc_bearing_and_distance(
        self, start: GeoPoint, end: GeoPoint
    ) -> BearingAndDistance:
        body = BearingAndDistanceRequest(
            start_latitude=start.latitude,
            start_longitude=start.longitude,
            end_latitude=end.latitude,
            end_longitude=end.longitude,
        )
        resp = await self._client.post(
            f"{self._base_url}/Navlog/CalculateBearingAndDistance",
            json=body.to_wire(),
        )
        resp.raise_for_status()
        return _parse(BearingAndDistance, resp.json())

    async def aclose(self) -> None:
        await self._client.aclose()


def _parse(model, data):
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Unexpected {model.__name__} payload: {exc.error_count()} validation errors"
        ) from exc
