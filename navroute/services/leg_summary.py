"""Per-leg bearing/distance summary shown next to the route list.

Display-only: a failed lookup leaves that leg without data and is never
allowed to touch the route.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence

import httpx
from pydantic import BaseModel, Field

from navroute.contracts.navlog import BearingAndDistance
from navroute.contracts.result import ServiceResult
from navroute.contracts.waypoint import Waypoint
from navroute.errors import NavServiceError
from navroute.services.navlog_client import NavlogClient

logger = logging.getLogger(__name__)


def leg_key(start: Waypoint, end: Waypoint) -> str:
    return f"{start.id}~{end.id}"


class LegSummary(BaseModel):
    legs: dict[str, ServiceResult[BearingAndDistance]] = Field(default_factory=dict)
    total_distance: float = 0.0

    def get(self, key: str) -> BearingAndDistance | None:
        result = self.legs.get(key)
        return result.data if result is not None and result.success else None


async def _fetch_leg(
    client: NavlogClient, start: Waypoint, end: Waypoint
) -> ServiceResult[BearingAndDistance]:
    started = time.perf_counter()
    try:
        data = await client.calc_bearing_and_distance(start.position, end.position)
    except (httpx.HTTPError, NavServiceError) as exc:
        logger.warning("Bearing/distance lookup failed for %s: %s", leg_key(start, end), exc)
        return ServiceResult.fail("leg_lookup_failed", str(exc), leg=leg_key(start, end))
    return ServiceResult.ok(data, duration_ms=(time.perf_counter() - started) * 1000)


async def summarize_legs(
    waypoints: Sequence[Waypoint], client: NavlogClient
) -> LegSummary:
    """Bearing and distance of every adjacent pair, plus the total distance."""
    if len(waypoints) < 2:
        return LegSummary()

    pairs = list(zip(waypoints, waypoints[1:]))
    results = await asyncio.gather(*(_fetch_leg(client, a, b) for a, b in pairs))

    summary = LegSummary()
    for (start, end), result in zip(pairs, results):
        summary.legs[leg_key(start, end)] = result
        if result.success and result.data is not None:
            summary.total_distance += result.data.distance or 0.0
    return summary
