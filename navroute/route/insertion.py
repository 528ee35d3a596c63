"""Choose where a newly created waypoint enters the route.

Map clicks and right-clicks go through the nearest-segment heuristic: the
new point is placed into the leg whose endpoints are jointly closest to
it, i.e. the leg that grows least when detoured through the new point.
This is greedy cheapest insertion, not route optimisation; it has to
answer within a single UI frame.

Airports picked from search are appended, never heuristically placed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import ValidationError

from navroute.contracts.common import GeoPoint
from navroute.contracts.enums import RejectionReason, WaypointType
from navroute.contracts.result import MutationResult
from navroute.contracts.waypoint import Airport, Waypoint, new_waypoint_id
from navroute.route.geo import haversine_nm
from navroute.route.store import WaypointStore

logger = logging.getLogger(__name__)

DEFAULT_WAYPOINT_NAME = "New waypoint"


def _distance(a: Waypoint | GeoPoint, b: Waypoint | GeoPoint) -> float:
    return haversine_nm(a.latitude, a.longitude, b.latitude, b.longitude)


def nearest_segment_index(waypoints: Sequence[Waypoint], point: GeoPoint) -> int:
    """Index right after the start of the cheapest segment to detour through.

    Ties go to the earliest segment. Routes with fewer than two points
    have no segment, so the point is appended.
    """
    best_index = len(waypoints)
    best_score = float("inf")
    for i in range(len(waypoints) - 1):
        a, b = waypoints[i], waypoints[i + 1]
        score = _distance(a, point) + _distance(point, b)
        if score < best_score:
            best_score = score
            best_index = i + 1
    return best_index


def plan_insertion_index(
    waypoints: Sequence[Waypoint],
    point: GeoPoint,
    explicit_index: int | None = None,
) -> int:
    """Decide the insertion index for a new waypoint at ``point``.

    Parameters
    ----------
    waypoints:
        Current route, in order.
    point:
        Position of the new waypoint.
    explicit_index:
        Index supplied by the caller, e.g. one past the start of a route
        segment the user clicked. Clamped to ``[0, len(waypoints)]``.
    """
    if not waypoints:
        return 0
    if explicit_index is not None:
        return max(0, min(explicit_index, len(waypoints)))
    return nearest_segment_index(waypoints, point)


class InsertionPlanner:
    """Creates waypoints from user gestures and inserts them in a store."""

    def add_waypoint(
        self,
        store: WaypointStore,
        waypoint: Waypoint,
        insert_index: int | None = None,
    ) -> MutationResult:
        index = plan_insertion_index(store.waypoints, waypoint.position, insert_index)
        logger.debug("Inserting %s at index %d", waypoint.id, index)
        return store.insert(waypoint, index)

    def add_custom_waypoint(
        self,
        store: WaypointStore,
        latitude: float,
        longitude: float,
        name: str = DEFAULT_WAYPOINT_NAME,
        insert_index: int | None = None,
    ) -> MutationResult:
        try:
            waypoint = Waypoint(
                id=new_waypoint_id(),
                name=name.strip() or DEFAULT_WAYPOINT_NAME,
                latitude=latitude,
                longitude=longitude,
                waypoint_type=WaypointType.CUSTOM,
            )
        except ValidationError:
            logger.debug("Rejected custom waypoint %r at (%s, %s)", name, latitude, longitude)
            return MutationResult.rejected(RejectionReason.INVALID_VALUE)
        return self.add_waypoint(store, waypoint, insert_index)

    def add_airport_from_search(
        self, store: WaypointStore, airport: Airport
    ) -> MutationResult:
        """Append a searched airport unless the route already contains it."""
        names = {airport.icao_id, airport.arpt_id} - {None, ""}
        if any(wp.name in names for wp in store):
            return MutationResult.rejected(RejectionReason.DUPLICATE_AIRPORT)
        return store.insert(airport.to_waypoint(), len(store))
