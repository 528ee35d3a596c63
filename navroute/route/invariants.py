"""Ordering invariants: which waypoint kinds may sit where.

Only the first position is constrained: a non-empty route starts at an
airport. Everything here is a pure predicate over a waypoint sequence.
"""

from __future__ import annotations

from collections.abc import Sequence

from navroute.contracts.enums import RejectionReason, WaypointType
from navroute.contracts.waypoint import Waypoint

MIN_CALCULABLE_WAYPOINTS = 2


def is_airport(waypoint: Waypoint) -> bool:
    return waypoint.waypoint_type == WaypointType.AIRPORT


def is_calculated(waypoint: Waypoint) -> bool:
    return waypoint.waypoint_type == WaypointType.CALCULATED_POINT


def can_occupy(waypoint: Waypoint, index: int) -> bool:
    """Whether ``waypoint`` may sit at ``index`` of a route."""
    if index == 0:
        return is_airport(waypoint)
    return True


def satisfies_airport_first(waypoints: Sequence[Waypoint]) -> bool:
    return not waypoints or is_airport(waypoints[0])


def has_unique_ids(waypoints: Sequence[Waypoint]) -> bool:
    ids = [wp.id for wp in waypoints]
    return len(ids) == len(set(ids))


def is_complete(waypoints: Sequence[Waypoint]) -> bool:
    """A route is complete enough for nav-log calculation."""
    return len(waypoints) >= MIN_CALCULABLE_WAYPOINTS


def check_route(waypoints: Sequence[Waypoint]) -> RejectionReason | None:
    """Return the first violated invariant, or None for a valid route."""
    if not has_unique_ids(waypoints):
        return RejectionReason.DUPLICATE_ID
    if not satisfies_airport_first(waypoints):
        return RejectionReason.AIRPORT_FIRST
    return None


def check_insert(
    waypoints: Sequence[Waypoint], waypoint: Waypoint, index: int
) -> RejectionReason | None:
    """Validate inserting ``waypoint`` at ``index`` (no clamping)."""
    if index < 0 or index > len(waypoints):
        return RejectionReason.OUT_OF_BOUNDS
    if any(wp.id == waypoint.id for wp in waypoints):
        return RejectionReason.DUPLICATE_ID
    if not can_occupy(waypoint, index):
        return RejectionReason.AIRPORT_FIRST
    return None
