"""Rendering classification of route segments and calculated points.

Segments are only classified in PREVIEW mode: that is the one mode where
a freshly calculated nav-log provides trustworthy fuel and altitude data.
Everywhere else a segment is drawn with the cruise style.

Top-of-climb / top-of-descent markers are recognised by name. The nav-log
API does not tag them, so a calculated point whose name merely contains
"toc" (e.g. "Toccoa") is reported as a top of climb as well.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from navroute.contracts.enums import DisplayMode, MarkerRole, SegmentStyle
from navroute.contracts.navlog import NavigationLeg
from navroute.contracts.waypoint import Waypoint
from navroute.route.invariants import is_calculated

ALTITUDE_CHANGE_THRESHOLD_FT = 100

TOC_NAME_TOKENS = ("toc", "top of climb")
TOD_NAME_TOKENS = ("tod", "top of descent")

# Route style defaults (aqua line, magenta points)
ROUTE_LINE_COLOR = "#00ffff"
ROUTE_POINT_COLOR = "#ff00ff"

SEGMENT_COLORS: dict[SegmentStyle, str] = {
    SegmentStyle.CRUISE: ROUTE_LINE_COLOR,
    SegmentStyle.CLIMB: "#22c55e",
    SegmentStyle.DESCENT: "#f97316",
    SegmentStyle.FUEL_CRITICAL: "#ef4444",
}


def find_leg(
    legs: Iterable[NavigationLeg], start: Waypoint, end: Waypoint
) -> NavigationLeg | None:
    for leg in legs:
        if leg.connects(start.id, end.id):
            return leg
    return None


def classify_segment(
    start: Waypoint,
    end: Waypoint,
    leg: NavigationLeg | None,
    mode: DisplayMode,
) -> SegmentStyle:
    """Style of the segment ``start -> end``.

    Fuel exhaustion wins over any altitude change. Without a matching leg,
    or when either endpoint has no altitude, the segment is cruise.
    """
    if mode != DisplayMode.PREVIEW or leg is None:
        return SegmentStyle.CRUISE
    if leg.remaining_fuel_gals is not None and leg.remaining_fuel_gals < 0:
        return SegmentStyle.FUEL_CRITICAL
    if start.altitude is None or end.altitude is None:
        return SegmentStyle.CRUISE
    delta = end.altitude - start.altitude
    if delta > ALTITUDE_CHANGE_THRESHOLD_FT:
        return SegmentStyle.CLIMB
    if delta < -ALTITUDE_CHANGE_THRESHOLD_FT:
        return SegmentStyle.DESCENT
    return SegmentStyle.CRUISE


def classify_segments(
    points: Sequence[Waypoint],
    legs: Sequence[NavigationLeg],
    mode: DisplayMode,
) -> list[SegmentStyle]:
    """One style per consecutive pair of ``points``."""
    return [
        classify_segment(a, b, find_leg(legs, a, b), mode)
        for a, b in zip(points, points[1:])
    ]


def classify_marker(waypoint: Waypoint) -> MarkerRole:
    """Marker role of a point, by kind and case-insensitive name match."""
    if not is_calculated(waypoint):
        return MarkerRole.NONE
    name = waypoint.name.lower()
    if any(token in name for token in TOC_NAME_TOKENS):
        return MarkerRole.TOP_OF_CLIMB
    if any(token in name for token in TOD_NAME_TOKENS):
        return MarkerRole.TOP_OF_DESCENT
    return MarkerRole.CALCULATED
