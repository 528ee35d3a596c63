"""Project the route of the active display mode into renderable points.

All mode-dependent behaviour lives in ``MODE_POLICIES``: where the points
come from, whether they can be edited, how positions are resolved, which
kinds get their own marker, and whether labels carry the altitude.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass

from navroute.contracts.common import GeoPoint
from navroute.contracts.enums import DisplayMode, PointSource, WaypointType
from navroute.contracts.navlog import NavigationLeg
from navroute.contracts.render import (
    RenderedRoute,
    RenderPoint,
    RenderPosition,
    RenderSegment,
)
from navroute.contracts.waypoint import Waypoint
from navroute.route.classifier import (
    ROUTE_POINT_COLOR,
    SEGMENT_COLORS,
    classify_marker,
    classify_segments,
)
from navroute.route.invariants import is_calculated

PositionResolver = Callable[[Waypoint], RenderPosition]


def ground_position(waypoint: Waypoint) -> RenderPosition:
    """Flat position on the ground; altitude is ignored."""
    return RenderPosition(latitude=waypoint.latitude, longitude=waypoint.longitude)


def altitude_position(waypoint: Waypoint) -> RenderPosition:
    """Position at the waypoint's altitude, so climb/descent points float."""
    return RenderPosition(
        latitude=waypoint.latitude,
        longitude=waypoint.longitude,
        altitude_ft=waypoint.altitude or 0.0,
    )


@dataclass(frozen=True)
class ModePolicy:
    source: PointSource
    editable: bool
    resolve_position: PositionResolver
    marker_kinds: frozenset[WaypointType]
    altitude_label: bool = False


_CUSTOM_AND_CALCULATED = frozenset({WaypointType.CUSTOM, WaypointType.CALCULATED_POINT})

MODE_POLICIES: dict[DisplayMode, ModePolicy] = {
    DisplayMode.PLANNING: ModePolicy(
        source=PointSource.STORE,
        editable=True,
        resolve_position=ground_position,
        marker_kinds=_CUSTOM_AND_CALCULATED,
    ),
    DisplayMode.EDITING: ModePolicy(
        source=PointSource.STORE,
        editable=True,
        resolve_position=ground_position,
        marker_kinds=_CUSTOM_AND_CALCULATED,
    ),
    DisplayMode.PREVIEW: ModePolicy(
        source=PointSource.NAVLOG_PREVIEW,
        editable=False,
        resolve_position=altitude_position,
        marker_kinds=frozenset(WaypointType),
        altitude_label=True,
    ),
    DisplayMode.VIEWING: ModePolicy(
        source=PointSource.FLIGHT_LEGS,
        editable=False,
        resolve_position=altitude_position,
        marker_kinds=_CUSTOM_AND_CALCULATED,
    ),
}


def extract_leg_points(legs: Iterable[NavigationLeg]) -> list[Waypoint]:
    """Flatten legs to ``[start, end, ...]`` keeping the first occurrence of each id."""
    seen: set[str] = set()
    points: list[Waypoint] = []
    for leg in legs:
        for point in (leg.leg_start_point, leg.leg_end_point):
            if point is None or point.id in seen:
                continue
            seen.add(point.id)
            points.append(point)
    return points


def point_label(waypoint: Waypoint, policy: ModePolicy) -> str:
    if policy.altitude_label and waypoint.altitude is not None:
        return f"{waypoint.name}\n{round(waypoint.altitude)} ft"
    return waypoint.name


class DisplayProjector:
    """Maps (route of the active mode, display mode) to a ``RenderedRoute``."""

    def __init__(self, policies: Mapping[DisplayMode, ModePolicy] = MODE_POLICIES):
        self._policies = policies

    def policy(self, mode: DisplayMode) -> ModePolicy:
        return self._policies[DisplayMode(mode)]

    def is_draggable(self, mode: DisplayMode, waypoint: Waypoint) -> bool:
        """Editable mode, own marker, not a calculated point."""
        policy = self.policy(mode)
        return (
            policy.editable
            and WaypointType(waypoint.waypoint_type) in policy.marker_kinds
            and not is_calculated(waypoint)
        )

    def source_points(
        self,
        mode: DisplayMode,
        waypoints: Sequence[Waypoint] = (),
        legs: Sequence[NavigationLeg] = (),
    ) -> list[Waypoint]:
        if self.policy(mode).source == PointSource.STORE:
            return list(waypoints)
        return extract_leg_points(legs)

    def project(
        self,
        mode: DisplayMode,
        *,
        waypoints: Sequence[Waypoint] = (),
        legs: Sequence[NavigationLeg] = (),
        live_positions: Mapping[str, GeoPoint] | None = None,
    ) -> RenderedRoute:
        """Build the renderable route.

        ``waypoints`` feeds the editable modes, ``legs`` the read-only ones
        (nav-log preview or persisted flight). ``live_positions`` overrides
        the displayed position of points being dragged.
        """
        mode = DisplayMode(mode)
        policy = self.policy(mode)
        points = self.source_points(mode, waypoints, legs)
        live_positions = live_positions or {}

        positions: list[RenderPosition] = []
        render_points: list[RenderPoint] = []
        for wp in points:
            position = policy.resolve_position(wp)
            live = live_positions.get(wp.id)
            if live is not None:
                position = RenderPosition(
                    latitude=live.latitude,
                    longitude=live.longitude,
                    altitude_ft=position.altitude_ft,
                )
            positions.append(position)
            show_marker = WaypointType(wp.waypoint_type) in policy.marker_kinds
            render_points.append(
                RenderPoint(
                    waypoint_id=wp.id,
                    name=wp.name,
                    waypoint_type=wp.waypoint_type,
                    position=position,
                    label=point_label(wp, policy),
                    marker_role=classify_marker(wp),
                    show_marker=show_marker,
                    color=ROUTE_POINT_COLOR,
                    editable=policy.editable and not is_calculated(wp),
                    draggable=self.is_draggable(mode, wp),
                )
            )

        styles = classify_segments(points, legs, mode)
        segments = [
            RenderSegment(
                start_id=points[i].id,
                end_id=points[i + 1].id,
                start=positions[i],
                end=positions[i + 1],
                style=style,
                color=SEGMENT_COLORS[style],
            )
            for i, style in enumerate(styles)
        ]
        return RenderedRoute(mode=mode, points=render_points, segments=segments)
