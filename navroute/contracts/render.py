"""Renderable route — what the map renderer draws for the active mode.

Calculated (never persisted): recomputed from the authoritative route
whenever the route or its nav-log changes.
"""

from pydantic import BaseModel, ConfigDict, Field

from navroute.contracts.enums import DisplayMode, MarkerRole, SegmentStyle, WaypointType


class RenderPosition(BaseModel):
    """Position handed to the renderer. ``altitude_ft`` is 0 when flat."""

    latitude: float
    longitude: float
    altitude_ft: float = 0.0

    model_config = ConfigDict(frozen=True)


class RenderPoint(BaseModel):
    waypoint_id: str
    name: str
    waypoint_type: WaypointType
    position: RenderPosition
    label: str
    marker_role: MarkerRole = MarkerRole.NONE
    show_marker: bool = Field(
        ..., description="False when another layer draws this point (airports)"
    )
    color: str
    editable: bool
    draggable: bool


class RenderSegment(BaseModel):
    start_id: str
    end_id: str
    start: RenderPosition
    end: RenderPosition
    style: SegmentStyle = SegmentStyle.CRUISE
    color: str


class RenderedRoute(BaseModel):
    mode: DisplayMode
    points: list[RenderPoint] = Field(default_factory=list)
    segments: list[RenderSegment] = Field(default_factory=list)

    @property
    def markers(self) -> list[RenderPoint]:
        """Points drawn as independent markers."""
        return [p for p in self.points if p.show_marker]

    @property
    def point_ids(self) -> list[str]:
        return [p.waypoint_id for p in self.points]
