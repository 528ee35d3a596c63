"""Nav-log DTOs — legs and results computed by the remote nav-log API.

These models are **consumed, never produced** by the route model: leg
physics (wind, fuel, timing) is computed server-side. The route model only
reads leg endpoints, altitude and remaining fuel to classify segments.
"""

from datetime import datetime, timezone

from pydantic import Field

from navroute.contracts.common import NavModel
from navroute.contracts.waypoint import Waypoint


class NavigationLeg(NavModel):
    """A leg between two consecutive waypoints of a calculated nav-log.

    Only the endpoints are required; every computed attribute may be
    missing when the server could not produce it.
    """

    leg_start_point: Waypoint
    leg_end_point: Waypoint

    leg_distance: float | None = Field(default=None, ge=0, description="NM")
    ground_speed: float | None = Field(default=None, description="kt")
    true_course: float | None = Field(default=None, description="Degrees true")
    magnetic_heading: float | None = Field(default=None, description="Degrees magnetic")
    wind_dir: float | None = None
    wind_speed: float | None = None
    temp_c: float | None = None
    altitude: float | None = Field(default=None, description="Planned altitude, ft")
    remaining_fuel_gals: float | None = Field(
        default=None, description="Fuel left at leg end; negative means exhausted"
    )
    leg_fuel_burn_gals: float | None = None
    start_leg_time: datetime | None = None
    end_leg_time: datetime | None = None

    def connects(self, start_id: str, end_id: str) -> bool:
        return (
            self.leg_start_point.id == start_id
            and self.leg_end_point.id == end_id
        )


class NavlogResult(NavModel):
    """Nav-log calculation response."""

    legs: list[NavigationLeg] = Field(default_factory=list)
    total_route_distance: float = Field(default=0.0, ge=0)
    total_route_time_hours: float = Field(default=0.0, ge=0)
    total_fuel_used: float = Field(default=0.0)
    average_wind_component: float = Field(default=0.0)


class NavlogRequest(NavModel):
    """Everything the nav-log API needs to calculate a route."""

    waypoints: list[Waypoint] = Field(..., min_length=2)
    performance_profile_id: str | None = None
    planned_cruising_altitude: int = Field(..., ge=0, le=60000)
    time_of_departure: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc)
    )


class BearingAndDistanceRequest(NavModel):
    start_latitude: float = Field(..., ge=-90.0, le=90.0)
    start_longitude: float = Field(..., ge=-180.0, le=180.0)
    end_latitude: float = Field(..., ge=-90.0, le=90.0)
    end_longitude: float = Field(..., ge=-180.0, le=180.0)


class BearingAndDistance(NavModel):
    """True course and great-circle distance between two points."""

    true_course: float | None = Field(default=None, description="Degrees true")
    distance: float | None = Field(default=None, ge=0, description="NM")
