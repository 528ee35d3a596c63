"""Flight — a persisted flight as returned by the flight API.

A Flight carries the waypoints the pilot planned plus a **frozen
snapshot** of the nav-log legs computed when it was saved. Viewing a
flight renders those legs; editing it clones ``waypoints`` into a
working copy.
"""

from datetime import datetime, timezone

from pydantic import Field

from navroute.contracts.common import NavModel
from navroute.contracts.navlog import NavigationLeg, NavlogResult
from navroute.contracts.waypoint import Waypoint


class Flight(NavModel):
    id: str | None = None
    name: str = ""
    aircraft_id: str | None = None
    aircraft_performance_id: str | None = None
    planned_cruising_altitude: int | None = Field(default=None, ge=0)
    departure_time: datetime | None = None

    waypoints: list[Waypoint] = Field(default_factory=list)
    legs: list[NavigationLeg] = Field(default_factory=list)

    total_route_distance: float | None = Field(default=None, ge=0)
    total_route_time_hours: float | None = Field(default=None, ge=0)
    total_fuel_used: float | None = None
    average_wind_component: float | None = None

    def to_navlog(self) -> NavlogResult:
        """Rebuild the nav-log result embedded in this flight."""
        return NavlogResult(
            legs=list(self.legs),
            total_route_distance=self.total_route_distance or 0.0,
            total_route_time_hours=self.total_route_time_hours or 0.0,
            total_fuel_used=self.total_fuel_used or 0.0,
            average_wind_component=self.average_wind_component or 0.0,
        )


class DraftPlanSettings(NavModel):
    """Settings of the flight being planned, submitted with the nav-log request."""

    name: str = Field(default="", max_length=200)
    performance_profile_id: str | None = None
    planned_cruising_altitude: int = Field(default=4500, ge=0, le=60000)
    departure_time_utc: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc)
    )
