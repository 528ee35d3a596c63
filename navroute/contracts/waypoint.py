"""Waypoint and Airport — geographic locations a pilot routes through.

A ``Waypoint`` is one element of a route. Its ``waypoint_type`` is fixed
at creation; every other attribute changes only through a new copy, which
is how the route store keeps previously returned snapshots stable.

An ``Airport`` is the search-result DTO returned by the airport lookup;
it becomes a route ``Waypoint`` through ``Airport.to_waypoint()``.
"""

import uuid

from pydantic import ConfigDict, Field, field_validator

from navroute.contracts.common import GeoPoint, NavModel
from navroute.contracts.enums import WaypointType


def new_waypoint_id() -> str:
    """Fresh, never reused waypoint id: ``wp-`` + 16 hex chars."""
    return f"wp-{uuid.uuid4().hex[:16]}"


class Waypoint(NavModel):
    """A point of the route.

    ``altitude`` is only present for airports (field elevation) and for
    points returned by the nav-log calculation. Refuel fields are only
    meaningful on intermediate airports.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_waypoint_id, min_length=1)
    name: str = Field(default="", max_length=100)
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    altitude: float | None = Field(default=None, description="Feet MSL")
    waypoint_type: WaypointType = WaypointType.CUSTOM

    is_refueling_stop: bool | None = None
    refuel_to_full: bool | None = None
    refuel_gallons: float | None = Field(default=None, ge=0)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str | None) -> str:
        return (v or "").strip()

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)

    @property
    def is_airport(self) -> bool:
        return self.waypoint_type == WaypointType.AIRPORT

    @property
    def is_calculated(self) -> bool:
        return self.waypoint_type == WaypointType.CALCULATED_POINT


class Airport(NavModel):
    """Airport search result (subset of the airport lookup DTO)."""

    site_no: str = Field(..., min_length=1, description="FAA site number")
    icao_id: str | None = None
    arpt_id: str | None = Field(default=None, description="FAA location id")
    lat_decimal: float | None = Field(default=None, ge=-90.0, le=90.0)
    long_decimal: float | None = Field(default=None, ge=-180.0, le=180.0)
    elev: float | None = Field(default=None, description="Field elevation, ft")

    @property
    def display_id(self) -> str:
        return self.icao_id or self.arpt_id or ""

    def to_waypoint(self) -> Waypoint:
        """Map to an Airport-kind route waypoint keyed by site number."""
        return Waypoint(
            id=self.site_no,
            name=self.display_id,
            latitude=self.lat_decimal or 0.0,
            longitude=self.long_decimal or 0.0,
            altitude=self.elev or 0.0,
            waypoint_type=WaypointType.AIRPORT,
        )
