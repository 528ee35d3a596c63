"""navroute data contracts — Pydantic v2 models for the interactive route.

Data authority
--------------

**Route store** (source of truth while a route is being built or edited):
- ``Waypoint`` — elements of the draft or editing route

**Nav-log API** (remote, consumed read-only):
- ``NavlogResult`` / ``NavigationLeg`` — calculated legs incl. TOC/TOD points
- ``BearingAndDistance`` — per-leg course and distance for display
- ``Flight`` — persisted flight with its frozen nav-log legs
- ``Airport`` — airport search results

Calculated (never persisted)
----------------------------
- ``RenderedRoute`` — points and classified segments for the map renderer
- ``MutationResult`` — outcome of a route gesture
"""

from navroute.contracts.enums import (
    DisplayMode,
    MarkerRole,
    PointSource,
    RejectionReason,
    SegmentStyle,
    WaypointType,
)
from navroute.contracts.common import GeoPoint, NavModel
from navroute.contracts.result import MutationResult, ServiceError, ServiceResult
from navroute.contracts.waypoint import Airport, Waypoint, new_waypoint_id
from navroute.contracts.navlog import (
    BearingAndDistance,
    BearingAndDistanceRequest,
    NavigationLeg,
    NavlogRequest,
    NavlogResult,
)
from navroute.contracts.flight import DraftPlanSettings, Flight
from navroute.contracts.render import (
    RenderedRoute,
    RenderPoint,
    RenderPosition,
    RenderSegment,
)

__all__ = [
    # Enums
    "DisplayMode",
    "MarkerRole",
    "PointSource",
    "RejectionReason",
    "SegmentStyle",
    "WaypointType",
    # Common
    "GeoPoint",
    "NavModel",
    # Results
    "MutationResult",
    "ServiceError",
    "ServiceResult",
    # Domain models
    "Airport",
    "Waypoint",
    "new_waypoint_id",
    "BearingAndDistance",
    "BearingAndDistanceRequest",
    "NavigationLeg",
    "NavlogRequest",
    "NavlogResult",
    "DraftPlanSettings",
    "Flight",
    # Render DTOs
    "RenderedRoute",
    "RenderPoint",
    "RenderPosition",
    "RenderSegment",
]
