"""Enumerations shared across all navroute contracts."""

from enum import Enum


class WaypointType(str, Enum):
    """Intrinsic kind of a route waypoint. Immutable once created."""
    AIRPORT = "Airport"
    CUSTOM = "Custom"
    CALCULATED_POINT = "CalculatedPoint"  # server-derived (TOC, TOD, ...)


class DisplayMode(str, Enum):
    """Which variant of the route is authoritative and how it renders."""
    PLANNING = "PLANNING"  # building a new flight
    EDITING = "EDITING"  # modifying a saved flight
    PREVIEW = "PREVIEW"  # reviewing a calculated nav-log before saving
    VIEWING = "VIEWING"  # looking at a saved flight


class SegmentStyle(str, Enum):
    CRUISE = "cruise"
    CLIMB = "climb"
    DESCENT = "descent"
    FUEL_CRITICAL = "fuel_critical"


class MarkerRole(str, Enum):
    """Role of a rendered point, derived from its kind and name."""
    NONE = "none"
    TOP_OF_CLIMB = "top_of_climb"
    TOP_OF_DESCENT = "top_of_descent"
    CALCULATED = "calculated"


class PointSource(str, Enum):
    """Where the projector reads a mode's points from."""
    STORE = "store"
    NAVLOG_PREVIEW = "navlog_preview"
    FLIGHT_LEGS = "flight_legs"


class RejectionReason(str, Enum):
    """Why a route mutation was not applied."""
    NO_OP = "no_op"
    OUT_OF_BOUNDS = "out_of_bounds"
    AIRPORT_FIRST = "airport_first"
    DUPLICATE_ID = "duplicate_id"
    DUPLICATE_AIRPORT = "duplicate_airport"
    UNKNOWN_WAYPOINT = "unknown_waypoint"
    CALCULATED_POINT_LOCKED = "calculated_point_locked"
    NOT_AN_AIRPORT = "not_an_airport"
    EMPTY_NAME = "empty_name"
    READ_ONLY_MODE = "read_only_mode"
    INVALID_VALUE = "invalid_value"  # field outside its allowed range or length
    NOT_DRAGGABLE = "not_draggable"
