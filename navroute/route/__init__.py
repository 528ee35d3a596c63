"""Route model: store, invariants, insertion, reorder, classification,
projection, drag debounce and the per-session planning context."""

from navroute.route.classifier import classify_marker, classify_segment, classify_segments
from navroute.route.context import RoutePlanningContext
from navroute.route.drag import DragController, LivePosition
from navroute.route.insertion import InsertionPlanner, plan_insertion_index
from navroute.route.projector import MODE_POLICIES, DisplayProjector, ModePolicy, extract_leg_points
from navroute.route.reorder import ReorderValidator
from navroute.route.store import WaypointStore

__all__ = [
    "MODE_POLICIES",
    "DisplayProjector",
    "DragController",
    "InsertionPlanner",
    "LivePosition",
    "ModePolicy",
    "ReorderValidator",
    "RoutePlanningContext",
    "WaypointStore",
    "classify_marker",
    "classify_segment",
    "classify_segments",
    "extract_leg_points",
    "plan_insertion_index",
]
