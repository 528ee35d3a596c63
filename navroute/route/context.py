"""Planning context — the route state of one planning session.

Holds one ``WaypointStore`` per editable mode (the draft and, while a
saved flight is being edited, its working copy), the nav-log preview, the
viewed flight, and the active display mode. Callers hold the context and
pass it around explicitly; there is no module-level route state.

Mode lifecycle::

    PLANNING --preview_navlog--> PREVIEW --save_flight--> VIEWING
    PREVIEW  --cancel_preview--> PLANNING
    VIEWING  --start_editing---> EDITING --finish_editing--> VIEWING
    any      --start_new_flight--> PLANNING
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Set

from navroute.contracts.enums import DisplayMode, RejectionReason, WaypointType
from navroute.contracts.flight import DraftPlanSettings, Flight
from navroute.contracts.navlog import NavigationLeg, NavlogRequest, NavlogResult
from navroute.contracts.render import RenderedRoute
from navroute.contracts.result import MutationResult
from navroute.contracts.waypoint import Airport, Waypoint
from navroute.errors import IncompleteRouteError, InvalidTransitionError
from navroute.route.drag import DEFAULT_DEBOUNCE_SECONDS, DragController
from navroute.route.insertion import DEFAULT_WAYPOINT_NAME, InsertionPlanner
from navroute.route.invariants import is_complete
from navroute.route.projector import DisplayProjector, extract_leg_points
from navroute.route.reorder import ReorderValidator
from navroute.route.store import WaypointStore

logger = logging.getLogger(__name__)

_SAVABLE_MODES = frozenset({DisplayMode.PLANNING, DisplayMode.PREVIEW})


class RoutePlanningContext:
    def __init__(
        self,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
        projector: DisplayProjector | None = None,
    ):
        self._mode = DisplayMode.PLANNING
        self.draft = WaypointStore()
        self.editing: WaypointStore | None = None
        self.settings = DraftPlanSettings()
        self.navlog_preview: NavlogResult | None = None
        self.flight: Flight | None = None

        self._planner = InsertionPlanner()
        self._reorderer = ReorderValidator()
        self._projector = projector or DisplayProjector()
        self.drag = DragController(
            self._commit_position, debounce_seconds=debounce_seconds, loop=loop
        )

        # bumped on every mode / preview / flight change
        self._version = 0
        self._render_key: tuple | None = None
        self._rendered: RenderedRoute | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def display_mode(self) -> DisplayMode:
        return self._mode

    @property
    def active_flight_id(self) -> str | None:
        return self.flight.id if self.flight else None

    @property
    def active_store(self) -> WaypointStore | None:
        """Store gestures apply to; None in the read-only modes."""
        if self._mode == DisplayMode.PLANNING:
            return self.draft
        if self._mode == DisplayMode.EDITING:
            return self.editing
        return None

    @property
    def is_editable(self) -> bool:
        return self.active_store is not None

    @property
    def route(self) -> tuple[Waypoint, ...]:
        """Ordered waypoints of the active editable route."""
        store = self.active_store
        return store.waypoints if store is not None else ()

    @property
    def can_calculate_navlog(self) -> bool:
        return is_complete(self.route)

    @property
    def has_unsaved_changes(self) -> bool:
        return self.editing is not None and self.editing.has_unsaved_changes

    @property
    def can_save_flight(self) -> bool:
        return self._mode in _SAVABLE_MODES

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    def add_waypoint(
        self, waypoint: Waypoint, insert_index: int | None = None
    ) -> MutationResult:
        store = self.active_store
        if store is None:
            return self._read_only("add")
        return self._planner.add_waypoint(store, waypoint, insert_index)

    def add_custom_waypoint(
        self,
        latitude: float,
        longitude: float,
        name: str = DEFAULT_WAYPOINT_NAME,
        insert_index: int | None = None,
    ) -> MutationResult:
        store = self.active_store
        if store is None:
            return self._read_only("add")
        return self._planner.add_custom_waypoint(
            store, latitude, longitude, name=name, insert_index=insert_index
        )

    def add_airport(self, airport: Airport) -> MutationResult:
        store = self.active_store
        if store is None:
            return self._read_only("add airport")
        return self._planner.add_airport_from_search(store, airport)

    def remove_waypoint(self, waypoint_id: str) -> MutationResult:
        store = self.active_store
        if store is None:
            return self._read_only("remove")
        self.drag.discard(waypoint_id)
        return store.remove_by_id(waypoint_id)

    def rename_waypoint(self, waypoint_id: str, name: str) -> MutationResult:
        store = self.active_store
        if store is None:
            return self._read_only("rename")
        return store.rename_by_id(waypoint_id, name)

    def set_position(
        self, waypoint_id: str, latitude: float, longitude: float
    ) -> MutationResult:
        return self._commit_position(waypoint_id, latitude, longitude)

    def move_waypoint(self, waypoint_id: str, new_index: int) -> MutationResult:
        store = self.active_store
        if store is None:
            return self._read_only("move")
        return store.move_to(waypoint_id, new_index)

    def reorder(self, old_index: int, new_index: int) -> MutationResult:
        store = self.active_store
        if store is None:
            return self._read_only("reorder")
        return self._reorderer.reorder(store, old_index, new_index)

    def set_refuel(
        self,
        waypoint_id: str,
        is_refuel: bool,
        refuel_to_full: bool | None = None,
        refuel_gallons: float | None = None,
    ) -> MutationResult:
        store = self.active_store
        if store is None:
            return self._read_only("set refuel")
        return store.set_refuel(waypoint_id, is_refuel, refuel_to_full, refuel_gallons)

    def clear_waypoints(self) -> MutationResult:
        store = self.active_store
        if store is None:
            return self._read_only("clear")
        self.drag.discard()
        return store.clear()

    def drag_move(self, waypoint_id: str, latitude: float, longitude: float) -> bool:
        """Live drag update. Returns False when the point cannot be dragged."""
        if self._not_draggable(waypoint_id) is not None:
            return False
        self.drag.drag_move(waypoint_id, latitude, longitude)
        return True

    def drag_end(
        self, waypoint_id: str, latitude: float, longitude: float
    ) -> MutationResult:
        reason = self._not_draggable(waypoint_id)
        if reason is not None:
            self.drag.discard(waypoint_id)
            logger.debug("Refusing drag of %s: %s", waypoint_id, reason.value)
            return MutationResult.rejected(reason)
        return self.drag.drag_end(waypoint_id, latitude, longitude)

    def edit_waypoint(
        self,
        waypoint_id: str,
        *,
        name: str | None = None,
        position: tuple[float, float] | None = None,
        is_refuel: bool | None = None,
        refuel_to_full: bool | None = None,
        refuel_gallons: float | None = None,
    ) -> MutationResult:
        """Apply several field edits to one waypoint, all or nothing."""
        store = self.active_store
        if store is None:
            return self._read_only("edit")

        def apply(target: WaypointStore) -> MutationResult:
            result = MutationResult.ok(target.version, waypoint_id)
            if name is not None:
                result = target.rename_by_id(waypoint_id, name)
            if result.applied and position is not None:
                result = target.set_position(waypoint_id, *position)
            if result.applied and is_refuel is not None:
                result = target.set_refuel(
                    waypoint_id, is_refuel, refuel_to_full, refuel_gallons
                )
            return result

        # dry run on a scratch copy so a late rejection leaves nothing applied
        trial = apply(WaypointStore(store.waypoints))
        if not trial.applied:
            return trial
        return apply(store)

    # ------------------------------------------------------------------
    # Mode transitions
    # ------------------------------------------------------------------

    def preview_navlog(self, result: NavlogResult) -> None:
        self._require({DisplayMode.PLANNING, DisplayMode.PREVIEW}, "preview a nav-log")
        self.drag.flush()
        self.navlog_preview = result
        self._set_mode(DisplayMode.PREVIEW)

    def cancel_preview(self) -> None:
        self._require({DisplayMode.PREVIEW}, "leave the preview")
        self.navlog_preview = None
        self._set_mode(DisplayMode.PLANNING)

    def save_flight(self, flight: Flight) -> None:
        """The previewed plan was persisted as ``flight``."""
        self._require(_SAVABLE_MODES, "save a flight")
        self.drag.flush()
        self._show_flight(flight)

    def view_flight(self, flight: Flight) -> None:
        """Open a persisted flight, dropping any unsaved draft."""
        self.drag.discard()
        self._show_flight(flight)

    def start_editing(self) -> None:
        self._require({DisplayMode.VIEWING}, "edit a flight")
        if self.flight is None:
            raise InvalidTransitionError("edit a flight", "VIEWING without a flight")
        self.editing = WaypointStore(_editable_copy(self.flight))
        self._set_mode(DisplayMode.EDITING)

    def finish_editing(self, flight: Flight | None = None) -> None:
        """Leave editing; ``flight`` is the saved result, if it was saved."""
        self._require({DisplayMode.EDITING}, "finish editing")
        self.drag.flush()
        if flight is not None:
            self.flight = flight
            self.editing.mark_saved()
        self.editing = None
        self._set_mode(DisplayMode.VIEWING)

    def start_new_flight(self) -> None:
        self.drag.discard()
        self.draft = WaypointStore()
        self.settings = DraftPlanSettings()
        self.editing = None
        self.navlog_preview = None
        self.flight = None
        self._set_mode(DisplayMode.PLANNING)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def render(self) -> RenderedRoute:
        """Renderable route of the active mode, recomputed only when stale."""
        store = self.active_store
        key = (
            self._mode,
            self._version,
            id(store) if store is not None else None,
            store.version if store is not None else None,
            self.drag.live_position,
        )
        if key != self._render_key or self._rendered is None:
            self._rendered = self._projector.project(
                self._mode,
                waypoints=self.route,
                legs=self._read_only_legs(),
                live_positions=self.drag.live_positions(),
            )
            self._render_key = key
        return self._rendered

    def navlog_request(self) -> NavlogRequest:
        """Request body for the nav-log calculation of the active route."""
        waypoints = list(self.route)
        if not is_complete(waypoints):
            raise IncompleteRouteError(
                f"A nav-log needs at least 2 waypoints, route has {len(waypoints)}"
            )
        altitude = self.settings.planned_cruising_altitude
        departure = self.settings.departure_time_utc
        profile = self.settings.performance_profile_id
        if self._mode == DisplayMode.EDITING and self.flight is not None:
            altitude = self.flight.planned_cruising_altitude or altitude
            departure = self.flight.departure_time or departure
            profile = self.flight.aircraft_performance_id or profile
        return NavlogRequest(
            waypoints=waypoints,
            performance_profile_id=profile,
            planned_cruising_altitude=altitude,
            time_of_departure=departure,
        )

    def draft_flight(self) -> Flight:
        """Flight to persist from the draft and its previewed nav-log."""
        navlog = self.navlog_preview or NavlogResult()
        return Flight(
            name=self.settings.name,
            aircraft_performance_id=self.settings.performance_profile_id,
            planned_cruising_altitude=self.settings.planned_cruising_altitude,
            departure_time=self.settings.departure_time_utc,
            waypoints=list(self.draft.waypoints),
            legs=list(navlog.legs),
            total_route_distance=navlog.total_route_distance,
            total_route_time_hours=navlog.total_route_time_hours,
            total_fuel_used=navlog.total_fuel_used,
            average_wind_component=navlog.average_wind_component,
        )

    def edited_flight(self) -> Flight:
        """The viewed flight with the editing copy's waypoints."""
        if self.flight is None or self.editing is None:
            raise InvalidTransitionError("save the edited flight", self._mode.value)
        return self.flight.model_copy(update={"waypoints": list(self.editing.waypoints)})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read_only_legs(self) -> list[NavigationLeg]:
        if self._mode == DisplayMode.PREVIEW and self.navlog_preview is not None:
            return list(self.navlog_preview.legs)
        if self._mode == DisplayMode.VIEWING and self.flight is not None:
            return list(self.flight.legs)
        return []

    def _commit_position(
        self, waypoint_id: str, latitude: float, longitude: float
    ) -> MutationResult:
        store = self.active_store
        if store is None:
            return self._read_only("reposition")
        return store.set_position(waypoint_id, latitude, longitude)

    def _not_draggable(self, waypoint_id: str) -> RejectionReason | None:
        store = self.active_store
        if store is None:
            return RejectionReason.READ_ONLY_MODE
        waypoint = store.get(waypoint_id)
        if waypoint is None:
            return RejectionReason.UNKNOWN_WAYPOINT
        if not self._projector.is_draggable(self._mode, waypoint):
            return RejectionReason.NOT_DRAGGABLE
        return None

    def _show_flight(self, flight: Flight) -> None:
        self.flight = flight
        self.navlog_preview = None
        self.editing = None
        self.draft = WaypointStore()
        self.settings = DraftPlanSettings()
        self._set_mode(DisplayMode.VIEWING)

    def _set_mode(self, mode: DisplayMode) -> None:
        logger.info("Display mode %s -> %s", self._mode.value, mode.value)
        self._mode = mode
        self._version += 1

    def _require(self, allowed: Set[DisplayMode], action: str) -> None:
        if self._mode not in allowed:
            raise InvalidTransitionError(action, self._mode.value)

    def _read_only(self, op: str) -> MutationResult:
        logger.debug("Ignoring %s in read-only mode %s", op, self._mode.value)
        return MutationResult.rejected(RejectionReason.READ_ONLY_MODE)


def _editable_copy(flight: Flight) -> list[Waypoint]:
    """Waypoints to edit: the flight's planned route, else the legs' user points."""
    if flight.waypoints:
        return [wp.model_copy() for wp in flight.waypoints]
    return [
        wp for wp in extract_leg_points(flight.legs)
        if wp.waypoint_type != WaypointType.CALCULATED_POINT
    ]
