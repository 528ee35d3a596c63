"""Authoritative ordered waypoint sequence for one display mode.

Every mutation returns a ``MutationResult``. Rejected mutations leave the
sequence untouched. Applied mutations bump ``version`` so derived views
(segment classification, projected points) know to recompute lazily on
their next read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from pydantic import ValidationError

from navroute.contracts.enums import RejectionReason
from navroute.contracts.result import MutationResult
from navroute.contracts.waypoint import Waypoint
from navroute.route.invariants import check_insert, check_route, is_airport, is_calculated
from navroute.route.reorder import check_move, splice

logger = logging.getLogger(__name__)


class WaypointStore:
    """Ordered, id-unique waypoint list with an airport-first invariant."""

    def __init__(self, waypoints: Iterable[Waypoint] = ()):
        initial = list(waypoints)
        violation = check_route(initial)
        if violation is not None:
            raise ValueError(f"Invalid initial route: {violation.value}")
        self._waypoints: list[Waypoint] = initial
        self._version = 0
        self._has_unsaved_changes = False

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @property
    def waypoints(self) -> tuple[Waypoint, ...]:
        return tuple(self._waypoints)

    @property
    def version(self) -> int:
        return self._version

    @property
    def has_unsaved_changes(self) -> bool:
        return self._has_unsaved_changes

    def mark_saved(self) -> None:
        self._has_unsaved_changes = False

    def __len__(self) -> int:
        return len(self._waypoints)

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(tuple(self._waypoints))

    def index_of(self, waypoint_id: str) -> int | None:
        for i, wp in enumerate(self._waypoints):
            if wp.id == waypoint_id:
                return i
        return None

    def get(self, waypoint_id: str) -> Waypoint | None:
        index = self.index_of(waypoint_id)
        return None if index is None else self._waypoints[index]

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def insert(self, waypoint: Waypoint, index: int) -> MutationResult:
        reason = check_insert(self._waypoints, waypoint, index)
        if reason is not None:
            return self._reject("insert", waypoint.id, reason)
        self._waypoints.insert(index, waypoint)
        return self._applied(waypoint.id)

    def remove_by_id(self, waypoint_id: str) -> MutationResult:
        index = self.index_of(waypoint_id)
        if index is None:
            return self._reject("remove", waypoint_id, RejectionReason.UNKNOWN_WAYPOINT)
        if is_calculated(self._waypoints[index]):
            return self._reject(
                "remove", waypoint_id, RejectionReason.CALCULATED_POINT_LOCKED
            )
        del self._waypoints[index]
        return self._applied(waypoint_id)

    def rename_by_id(self, waypoint_id: str, name: str) -> MutationResult:
        name = (name or "").strip()
        if not name:
            return self._reject("rename", waypoint_id, RejectionReason.EMPTY_NAME)
        return self._replace(waypoint_id, "rename", name=name)

    def move_to(self, waypoint_id: str, new_index: int) -> MutationResult:
        old_index = self.index_of(waypoint_id)
        if old_index is None:
            return self._reject("move", waypoint_id, RejectionReason.UNKNOWN_WAYPOINT)
        reason = check_move(self._waypoints, old_index, new_index)
        if reason is not None:
            return self._reject("move", waypoint_id, reason)
        self._waypoints = splice(self._waypoints, old_index, new_index)
        return self._applied(waypoint_id)

    def set_position(
        self,
        waypoint_id: str,
        latitude: float,
        longitude: float,
        altitude: float | None = None,
    ) -> MutationResult:
        update: dict[str, float] = {"latitude": latitude, "longitude": longitude}
        if altitude is not None:
            update["altitude"] = altitude
        return self._replace(waypoint_id, "reposition", **update)

    def set_refuel(
        self,
        waypoint_id: str,
        is_refuel: bool,
        refuel_to_full: bool | None = None,
        refuel_gallons: float | None = None,
    ) -> MutationResult:
        current = self.get(waypoint_id)
        if current is None:
            return self._reject("refuel", waypoint_id, RejectionReason.UNKNOWN_WAYPOINT)
        if not is_airport(current):
            return self._reject("refuel", waypoint_id, RejectionReason.NOT_AN_AIRPORT)
        if is_refuel:
            to_full = refuel_to_full
            if to_full is None:
                to_full = True if current.refuel_to_full is None else current.refuel_to_full
            gallons = refuel_gallons if refuel_gallons is not None else current.refuel_gallons
        else:
            to_full = None
            gallons = None
        return self._replace(
            waypoint_id,
            "refuel",
            is_refueling_stop=is_refuel,
            refuel_to_full=to_full,
            refuel_gallons=gallons,
        )

    def clear(self) -> MutationResult:
        if not self._waypoints:
            return MutationResult.rejected(RejectionReason.NO_OP)
        self._waypoints = []
        return self._applied()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _replace(self, waypoint_id: str, op: str, **update) -> MutationResult:
        index = self.index_of(waypoint_id)
        if index is None:
            return self._reject(op, waypoint_id, RejectionReason.UNKNOWN_WAYPOINT)
        current = self._waypoints[index]
        if is_calculated(current):
            return self._reject(op, waypoint_id, RejectionReason.CALCULATED_POINT_LOCKED)
        # re-validate so coordinates and name stay within bounds
        try:
            replaced = Waypoint.model_validate({**current.model_dump(), **update})
        except ValidationError:
            return self._reject(op, waypoint_id, RejectionReason.INVALID_VALUE)
        self._waypoints[index] = replaced
        return self._applied(waypoint_id)

    def _applied(self, waypoint_id: str | None = None) -> MutationResult:
        self._version += 1
        self._has_unsaved_changes = True
        return MutationResult.ok(version=self._version, waypoint_id=waypoint_id)

    @staticmethod
    def _reject(op: str, waypoint_id: str, reason: RejectionReason) -> MutationResult:
        logger.debug("Rejected %s of %s: %s", op, waypoint_id, reason.value)
        return MutationResult.rejected(reason)
