"""Drag-and-drop reordering rules.

A move ``(old_index, new_index)`` is checked in this order:

1. same index or either index out of bounds: nothing to do;
2. moving to the top: the moved waypoint must be an airport;
3. moving the current first waypoint away: the waypoint that becomes
   first (the current second one) must be an airport;
4. otherwise the move is applied as a splice (remove, then insert).

Rejection is an expected outcome of dragging, not a fault, so it is
reported through ``MutationResult`` and never raised.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, TypeVar

from navroute.contracts.enums import RejectionReason
from navroute.contracts.result import MutationResult
from navroute.contracts.waypoint import Waypoint
from navroute.route.invariants import is_airport

if TYPE_CHECKING:
    from navroute.route.store import WaypointStore

T = TypeVar("T")


def check_move(
    waypoints: Sequence[Waypoint], old_index: int, new_index: int
) -> RejectionReason | None:
    size = len(waypoints)
    if old_index == new_index:
        return RejectionReason.NO_OP
    if not (0 <= old_index < size) or not (0 <= new_index < size):
        return RejectionReason.OUT_OF_BOUNDS
    if new_index == 0 and not is_airport(waypoints[old_index]):
        return RejectionReason.AIRPORT_FIRST
    if old_index == 0 and not is_airport(waypoints[1]):
        return RejectionReason.AIRPORT_FIRST
    return None


def splice(items: Sequence[T], old_index: int, new_index: int) -> list[T]:
    """Remove the item at ``old_index`` and re-insert it at ``new_index``."""
    updated = list(items)
    moved = updated.pop(old_index)
    updated.insert(new_index, moved)
    return updated


class ReorderValidator:
    """Applies drag-and-drop moves to a store, ignoring invalid ones."""

    def validate(
        self, waypoints: Sequence[Waypoint], old_index: int, new_index: int
    ) -> MutationResult:
        reason = check_move(waypoints, old_index, new_index)
        if reason is not None:
            return MutationResult.rejected(reason)
        return MutationResult.ok()

    def reorder(
        self, store: WaypointStore, old_index: int, new_index: int
    ) -> MutationResult:
        waypoints = store.waypoints
        verdict = self.validate(waypoints, old_index, new_index)
        if not verdict.applied:
            return verdict
        return store.move_to(waypoints[old_index].id, new_index)
