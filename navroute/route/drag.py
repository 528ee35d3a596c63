"""Continuous drag of a waypoint pin.

A drag produces a rapid stream of positions. Each one updates the live
(UI-only) position at once, while the store-of-record is only written
after ``debounce_seconds`` without further movement, or immediately when
the drag ends. The deferred write is an ``asyncio`` timer on the event
loop that dispatches the gestures, so there is a single writer and no
locking.

Only one drag is active at a time. A pending write always carries the last
position seen before it fires.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from navroute.contracts.common import GeoPoint
from navroute.contracts.result import MutationResult

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5

CommitFn = Callable[[str, float, float], MutationResult]


@dataclass(frozen=True)
class LivePosition:
    waypoint_id: str
    position: GeoPoint


class DragController:
    """Tracks ``live_position`` and debounces commits of a dragged waypoint.

    ``commit`` writes the authoritative position, typically
    ``store.set_position``. It is called with ``(waypoint_id, lat, lon)``.
    """

    def __init__(
        self,
        commit: CommitFn,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self._commit = commit
        self._debounce_seconds = debounce_seconds
        self._loop = loop
        self._live: LivePosition | None = None
        self._pending: LivePosition | None = None
        self._timer: asyncio.TimerHandle | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def live_position(self) -> LivePosition | None:
        """Position shown while dragging; never written to the store."""
        return self._live

    @property
    def pending(self) -> LivePosition | None:
        """Position waiting for the debounce window to elapse."""
        return self._pending

    @property
    def is_dragging(self) -> bool:
        return self._live is not None

    def live_positions(self) -> dict[str, GeoPoint]:
        if self._live is None:
            return {}
        return {self._live.waypoint_id: self._live.position}

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    def drag_move(self, waypoint_id: str, latitude: float, longitude: float) -> None:
        if self._pending is not None and self._pending.waypoint_id != waypoint_id:
            # a new drag started before the previous one was committed
            self.flush()
        self._live = LivePosition(waypoint_id, GeoPoint(latitude=latitude, longitude=longitude))
        self._pending = self._live
        self._cancel_timer()
        self._timer = self._get_loop().call_later(self._debounce_seconds, self.flush)

    def drag_end(
        self, waypoint_id: str, latitude: float, longitude: float
    ) -> MutationResult:
        """Commit the final position immediately, regardless of the window."""
        self._cancel_timer()
        self._pending = None
        self._live = None
        return self._write(waypoint_id, latitude, longitude)

    def flush(self) -> MutationResult | None:
        """Commit the pending position now, if any."""
        self._cancel_timer()
        pending, self._pending = self._pending, None
        if pending is None:
            return None
        return self._write(
            pending.waypoint_id,
            pending.position.latitude,
            pending.position.longitude,
        )

    def discard(self, waypoint_id: str | None = None) -> bool:
        """Drop the pending commit (for ``waypoint_id`` only, when given).

        Used when a waypoint is deleted mid-drag so the deferred write
        cannot bring it back.
        """
        if self._pending is None:
            return False
        if waypoint_id is not None and self._pending.waypoint_id != waypoint_id:
            return False
        logger.debug("Discarding pending drag commit for %s", self._pending.waypoint_id)
        self._cancel_timer()
        self._pending = None
        self._live = None
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _write(self, waypoint_id: str, latitude: float, longitude: float) -> MutationResult:
        result = self._commit(waypoint_id, latitude, longitude)
        if not result.applied:
            logger.debug("Drag commit for %s ignored: %s", waypoint_id, result.reason)
        return result

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()
