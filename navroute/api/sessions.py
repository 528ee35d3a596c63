"""In-memory registry of planning sessions, one context per session."""

from __future__ import annotations

import logging
import uuid

from navroute.errors import SessionNotFoundError
from navroute.route.context import RoutePlanningContext

logger = logging.getLogger(__name__)


class SessionRegistry:
    def __init__(self, debounce_seconds: float):
        self._debounce_seconds = debounce_seconds
        self._sessions: dict[str, RoutePlanningContext] = {}

    def create(self) -> tuple[str, RoutePlanningContext]:
        session_id = uuid.uuid4().hex
        context = RoutePlanningContext(debounce_seconds=self._debounce_seconds)
        self._sessions[session_id] = context
        logger.info("Created planning session %s", session_id)
        return session_id, context

    def get(self, session_id: str) -> RoutePlanningContext:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def close(self, session_id: str) -> None:
        context = self._sessions.pop(session_id, None)
        if context is None:
            raise SessionNotFoundError(session_id)
        context.drag.discard()

    def __len__(self) -> int:
        return len(self._sessions)
