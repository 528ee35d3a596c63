"""navroute exceptions.

Rejected route gestures are *not* exceptions (see ``MutationResult``).
These cover programming errors and failures of the remote services.
"""


class NavrouteError(Exception):
    """Base exception for all navroute errors."""


class InvalidTransitionError(NavrouteError):
    """Raised when a display-mode transition is not allowed from the current mode."""

    def __init__(self, action: str, mode: str):
        self.action = action
        self.mode = mode
        super().__init__(f"Cannot {action} while in {mode} mode")


class IncompleteRouteError(NavrouteError):
    """Raised when a nav-log is requested for a route with fewer than 2 waypoints."""


class SessionNotFoundError(NavrouteError):
    """Raised when a planning session id is unknown."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"planning session {session_id} not found")


class NavServiceError(NavrouteError):
    """Base exception for nav-log API failures not covered by httpx."""


class MalformedResponseError(NavServiceError):
    """Raised when the nav-log API returns a payload that does not validate."""
