"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from navroute.api.sessions import SessionRegistry
from navroute.errors import SessionNotFoundError
from navroute.route.context import RoutePlanningContext
from navroute.services.flight_client import FlightClient
from navroute.services.navlog_client import NavlogClient

# ------------------------------------------------------------------
# Singletons from app.state
# ------------------------------------------------------------------


def get_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_navlog_client(request: Request) -> NavlogClient:
    return request.app.state.navlog_client


def get_flight_client(request: Request) -> FlightClient:
    return request.app.state.flight_client


# ------------------------------------------------------------------
# Planning session
# ------------------------------------------------------------------


def get_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> RoutePlanningContext:
    try:
        return registry.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Planning session not found")
