"""Planning session endpoints.

Each session owns one ``RoutePlanningContext``. Gesture endpoints return
the mutation outcome with the re-rendered route; a rejected gesture is a
409 carrying the rejection reason.
"""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from navroute.api.deps import (
    get_flight_client,
    get_navlog_client,
    get_registry,
    get_session,
)
from navroute.api.sessions import SessionRegistry
from navroute.contracts.enums import RejectionReason
from navroute.contracts.result import MutationResult
from navroute.contracts.waypoint import Airport
from navroute.errors import (
    IncompleteRouteError,
    InvalidTransitionError,
    NavServiceError,
    SessionNotFoundError,
)
from navroute.route.context import RoutePlanningContext
from navroute.route.insertion import DEFAULT_WAYPOINT_NAME
from navroute.services.flight_client import FlightClient
from navroute.services.leg_summary import summarize_legs
from navroute.services.navlog_client import NavlogClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/planning/sessions", tags=["planning"])

MAX_NAME_LENGTH = 100


# ------------------------------------------------------------------
# Request bodies
# ------------------------------------------------------------------


class CustomWaypointIn(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    name: str = Field(default=DEFAULT_WAYPOINT_NAME, max_length=MAX_NAME_LENGTH)
    insert_index: int | None = None


class WaypointPatch(BaseModel):
    name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    is_refueling_stop: bool | None = None
    refuel_to_full: bool | None = None
    refuel_gallons: float | None = Field(default=None, ge=0)


class ReorderIn(BaseModel):
    old_index: int
    new_index: int


class DragIn(BaseModel):
    waypoint_id: str
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    end: bool = False


class SettingsIn(BaseModel):
    name: str | None = None
    performance_profile_id: str | None = None
    planned_cruising_altitude: int | None = Field(default=None, ge=0, le=60000)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _state(context: RoutePlanningContext) -> dict:
    return {
        "mode": context.display_mode.value,
        "flight_id": context.active_flight_id,
        "can_calculate_navlog": context.can_calculate_navlog,
        "has_unsaved_changes": context.has_unsaved_changes,
        "waypoints": [wp.to_wire() for wp in context.route],
        "route": context.render().model_dump(mode="json"),
    }


def _applied(context: RoutePlanningContext, result: MutationResult) -> dict:
    if not result.applied:
        raise HTTPException(
            status_code=409,
            detail={
                "reason": RejectionReason(result.reason).value,
                "message": "Route change rejected",
            },
        )
    data = _state(context)
    data["result"] = result.model_dump(mode="json")
    return data


def _conflict(exc: Exception) -> HTTPException:
    return HTTPException(status_code=409, detail=str(exc))


def _upstream(exc: Exception) -> HTTPException:
    logger.error("Upstream API call failed: %s", exc)
    return HTTPException(status_code=502, detail=f"Upstream API error: {exc}")


# ------------------------------------------------------------------
# Sessions
# ------------------------------------------------------------------


@router.post("", status_code=201)
async def create_session(
    registry: SessionRegistry = Depends(get_registry),
) -> dict:
    session_id, context = registry.create()
    data = _state(context)
    data["session_id"] = session_id
    return data


@router.get("/{session_id}")
async def get_session_state(
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    return _state(context)


@router.delete("/{session_id}", status_code=204)
async def close_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> None:
    try:
        registry.close(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Planning session not found")


@router.patch("/{session_id}/settings")
async def update_settings(
    body: SettingsIn,
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    update = body.model_dump(exclude_none=True)
    context.settings = context.settings.model_copy(update=update)
    return context.settings.model_dump(mode="json")


# ------------------------------------------------------------------
# Gestures
# ------------------------------------------------------------------


@router.post("/{session_id}/waypoints", status_code=201)
async def add_custom_waypoint(
    body: CustomWaypointIn,
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    result = context.add_custom_waypoint(
        body.latitude, body.longitude, name=body.name, insert_index=body.insert_index
    )
    return _applied(context, result)


@router.post("/{session_id}/airports", status_code=201)
async def add_airport(
    airport: Airport,
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    return _applied(context, context.add_airport(airport))


@router.patch("/{session_id}/waypoints/{waypoint_id}")
async def update_waypoint(
    waypoint_id: str,
    body: WaypointPatch,
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    if (body.latitude is None) != (body.longitude is None):
        raise HTTPException(status_code=422, detail="latitude and longitude go together")

    position = None if body.latitude is None else (body.latitude, body.longitude)
    result = context.edit_waypoint(
        waypoint_id,
        name=body.name,
        position=position,
        is_refuel=body.is_refueling_stop,
        refuel_to_full=body.refuel_to_full,
        refuel_gallons=body.refuel_gallons,
    )
    return _applied(context, result)


@router.delete("/{session_id}/waypoints/{waypoint_id}")
async def remove_waypoint(
    waypoint_id: str,
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    return _applied(context, context.remove_waypoint(waypoint_id))


@router.delete("/{session_id}/waypoints")
async def clear_waypoints(
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    return _applied(context, context.clear_waypoints())


@router.post("/{session_id}/reorder")
async def reorder(
    body: ReorderIn,
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    return _applied(context, context.reorder(body.old_index, body.new_index))


@router.post("/{session_id}/drag")
async def drag(
    body: DragIn,
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    """Drag event: live move, or the final drop when ``end`` is set."""
    if body.end:
        return _applied(
            context, context.drag_end(body.waypoint_id, body.latitude, body.longitude)
        )
    if not context.drag_move(body.waypoint_id, body.latitude, body.longitude):
        raise HTTPException(
            status_code=409,
            detail={
                "reason": RejectionReason.NOT_DRAGGABLE.value,
                "message": "Waypoint cannot be dragged",
            },
        )
    return _state(context)


# ------------------------------------------------------------------
# Nav-log preview
# ------------------------------------------------------------------


@router.post("/{session_id}/navlog")
async def calculate_navlog(
    context: RoutePlanningContext = Depends(get_session),
    client: NavlogClient = Depends(get_navlog_client),
) -> dict:
    try:
        request = context.navlog_request()
    except IncompleteRouteError as exc:
        raise _conflict(exc)
    try:
        result = await client.calculate_navlog(request)
    except (httpx.HTTPError, NavServiceError) as exc:
        raise _upstream(exc)
    try:
        context.preview_navlog(result)
    except InvalidTransitionError as exc:
        raise _conflict(exc)
    data = _state(context)
    data["navlog"] = result.to_wire()
    return data


@router.get("/{session_id}/legs")
async def leg_summary(
    context: RoutePlanningContext = Depends(get_session),
    client: NavlogClient = Depends(get_navlog_client),
) -> dict:
    """Bearing and distance per leg of the editable route; failed legs are null."""
    summary = await summarize_legs(context.route, client)
    legs = {}
    for key in summary.legs:
        data = summary.get(key)
        legs[key] = data.to_wire() if data is not None else None
    return {"legs": legs, "total_distance": summary.total_distance}


@router.delete("/{session_id}/navlog")
async def cancel_preview(
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    try:
        context.cancel_preview()
    except InvalidTransitionError as exc:
        raise _conflict(exc)
    return _state(context)


# ------------------------------------------------------------------
# Flights
# ------------------------------------------------------------------


@router.post("/{session_id}/flight", status_code=201)
async def save_flight(
    user_id: str,
    context: RoutePlanningContext = Depends(get_session),
    client: FlightClient = Depends(get_flight_client),
) -> dict:
    if not context.can_save_flight:
        raise _conflict(
            InvalidTransitionError("save a flight", context.display_mode.value)
        )
    try:
        flight = await client.create_flight(user_id, context.draft_flight())
    except (httpx.HTTPError, NavServiceError) as exc:
        raise _upstream(exc)
    try:
        context.save_flight(flight)
    except InvalidTransitionError as exc:
        raise _conflict(exc)
    return _state(context)


@router.put("/{session_id}/flight/{flight_id}")
async def view_flight(
    flight_id: str,
    user_id: str,
    context: RoutePlanningContext = Depends(get_session),
    client: FlightClient = Depends(get_flight_client),
) -> dict:
    try:
        flight = await client.get_flight(user_id, flight_id)
    except (httpx.HTTPError, NavServiceError) as exc:
        raise _upstream(exc)
    if flight is None:
        raise HTTPException(status_code=404, detail="Flight not found")
    context.view_flight(flight)
    return _state(context)


@router.post("/{session_id}/edit")
async def start_editing(
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    try:
        context.start_editing()
    except InvalidTransitionError as exc:
        raise _conflict(exc)
    return _state(context)


@router.post("/{session_id}/edit/finish")
async def finish_editing(
    user_id: str | None = None,
    save: bool = False,
    context: RoutePlanningContext = Depends(get_session),
    client: FlightClient = Depends(get_flight_client),
) -> dict:
    """Leave editing. With ``save`` the edited route is persisted first."""
    saved = None
    if save:
        if user_id is None:
            raise HTTPException(status_code=422, detail="user_id is required to save")
        try:
            flight = context.edited_flight()
        except InvalidTransitionError as exc:
            raise _conflict(exc)
        try:
            saved = await client.update_flight(user_id, flight.id or "", flight)
        except (httpx.HTTPError, NavServiceError) as exc:
            raise _upstream(exc)
    try:
        context.finish_editing(saved)
    except InvalidTransitionError as exc:
        raise _conflict(exc)
    return _state(context)


@router.post("/{session_id}/reset")
async def start_new_flight(
    context: RoutePlanningContext = Depends(get_session),
) -> dict:
    context.start_new_flight()
    return _state(context)
