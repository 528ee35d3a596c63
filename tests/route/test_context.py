"""Tests for the planning context and its mode lifecycle."""

import asyncio

import pytest

from navroute.contracts.enums import DisplayMode, RejectionReason
from navroute.contracts.flight import Flight
from navroute.errors import IncompleteRouteError, InvalidTransitionError
from navroute.route.context import RoutePlanningContext
from tests.factories import KBOS, KJFK, KPVD, airport, calculated, custom, navlog

WINDOW = 0.05


@pytest.fixture
def ctx():
    return RoutePlanningContext(debounce_seconds=WINDOW)


@pytest.fixture
def planned(ctx):
    """Context with KJFK -> Waypoint1 -> KBOS in the draft."""
    ctx.add_airport(KJFK)
    ctx.add_custom_waypoint(41.5, -72.4, name="Waypoint1")
    ctx.add_airport(KBOS)
    return ctx


def names(ctx):
    return [wp.name for wp in ctx.route]


def saved_flight(points=None):
    a = airport("A", lat=40.0, lon=-73.0, altitude=13)
    toc = calculated("T1", "TOC", lat=40.3, lon=-72.7, altitude=4500)
    b = custom("B", lat=40.6, lon=-72.4, altitude=4500)
    c = airport("C", lat=41.0, lon=-72.0, altitude=20)
    nav = navlog(a, toc, b, c)
    return Flight(
        id="flight-1",
        name="Sunday hop",
        planned_cruising_altitude=5500,
        waypoints=[a, b, c] if points is None else points,
        legs=nav.legs,
    )


class TestEndToEnd:
    def test_build_route_and_reject_bad_reorders(self, ctx):
        assert ctx.add_airport(KJFK).applied
        wp1 = ctx.add_custom_waypoint(41.5, -72.4, name="Waypoint1")
        assert wp1.applied
        assert ctx.add_airport(KBOS).applied
        assert names(ctx) == ["KJFK", "Waypoint1", "KBOS"]

        to_top = ctx.reorder(1, 0)
        assert to_top.reason == RejectionReason.AIRPORT_FIRST
        promote = ctx.reorder(0, 1)
        assert promote.reason == RejectionReason.AIRPORT_FIRST
        assert names(ctx) == ["KJFK", "Waypoint1", "KBOS"]

    def test_custom_click_lands_in_nearest_leg(self, planned):
        result = planned.add_custom_waypoint(42.0, -71.6, name="Harbor")
        assert result.applied
        assert names(planned) == ["KJFK", "Waypoint1", "Harbor", "KBOS"]

    def test_search_airport_is_appended(self, planned):
        planned.add_airport(KPVD)
        assert names(planned)[-1] == "KPVD"


class TestPlanning:
    def test_starts_in_planning(self, ctx):
        assert ctx.display_mode == DisplayMode.PLANNING
        assert ctx.is_editable
        assert not ctx.can_calculate_navlog

    def test_can_calculate_with_two_points(self, ctx):
        ctx.add_airport(KJFK)
        assert not ctx.can_calculate_navlog
        ctx.add_airport(KBOS)
        assert ctx.can_calculate_navlog

    def test_navlog_request(self, planned):
        planned.settings = planned.settings.model_copy(update={"planned_cruising_altitude": 6500})
        request = planned.navlog_request()
        assert [wp.name for wp in request.waypoints] == ["KJFK", "Waypoint1", "KBOS"]
        assert request.planned_cruising_altitude == 6500

    def test_navlog_request_incomplete(self, ctx):
        ctx.add_airport(KJFK)
        with pytest.raises(IncompleteRouteError):
            ctx.navlog_request()

    def test_rename_and_remove(self, planned):
        wp_id = planned.route[1].id
        assert planned.rename_waypoint(wp_id, "Bridge").applied
        assert names(planned)[1] == "Bridge"
        assert planned.remove_waypoint(wp_id).applied
        assert names(planned) == ["KJFK", "KBOS"]

    def test_set_refuel(self, planned):
        assert planned.set_refuel(KBOS.site_no, True).applied
        assert planned.route[-1].is_refueling_stop

    def test_edit_waypoint_applies_all_fields(self, planned):
        result = planned.edit_waypoint(
            KBOS.site_no, name="Boston", position=(42.3, -71.0), is_refuel=True
        )
        assert result.applied
        edited = planned.route[-1]
        assert (edited.name, edited.latitude, edited.is_refueling_stop) == ("Boston", 42.3, True)

    def test_edit_waypoint_is_all_or_nothing(self, planned):
        wp_id = planned.route[1].id
        version = planned.draft.version
        result = planned.edit_waypoint(
            wp_id, name="Bridge", position=(41.8, -72.1), is_refuel=True
        )
        assert result.reason == RejectionReason.NOT_AN_AIRPORT
        assert names(planned)[1] == "Waypoint1"
        assert planned.route[1].latitude == 41.5
        assert planned.draft.version == version

    def test_edit_waypoint_rejects_long_name(self, planned):
        result = planned.edit_waypoint(KBOS.site_no, name="x" * 101, is_refuel=True)
        assert result.reason == RejectionReason.INVALID_VALUE
        assert not planned.route[-1].is_refueling_stop

    def test_clear(self, planned):
        assert planned.clear_waypoints().applied
        assert planned.route == ()


class TestRender:
    def test_render_is_cached_until_route_changes(self, planned):
        first = planned.render()
        assert planned.render() is first
        planned.rename_waypoint(planned.route[1].id, "Bridge")
        second = planned.render()
        assert second is not first
        assert second.points[1].name == "Bridge"

    def test_render_follows_mode(self, planned):
        planned.preview_navlog(navlog(*planned.route))
        assert planned.render().mode == DisplayMode.PREVIEW


class TestDrag:
    async def test_drag_shows_live_position_then_commits(self, planned):
        wp_id = planned.route[1].id
        assert planned.drag_move(wp_id, 41.9, -72.0)
        assert planned.render().points[1].position.latitude == 41.9
        assert planned.route[1].latitude == 41.5
        await asyncio.sleep(WINDOW * 3)
        assert planned.route[1].latitude == 41.9

    async def test_drag_end_commits_immediately(self, planned):
        wp_id = planned.route[1].id
        planned.drag_move(wp_id, 41.9, -72.0)
        assert planned.drag_end(wp_id, 42.1, -71.9).applied
        assert planned.route[1].latitude == 42.1

    async def test_remove_mid_drag_discards_commit(self, planned):
        wp_id = planned.route[1].id
        planned.drag_move(wp_id, 41.9, -72.0)
        planned.remove_waypoint(wp_id)
        await asyncio.sleep(WINDOW * 3)
        assert names(planned) == ["KJFK", "KBOS"]

    async def test_calculated_points_not_draggable(self, ctx):
        points = [airport("A"), calculated("T9", "TOC"), airport("C")]
        ctx.view_flight(saved_flight(points=points))
        ctx.start_editing()
        assert not ctx.drag_move("T9", 41.0, -72.0)
        assert ctx.drag_end("T9", 41.0, -72.0).reason == RejectionReason.NOT_DRAGGABLE

    async def test_airports_not_draggable(self, planned):
        departure = planned.route[0]
        assert not planned.drag_move(departure.id, 41.0, -72.0)
        assert planned.drag.live_position is None
        result = planned.drag_end(departure.id, 41.0, -72.0)
        assert not result.applied
        assert result.reason == RejectionReason.NOT_DRAGGABLE
        assert planned.route[0].latitude == departure.latitude
        assert not planned.render().points[0].draggable

    async def test_drag_in_read_only_mode(self, planned):
        wp_id = planned.route[1].id
        planned.preview_navlog(navlog(*planned.route))
        assert not planned.drag_move(wp_id, 41.9, -72.0)
        assert planned.drag_end(wp_id, 41.9, -72.0).reason == RejectionReason.READ_ONLY_MODE

    async def test_drag_unknown_waypoint(self, planned):
        assert planned.drag_end("nope", 41.9, -72.0).reason == RejectionReason.UNKNOWN_WAYPOINT

    async def test_transition_flushes_pending_drag(self, planned):
        wp_id = planned.route[1].id
        planned.drag_move(wp_id, 41.9, -72.0)
        planned.preview_navlog(navlog(*planned.route))
        assert planned.draft.get(wp_id).latitude == 41.9


class TestLifecycle:
    def test_preview_is_read_only(self, planned):
        planned.preview_navlog(navlog(*planned.route))
        assert planned.display_mode == DisplayMode.PREVIEW
        result = planned.add_airport(KPVD)
        assert result.reason == RejectionReason.READ_ONLY_MODE

    def test_cancel_preview_returns_to_draft(self, planned):
        planned.preview_navlog(navlog(*planned.route))
        planned.cancel_preview()
        assert planned.display_mode == DisplayMode.PLANNING
        assert planned.navlog_preview is None
        assert names(planned) == ["KJFK", "Waypoint1", "KBOS"]

    def test_cancel_preview_outside_preview(self, ctx):
        with pytest.raises(InvalidTransitionError):
            ctx.cancel_preview()

    def test_save_flight_resets_draft(self, planned):
        planned.preview_navlog(navlog(*planned.route))
        flight = planned.draft_flight().model_copy(update={"id": "f-9"})
        assert len(flight.legs) == 2
        planned.save_flight(flight)
        assert planned.display_mode == DisplayMode.VIEWING
        assert planned.active_flight_id == "f-9"
        assert len(planned.draft) == 0

    def test_can_save_flight_follows_mode(self, planned):
        assert planned.can_save_flight
        planned.preview_navlog(navlog(*planned.route))
        assert planned.can_save_flight
        planned.save_flight(planned.draft_flight().model_copy(update={"id": "f-9"}))
        assert not planned.can_save_flight
        with pytest.raises(InvalidTransitionError):
            planned.save_flight(Flight(id="f-10"))

    def test_viewing_renders_flight_legs(self, ctx):
        ctx.view_flight(saved_flight())
        rendered = ctx.render()
        assert rendered.point_ids == ["A", "T1", "B", "C"]
        assert ctx.route == ()

    def test_editing_works_on_a_copy(self, ctx):
        flight = saved_flight()
        ctx.view_flight(flight)
        ctx.start_editing()
        assert ctx.display_mode == DisplayMode.EDITING
        assert [wp.id for wp in ctx.route] == ["A", "B", "C"]
        ctx.remove_waypoint("B")
        assert ctx.has_unsaved_changes
        assert [wp.id for wp in ctx.flight.waypoints] == ["A", "B", "C"]

    def test_editing_falls_back_to_leg_points(self, ctx):
        ctx.view_flight(saved_flight(points=[]))
        ctx.start_editing()
        assert [wp.id for wp in ctx.route] == ["A", "B", "C"]

    def test_finish_editing_with_saved_flight(self, ctx):
        ctx.view_flight(saved_flight())
        ctx.start_editing()
        ctx.remove_waypoint("B")
        edited = ctx.edited_flight()
        ctx.finish_editing(edited)
        assert ctx.display_mode == DisplayMode.VIEWING
        assert [wp.id for wp in ctx.flight.waypoints] == ["A", "C"]
        assert ctx.editing is None
        assert not ctx.has_unsaved_changes

    def test_finish_editing_without_save_keeps_flight(self, ctx):
        ctx.view_flight(saved_flight())
        ctx.start_editing()
        ctx.remove_waypoint("B")
        ctx.finish_editing()
        assert [wp.id for wp in ctx.flight.waypoints] == ["A", "B", "C"]

    def test_editing_navlog_request_uses_flight_settings(self, ctx):
        ctx.view_flight(saved_flight())
        ctx.start_editing()
        assert ctx.navlog_request().planned_cruising_altitude == 5500

    def test_start_editing_requires_viewing(self, ctx):
        with pytest.raises(InvalidTransitionError):
            ctx.start_editing()

    def test_start_new_flight(self, ctx):
        ctx.view_flight(saved_flight())
        ctx.start_new_flight()
        assert ctx.display_mode == DisplayMode.PLANNING
        assert ctx.flight is None
        assert ctx.route == ()
