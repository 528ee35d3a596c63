"""Tests for segment and marker classification."""

import pytest

from navroute.contracts.enums import DisplayMode, MarkerRole, SegmentStyle
from navroute.route.classifier import (
    SEGMENT_COLORS,
    classify_marker,
    classify_segment,
    classify_segments,
)
from tests.factories import airport, calculated, custom, leg

PREVIEW = DisplayMode.PREVIEW


class TestClassifySegment:
    def test_climb(self):
        a, b = airport("A", altitude=100), calculated("T", "TOC", altitude=4500)
        assert classify_segment(a, b, leg(a, b), PREVIEW) == SegmentStyle.CLIMB

    def test_descent(self):
        a, b = calculated("T", "TOD", altitude=4500), airport("B", altitude=50)
        assert classify_segment(a, b, leg(a, b), PREVIEW) == SegmentStyle.DESCENT

    def test_small_change_is_cruise(self):
        a, b = custom("A", altitude=4500), custom("B", altitude=4600)
        assert classify_segment(a, b, leg(a, b), PREVIEW) == SegmentStyle.CRUISE

    def test_fuel_critical_wins_over_climb(self):
        a, b = airport("A", altitude=0), calculated("T", "TOC", altitude=4500)
        critical = leg(a, b, remaining_fuel=-0.5)
        assert classify_segment(a, b, critical, PREVIEW) == SegmentStyle.FUEL_CRITICAL

    def test_zero_fuel_is_not_critical(self):
        a, b = custom("A", altitude=4500), custom("B", altitude=4500)
        assert classify_segment(a, b, leg(a, b, remaining_fuel=0), PREVIEW) == SegmentStyle.CRUISE

    def test_missing_altitude_is_cruise(self):
        a, b = custom("A", altitude=None), custom("B", altitude=4500)
        assert classify_segment(a, b, leg(a, b), PREVIEW) == SegmentStyle.CRUISE

    def test_no_leg_is_cruise(self):
        a, b = airport("A", altitude=0), calculated("T", "TOC", altitude=4500)
        assert classify_segment(a, b, None, PREVIEW) == SegmentStyle.CRUISE

    @pytest.mark.parametrize(
        "mode", [DisplayMode.PLANNING, DisplayMode.EDITING, DisplayMode.VIEWING]
    )
    def test_only_preview_is_classified(self, mode):
        a, b = airport("A", altitude=0), calculated("T", "TOC", altitude=4500)
        assert classify_segment(a, b, leg(a, b, remaining_fuel=-5), mode) == SegmentStyle.CRUISE

    def test_classify_segments_matches_legs_by_id(self):
        a = airport("A", altitude=0)
        t = calculated("T", "TOC", altitude=4500)
        d = calculated("D", "TOD", altitude=4500)
        b = airport("B", altitude=0)
        legs = [leg(a, t), leg(t, d), leg(d, b, remaining_fuel=-1)]
        styles = classify_segments([a, t, d, b], legs, PREVIEW)
        assert styles == [SegmentStyle.CLIMB, SegmentStyle.CRUISE, SegmentStyle.FUEL_CRITICAL]

    def test_every_style_has_a_color(self):
        assert set(SEGMENT_COLORS) == set(SegmentStyle)


class TestClassifyMarker:
    @pytest.mark.parametrize(
        "name,role",
        [
            ("TOC", MarkerRole.TOP_OF_CLIMB),
            ("TOC-1", MarkerRole.TOP_OF_CLIMB),
            ("Rwy TOD Alpha", MarkerRole.TOP_OF_DESCENT),
            ("Top of Climb", MarkerRole.TOP_OF_CLIMB),
            ("tod", MarkerRole.TOP_OF_DESCENT),
            ("TOP OF DESCENT", MarkerRole.TOP_OF_DESCENT),
            ("Refuel point", MarkerRole.CALCULATED),
            # substring match: "Toccoa" contains "toc"
            ("Toccoa", MarkerRole.TOP_OF_CLIMB),
        ],
    )
    def test_calculated_point_roles(self, name, role):
        assert classify_marker(calculated("X", name)) == role

    def test_user_points_have_no_role(self):
        assert classify_marker(custom("X", "TOC")) == MarkerRole.NONE
        assert classify_marker(airport("X", "Todd Field")) == MarkerRole.NONE
