"""Tests for the nav-log rendering CLI."""

from __future__ import annotations

import json

import pytest

from navroute.cli import load_legs, main
from navroute.contracts.flight import Flight
from tests.factories import airport, calculated, navlog


@pytest.fixture
def navlog_file(tmp_path):
    result = navlog(
        airport("A", "KJFK", altitude=13),
        calculated("T1", "TOC", altitude=4500),
        calculated("T2", "TOD", altitude=4500),
        airport("B", "KBOS", altitude=20),
        remaining_fuel=-1,
    )
    path = tmp_path / "navlog.json"
    path.write_text(json.dumps(result.to_wire()))
    return path


def test_preview_output(navlog_file, capsys):
    assert main([str(navlog_file)]) == 0
    out = capsys.readouterr().out
    assert "Mode: PREVIEW" in out
    assert "top_of_climb" in out
    assert "top_of_descent" in out
    assert "fuel_critical" in out


def test_viewing_output(navlog_file, capsys):
    assert main([str(navlog_file), "--mode", "viewing"]) == 0
    out = capsys.readouterr().out
    assert "Mode: VIEWING" in out
    assert "fuel_critical" not in out


def test_load_flight_document(tmp_path):
    nav = navlog(airport("A"), airport("B"))
    flight = Flight(id="f1", waypoints=[airport("A"), airport("B")], legs=nav.legs)
    path = tmp_path / "flight.json"
    path.write_text(json.dumps(flight.to_wire()))
    assert len(load_legs(path)) == 1


def test_missing_legs(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{}")
    with pytest.raises(ValueError):
        load_legs(path)
