"""Shared fixtures for API tests."""

from __future__ import annotations

import json

import httpx
import pytest

from navroute.api.app import app
from navroute.api.sessions import SessionRegistry
from navroute.contracts.navlog import NavlogRequest, NavlogResult
from navroute.services.flight_client import FlightClient
from navroute.services.navlog_client import NavlogClient
from tests.factories import leg

UPSTREAM_URL = "http://upstream.test/api"

class FakeUpstream:
    """In-memory stand-in for the remote nav-log and flight API."""

    def __init__(self):
        self.flights: dict[str, dict] = {}
        self.fail = False
        self.requests: list[httpx.Request] = []

    def __call__(self, req: httpx.Request) -> httpx.Response:
        self.requests.append(req)
        if self.fail:
            return httpx.Response(503, json={"error": "unavailable"})
        path = req.url.path.removeprefix("/api")
        if path == "/Navlog/CalculateNavlog":
            request = NavlogRequest.model_validate(json.loads(req.content))
            points = request.waypoints
            legs = [leg(a, b) for a, b in zip(points, points[1:])]
            result = NavlogResult(legs=legs, total_route_distance=10.0 * len(legs))
            return httpx.Response(200, json=result.to_wire())
        if path == "/Navlog/CalculateBearingAndDistance":
            return httpx.Response(200, json={"trueCourse": 45.0, "distance": 10.0})
        if path == "/Flight" and req.method == "POST":
            flight = json.loads(req.content)
            flight["id"] = f"flight-{len(self.flights) + 1}"
            self.flights[flight["id"]] = flight
            return httpx.Response(201, json=flight)
        if path.startswith("/Flight/"):
            _, _, _user_id, flight_id = path.split("/")
            if flight_id not in self.flights:
                return httpx.Response(404)
            if req.method == "PATCH":
                self.flights[flight_id] = {**json.loads(req.content), "id": flight_id}
            return httpx.Response(200, json=self.flights[flight_id])
        return httpx.Response(404)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
async def test_app(upstream):
    """FastAPI app with a fresh registry and clients bound to the fake upstream."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app.state.sessions = SessionRegistry(debounce_seconds=0.05)
    app.state.navlog_client = NavlogClient(UPSTREAM_URL, http_client=http)
    app.state.flight_client = FlightClient(UPSTREAM_URL, http_client=http)
    yield app
    await http.aclose()


@pytest.fixture
async def client(test_app):
    """httpx AsyncClient wired to the test app."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def session_id(client):
    resp = await client.post("/api/planning/sessions")
    return resp.json()["session_id"]
