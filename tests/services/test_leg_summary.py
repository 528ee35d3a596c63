"""Tests for per-leg bearing/distance summaries."""

from __future__ import annotations

import json

import httpx

from navroute.services.leg_summary import leg_key, summarize_legs
from navroute.services.navlog_client import NavlogClient
from tests.factories import airport, custom

BASE_URL = "http://navlog.test/api"


def _client(http: httpx.AsyncClient) -> NavlogClient:
    return NavlogClient(BASE_URL, http_client=http)


class TestSummarizeLegs:
    async def test_keys_and_total(self):
        a, b, c = airport("A", lat=40.0), custom("B", lat=40.5), airport("C", lat=41.0)

        def handler(req: httpx.Request) -> httpx.Response:
            body = json.loads(req.content)
            distance = round((body["endLatitude"] - body["startLatitude"]) * 60, 3)
            return httpx.Response(200, json={"trueCourse": 0.0, "distance": distance})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            summary = await summarize_legs([a, b, c], _client(http))

        assert list(summary.legs) == ["A~B", "B~C"]
        assert summary.get("A~B").distance == 30.0
        assert summary.total_distance == 60.0

    async def test_failed_leg_has_no_data(self):
        a, b, c = airport("A", lat=40.0), custom("B", lat=40.5), airport("C", lat=41.0)

        def handler(req: httpx.Request) -> httpx.Response:
            body = json.loads(req.content)
            if body["startLatitude"] == 40.5:
                return httpx.Response(503)
            return httpx.Response(200, json={"trueCourse": 10.0, "distance": 30.0})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            summary = await summarize_legs([a, b, c], _client(http))

        assert summary.get(leg_key(a, b)).distance == 30.0
        assert summary.get(leg_key(b, c)) is None
        assert not summary.legs["B~C"].success
        assert summary.total_distance == 30.0

    async def test_single_waypoint_has_no_legs(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(500))
        async with httpx.AsyncClient(transport=transport) as http:
            summary = await summarize_legs([airport("A")], _client(http))
        assert summary.legs == {}
        assert summary.total_distance == 0.0
