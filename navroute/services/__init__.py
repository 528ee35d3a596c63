"""Clients of the remote nav-log and flight APIs."""

from navroute.services.flight_client import FlightClient
from navroute.services.leg_summary import LegSummary, leg_key, summarize_legs
from navroute.services.navlog_client import NavlogClient

__all__ = ["FlightClient", "LegSummary", "NavlogClient", "leg_key", "summarize_legs"]
