"""Render a nav-log or flight document from the command line.

Usage:
    python -m navroute.cli navlog.json --mode preview -v
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from navroute.contracts.enums import DisplayMode
from navroute.contracts.flight import Flight
from navroute.contracts.navlog import NavlogResult
from navroute.contracts.render import RenderedRoute
from navroute.route.projector import DisplayProjector

logger = logging.getLogger(__name__)

MODES = {"preview": DisplayMode.PREVIEW, "viewing": DisplayMode.VIEWING}


def load_legs(path: Path):
    """Legs of a nav-log result or of a flight document."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if "legs" not in data:
        raise ValueError(f"{path} has no 'legs' array")
    if "waypoints" in data or "plannedCruisingAltitude" in data:
        logger.debug("Reading %s as a flight", path)
        return Flight.model_validate(data).legs
    return NavlogResult.model_validate(data).legs


def format_route(route: RenderedRoute) -> str:
    lines = [f"Mode: {route.mode.value}"]
    lines.append(f"Points ({len(route.points)}):")
    for point in route.points:
        marker = "marker" if point.show_marker else "-"
        lines.append(
            f"  {point.waypoint_id:<20} {point.label.replace(chr(10), ' / '):<30} "
            f"{point.position.latitude:9.4f} {point.position.longitude:10.4f} "
            f"{point.position.altitude_ft:7.0f} ft  {point.marker_role.value:<15} {marker}"
        )
    lines.append(f"Segments ({len(route.segments)}):")
    for seg in route.segments:
        lines.append(f"  {seg.start_id} -> {seg.end_id}: {seg.style.value} ({seg.color})")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="navroute nav-log renderer")
    parser.add_argument("navlog", type=Path, help="Nav-log or flight JSON file")
    parser.add_argument("--mode", choices=sorted(MODES), default="preview")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    legs = load_legs(args.navlog)
    logger.info("Loaded %d legs from %s", len(legs), args.navlog)
    route = DisplayProjector().project(MODES[args.mode], legs=legs)
    print(format_route(route))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
