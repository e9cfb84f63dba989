"""Command-line entrypoint for the Mapty web UI."""

from __future__ import annotations

import argparse
import logging
import sys

from mapty.ui.controller import DEFAULT_ZOOM
from mapty.workout.model import Coordinates


def parse_coordinates(raw: str) -> Coordinates:
    parts = raw.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError("expected LAT,LNG")
    try:
        lat, lng = float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError("LAT and LNG must be numbers") from exc
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        raise argparse.ArgumentTypeError("coordinates out of range")
    return (lat, lng)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mapty workout map")
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host bind for the web UI",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=8080,
        help="Port for the web UI",
    )
    parser.add_argument(
        "--zoom",
        type=int,
        default=DEFAULT_ZOOM,
        help="Map zoom level once your location is known",
    )
    parser.add_argument(
        "--location-timeout",
        type=float,
        default=10.0,
        help="Seconds to wait for browser geolocation",
    )
    parser.add_argument(
        "--debug-sim-location",
        type=parse_coordinates,
        default=None,
        metavar="LAT,LNG",
        help="Skip browser geolocation and start at LAT,LNG (use --debug-sim-location=LAT,LNG for negative values)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    from mapty.ui.web_app import WebConfig, run_web_ui

    if args.debug_sim_location is not None:
        print(f"SIM MODE - starting at {args.debug_sim_location[0]},{args.debug_sim_location[1]}")
    return run_web_ui(
        WebConfig(
            host=args.web_host,
            port=args.web_port,
            zoom=args.zoom,
            location_timeout_sec=max(1.0, args.location_timeout),
            simulated_location=args.debug_sim_location,
        )
    )


if __name__ == "__main__":
    raise SystemExit(main())
