"""Command-line Entry Point.

A thin wrapper that loads configuration, runs one refresh through the
orchestrator and prints the requested view.
"""

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict

import yaml

from quakeview.core.config import Config, validate_config
from quakeview.core.earthquake import Coordinate
from quakeview.core.formatter import format_record_summary
from quakeview.core.markers import marker_style
from quakeview.core.noise import RiskLevel
from quakeview.core.query import SortOrder
from quakeview.orchestrator import Orchestrator
from quakeview.shell.config_loader import load_config, load_config_from_env


logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _get_config(config_path: str | None) -> Config:
    """Load configuration from file or environment."""
    if config_path:
        return load_config(config_path)
    elif os.environ.get("FEED_URL"):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quakeview",
        description="List and map recent earthquakes from a JSON feed.",
    )
    parser.add_argument("--config", help="Path to YAML config file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Print the earthquake list")
    list_parser.add_argument("--min-magnitude", type=float)
    list_parser.add_argument(
        "--sort",
        choices=[o.value for o in SortOrder],
        help="Sort by time (newest first) or magnitude (largest first)",
    )
    list_parser.add_argument("--limit", type=int, default=0, help="0 for all")

    map_parser = subparsers.add_parser("map", help="Print map annotations as JSON")
    map_parser.add_argument("--min-magnitude", type=float)

    risk_parser = subparsers.add_parser("risk", help="Print the risk scatter as JSON")
    risk_parser.add_argument("--latitude", type=float)
    risk_parser.add_argument("--longitude", type=float)
    risk_parser.add_argument(
        "--level",
        choices=[level.value for level in RiskLevel],
        help="Override the mocked risk level",
    )

    subparsers.add_parser("nearby", help="Print events near monitored locations")

    return parser


def _run_list(orchestrator: Orchestrator, args: argparse.Namespace) -> int:
    if args.sort:
        orchestrator.set_sort_order(SortOrder.parse(args.sort))

    earthquakes = orchestrator.earthquakes
    if args.limit > 0:
        earthquakes = earthquakes[:args.limit]

    for record in earthquakes:
        print(format_record_summary(record))

    return 0


def _run_map(orchestrator: Orchestrator, args: argparse.Namespace) -> int:
    center = orchestrator.center_coordinate()
    span = orchestrator.initial_span()

    payload = {
        "center": {"latitude": center.latitude, "longitude": center.longitude},
        "span": {
            "latitude_delta": span.latitude_delta,
            "longitude_delta": span.longitude_delta,
        },
        "annotations": [
            {
                "latitude": a.coordinate.latitude,
                "longitude": a.coordinate.longitude,
                "title": a.title,
                "subtitle": a.subtitle,
                "selected": a.is_selected,
                "style": asdict(marker_style(a.record)),
            }
            for a in orchestrator.annotations()
        ],
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def _run_risk(orchestrator: Orchestrator, args: argparse.Namespace) -> int:
    location = None
    if args.latitude is not None and args.longitude is not None:
        location = Coordinate(latitude=args.latitude, longitude=args.longitude)

    level = RiskLevel(args.level) if args.level else None
    assessment = orchestrator.assess_risk(location, level)

    payload = {
        "location": {
            "latitude": assessment.location.latitude,
            "longitude": assessment.location.longitude,
        },
        "level": assessment.level.value,
        "points": [[p.latitude, p.longitude] for p in assessment.points],
    }
    print(json.dumps(payload, indent=2))
    return 0


def _run_nearby(orchestrator: Orchestrator, args: argparse.Namespace) -> int:
    if not orchestrator.monitored_locations:
        print("No monitored locations configured")
        return 0

    for location, records in orchestrator.nearby_events():
        print(f"{location.name} (M{location.notification_threshold:.1f}+): {len(records)}")
        for record in records:
            print(f"  {format_record_summary(record)}")

    return 0


COMMANDS = {
    "list": _run_list,
    "map": _run_map,
    "risk": _run_risk,
    "nearby": _run_nearby,
}


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        Process exit code
    """
    _configure_logging()
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command == "risk" and (args.latitude is None) != (args.longitude is None):
        parser.error("--latitude and --longitude must be given together")

    try:
        config = _get_config(args.config)
    except (ValueError, KeyError, yaml.YAMLError) as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning("%s: %s", warning.field, warning.message)
    if not validation.valid:
        for error in validation.critical_errors:
            logger.error("%s: %s", error.field, error.message)
        return 2

    orchestrator = Orchestrator(config)

    if args.command != "risk":
        if getattr(args, "min_magnitude", None) is not None:
            orchestrator.filter_by_magnitude(args.min_magnitude)

        result = orchestrator.refresh()
        if not result.success:
            for error in result.errors:
                print(f"Error: {error}", file=sys.stderr)
            return 1

    return COMMANDS[args.command](orchestrator, args)


if __name__ == "__main__":
    sys.exit(main())
