"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config) are defined in quakeview/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from quakeview.core.config import DEFAULT_FEED_URL, Config
from quakeview.core.earthquake import Coordinate
from quakeview.core.geo import DEFAULT_CENTER
from quakeview.core.noise import DEFAULT_RISK_RADIUS_DEGREES
from quakeview.core.personalization import (
    DEFAULT_MAGNITUDE_THRESHOLD,
    DEFAULT_USER_LOCATION,
    MonitoredLocation,
)
from quakeview.core.query import SortOrder


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place (validate_config warns).

    Args:
        value: Value to resolve

    Returns:
        Resolved value
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_coordinate(data: dict[str, Any], default: Coordinate) -> Coordinate:
    """Parse a {latitude, longitude} mapping, falling back to default."""
    if not data:
        return default
    return Coordinate(
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
    )


def _parse_monitored_location(
    data: dict[str, Any],
    default_threshold: float,
) -> MonitoredLocation:
    """Parse a monitored location from config data."""
    return MonitoredLocation(
        name=data["name"],
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
        notification_threshold=float(
            data.get("notification_threshold", default_threshold)
        ),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object

    Raises:
        ValueError: If sort_order is not recognised
        KeyError: If a monitored location or coordinate lacks a key
    """
    threshold = float(data.get("magnitude_threshold", DEFAULT_MAGNITUDE_THRESHOLD))

    locations = [
        _parse_monitored_location(loc, threshold)
        for loc in data.get("monitored_locations") or []
    ]

    return Config(
        feed_url=_resolve_value(data.get("feed_url", DEFAULT_FEED_URL)),
        request_timeout_seconds=int(data.get("request_timeout_seconds", 30)),
        min_magnitude=float(data.get("min_magnitude", 0.0)),
        sort_order=SortOrder.parse(str(data.get("sort_order", "time"))),
        fallback_center=_parse_coordinate(data.get("fallback_center"), DEFAULT_CENTER),
        user_location=_parse_coordinate(data.get("user_location"), DEFAULT_USER_LOCATION),
        magnitude_threshold=threshold,
        risk_radius_degrees=float(
            data.get("risk_radius_degrees", DEFAULT_RISK_RADIUS_DEGREES)
        ),
        monitored_radius_km=float(data.get("monitored_radius_km", 100.0)),
        monitored_locations=locations,
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
        ValueError: If the top level of the file is not a mapping
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    if not isinstance(data, dict):
        raise ValueError(
            f"Config file must contain a mapping, got {type(data).__name__}",
        )

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: feed %s, %d monitored locations",
        config.feed_url,
        len(config.monitored_locations),
    )

    return config


def load_config_from_env() -> Config:
    """Load minimal configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        FEED_URL: Earthquake feed URL
        REQUEST_TIMEOUT: Feed request timeout in seconds
        MIN_MAGNITUDE: Initial minimum magnitude filter
        SORT_ORDER: "time" or "magnitude"

    Returns:
        Config object from environment
    """
    return Config(
        feed_url=os.environ.get("FEED_URL", DEFAULT_FEED_URL),
        request_timeout_seconds=int(os.environ.get("REQUEST_TIMEOUT", "30")),
        min_magnitude=float(os.environ.get("MIN_MAGNITUDE", "0")),
        sort_order=SortOrder.parse(os.environ.get("SORT_ORDER", "time")),
    )
