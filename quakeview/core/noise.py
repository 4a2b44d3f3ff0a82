"""Deterministic noise for the risk visualization - Pure functions.

The risk scatter around a location must look identical every time it is
shown without being stored anywhere, so points come from a seeded
linear-congruential generator whose seed is derived from the location.
"""

import math
from collections.abc import Iterator
from enum import Enum

from quakeview.core.earthquake import Coordinate


LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MASK = 0x7FFFFFFF

DEFAULT_RISK_RADIUS_DEGREES = 0.05


class RiskLevel(Enum):
    """Mocked risk category for a location."""
    UNKNOWN = "unknown"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Points drawn per risk category
POINT_COUNTS = {
    RiskLevel.HIGH: 40,
    RiskLevel.MEDIUM: 25,
    RiskLevel.LOW: 15,
    RiskLevel.UNKNOWN: 10,
}


class SeededRandomGenerator:
    """Reproducible stream of values in [0, 1).

    seed = (seed * 1103515245 + 12345) & 0x7FFFFFFF
    value = seed / 0x7FFFFFFF

    The same seed always yields the same sequence.
    """

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)

    def next_double(self) -> float:
        """Advance the generator and return the next value."""
        self.seed = (self.seed * LCG_MULTIPLIER + LCG_INCREMENT) & LCG_MASK
        return self.seed / LCG_MASK

    def uniform(self, low: float, high: float) -> float:
        """Next value mapped from [0, 1) onto [low, high)."""
        return low + self.next_double() * (high - low)

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self.next_double()


def seed_for_location(center: Coordinate) -> int:
    """Derive the generator seed for a location.

    Pure function. floor(lat * 1000) + floor(lon * 1000).
    """
    return math.floor(center.latitude * 1000) + math.floor(center.longitude * 1000)


def scatter_points(
    center: Coordinate,
    radius_degrees: float,
    count: int,
    seed: int | None = None,
) -> list[Coordinate]:
    """Generate reproducible points scattered around a center.

    Pure function. For each point two values are drawn and mapped to
    [-radius, +radius), offsetting latitude then longitude.

    Args:
        center: Center of the scatter
        radius_degrees: Maximum offset on each axis
        count: Number of points
        seed: Generator seed (defaults to seed_for_location(center))

    Returns:
        List of count coordinates

    Raises:
        ValueError: If count is negative
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    if seed is None:
        seed = seed_for_location(center)
    generator = SeededRandomGenerator(seed)

    points = []
    for _ in range(count):
        lat_offset = generator.uniform(-radius_degrees, radius_degrees)
        lon_offset = generator.uniform(-radius_degrees, radius_degrees)
        points.append(Coordinate(
            latitude=center.latitude + lat_offset,
            longitude=center.longitude + lon_offset,
        ))

    return points


def point_count(level: RiskLevel) -> int:
    """Number of scatter points for a risk category."""
    return POINT_COUNTS[level]


def risk_scatter(
    center: Coordinate,
    level: RiskLevel,
    radius_degrees: float = DEFAULT_RISK_RADIUS_DEGREES,
) -> list[Coordinate]:
    """Generate the risk-area scatter for a location and risk category.

    Pure function.
    """
    return scatter_points(center, radius_degrees, point_count(level))
