"""Personalization logic - Pure functions.

Monitored locations, the mocked risk level for a location, and the
shaking simulation. Storage of preferences and delivery of notifications
are handled outside the core.
"""

import math
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from quakeview.core.earthquake import Coordinate, EarthquakeRecord
from quakeview.core.geo import calculate_distance
from quakeview.core.magnitude import effective_magnitude
from quakeview.core.noise import RiskLevel, SeededRandomGenerator


DEFAULT_MAGNITUDE_THRESHOLD = 4.0

# Ankara, used until a device location is known
DEFAULT_USER_LOCATION = Coordinate(latitude=39.9334, longitude=32.8597)

SIMULATION_DURATION_SECONDS = 15.0
SIMULATION_NOISE_AMPLITUDE = 0.3


@dataclass(frozen=True)
class MonitoredLocation:
    """A user-chosen place to watch for nearby earthquakes.

    Attributes:
        name: Human-readable name (e.g., "Home")
        latitude: Location latitude
        longitude: Location longitude
        notification_threshold: Minimum magnitude of interest
        id: Generated identifier
    """
    name: str
    latitude: float
    longitude: float
    notification_threshold: float = DEFAULT_MAGNITUDE_THRESHOLD
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


def add_monitored_location(
    locations: Sequence[MonitoredLocation],
    name: str,
    coordinate: Coordinate | None,
    threshold: float = DEFAULT_MAGNITUDE_THRESHOLD,
) -> tuple[MonitoredLocation, ...]:
    """Append a monitored location.

    Pure function. Nothing is added if the name is blank or the
    coordinate is missing.

    Returns:
        New tuple of locations
    """
    if not name.strip() or coordinate is None:
        return tuple(locations)

    location = MonitoredLocation(
        name=name,
        latitude=coordinate.latitude,
        longitude=coordinate.longitude,
        notification_threshold=threshold,
    )
    return (*locations, location)


def remove_monitored_location(
    locations: Sequence[MonitoredLocation],
    index: int,
) -> tuple[MonitoredLocation, ...]:
    """Remove the location at index. Out-of-range indexes are ignored."""
    if not 0 <= index < len(locations):
        return tuple(locations)
    return (*locations[:index], *locations[index + 1:])


def events_near_location(
    records: Iterable[EarthquakeRecord],
    location: MonitoredLocation,
    radius_km: float,
) -> list[EarthquakeRecord]:
    """Find records worth notifying about for a monitored location.

    Pure function. A record qualifies when it is mappable, lies within
    radius_km of the location, and its effective magnitude reaches the
    location's notification threshold.

    Args:
        records: Records to check
        location: Monitored location
        radius_km: Proximity radius in kilometers

    Returns:
        Qualifying records in input order
    """
    nearby = []

    for record in records:
        coordinate = record.coordinate
        if coordinate is None:
            continue

        if effective_magnitude(record) < location.notification_threshold:
            continue

        distance = calculate_distance(
            coordinate.latitude,
            coordinate.longitude,
            location.latitude,
            location.longitude,
        )
        if distance <= radius_km:
            nearby.append(record)

    return nearby


def mock_risk_level(coordinate: Coordinate) -> RiskLevel:
    """Derive a placeholder risk level from the latitude.

    Pure function. There is no real risk model behind this; it only
    needs to be stable for a given location.
    """
    bucket = math.fmod(abs(coordinate.latitude * 1000), 3)
    if bucket < 1:
        return RiskLevel.LOW
    elif bucket < 2:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


class SimulationEffect(Enum):
    """Felt effect of a simulated earthquake."""
    LIGHT = "light"
    MODERATE = "moderate"
    STRONG = "strong"
    SEVERE = "severe"

    @property
    def description(self) -> str:
        return _EFFECT_DESCRIPTIONS[self]


_EFFECT_DESCRIPTIONS = {
    SimulationEffect.LIGHT: "Light shaking, hanging objects may swing.",
    SimulationEffect.MODERATE: "Moderate shaking, furniture may move.",
    SimulationEffect.STRONG: (
        "Strong shaking, standing becomes difficult and objects may fall."
    ),
    SimulationEffect.SEVERE: (
        "Violent shaking, standing is impossible and structural damage may occur."
    ),
}


def simulation_effect(magnitude: float) -> SimulationEffect:
    if magnitude >= 7.0:
        return SimulationEffect.SEVERE
    elif magnitude >= 5.0:
        return SimulationEffect.STRONG
    elif magnitude >= 4.0:
        return SimulationEffect.MODERATE
    return SimulationEffect.LIGHT


def simulation_intensity(magnitude: float, elapsed: float, noise: float) -> float:
    """Shaking intensity at a point in time.

    Pure function. A sine wave whose frequency and amplitude grow with
    magnitude, perturbed by noise and decaying quadratically to zero at
    the end of the simulation.

    Args:
        magnitude: Simulated magnitude
        elapsed: Seconds since the simulation started
        noise: Random perturbation, normally in [-0.3, 0.3]

    Returns:
        Signed intensity; 0.0 outside the simulation window
    """
    if elapsed < 0 or elapsed > SIMULATION_DURATION_SECONDS:
        return 0.0

    max_intensity = magnitude / 10.0 * 2.0
    base_frequency = 0.5 + (magnitude - 3.0) * 0.3
    progress = elapsed / SIMULATION_DURATION_SECONDS

    wave = math.sin(elapsed * base_frequency * 2 * math.pi)
    time_decay = 1.0 - progress ** 2

    return (wave + noise) * max_intensity * time_decay


def simulation_series(
    magnitude: float,
    seed: int,
    step: float = 0.1,
) -> list[float]:
    """Sample the whole simulation at a fixed step.

    Pure function. Noise comes from a seeded generator so the series is
    reproducible.

    Raises:
        ValueError: If step is not positive
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    generator = SeededRandomGenerator(seed)
    samples = round(SIMULATION_DURATION_SECONDS / step) + 1

    series = []
    for i in range(samples):
        noise = generator.uniform(-SIMULATION_NOISE_AMPLITUDE, SIMULATION_NOISE_AMPLITUDE)
        series.append(simulation_intensity(magnitude, i * step, noise))

    return series
