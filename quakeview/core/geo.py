"""Geographic calculations and map annotations - Pure functions.

This module turns records into map-plottable annotations and computes
the initial map viewport. Records whose coordinates don't parse are
left out of the map but stay in the list view.
All functions are pure with no side effects.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from quakeview.core.earthquake import Coordinate, EarthquakeRecord
from quakeview.core.formatter import format_annotation_subtitle


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0

# Country centroid used when nothing is mappable
DEFAULT_CENTER = Coordinate(latitude=39.0, longitude=35.0)

# Roughly 11 m at the equator
MATCH_TOLERANCE_DEGREES = 1e-4

MIN_SPAN_DEGREES = 5.0
SPAN_PADDING = 1.5


@dataclass(frozen=True)
class Span:
    """Map viewport size in degrees.

    Attributes:
        latitude_delta: North-south extent
        longitude_delta: East-west extent
    """
    latitude_delta: float
    longitude_delta: float


DEFAULT_SPAN = Span(latitude_delta=10.0, longitude_delta=10.0)


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def matches(a: EarthquakeRecord, b: EarthquakeRecord) -> bool:
    """Check whether two records describe the same event.

    Pure function. The feed has no stable id across fetches, so:
    - if both records are mappable, they match when both axes differ
      by less than MATCH_TOLERANCE_DEGREES;
    - otherwise they match on exact (date, time, location).

    Args:
        a: First record
        b: Second record

    Returns:
        True if the records match
    """
    coord_a = a.coordinate
    coord_b = b.coordinate

    if coord_a is not None and coord_b is not None:
        return (
            abs(coord_a.latitude - coord_b.latitude) < MATCH_TOLERANCE_DEGREES
            and abs(coord_a.longitude - coord_b.longitude) < MATCH_TOLERANCE_DEGREES
        )

    return (a.date, a.time, a.location) == (b.date, b.time, b.location)


@dataclass(frozen=True)
class Annotation:
    """A map-plottable projection of a record.

    Attributes:
        coordinate: Where to plot the record
        record: Source record
        is_selected: Whether this annotation matches the current selection
    """
    coordinate: Coordinate
    record: EarthquakeRecord
    is_selected: bool = False

    @property
    def title(self) -> str:
        return self.record.location

    @property
    def subtitle(self) -> str:
        return format_annotation_subtitle(self.record)

    def matches(self, record: EarthquakeRecord) -> bool:
        """Check whether this annotation's record matches another record."""
        return matches(self.record, record)


def build_annotations(
    records: Iterable[EarthquakeRecord],
    selected: EarthquakeRecord | None = None,
) -> list[Annotation]:
    """Build map annotations for mappable records.

    Pure function. Unmappable records are skipped silently.

    Args:
        records: Records to plot (usually the filtered view)
        selected: Currently selected record, if any

    Returns:
        Annotations in record order
    """
    annotations = []

    for record in records:
        coordinate = record.coordinate
        if coordinate is None:
            continue

        is_selected = selected is not None and matches(record, selected)
        annotations.append(Annotation(
            coordinate=coordinate,
            record=record,
            is_selected=is_selected,
        ))

    return annotations


def mappable_coordinates(records: Iterable[EarthquakeRecord]) -> list[Coordinate]:
    """Extract coordinates of all mappable records, in order."""
    return [c for c in (r.coordinate for r in records) if c is not None]


def bounding_box(coordinates: Iterable[Coordinate]) -> BoundingBox | None:
    """Compute the smallest box containing all coordinates.

    Pure function.

    Returns:
        BoundingBox, or None if there are no coordinates
    """
    coords = list(coordinates)
    if not coords:
        return None

    latitudes = [c.latitude for c in coords]
    longitudes = [c.longitude for c in coords]

    return BoundingBox(
        min_latitude=min(latitudes),
        max_latitude=max(latitudes),
        min_longitude=min(longitudes),
        max_longitude=max(longitudes),
    )


def center_coordinate(
    records: Iterable[EarthquakeRecord],
    fallback: Coordinate = DEFAULT_CENTER,
) -> Coordinate:
    """Get the map center: the first mappable record, else the fallback.

    Pure function.
    """
    for record in records:
        coordinate = record.coordinate
        if coordinate is not None:
            return coordinate
    return fallback


def initial_span(records: Iterable[EarthquakeRecord]) -> Span:
    """Compute the initial map viewport.

    Pure function. With fewer than two mappable records the default
    10x10 degree span is used. Otherwise the bounding box is padded by
    SPAN_PADDING and each axis is floored at MIN_SPAN_DEGREES, so a tight
    cluster never zooms in too far.

    Args:
        records: Records on the map

    Returns:
        Span in degrees
    """
    coords = mappable_coordinates(records)
    if len(coords) < 2:
        return DEFAULT_SPAN

    box = bounding_box(coords)
    latitude_delta = (box.max_latitude - box.min_latitude) * SPAN_PADDING
    longitude_delta = (box.max_longitude - box.min_longitude) * SPAN_PADDING

    return Span(
        latitude_delta=max(MIN_SPAN_DEGREES, latitude_delta),
        longitude_delta=max(MIN_SPAN_DEGREES, longitude_delta),
    )
