"""Text formatting for list rows and map callouts - Pure functions."""

from quakeview.core.earthquake import EARLIEST, EarthquakeRecord
from quakeview.core.magnitude import format_magnitude


def format_occurred_at(record: EarthquakeRecord) -> str:
    """Format the event timestamp, or "Unknown time" if unparsable."""
    occurred_at = record.occurred_at
    if occurred_at == EARLIEST:
        return "Unknown time"
    return occurred_at.strftime("%Y-%m-%d %H:%M:%S")


def format_annotation_subtitle(record: EarthquakeRecord) -> str:
    """Format the map callout subtitle.

    Pure function. Depth is shown as reported by the feed.

    Example:
        "Magnitude: 4.5 - Depth: 10.0 km"
    """
    return f"Magnitude: {format_magnitude(record)} - Depth: {record.depth_km} km"


def format_record_summary(record: EarthquakeRecord) -> str:
    """Format a one-line summary for the list view.

    Pure function.

    Example:
        "M4.5 | 2024-01-01 10:00:00 | Istanbul"
    """
    return (
        f"M{format_magnitude(record)} | "
        f"{format_occurred_at(record)} | "
        f"{record.location}"
    )
