"""Map marker styling - Pure functions.

Marker color, size and icon are derived from the effective magnitude.
Rendering is left to the map layer.
"""

from dataclasses import dataclass

from quakeview.core.earthquake import EarthquakeRecord
from quakeview.core.magnitude import effective_magnitude


@dataclass(frozen=True)
class MarkerStyle:
    """Visual parameters for one map marker.

    Attributes:
        color: Hex color for the marker
        scale: Size multiplier relative to the base marker
        icon: Symbol name for the marker glyph
    """
    color: str
    scale: float
    icon: str


def get_magnitude_color(magnitude: float) -> str:
    """Get hex color for magnitude visualization.

    Pure function.
    """
    if magnitude >= 6.0:
        return "#FF0000"  # red
    elif magnitude >= 5.0:
        return "#FF6600"  # dark orange
    elif magnitude >= 4.0:
        return "#E69900"  # orange
    elif magnitude >= 3.0:
        return "#CCCC00"  # yellow
    elif magnitude >= 2.0:
        return "#99CC00"  # lime
    return "#00B300"  # green


def get_marker_scale(magnitude: float) -> float:
    """Get marker size multiplier. Larger earthquakes get bigger markers."""
    if magnitude >= 6.0:
        return 1.4
    elif magnitude >= 5.0:
        return 1.2
    elif magnitude >= 4.0:
        return 1.1
    elif magnitude >= 3.0:
        return 1.0
    elif magnitude >= 2.0:
        return 0.9
    return 0.8


def get_marker_icon(magnitude: float) -> str:
    if magnitude >= 5.0:
        return "exclamationmark.triangle.fill"
    elif magnitude >= 4.0:
        return "exclamationmark"
    return "waveform.path.ecg"


def marker_style(record: EarthquakeRecord) -> MarkerStyle:
    """Get the full marker style for a record.

    Pure function.
    """
    magnitude = effective_magnitude(record)
    return MarkerStyle(
        color=get_magnitude_color(magnitude),
        scale=get_marker_scale(magnitude),
        icon=get_marker_icon(magnitude),
    )
