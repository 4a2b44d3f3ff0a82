"""Magnitude resolution - Pure functions.

The feed reports up to three magnitude scales per event. A single
effective magnitude is chosen by fixed precedence, not by averaging.
A reading of 0 or a blank/non-numeric value means "not reported".
"""

from quakeview.core.earthquake import EarthquakeRecord, parse_number


# Precedence: local, then moment, then duration
SCALE_PRECEDENCE = (
    ("ML", "ml"),
    ("MW", "mw"),
    ("MD", "md"),
)


def _resolve(record: EarthquakeRecord) -> tuple[str, float] | None:
    """Return (scale, value) for the first scale reporting a positive value."""
    for scale, attr in SCALE_PRECEDENCE:
        value = parse_number(getattr(record, attr))
        if value is not None and value > 0:
            return scale, value
    return None


def effective_magnitude(record: EarthquakeRecord) -> float:
    """Get the single display magnitude for a record.

    Pure function.

    Args:
        record: Earthquake record

    Returns:
        First of ML, MW, MD that parses to a number > 0, else 0.0
    """
    resolved = _resolve(record)
    if resolved is None:
        return 0.0
    return resolved[1]


def magnitude_scale(record: EarthquakeRecord) -> str | None:
    """Get which scale supplied the effective magnitude.

    Pure function.

    Returns:
        "ML", "MW", "MD", or None if no scale reported a value
    """
    resolved = _resolve(record)
    if resolved is None:
        return None
    return resolved[0]


def format_magnitude(record: EarthquakeRecord) -> str:
    """Format the effective magnitude to one decimal, or "N/A"."""
    resolved = _resolve(record)
    if resolved is None:
        return "N/A"
    return f"{resolved[1]:.1f}"
