"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Record parsing and encoding
- Magnitude resolution
- Filtering and sorting
- Map annotations and viewport
- Deterministic risk scatter
- Personalization (monitored locations, simulation)

All functions here are deterministic and have no I/O.
"""

from quakeview.core.earthquake import (
    Coordinate,
    EarthquakeRecord,
    MalformedRecord,
    ParseResult,
    encode_record,
    parse_record,
    parse_records,
)
from quakeview.core.magnitude import effective_magnitude
from quakeview.core.query import QueryEngine, QueryState, SortOrder, apply_query
from quakeview.core.geo import (
    Annotation,
    Span,
    build_annotations,
    center_coordinate,
    initial_span,
    matches,
)
from quakeview.core.noise import RiskLevel, SeededRandomGenerator, risk_scatter, scatter_points

__all__ = [
    # Records
    "Coordinate",
    "EarthquakeRecord",
    "MalformedRecord",
    "ParseResult",
    "encode_record",
    "parse_record",
    "parse_records",
    # Magnitude
    "effective_magnitude",
    # Query
    "QueryEngine",
    "QueryState",
    "SortOrder",
    "apply_query",
    # Geo
    "Annotation",
    "Span",
    "build_annotations",
    "center_coordinate",
    "initial_span",
    "matches",
    # Noise
    "RiskLevel",
    "SeededRandomGenerator",
    "risk_scatter",
    "scatter_points",
]
