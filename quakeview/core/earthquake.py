"""Earthquake records and parsing - Pure functions.

This module handles parsing raw feed records into typed EarthquakeRecord
objects. The feed transmits every value as a JSON string, so numeric
coercion is deferred until a number is actually needed.
All functions are pure with no side effects.
"""

import json
import math
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


# Wire order of the nine textual fields
REQUIRED_FIELDS = (
    "date",
    "time",
    "latitude",
    "longitude",
    "depth_km",
    "md",
    "ml",
    "mw",
    "location",
)

# Feed timestamps are "yyyy.MM.dd" + "HH:mm:ss"; the hyphenated form also appears
TIMESTAMP_FORMATS = (
    "%Y.%m.%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
)

# Malformed timestamps resolve here so they sort last under newest-first order
EARLIEST = datetime.min


class MalformedRecord(ValueError):
    """Raised when a raw record is missing a field or has a mistyped one.

    Attributes:
        field: Name of the offending field (None if the record itself is invalid)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class Coordinate:
    """A point in decimal degrees."""
    latitude: float
    longitude: float


def parse_number(text: Any) -> float | None:
    """Coerce feed text to a float.

    Pure function. Blank, non-numeric and non-finite values are treated
    as absent rather than raising.

    Args:
        text: Raw field value

    Returns:
        Parsed float or None
    """
    if not isinstance(text, str):
        return None

    # Padded or underscore-grouped text is not a number here, though float() accepts it
    if text != text.strip() or "_" in text:
        return None

    try:
        value = float(text)
    except ValueError:
        return None

    if not math.isfinite(value):
        return None

    return value


def parse_occurred_at(date: str, time: str) -> datetime:
    """Compose a timestamp from the feed's date and time strings.

    Pure function.

    Args:
        date: Date component, e.g. "2024.01.02"
        time: Time component, e.g. "11:00:00"

    Returns:
        Parsed datetime, or EARLIEST if the pair cannot be parsed
    """
    combined = f"{date} {time}"

    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(combined, fmt)
        except ValueError:
            continue

    return EARLIEST


@dataclass(frozen=True)
class EarthquakeRecord:
    """Immutable earthquake observation from the feed.

    The nine source fields are kept verbatim as text. Identity is
    per-observation: every record gets a fresh id, so two records with
    identical content are still distinct.

    Attributes:
        date: Date component ("yyyy.MM.dd")
        time: Time component ("HH:mm:ss")
        latitude: Epicenter latitude as text
        longitude: Epicenter longitude as text
        depth_km: Depth in kilometers as text
        md: Duration magnitude as text
        ml: Local magnitude as text
        mw: Moment magnitude as text
        location: Free-text place description
        id: Generated identifier (never encoded)
    """
    date: str
    time: str
    latitude: str
    longitude: str
    depth_km: str
    md: str
    ml: str
    mw: str
    location: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def occurred_at(self) -> datetime:
        """Event timestamp, EARLIEST if unparsable."""
        return parse_occurred_at(self.date, self.time)

    @property
    def latitude_value(self) -> float | None:
        return parse_number(self.latitude)

    @property
    def longitude_value(self) -> float | None:
        return parse_number(self.longitude)

    @property
    def depth_value(self) -> float | None:
        return parse_number(self.depth_km)

    @property
    def coordinate(self) -> Coordinate | None:
        """Epicenter coordinate, or None if the record is unmappable."""
        latitude = self.latitude_value
        longitude = self.longitude_value
        if latitude is None or longitude is None:
            return None
        return Coordinate(latitude=latitude, longitude=longitude)

    @property
    def is_mappable(self) -> bool:
        return self.coordinate is not None


@dataclass(frozen=True)
class RejectedRecord:
    """A raw record that failed to parse.

    Attributes:
        index: Position of the record in the raw batch
        reason: Why it was rejected
        field: Offending field, if known
    """
    index: int
    reason: str
    field: str | None = None


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing a batch of raw records.

    Attributes:
        records: Successfully parsed records, in feed order
        rejected: Records that failed to parse
    """
    records: tuple[EarthquakeRecord, ...]
    rejected: tuple[RejectedRecord, ...] = ()

    @property
    def ok(self) -> bool:
        """True if every raw record parsed."""
        return not self.rejected


def parse_record(raw: Any) -> EarthquakeRecord:
    """Parse a single raw feed record into an EarthquakeRecord.

    Pure function. All nine fields must be present and must be strings;
    no defaults are substituted. Extra keys are ignored.

    Args:
        raw: Mapping decoded from one JSON object of the feed

    Returns:
        EarthquakeRecord with a freshly generated id

    Raises:
        MalformedRecord: If the record is not a mapping, or a field is
            missing or not a string
    """
    if not isinstance(raw, Mapping):
        raise MalformedRecord(
            f"Expected an object, got {type(raw).__name__}",
        )

    values: dict[str, str] = {}
    for name in REQUIRED_FIELDS:
        if name not in raw:
            raise MalformedRecord(f"Missing field '{name}'", field=name)

        value = raw[name]
        if not isinstance(value, str):
            raise MalformedRecord(
                f"Field '{name}' must be a string, got {type(value).__name__}",
                field=name,
            )
        values[name] = value

    return EarthquakeRecord(**values)


def parse_records(raw_records: Iterable[Any]) -> ParseResult:
    """Parse a batch of raw records, collecting failures instead of raising.

    Pure function. Whether to drop rejected records or abort the whole
    batch is left to the caller.

    Args:
        raw_records: Raw records from one fetch

    Returns:
        ParseResult with parsed records and rejections
    """
    records = []
    rejected = []

    for index, raw in enumerate(raw_records):
        try:
            records.append(parse_record(raw))
        except MalformedRecord as e:
            rejected.append(RejectedRecord(index=index, reason=str(e), field=e.field))

    return ParseResult(records=tuple(records), rejected=tuple(rejected))


def decode_records(payload: str | bytes) -> list[EarthquakeRecord]:
    """Decode a JSON array document into records.

    Pure function. Strict: any malformed element fails the whole document.

    Args:
        payload: JSON text of the feed response

    Returns:
        Parsed records in document order

    Raises:
        MalformedRecord: On invalid JSON, a non-array document, or a
            malformed element
    """
    try:
        data = json.loads(payload)
    except ValueError as e:
        raise MalformedRecord(f"Invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedRecord(
            f"Expected a JSON array, got {type(data).__name__}",
        )

    return [parse_record(item) for item in data]


def encode_record(record: EarthquakeRecord) -> dict[str, str]:
    """Encode a record to its wire form.

    Pure function. Reproduces the nine textual fields verbatim; the
    generated id is not included.
    """
    return {name: getattr(record, name) for name in REQUIRED_FIELDS}


def encode_records(records: Iterable[EarthquakeRecord]) -> str:
    """Encode records as a JSON array document."""
    return json.dumps(
        [encode_record(r) for r in records],
        ensure_ascii=False,
    )
