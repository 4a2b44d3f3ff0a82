"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components. It owns the state of one
viewing session: the current record set, the query settings, the
selected earthquake and the monitored locations.
"""

import logging
from dataclasses import dataclass

import requests

from quakeview.core.config import Config
from quakeview.core.earthquake import Coordinate, EarthquakeRecord, parse_records
from quakeview.core.geo import (
    Annotation,
    Span,
    build_annotations,
    center_coordinate,
    initial_span,
)
from quakeview.core.noise import RiskLevel, risk_scatter
from quakeview.core.personalization import (
    MonitoredLocation,
    add_monitored_location,
    events_near_location,
    mock_risk_level,
    remove_monitored_location,
)
from quakeview.core.query import QueryEngine, QueryState, SortOrder
from quakeview.shell.feed_client import FeedClient, FeedFormatError


logger = logging.getLogger(__name__)


@dataclass
class RefreshResult:
    """Result of one fetch-and-recompute cycle.

    Attributes:
        records_fetched: Raw records returned by the feed
        records_parsed: Records that parsed and replaced the working set
        records_rejected: Malformed records that were dropped
        errors: Any errors that occurred
    """
    records_fetched: int
    records_parsed: int
    records_rejected: int
    errors: list[str]

    @property
    def success(self) -> bool:
        """Returns True if the fetch itself succeeded."""
        return len(self.errors) == 0

    @property
    def summary(self) -> str:
        """Human-readable summary of the refresh."""
        return (
            f"Fetched {self.records_fetched} records, "
            f"{self.records_parsed} parsed, "
            f"{self.records_rejected} rejected"
        )


@dataclass(frozen=True)
class RiskAssessment:
    """Mocked risk view for a location.

    Attributes:
        location: Assessed location
        level: Risk category
        points: Deterministic scatter around the location
    """
    location: Coordinate
    level: RiskLevel
    points: list[Coordinate]


class Orchestrator:
    """Coordinates fetching, querying and map projection.

    This class wires together:
    - Feed client (fetches raw records)
    - Core functions (parsing, query, annotations, personalization)

    A refresh always replaces the whole working set before the query is
    re-applied. A failed refresh leaves the previous working set intact.
    """

    def __init__(
        self,
        config: Config,
        feed_client: FeedClient | None = None,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            feed_client: Feed client (created if not provided)
        """
        self.config = config
        self.feed_client = feed_client or FeedClient(
            url=config.feed_url,
            timeout=config.request_timeout_seconds,
        )
        self.engine = QueryEngine(state=QueryState(
            min_magnitude=config.min_magnitude,
            sort_order=config.sort_order,
        ))
        self.monitored_locations: tuple[MonitoredLocation, ...] = tuple(
            config.monitored_locations
        )
        self._selected: EarthquakeRecord | None = None

    def refresh(self) -> RefreshResult:
        """Fetch a new batch and recompute the view.

        Malformed records are dropped; the rest of the batch is kept.

        Returns:
            RefreshResult describing what happened
        """
        try:
            raw_records = self.feed_client.fetch_raw_records()
        except (requests.RequestException, FeedFormatError) as e:
            logger.error("Failed to fetch earthquakes: %s", e)
            return RefreshResult(
                records_fetched=0,
                records_parsed=0,
                records_rejected=0,
                errors=[f"Failed to fetch earthquakes: {e}"],
            )

        # Pure core function
        result = parse_records(raw_records)

        for rejected in result.rejected:
            logger.warning(
                "Dropped malformed record at index %d: %s",
                rejected.index,
                rejected.reason,
            )

        self.engine.replace_records(result.records)

        refresh_result = RefreshResult(
            records_fetched=len(raw_records),
            records_parsed=len(result.records),
            records_rejected=len(result.rejected),
            errors=[],
        )
        logger.info("Refresh complete: %s", refresh_result.summary)

        return refresh_result

    @property
    def earthquakes(self) -> tuple[EarthquakeRecord, ...]:
        """The filtered and sorted list view."""
        return self.engine.results

    @property
    def query_state(self) -> QueryState:
        return self.engine.state

    def filter_by_magnitude(self, min_magnitude: float) -> None:
        self.engine.filter_by_magnitude(min_magnitude)

    def sort_by_date(self) -> None:
        self.engine.sort_by_date()

    def sort_by_magnitude(self) -> None:
        self.engine.sort_by_magnitude()

    def set_sort_order(self, order: SortOrder) -> None:
        if order is SortOrder.MAGNITUDE:
            self.sort_by_magnitude()
        else:
            self.sort_by_date()

    @property
    def selected(self) -> EarthquakeRecord | None:
        return self._selected

    def select(self, target: Annotation | EarthquakeRecord) -> None:
        """Select an earthquake by annotation or record."""
        if isinstance(target, Annotation):
            target = target.record
        self._selected = target

    def clear_selection(self) -> None:
        self._selected = None

    def annotations(self) -> list[Annotation]:
        """Map annotations for the current view, with selection applied."""
        return build_annotations(self.earthquakes, self._selected)

    def center_coordinate(self) -> Coordinate:
        return center_coordinate(self.earthquakes, self.config.fallback_center)

    def initial_span(self) -> Span:
        return initial_span(self.earthquakes)

    def assess_risk(
        self,
        location: Coordinate | None = None,
        level: RiskLevel | None = None,
    ) -> RiskAssessment:
        """Build the mocked risk view for a location.

        Args:
            location: Location to assess (defaults to the configured user location)
            level: Risk category to use instead of the mocked one

        Returns:
            RiskAssessment with a deterministic scatter
        """
        if location is None:
            location = self.config.user_location
        if level is None:
            level = mock_risk_level(location)
        points = risk_scatter(location, level, self.config.risk_radius_degrees)

        logger.debug(
            "Risk for %.4f,%.4f: %s (%d points)",
            location.latitude,
            location.longitude,
            level.value,
            len(points),
        )

        return RiskAssessment(location=location, level=level, points=points)

    def add_monitored_location(
        self,
        name: str,
        coordinate: Coordinate | None,
        threshold: float | None = None,
    ) -> bool:
        """Add a monitored location.

        Returns:
            True if the location was added
        """
        if threshold is None:
            threshold = self.config.magnitude_threshold

        before = len(self.monitored_locations)
        self.monitored_locations = add_monitored_location(
            self.monitored_locations, name, coordinate, threshold,
        )
        return len(self.monitored_locations) > before

    def remove_monitored_location(self, index: int) -> bool:
        """Remove a monitored location by index.

        Returns:
            True if a location was removed
        """
        before = len(self.monitored_locations)
        self.monitored_locations = remove_monitored_location(
            self.monitored_locations, index,
        )
        return len(self.monitored_locations) < before

    def nearby_events(self) -> list[tuple[MonitoredLocation, list[EarthquakeRecord]]]:
        """Records of interest for each monitored location.

        Uses the full record set, not the filtered view; each location
        applies its own threshold.
        """
        return [
            (
                location,
                events_near_location(
                    self.engine.records,
                    location,
                    self.config.monitored_radius_km,
                ),
            )
            for location in self.monitored_locations
        ]
