"""Filtering and sorting of earthquake records - Pure functions.

Queries produce new ordered views over an immutable record set; the
source records are never mutated. Filtering and sorting are always
applied together so a view is never partially stale.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from enum import Enum

from quakeview.core.earthquake import EarthquakeRecord
from quakeview.core.magnitude import effective_magnitude


class SortOrder(Enum):
    """Order of the list view."""
    TIME = "time"
    MAGNITUDE = "magnitude"

    @classmethod
    def parse(cls, text: str) -> "SortOrder":
        """Parse a sort order name ("time"/"date" or "magnitude").

        Raises:
            ValueError: If the name is not recognised
        """
        normalized = text.strip().lower()
        if normalized in ("time", "date"):
            return cls.TIME
        if normalized == "magnitude":
            return cls.MAGNITUDE
        raise ValueError(f"Unknown sort order: {text!r}")


def filter_by_magnitude(
    records: Iterable[EarthquakeRecord],
    min_magnitude: float,
) -> list[EarthquakeRecord]:
    """Keep records whose effective magnitude is at least min_magnitude.

    Pure function. The boundary is inclusive.
    """
    return [r for r in records if effective_magnitude(r) >= min_magnitude]


def sort_records(
    records: Iterable[EarthquakeRecord],
    order: SortOrder,
) -> list[EarthquakeRecord]:
    """Sort records newest-first or largest-first.

    Pure function. Ties keep their original relative order. Records with
    unparsable timestamps sort to the end under TIME order.

    Args:
        records: Records to sort
        order: SortOrder.TIME or SortOrder.MAGNITUDE

    Returns:
        New sorted list
    """
    if order is SortOrder.MAGNITUDE:
        return sorted(records, key=effective_magnitude, reverse=True)

    # sorted() keeps ties stable even with reverse=True
    return sorted(records, key=lambda r: r.occurred_at, reverse=True)


def apply_query(
    records: Iterable[EarthquakeRecord],
    min_magnitude: float,
    order: SortOrder,
) -> list[EarthquakeRecord]:
    """Filter by minimum magnitude, then sort.

    Pure function.

    Args:
        records: Source records (not modified)
        min_magnitude: Minimum effective magnitude (inclusive)
        order: Sort order

    Returns:
        New ordered list of matching records
    """
    return sort_records(filter_by_magnitude(records, min_magnitude), order)


@dataclass(frozen=True)
class QueryState:
    """Last-applied query settings.

    Attributes:
        min_magnitude: Minimum effective magnitude (inclusive)
        sort_order: Order of the resulting view
    """
    min_magnitude: float = 0.0
    sort_order: SortOrder = SortOrder.TIME


class QueryEngine:
    """Holds a record set and the current query, and keeps the view in sync.

    Every change (new records, new filter, new sort) re-runs
    apply_query() over the full record set.
    """

    def __init__(
        self,
        records: Sequence[EarthquakeRecord] = (),
        state: QueryState | None = None,
    ) -> None:
        self._records: tuple[EarthquakeRecord, ...] = tuple(records)
        self._state = state or QueryState()
        self._results: tuple[EarthquakeRecord, ...] = ()
        self._recompute()

    @property
    def records(self) -> tuple[EarthquakeRecord, ...]:
        """The full, unfiltered record set."""
        return self._records

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def results(self) -> tuple[EarthquakeRecord, ...]:
        """The filtered and sorted view."""
        return self._results

    def _recompute(self) -> None:
        self._results = tuple(apply_query(
            self._records,
            self._state.min_magnitude,
            self._state.sort_order,
        ))

    def replace_records(self, records: Sequence[EarthquakeRecord]) -> None:
        """Replace the whole record set (a new fetch) and re-run the query."""
        self._records = tuple(records)
        self._recompute()

    def set_state(self, state: QueryState) -> None:
        self._state = state
        self._recompute()

    def filter_by_magnitude(self, min_magnitude: float) -> None:
        self.set_state(replace(self._state, min_magnitude=min_magnitude))

    def sort_by_date(self) -> None:
        self.set_state(replace(self._state, sort_order=SortOrder.TIME))

    def sort_by_magnitude(self) -> None:
        self.set_state(replace(self._state, sort_order=SortOrder.MAGNITUDE))
