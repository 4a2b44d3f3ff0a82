"""Unit tests for filtering and sorting.

Pure function tests - no mocks needed, fast execution.
"""

import pytest

from quakeview.core.earthquake import EarthquakeRecord
from quakeview.core.query import (
    QueryEngine,
    QueryState,
    SortOrder,
    apply_query,
    filter_by_magnitude,
    sort_records,
)


def make_record(
    location: str,
    ml: str = "",
    date: str = "2024.01.01",
    time: str = "10:00:00",
) -> EarthquakeRecord:
    """Create a record with the fields that matter for queries."""
    return EarthquakeRecord(
        date=date, time=time, latitude="39.0", longitude="35.0", depth_km="7.0",
        md="", ml=ml, mw="", location=location,
    )


@pytest.fixture
def high_and_low():
    """Two records with magnitudes 5.5 and 3.5."""
    return [
        make_record("Low", ml="3.5", date="2024.01.02"),
        make_record("High", ml="5.5", date="2024.01.01"),
    ]


class TestSortOrderParse:
    """Tests for SortOrder.parse()."""

    @pytest.mark.parametrize("text,expected", [
        ("time", SortOrder.TIME),
        ("date", SortOrder.TIME),
        ("Magnitude", SortOrder.MAGNITUDE),
        (" TIME ", SortOrder.TIME),
    ])
    def test_parses_names(self, text, expected):
        assert SortOrder.parse(text) is expected

    def test_rejects_unknown(self):
        with pytest.raises(ValueError):
            SortOrder.parse("depth")


class TestFilterByMagnitude:
    """Tests for filter_by_magnitude()."""

    def test_filters_below_minimum(self, high_and_low):
        result = filter_by_magnitude(high_and_low, 4.0)
        assert [r.location for r in result] == ["High"]

    def test_boundary_is_inclusive(self):
        records = [make_record("Exact", ml="4.0")]
        assert len(filter_by_magnitude(records, 4.0)) == 1

    def test_zero_keeps_unreported(self):
        """Records with no magnitude resolve to 0 and pass a 0 filter."""
        records = [make_record("None")]
        assert len(filter_by_magnitude(records, 0.0)) == 1

    def test_empty_input(self):
        assert filter_by_magnitude([], 3.0) == []


class TestSortRecords:
    """Tests for sort_records()."""

    def test_time_sort_newest_first(self):
        older = make_record("Older", date="2024-01-01", time="10:00:00")
        newer = make_record("Newer", date="2024-01-02", time="11:00:00")

        result = sort_records([older, newer], SortOrder.TIME)

        assert [r.location for r in result] == ["Newer", "Older"]

    def test_time_sort_uses_time_of_day(self):
        morning = make_record("Morning", time="08:00:00")
        evening = make_record("Evening", time="20:00:00")

        result = sort_records([morning, evening], SortOrder.TIME)

        assert [r.location for r in result] == ["Evening", "Morning"]

    def test_unparsable_timestamp_sorts_last(self):
        broken = make_record("Broken", date="", time="")
        valid = make_record("Valid")

        result = sort_records([broken, valid], SortOrder.TIME)

        assert [r.location for r in result] == ["Valid", "Broken"]

    def test_time_sort_is_stable(self):
        records = [make_record(f"Same {i}") for i in range(5)]

        result = sort_records(records, SortOrder.TIME)

        assert [r.location for r in result] == [f"Same {i}" for i in range(5)]

    def test_magnitude_sort_largest_first(self):
        records = [
            make_record("Small", ml="2.0"),
            make_record("Big", ml="6.1"),
            make_record("Mid", ml="4.0"),
        ]

        result = sort_records(records, SortOrder.MAGNITUDE)

        assert [r.location for r in result] == ["Big", "Mid", "Small"]

    def test_magnitude_sort_is_stable(self):
        records = [
            make_record("A", ml="3.0"),
            make_record("B", ml="4.0"),
            make_record("C", ml="3.0"),
        ]

        result = sort_records(records, SortOrder.MAGNITUDE)

        assert [r.location for r in result] == ["B", "A", "C"]


class TestApplyQuery:
    """Tests for apply_query() filter + sort."""

    def test_filters_then_sorts(self, high_and_low):
        result = apply_query(high_and_low, 4.0, SortOrder.TIME)
        assert [r.location for r in result] == ["High"]

    def test_zero_minimum_keeps_all_sorted_by_magnitude(self, high_and_low):
        result = apply_query(high_and_low, 0.0, SortOrder.MAGNITUDE)
        assert [r.location for r in result] == ["High", "Low"]

    def test_zero_minimum_keeps_all_sorted_by_time(self, high_and_low):
        result = apply_query(high_and_low, 0.0, SortOrder.TIME)
        assert [r.location for r in result] == ["Low", "High"]

    def test_does_not_mutate_input(self, high_and_low):
        original = list(high_and_low)

        apply_query(high_and_low, 0.0, SortOrder.MAGNITUDE)

        assert high_and_low == original


class TestQueryEngine:
    """Tests for the stateful QueryEngine."""

    def test_defaults(self):
        engine = QueryEngine()

        assert engine.state == QueryState(min_magnitude=0.0, sort_order=SortOrder.TIME)
        assert engine.results == ()

    def test_filter_by_magnitude_updates_state_and_results(self, high_and_low):
        engine = QueryEngine(high_and_low)

        engine.filter_by_magnitude(4.0)

        assert engine.state.min_magnitude == 4.0
        assert [r.location for r in engine.results] == ["High"]

    def test_sort_changes_keep_filter(self, high_and_low):
        engine = QueryEngine(high_and_low + [make_record("Mid", ml="4.5")])
        engine.filter_by_magnitude(4.0)

        engine.sort_by_magnitude()
        assert [r.location for r in engine.results] == ["High", "Mid"]

        engine.sort_by_date()
        assert engine.state.sort_order is SortOrder.TIME
        assert {r.location for r in engine.results} == {"High", "Mid"}

    def test_replace_records_reapplies_query(self, high_and_low):
        engine = QueryEngine(high_and_low)
        engine.filter_by_magnitude(4.0)
        engine.sort_by_magnitude()

        engine.replace_records([
            make_record("Tiny", ml="1.0"),
            make_record("Large", ml="4.2"),
            make_record("Huge", ml="7.0"),
        ])

        assert [r.location for r in engine.results] == ["Huge", "Large"]
        assert len(engine.records) == 3

    def test_replace_drops_previous_records(self, high_and_low):
        engine = QueryEngine(high_and_low)

        engine.replace_records([])

        assert engine.records == ()
        assert engine.results == ()

    def test_filter_with_no_records(self):
        engine = QueryEngine()

        engine.filter_by_magnitude(3.0)

        assert engine.results == ()
        assert engine.state.min_magnitude == 3.0

    def test_initial_state(self, high_and_low):
        engine = QueryEngine(
            high_and_low,
            QueryState(min_magnitude=0.0, sort_order=SortOrder.MAGNITUDE),
        )
        assert [r.location for r in engine.results] == ["High", "Low"]
