"""Unit tests for magnitude resolution.

Pure function tests - no mocks needed, fast execution.
"""

import pytest

from quakeview.core.earthquake import EarthquakeRecord
from quakeview.core.magnitude import (
    effective_magnitude,
    format_magnitude,
    magnitude_scale,
)


def make_record(ml: str = "", mw: str = "", md: str = "") -> EarthquakeRecord:
    """Create a record with only magnitude fields set."""
    return EarthquakeRecord(
        date="", time="", latitude="", longitude="", depth_km="",
        md=md, ml=ml, mw=mw, location="",
    )


class TestEffectiveMagnitude:
    """Tests for effective_magnitude() precedence rules."""

    def test_prefers_local_magnitude(self):
        """ML wins over MW and MD."""
        assert effective_magnitude(make_record(ml="3.4", mw="3.3", md="3.2")) == 3.4

    def test_zero_local_falls_through_to_moment(self):
        """A reported 0 is treated as not reported."""
        assert effective_magnitude(make_record(ml="0", mw="5.1", md="2.0")) == 5.1

    def test_falls_through_to_duration(self):
        assert effective_magnitude(make_record(md="4.8")) == 4.8

    def test_only_moment(self):
        assert effective_magnitude(make_record(mw="6.2")) == 6.2

    def test_all_blank_is_zero(self):
        assert effective_magnitude(make_record()) == 0.0

    def test_non_numeric_is_skipped(self):
        assert effective_magnitude(make_record(ml="-.-", mw="abc", md="2.5")) == 2.5

    def test_negative_is_skipped(self):
        assert effective_magnitude(make_record(ml="-1.0", mw="3.0")) == 3.0

    @pytest.mark.parametrize("ml,mw,md", [
        ("", "", ""),
        ("0", "0.0", "0"),
        ("x", "-2", ""),
    ])
    def test_never_negative(self, ml, mw, md):
        assert effective_magnitude(make_record(ml=ml, mw=mw, md=md)) >= 0


class TestMagnitudeScale:
    """Tests for magnitude_scale()."""

    def test_reports_winning_scale(self):
        assert magnitude_scale(make_record(ml="3.4", mw="3.3")) == "ML"
        assert magnitude_scale(make_record(ml="0", mw="3.3")) == "MW"
        assert magnitude_scale(make_record(md="2.1")) == "MD"

    def test_none_when_unreported(self):
        assert magnitude_scale(make_record()) is None


class TestFormatMagnitude:
    """Tests for format_magnitude()."""

    def test_one_decimal(self):
        assert format_magnitude(make_record(ml="4.56")) == "4.6"

    def test_not_available(self):
        assert format_magnitude(make_record()) == "N/A"
