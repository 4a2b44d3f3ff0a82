"""Tests for the command-line entry point.

The feed client is mocked; configuration comes from a temporary file.
"""

import json
from unittest.mock import patch

import pytest
import requests

from quakeview.main import main


RECORDS = [
    {
        "date": "2024.01.01", "time": "10:00:00", "latitude": "39.0", "longitude": "35.0",
        "depth_km": "7.0", "md": "-.-", "ml": "3.1", "mw": "-.-", "location": "KAYSERI",
    },
    {
        "date": "2024.01.02", "time": "11:30:00", "latitude": "40.0", "longitude": "36.0",
        "depth_km": "12.3", "md": "-.-", "ml": "5.4", "mw": "-.-", "location": "SIVAS",
    },
]


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "feed_url: http://localhost:5001/earthquakes\n"
        "monitored_locations:\n"
        "  - name: Kayseri\n"
        "    latitude: 39.0\n"
        "    longitude: 35.0\n"
        "    notification_threshold: 3.0\n"
    )
    return str(path)


@pytest.fixture
def mock_feed():
    with patch("quakeview.orchestrator.FeedClient") as client_class:
        client_class.return_value.fetch_raw_records.return_value = RECORDS
        yield client_class.return_value


class TestListCommand:
    """Tests for `quakeview list`."""

    def test_prints_newest_first(self, config_file, mock_feed, capsys):
        assert main(["--config", config_file, "list"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "M5.4 | 2024-01-02 11:30:00 | SIVAS",
            "M3.1 | 2024-01-01 10:00:00 | KAYSERI",
        ]

    def test_filter_and_limit(self, config_file, mock_feed, capsys):
        main(["--config", config_file, "list", "--min-magnitude", "1", "--sort", "magnitude", "--limit", "1"])

        assert capsys.readouterr().out.splitlines() == ["M5.4 | 2024-01-02 11:30:00 | SIVAS"]

    def test_fetch_failure_exits_1(self, config_file, mock_feed, capsys):
        mock_feed.fetch_raw_records.side_effect = requests.ConnectionError("refused")

        assert main(["--config", config_file, "list"]) == 1
        assert "Failed to fetch" in capsys.readouterr().err


class TestMapCommand:
    """Tests for `quakeview map`."""

    def test_prints_annotations(self, config_file, mock_feed, capsys):
        assert main(["--config", config_file, "map"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["center"] == {"latitude": 40.0, "longitude": 36.0}
        assert [a["title"] for a in payload["annotations"]] == ["SIVAS", "KAYSERI"]
        assert payload["annotations"][0]["style"]["color"] == "#FF6600"


class TestRiskCommand:
    """Tests for `quakeview risk`."""

    def test_does_not_fetch(self, config_file, mock_feed, capsys):
        assert main(["--config", config_file, "risk", "--latitude", "2.0", "--longitude", "30.0"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["level"] == "high"
        assert len(payload["points"]) == 40
        mock_feed.fetch_raw_records.assert_not_called()

    def test_level_override(self, config_file, mock_feed, capsys):
        main(["--config", config_file, "risk", "--level", "unknown"])

        payload = json.loads(capsys.readouterr().out)
        assert payload["level"] == "unknown"
        assert len(payload["points"]) == 10

    @pytest.mark.parametrize("flags", [["--latitude", "2.0"], ["--longitude", "30.0"]])
    def test_coordinates_required_together(self, config_file, mock_feed, flags):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", config_file, "risk", *flags])

        assert exc_info.value.code == 2


class TestNearbyCommand:
    """Tests for `quakeview nearby`."""

    def test_lists_events_per_location(self, config_file, mock_feed, capsys):
        assert main(["--config", config_file, "nearby"]) == 0

        out = capsys.readouterr().out
        assert "Kayseri (M3.0+): 1" in out
        assert "KAYSERI" in out


class TestConfigErrors:
    """Tests for configuration failures."""

    def test_invalid_config_exits_2(self, tmp_path, mock_feed):
        path = tmp_path / "bad.yaml"
        path.write_text("request_timeout_seconds: 0\n")

        assert main(["--config", str(path), "list"]) == 2

    def test_non_mapping_config_exits_2(self, tmp_path, mock_feed):
        path = tmp_path / "bad.yaml"
        path.write_text("just a string\n")

        assert main(["--config", str(path), "risk"]) == 2

    def test_empty_monitored_locations_runs(self, tmp_path, mock_feed, capsys):
        path = tmp_path / "config.yaml"
        path.write_text("monitored_locations:\n")

        assert main(["--config", str(path), "nearby"]) == 0
        assert "No monitored locations configured" in capsys.readouterr().out

    def test_unknown_sort_order_exits_2(self, tmp_path, mock_feed):
        path = tmp_path / "bad.yaml"
        path.write_text("sort_order: depth\n")

        assert main(["--config", str(path), "list"]) == 2
