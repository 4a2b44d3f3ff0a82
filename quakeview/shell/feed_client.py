"""Earthquake Feed Client - Imperative Shell.

This module handles HTTP communication with the earthquake feed.
All I/O is contained here; parsing and queries are in the core module.
"""

import logging
from typing import Any

import requests

from quakeview.core.config import DEFAULT_FEED_URL


logger = logging.getLogger(__name__)


# Default timeout for feed requests (seconds)
DEFAULT_TIMEOUT = 30


class FeedFormatError(ValueError):
    """Raised when the feed body is not a JSON array."""


class FeedClient:
    """Client for fetching raw earthquake records from the feed.

    This is part of the imperative shell - it handles HTTP I/O.
    It does not retry and does not interpret individual records.
    """

    def __init__(
        self,
        url: str = DEFAULT_FEED_URL,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize feed client.

        Args:
            url: Feed URL
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout

    def fetch_raw_records(self) -> list[Any]:
        """Fetch the raw record array from the feed.

        This method performs HTTP I/O.

        Returns:
            Decoded JSON array (elements are not validated here)

        Raises:
            requests.RequestException: If the request fails
            FeedFormatError: If the body is not a JSON array
        """
        logger.info("Fetching earthquakes from %s", self.url)

        response = requests.get(
            self.url,
            timeout=self.timeout,
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise FeedFormatError(f"Feed returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise FeedFormatError(
                f"Feed returned {type(data).__name__}, expected a JSON array",
            )

        logger.info("Fetched %d raw records from feed", len(data))

        return data
