"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Earthquake feed client (HTTP)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from quakeview.shell.feed_client import FeedClient, FeedFormatError
from quakeview.shell.config_loader import load_config, Config

__all__ = [
    "FeedClient",
    "FeedFormatError",
    "load_config",
    "Config",
]
