"""Earthquake feed normalization, querying and map projection."""

__version__ = "0.1.0"
