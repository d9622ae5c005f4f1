"""Error types raised by the geospatial core."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Malformed input rejected at the core boundary (bad radius, empty replay, ...)."""
