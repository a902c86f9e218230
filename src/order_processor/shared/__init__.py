"""Shared utilities for the order processor."""

from .constants import (
    BACKOFF_UNIT_SECONDS,
    DEFAULT_BASE_URL,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_RETRIES,
    DEFAULT_SIDE,
    DEFAULT_SYMBOL,
)

__all__ = [
    "BACKOFF_UNIT_SECONDS",
    "DEFAULT_BASE_URL",
    "DEFAULT_OUTPUT_FILE",
    "DEFAULT_RETRIES",
    "DEFAULT_SIDE",
    "DEFAULT_SYMBOL",
]
