"""Sentinel filtering for raw metadata values."""

import math
from numbers import Real
from typing import Any

# Epoch-seconds values below this are placeholders, not real capture times
MIN_EPOCH_SECONDS = 1_000_000_000

# Zero-date marker some encoders write for missing timestamps
ZERO_DATE_MARKER = "0000:00:00"


def is_valid(value: Any, epoch_seconds: bool = False) -> bool:
    """Return whether a raw metadata value is meaningful.

    Args:
        value: Raw tag value of any shape
        epoch_seconds: Treat numeric values as seconds since the epoch and
            reject placeholder timestamps. Only set this for timestamp fields;
            ordinary numeric tags such as ISO=100 are always valid.

    Returns:
        False for absent values, blank strings, zero-date strings and (for
        epoch fields) non-finite timestamps or ones below MIN_EPOCH_SECONDS,
        True otherwise
    """
    if value is None:
        return False

    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return False
        if ZERO_DATE_MARKER in stripped:
            return False
        return True

    if epoch_seconds and isinstance(value, Real):
        number = float(value)
        if not math.isfinite(number):
            return False
        return number >= MIN_EPOCH_SECONDS

    return True
