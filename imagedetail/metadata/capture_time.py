"""Capture timestamp resolution across candidate EXIF tags."""

import logging
import re
from datetime import datetime
from numbers import Real
from typing import Any, Mapping, Optional

from imagedetail.metadata.fields import CAPTURE_TIME_TAGS
from imagedetail.metadata.validator import is_valid

logger = logging.getLogger(__name__)

_FRACTION = re.compile(r"\.(\d+)")


def format_capture_time(moment: datetime) -> str:
    """Format a timestamp in the en-US 12-hour clock form.

    Args:
        moment: Timestamp to format

    Returns:
        String such as "1/9/2026, 9:17:55 PM"
    """
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


def _from_epoch(value: Real) -> Optional[datetime]:
    if not is_valid(value, epoch_seconds=True):
        return None
    try:
        return datetime.fromtimestamp(float(value))
    except (OverflowError, OSError, ValueError):
        return None


def _from_exif_string(value: str) -> Optional[datetime]:
    """Parse "YYYY:MM:DD HH:MM:SS[.fff][±HH:MM|Z]" into a datetime."""
    if not is_valid(value):
        return None

    stripped = value.strip()
    if " " not in stripped:
        return None

    date_part, time_part = stripped.split(" ", 1)
    time_part = time_part.strip().split(" ", 1)[0].removesuffix("Z")
    # fromisoformat wants microsecond precision fractions
    time_part = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), time_part, count=1)
    iso_value = f"{date_part.replace(':', '-')}T{time_part}"

    try:
        moment = datetime.fromisoformat(iso_value)
        if moment.tzinfo is not None:
            moment = moment.astimezone().replace(tzinfo=None)
    except (OverflowError, OSError, ValueError):
        logger.debug(f"Unparseable timestamp: {value!r}")
        return None

    return moment


def parse_capture_time(value: Any) -> Optional[datetime]:
    """Interpret a single candidate tag value as a timestamp.

    Numbers are epoch seconds, strings use the EXIF "date time" layout and
    datetime instances pass through. Anything else is rejected.

    Args:
        value: Raw tag value

    Returns:
        Naive local datetime, or None if the value is unusable
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, Real):
        return _from_epoch(value)
    if isinstance(value, str):
        return _from_exif_string(value)
    return None


def resolve_capture_time(raw: Mapping[str, Any]) -> Optional[str]:
    """Pick the best capture timestamp and format it.

    Candidates are consulted in a fixed order: sub-second original time,
    original time, file create time, then GPS time. The first candidate that
    validates and parses wins.

    Args:
        raw: Raw metadata mapping

    Returns:
        Formatted timestamp, or None if no candidate is usable

    Examples:
        >>> resolve_capture_time({"DateTimeOriginal": "2026:01:09 21:17:55"})
        '1/9/2026, 9:17:55 PM'
    """
    for tag in CAPTURE_TIME_TAGS:
        moment = parse_capture_time(raw.get(tag))
        if moment is not None:
            logger.debug(f"Capture time resolved from {tag}")
            return format_capture_time(moment)

    return None
