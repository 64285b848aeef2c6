"""GPS coordinate conversion from degrees/minutes/seconds."""

import math
from numbers import Real
from typing import Any, Optional, Tuple

HEMISPHERES = ("N", "S", "E", "W")


def _components(dms: Any) -> Optional[Tuple[float, float, float]]:
    """Return (degrees, minutes, seconds) or None if the input is malformed."""
    if not isinstance(dms, (list, tuple)) or len(dms) < 3:
        return None

    parts = []
    for component in dms[:3]:
        if isinstance(component, bool) or not isinstance(component, Real):
            return None
        number = float(component)
        if not math.isfinite(number):
            return None
        parts.append(number)

    return parts[0], parts[1], parts[2]


def _format_number(number: float) -> str:
    if number.is_integer():
        return str(int(number))
    return f"{number:.10f}".rstrip("0").rstrip(".")


def _hemisphere(ref: Any) -> Optional[str]:
    """Return the upper-case hemisphere letter, or None if ref is not N/S/E/W."""
    if not isinstance(ref, str):
        return None
    letter = ref.strip().upper()
    return letter if letter in HEMISPHERES else None


def dms_to_decimal(dms: Any, ref: Any) -> Optional[float]:
    """Convert GPS coordinates from degrees/minutes/seconds to decimal.

    Args:
        dms: Sequence of (degrees, minutes, seconds)
        ref: Reference direction ('N', 'S', 'E', 'W')

    Returns:
        Decimal degrees rounded to 6 places (negative for South/West), or
        None if dms is not a sequence of at least three numbers or ref is
        not a hemisphere letter
    """
    parts = _components(dms)
    hemisphere = _hemisphere(ref)
    if parts is None or hemisphere is None:
        return None

    degrees, minutes, seconds = parts
    decimal = degrees + minutes / 60.0 + seconds / 3600.0

    if hemisphere in ('S', 'W'):
        decimal = -decimal

    return round(decimal, 6)


def dms_to_pretty(dms: Any, ref: Any) -> Optional[str]:
    """Render GPS coordinates as a degrees/minutes/seconds string.

    Args:
        dms: Sequence of (degrees, minutes, seconds)
        ref: Reference direction ('N', 'S', 'E', 'W')

    Returns:
        String such as `77° 12' 3.4" E`, or None for malformed
        input or an unknown hemisphere
    """
    parts = _components(dms)
    hemisphere = _hemisphere(ref)
    if parts is None or hemisphere is None:
        return None

    degrees, minutes, seconds = (_format_number(part) for part in parts)
    return f"{degrees}° {minutes}' {seconds}\" {hemisphere}"
