"""EXIF metadata extraction utilities for images."""

import logging
import math
from numbers import Integral, Rational, Real
from pathlib import Path
from typing import Any, Dict, Tuple

from PIL import Image
from PIL.ExifTags import GPSTAGS, TAGS

# Register HEIF/HEIC support if available
try:
    from pillow_heif import register_heif_opener
    register_heif_opener()
    HEIC_SUPPORT = True
except ImportError:
    HEIC_SUPPORT = False

logger = logging.getLogger(__name__)

EXIF_IFD = 0x8769
GPS_IFD = 0x8825

# Pointer and binary tags that carry nothing readable
SKIPPED_TAGS = {
    "ExifOffset",
    "GPSInfo",
    "InteropOffset",
    "MakerNote",
    "PrintImageMatching",
    "JPEGInterchangeFormat",
    "JPEGInterchangeFormatLength",
}

# exifread key prefixes to drop entirely
SKIPPED_EXIFREAD_PREFIXES = (
    "JPEGThumbnail",
    "Thumbnail ",
    "MakerNote ",
    "EXIF MakerNote",
    "Interoperability ",
)

# exifread key prefixes stripped to get the bare tag name
EXIFREAD_PREFIXES = ("Image ", "EXIF ", "GPS ")

# Extractor tag names mapped to the names the normalizer expects
TAG_ALIASES = {
    "DateTimeDigitized": "CreateDate",
    "DateTime": "ModifyDate",
    "ISOSpeedRatings": "ISO",
    "PhotographicSensitivity": "ISO",
    "SubSecTimeOriginal": "SubsecTimeOriginal",
}

# Byte strings longer than this are treated as binary blobs
MAX_BYTES_LENGTH = 64

_SKIP = object()


def sanitize_value(value: Any) -> Any:
    """Convert a raw tag value into a JSON-safe value.

    IFDRational and other rationals become floats, text bytes are decoded,
    tuples become lists. Binary blobs that are not readable text are dropped.

    Args:
        value: Raw value from Pillow or exifread

    Returns:
        JSON-safe value, or the module-private skip marker for binary data
    """
    if value is None or isinstance(value, bool):
        return value

    if isinstance(value, str):
        return value.strip("\x00").strip()

    if isinstance(value, Integral):
        return int(value)

    if isinstance(value, (Rational, Real)):
        try:
            number = float(value)
        except (ValueError, ZeroDivisionError):
            return None
        return number if math.isfinite(number) else None

    if isinstance(value, (bytes, bytearray)):
        try:
            text = bytes(value).decode("utf-8").strip("\x00 ").strip()
        except UnicodeDecodeError:
            text = None
        if text is not None and text.isprintable():
            return text
        if len(value) <= MAX_BYTES_LENGTH:
            return list(bytes(value))
        return _SKIP

    if isinstance(value, (list, tuple)):
        items = [sanitize_value(item) for item in value]
        if any(item is _SKIP for item in items):
            return _SKIP
        return items

    return str(value)


def _collect(tags: Dict[int, Any], names: Dict[int, str], target: Dict[str, Any]) -> None:
    """Name and sanitize an IFD's tags into target."""
    for tag_id, value in tags.items():
        name = names.get(tag_id, f"Tag0x{tag_id:04X}")
        if name in SKIPPED_TAGS:
            continue
        cleaned = sanitize_value(value)
        if cleaned is not _SKIP:
            target[name] = cleaned


def _read_with_pillow(image_path: Path) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Read EXIF tags and basic image facts using Pillow.

    Args:
        image_path: Path to the image file

    Returns:
        Tuple of (named EXIF tags, image facts)
    """
    tags: Dict[str, Any] = {}

    with Image.open(image_path) as img:
        width, height = img.size
        facts = {
            "ImageWidth": width,
            "ImageHeight": height,
            "Megapixels": round(width * height / 1_000_000, 2),
            "MIMEType": img.get_format_mimetype(),
        }

        exif_data = img.getexif()
        if exif_data is None or len(exif_data) == 0:
            logger.debug(f"No EXIF data found in {image_path}")
            return tags, facts

        _collect(dict(exif_data), TAGS, tags)

        exif_ifd = exif_data.get_ifd(EXIF_IFD)
        if exif_ifd:
            _collect(exif_ifd, TAGS, tags)

        gps_ifd = exif_data.get_ifd(GPS_IFD)
        if gps_ifd:
            logger.debug(f"Found GPS data via get_ifd: {len(gps_ifd)} GPS tags")
            _collect(gps_ifd, GPSTAGS, tags)

    return tags, facts


def _exifread_value(tag: Any) -> Any:
    """Convert an exifread IfdTag into a JSON-safe value."""
    values = getattr(tag, "values", None)

    if isinstance(values, str):
        return sanitize_value(values)
    if isinstance(values, (bytes, bytearray)):
        return sanitize_value(values)
    if isinstance(values, list):
        items = [sanitize_value(item) for item in values]
        if any(item is _SKIP for item in items):
            return _SKIP
        if len(items) == 1:
            return items[0]
        if len(items) > MAX_BYTES_LENGTH:
            return _SKIP
        return items

    return sanitize_value(str(tag))


def _read_with_exifread(image_path: Path) -> Dict[str, Any]:
    """Read EXIF tags using the exifread library.

    This is often more reliable for HEIC files than Pillow.

    Args:
        image_path: Path to the image file

    Returns:
        Named EXIF tags (empty if none were found)
    """
    import exifread

    tags: Dict[str, Any] = {}

    with open(image_path, 'rb') as f:
        raw_tags = exifread.process_file(f, details=False)

    for key, tag in raw_tags.items():
        if key.startswith(SKIPPED_EXIFREAD_PREFIXES):
            continue
        name = key
        for prefix in EXIFREAD_PREFIXES:
            if key.startswith(prefix):
                name = key[len(prefix):]
                break
        if name in SKIPPED_TAGS:
            continue
        value = _exifread_value(tag)
        if value is not _SKIP:
            tags[name] = value

    return tags


def _apply_aliases(tags: Dict[str, Any]) -> Dict[str, Any]:
    """Rename extractor-specific tag names to their canonical names."""
    renamed: Dict[str, Any] = {}
    for name, value in tags.items():
        canonical = TAG_ALIASES.get(name, name)
        if canonical in renamed and canonical != name:
            continue
        renamed[canonical] = value
    return renamed


def _format_gps_time(timestamp: Any) -> Any:
    if not isinstance(timestamp, list) or len(timestamp) < 3:
        return None
    try:
        hours, minutes, seconds = (int(float(part)) for part in timestamp[:3])
    except (TypeError, ValueError):
        return None
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _add_composites(tags: Dict[str, Any]) -> None:
    """Add composite timestamp tags built from their component tags."""
    original = tags.get("DateTimeOriginal")
    subsec = tags.get("SubsecTimeOriginal")
    if isinstance(original, str) and original and subsec not in (None, ""):
        composite = f"{original}.{str(subsec).strip()}"
        offset = tags.get("OffsetTimeOriginal")
        if isinstance(offset, str) and offset:
            composite += offset
        tags.setdefault("SubSecDateTimeOriginal", composite)

    gps_date = tags.get("GPSDateStamp")
    gps_time = _format_gps_time(tags.get("GPSTimeStamp"))
    if isinstance(gps_date, str) and gps_date and gps_time:
        tags.setdefault("GPSDateTime", f"{gps_date} {gps_time}Z")


def extract_metadata(image_path: str) -> Dict[str, Any]:
    """Extract a flat tag name to value mapping from an image.

    Supports JPEG, PNG, TIFF, WebP and HEIC/HEIF formats. Pillow is tried
    first; when it finds no EXIF tags, exifread is used as a fallback.
    Failures never propagate: an unreadable file yields an empty mapping.

    Args:
        image_path: Path to the image file

    Returns:
        Mapping of tag names (e.g. "Make", "DateTimeOriginal",
        "GPSLatitude") to JSON-safe values, plus ImageWidth, ImageHeight,
        Megapixels and MIMEType

    Examples:
        >>> metadata = extract_metadata("photo.jpg")
        >>> metadata.get("Make")
        'Canon'
    """
    path = Path(image_path)
    if not path.exists():
        logger.warning(f"Image file not found: {image_path}")
        return {}

    is_heic = path.suffix.lower() in ('.heic', '.heif')
    if is_heic and not HEIC_SUPPORT:
        logger.warning(
            "HEIC format detected but pillow-heif not installed. "
            "EXIF extraction may fail. Install with: pip install pillow-heif"
        )

    tags: Dict[str, Any] = {}
    facts: Dict[str, Any] = {}

    try:
        tags, facts = _read_with_pillow(path)
    except Exception as e:
        logger.warning(f"Error reading {image_path} with Pillow: {e}")

    if not tags:
        try:
            tags = _read_with_exifread(path)
            if tags:
                logger.debug(f"Extracted {len(tags)} tags using exifread from {image_path}")
        except Exception as e:
            logger.debug(f"exifread extraction failed for {image_path}: {e}")

    metadata = _apply_aliases(tags)
    _add_composites(metadata)
    metadata.update(facts)

    logger.debug(f"Extracted {len(metadata)} metadata fields from {image_path}")

    return metadata
