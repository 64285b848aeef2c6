"""Assembly of clean, analysis and raw metadata groupings."""

import logging
from typing import Any, Dict, Mapping, Optional

from imagedetail.metadata.capture_time import resolve_capture_time
from imagedetail.metadata.fields import (
    ANALYSIS_FIELDS,
    CONSUMED_SOURCE_TAGS,
    COORDINATE_TAGS,
    DEVICE_FIELDS,
    IMAGE_FIELDS,
)
from imagedetail.metadata.geo import dms_to_decimal, dms_to_pretty
from imagedetail.metadata.models import FileAttributes, NormalizedOutput
from imagedetail.metadata.validator import is_valid

logger = logging.getLogger(__name__)

NOTE_METADATA_FOUND = "Camera metadata found in image."
NOTE_METADATA_MISSING = (
    "No camera metadata found. It is missing or was stripped, which commonly "
    "happens when images are shared through messaging apps."
)


def _copy_fields(
    raw: Mapping[str, Any],
    table: Mapping[str, Optional[str]],
    target: Dict[str, Any]
) -> None:
    """Copy valid source tags into target under their destination names."""
    for source, destination in table.items():
        if destination is None:
            continue
        value = raw.get(source)
        if is_valid(value):
            target[destination] = value


def _add_coordinates(raw: Mapping[str, Any], clean: Dict[str, Any]) -> None:
    """Add DMS, decimal and combined position fields when GPS data is usable."""
    pretty = {}

    for coordinate_tag, ref_tag, prefix in COORDINATE_TAGS:
        dms = raw.get(coordinate_tag)
        ref = raw.get(ref_tag)
        if not (is_valid(dms) and is_valid(ref)):
            continue

        dms_string = dms_to_pretty(dms, ref)
        decimal = dms_to_decimal(dms, ref)
        if dms_string is None or decimal is None:
            logger.debug(f"Malformed {coordinate_tag}: {dms!r}")
            continue

        clean[f"{prefix}_DMS"] = dms_string
        clean[f"{prefix}_Decimal"] = decimal
        pretty[prefix] = dms_string

    if "Latitude" in pretty and "Longitude" in pretty:
        clean["GPSPosition"] = f"{pretty['Latitude']}, {pretty['Longitude']}"


def normalize_metadata(
    raw: Optional[Mapping[str, Any]],
    file_attributes: FileAttributes
) -> NormalizedOutput:
    """Normalize raw extractor output into clean, analysis and raw groupings.

    Malformed or missing fields are omitted rather than raising, so the
    result is always usable by the response layer.

    Args:
        raw: Tag name to value mapping from the metadata extractor
        file_attributes: Attributes of the uploaded file

    Returns:
        NormalizedOutput with clean, analysis, raw and note populated

    Examples:
        >>> output = normalize_metadata(
        ...     {"Make": "Canon", "ISO": 100},
        ...     FileAttributes("photo.jpg", 2097152, "image/jpeg"),
        ... )
        >>> output.clean["FileSizeMB"]
        '2.00'
        >>> output.analysis
        {'ISO': 100}
    """
    raw = raw or {}
    output = NormalizedOutput()
    clean = output.clean

    captured = resolve_capture_time(raw)
    if captured is not None:
        clean["CapturedTime"] = captured

    _add_coordinates(raw, clean)
    _copy_fields(raw, DEVICE_FIELDS, clean)
    _copy_fields(raw, IMAGE_FIELDS, clean)

    if "MIMEType" not in clean and is_valid(file_attributes.mime_type):
        clean["MIMEType"] = file_attributes.mime_type

    clean["FileName"] = file_attributes.original_name
    clean["FileSizeMB"] = file_attributes.size_mb

    _copy_fields(raw, ANALYSIS_FIELDS, output.analysis)

    consumed = CONSUMED_SOURCE_TAGS | set(clean) | set(output.analysis)
    output.raw.update(
        (key, value) for key, value in raw.items() if key not in consumed
    )

    output.note = (
        NOTE_METADATA_FOUND if output.has_camera_metadata else NOTE_METADATA_MISSING
    )

    logger.debug(
        f"Normalized {len(raw)} tags: {len(clean)} clean, "
        f"{len(output.analysis)} analysis, {len(output.raw)} raw"
    )

    return output
