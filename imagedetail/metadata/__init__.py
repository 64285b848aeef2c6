"""Metadata normalization: sentinel filtering, capture time, GPS and assembly."""

from imagedetail.metadata.capture_time import (
    format_capture_time,
    parse_capture_time,
    resolve_capture_time,
)
from imagedetail.metadata.geo import dms_to_decimal, dms_to_pretty
from imagedetail.metadata.models import FileAttributes, NormalizedOutput
from imagedetail.metadata.normalizer import normalize_metadata
from imagedetail.metadata.validator import is_valid

__all__ = [
    "format_capture_time",
    "parse_capture_time",
    "resolve_capture_time",
    "dms_to_decimal",
    "dms_to_pretty",
    "FileAttributes",
    "NormalizedOutput",
    "normalize_metadata",
    "is_valid",
]
