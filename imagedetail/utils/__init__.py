"""Utility functions for imagedetail."""

from imagedetail.utils.exif import extract_metadata, sanitize_value
from imagedetail.utils.imaging import (
    analyze_image,
    classify_brightness,
    classify_contrast,
)

__all__ = [
    "extract_metadata",
    "sanitize_value",
    "analyze_image",
    "classify_brightness",
    "classify_contrast",
]
