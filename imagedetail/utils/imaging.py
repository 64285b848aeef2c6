"""Image decoding and basic pixel statistics."""

import logging
from pathlib import Path
from typing import Any, Dict

from PIL import Image, ImageStat, UnidentifiedImageError

from imagedetail.exceptions import ImageAnalysisError

logger = logging.getLogger(__name__)

# Fixed label thresholds on 0-255 luminance; kept as-is for compatibility,
# they have no calibration behind them.
BRIGHTNESS_LOW = 60
BRIGHTNESS_HIGH = 180
CONTRAST_LOW = 20
CONTRAST_HIGH = 80

# Bits per channel for Pillow image modes
MODE_BIT_DEPTH = {
    "1": 1,
    "L": 8,
    "LA": 8,
    "P": 8,
    "PA": 8,
    "RGB": 8,
    "RGBA": 8,
    "RGBX": 8,
    "CMYK": 8,
    "YCbCr": 8,
    "LAB": 8,
    "HSV": 8,
    "I;16": 16,
    "I;16B": 16,
    "I;16L": 16,
    "I": 32,
    "F": 32,
}


def classify_brightness(mean: float) -> str:
    """Label mean luminance as Low, Normal or High."""
    if mean < BRIGHTNESS_LOW:
        return "Low"
    if mean > BRIGHTNESS_HIGH:
        return "High"
    return "Normal"


def classify_contrast(stdev: float) -> str:
    """Label luminance standard deviation as Low, Normal or High."""
    if stdev < CONTRAST_LOW:
        return "Low"
    if stdev > CONTRAST_HIGH:
        return "High"
    return "Normal"


def _rounded(values) -> list:
    return [round(value, 2) for value in values]


def analyze_image(image_path: str) -> Dict[str, Any]:
    """Decode an image and compute structural facts and pixel statistics.

    Args:
        image_path: Path to the image file

    Returns:
        Dictionary with width, height, format, mode, channels, bit depth,
        per-channel RGB mean/stdev, luminance mean/stdev and the derived
        brightness and contrast labels

    Raises:
        ImageAnalysisError: If the file is missing or cannot be decoded
    """
    path = Path(image_path)

    try:
        with Image.open(path) as img:
            img.load()
            width, height = img.size

            rgb_stats = ImageStat.Stat(img.convert("RGB"))
            luminance = ImageStat.Stat(img.convert("L"))

            result = {
                "width": width,
                "height": height,
                "format": img.format,
                "mode": img.mode,
                "channels": len(img.getbands()),
                "bitDepth": MODE_BIT_DEPTH.get(img.mode),
                "stats": {
                    "mean": _rounded(rgb_stats.mean),
                    "stdev": _rounded(rgb_stats.stddev),
                },
            }
    except FileNotFoundError as e:
        raise ImageAnalysisError("file not found", path=str(path)) from e
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageAnalysisError(str(e), path=str(path)) from e

    mean = luminance.mean[0]
    stdev = luminance.stddev[0]
    result["luminance"] = {"mean": round(mean, 2), "stdev": round(stdev, 2)}
    result["brightness"] = classify_brightness(mean)
    result["contrast"] = classify_contrast(stdev)

    logger.debug(
        f"Analyzed {path.name}: {width}x{height} {result['mode']}, "
        f"brightness {result['brightness']}, contrast {result['contrast']}"
    )

    return result
