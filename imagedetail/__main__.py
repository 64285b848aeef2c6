#!/usr/bin/env python3
"""imagedetail - Image metadata extraction.

This is the command-line entry point. It prints the same JSON summary the
web service returns for each image given on the command line.

Usage:
    python -m imagedetail photo.jpg
    python -m imagedetail photo.jpg other.heic --no-stats
"""

import argparse
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import Any, Dict, List

from ._version import __version__
from .config import ConfigManager
from .config.manager import ConfigError
from .exceptions import ImageDetailError
from .metadata import FileAttributes
from .web.services.extraction import summarize_image


def setup_logging(config: ConfigManager, verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        config: Loaded configuration
        verbose: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if verbose else getattr(
        logging, str(config.get("logging.level", "INFO")).upper(), logging.INFO
    )

    # Console handler on stderr so stdout stays valid JSON
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    log_file = config.get("logging.file")
    if log_file:
        log_path = Path(log_file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
        except OSError as e:
            root_logger.warning(f"Could not open log file {log_path}: {e}")
            return
        file_handler.setLevel(logging.DEBUG)  # Always DEBUG in file
        file_handler.setFormatter(logging.Formatter(
            config.get(
                "logging.format",
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
        ))
        root_logger.addHandler(file_handler)


def parse_arguments(argv=None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="imagedetail - Extract and normalize image metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summarize a photo
  python -m imagedetail photo.jpg

  # Summarize several photos without decoding pixels
  python -m imagedetail *.jpg --no-stats
"""
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"imagedetail {__version__}"
    )
    parser.add_argument(
        "images",
        nargs="+",
        metavar="IMAGE",
        help="Image file(s) to summarize"
    )
    parser.add_argument(
        "--no-stats",
        action="store_true",
        help="Skip pixel statistics (brightness/contrast)"
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to imagedetail config file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose debug logging"
    )

    return parser.parse_args(argv)


def summarize_file(path: Path, pixel_stats: bool) -> Dict[str, Any]:
    """Summarize an image file on disk as if it had been uploaded."""
    attributes = FileAttributes(
        original_name=path.name,
        size_bytes=path.stat().st_size,
        mime_type=mimetypes.guess_type(path.name)[0],
    )
    return summarize_image(path, attributes, pixel_stats=pixel_stats)


def main(argv=None) -> int:
    """Main entry point for imagedetail.

    Returns:
        Exit code (0 for success, 1 if any image failed)
    """
    args = parse_arguments(argv)

    try:
        config = ConfigManager.load(config_path=args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(config, args.verbose)
    logger = logging.getLogger(__name__)

    pixel_stats = not args.no_stats and bool(config.get("analysis.pixel_stats", True))
    results: List[Dict[str, Any]] = []
    failures = 0

    for image in args.images:
        path = Path(image).expanduser()
        try:
            results.append(summarize_file(path, pixel_stats))
        except (ImageDetailError, OSError) as e:
            logger.error(f"Failed to summarize {path}: {e}")
            results.append({"error": "Image read failed", "message": str(e), "file": str(path)})
            failures += 1

    output = results[0] if len(results) == 1 else results
    print(json.dumps(output, indent=2, ensure_ascii=False))

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
