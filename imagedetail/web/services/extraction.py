"""Upload extraction service for the web API.

This service stores an uploaded image in a temporary file, runs metadata
extraction, normalization and pixel analysis on it, and always removes the
temporary file afterwards.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Tuple

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ...config import ConfigManager
from ...exceptions import UploadError
from ...metadata import FileAttributes, normalize_metadata
from ...utils.exif import extract_metadata
from ...utils.imaging import analyze_image

logger = logging.getLogger(__name__)


def summarize_image(
    image_path: Path,
    file_attributes: FileAttributes,
    pixel_stats: bool = True
) -> Dict[str, Any]:
    """Build the JSON summary for an image already on disk.

    Args:
        image_path: Path to the stored image
        file_attributes: Attributes of the original upload
        pixel_stats: Whether to decode the image for pixel statistics

    Returns:
        Normalized clean/analysis/raw/note groupings, plus an "image"
        section when pixel statistics are enabled

    Raises:
        ImageAnalysisError: If pixel statistics are enabled and the file
            cannot be decoded
    """
    metadata = extract_metadata(str(image_path))
    summary = normalize_metadata(metadata, file_attributes).to_dict()

    if pixel_stats:
        summary["image"] = analyze_image(str(image_path))

    return summary


class ExtractionService:
    """Service for turning image uploads into metadata summaries."""

    def __init__(self, config: ConfigManager):
        """Initialize extraction service.

        Args:
            config: imagedetail configuration manager
        """
        self.config = config
        self.upload_dir = Path(config.get("upload.directory")).expanduser()
        self.pixel_stats = bool(config.get("analysis.pixel_stats", True))

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Extraction service using upload directory: {self.upload_dir}")

    def save_upload(self, upload: FileStorage) -> Tuple[Path, FileAttributes]:
        """Store an upload under a temporary name in the upload directory.

        Args:
            upload: Uploaded file from the multipart request

        Returns:
            Tuple of (temporary path, file attributes)

        Raises:
            UploadError: If the upload has no filename
        """
        if upload is None or not upload.filename:
            raise UploadError("No image file uploaded.")

        # Keep the extension so format detection (e.g. HEIC) still works
        suffix = Path(secure_filename(upload.filename)).suffix.lower()
        fd, temp_name = tempfile.mkstemp(prefix="upload-", suffix=suffix, dir=self.upload_dir)
        os.close(fd)
        temp_path = Path(temp_name)

        try:
            upload.save(str(temp_path))
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

        attributes = FileAttributes(
            original_name=upload.filename,
            size_bytes=temp_path.stat().st_size,
            mime_type=upload.mimetype or None,
        )
        logger.debug(
            f"Stored upload {upload.filename!r} ({attributes.size_bytes} bytes) "
            f"at {temp_path}"
        )

        return temp_path, attributes

    def process_upload(self, upload: FileStorage) -> Dict[str, Any]:
        """Store, summarize and clean up a single uploaded image.

        Args:
            upload: Uploaded file from the multipart request

        Returns:
            JSON-serializable summary of the image

        Raises:
            UploadError: If no file was uploaded
            ImageAnalysisError: If the image cannot be decoded
        """
        temp_path, attributes = self.save_upload(upload)

        try:
            summary = summarize_image(temp_path, attributes, pixel_stats=self.pixel_stats)
            logger.info(f"Processed upload {attributes.original_name}: {summary['note']}")
            return summary
        finally:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not remove temporary upload {temp_path}: {e}")
