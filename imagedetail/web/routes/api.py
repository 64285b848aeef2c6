"""REST API routes for the image detail service."""

import logging
import threading

from flask import Blueprint, current_app, jsonify, request

from ...exceptions import UploadError
from ..services.extraction import ExtractionService

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

_service_lock = threading.Lock()


def get_extraction_service() -> ExtractionService:
    """Get or create the extraction service for the current app.

    The service is created once per application and stored in
    app.extensions, guarded by a lock for threaded servers.
    """
    service = current_app.extensions.get("imagedetail")

    if service is None:
        with _service_lock:
            # Double-check after acquiring lock
            service = current_app.extensions.get("imagedetail")
            if service is None:
                config = current_app.config["IMAGEDETAIL_CONFIG"]
                service = ExtractionService(config)
                current_app.extensions["imagedetail"] = service
                logger.info("Created ExtractionService")

    return service


@api_bp.route("/", methods=["GET"])
def health():
    """Liveness check."""
    return jsonify({"status": "ok", "message": "Image detail extractor is running."})


@api_bp.route("/upload", methods=["POST"])
def upload():
    """Extract and normalize metadata from a single uploaded image.

    Request:
        multipart/form-data with the image in the configured field
        (default "image")

    Returns:
        JSON summary with clean, analysis, raw, note and image sections
    """
    field_name = current_app.config["IMAGEDETAIL_CONFIG"].get("upload.field_name", "image")
    upload_file = request.files.get(field_name)

    try:
        service = get_extraction_service()
        summary = service.process_upload(upload_file)
        return jsonify(summary)

    except UploadError as e:
        logger.warning(f"Rejected upload: {e}")
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Failed to process upload: {e}", exc_info=True)
        return jsonify({"error": "Image read failed", "message": str(e)}), 500
