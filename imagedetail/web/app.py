"""Flask application factory for the image detail service."""

import logging
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

from ..config import ConfigManager

logger = logging.getLogger(__name__)


def create_app(
    config_path: str = None,
    debug: bool = False,
    config: Optional[ConfigManager] = None
) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_path: Optional path to imagedetail config file
        debug: Enable debug mode
        config: Already loaded configuration (takes precedence over config_path)

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    app.config["DEBUG"] = debug

    if config is None:
        try:
            config = ConfigManager.load(config_path=config_path)
        except Exception as e:
            logger.error(f"Failed to load imagedetail config: {e}")
            raise
    app.config["IMAGEDETAIL_CONFIG"] = config
    logger.info(f"Using configuration: {config!r}")

    max_size_mb = config.get("upload.max_size_mb")
    if max_size_mb:
        app.config["MAX_CONTENT_LENGTH"] = int(float(max_size_mb) * 1024 * 1024)

    cors_origins = config.get("server.cors_origins", "*")
    CORS(app, origins=cors_origins, send_wildcard=cors_origins == "*")

    @app.errorhandler(RequestEntityTooLarge)
    def upload_too_large(error):
        return jsonify({"error": "File too large", "message": str(error)}), 413

    from .routes.api import api_bp

    app.register_blueprint(api_bp)

    logger.info("imagedetail web app created")

    return app
