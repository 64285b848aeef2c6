"""Default configuration values for imagedetail."""

import tempfile
from pathlib import Path

# Default configuration dictionary
DEFAULT_CONFIG = {
    # HTTP server
    "server": {
        "host": "127.0.0.1",
        "port": 3000,
        "cors_origins": "*",
    },

    # Upload handling
    "upload": {
        "directory": str(Path(tempfile.gettempdir()) / "imagedetail" / "uploads"),
        "field_name": "image",
        "max_size_mb": 25,
    },

    # Pixel analysis
    "analysis": {
        "pixel_stats": True,
    },

    # Logging Configuration
    "logging": {
        "level": "INFO",
        "file": "",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
}

# Environment variables that override configuration values
ENV_OVERRIDES = {
    "PORT": ("server.port", int),
    "IMAGEDETAIL_UPLOAD_DIR": ("upload.directory", str),
}
