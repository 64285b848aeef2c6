"""Web API module for imagedetail.

This module provides the HTTP service that accepts a single image upload and
responds with its normalized metadata summary.
"""

from .app import create_app

__all__ = ["create_app"]
