"""Services for the imagedetail web API."""

from .extraction import ExtractionService, summarize_image

__all__ = ["ExtractionService", "summarize_image"]
