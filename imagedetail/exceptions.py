"""Custom exceptions for imagedetail."""


class ImageDetailError(Exception):
    """Base exception for imagedetail errors."""
    pass


class UploadError(ImageDetailError):
    """Raised when an upload is missing or cannot be stored."""
    pass


class ImageAnalysisError(ImageDetailError):
    """Raised when an image cannot be decoded for analysis.

    Attributes:
        path: Path of the image that failed to decode
    """

    def __init__(self, message: str, path: str = None):
        """Initialize image analysis error.

        Args:
            message: Error message
            path: Path of the offending image
        """
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        """Return string representation of error."""
        if self.path:
            return f"Image analysis failed for {self.path}: {self.message}"
        return f"Image analysis failed: {self.message}"
