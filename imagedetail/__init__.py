"""imagedetail - Image metadata extraction service.

Accepts an uploaded image, extracts its embedded EXIF/GPS metadata and basic
pixel statistics, and returns a clean, human-readable JSON summary.
"""

from imagedetail._version import __version__, __version_info__
from imagedetail.config import ConfigManager
from imagedetail.metadata import FileAttributes, NormalizedOutput, normalize_metadata

__license__ = "MIT"
__all__ = [
    "__version__",
    "__version_info__",
    "ConfigManager",
    "FileAttributes",
    "NormalizedOutput",
    "normalize_metadata",
]
