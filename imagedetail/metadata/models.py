"""Data models for metadata normalization."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from imagedetail.metadata.fields import BYTES_PER_MB, CAMERA_FIELDS


@dataclass(frozen=True)
class FileAttributes:
    """Attributes of an uploaded file, supplied by the upload handler.

    Attributes:
        original_name: Filename as uploaded by the client
        size_bytes: Size of the stored file in bytes
        mime_type: MIME type reported for the upload
    """
    original_name: str
    size_bytes: int
    mime_type: Optional[str] = None

    @property
    def size_mb(self) -> str:
        """Return the size in megabytes with two decimals."""
        return f"{self.size_bytes / BYTES_PER_MB:.2f}"


@dataclass
class NormalizedOutput:
    """Result of normalizing raw metadata.

    Attributes:
        clean: Normalized, human-meaningful fields
        analysis: Vetted shooting-condition fields
        raw: Every source tag not consumed into clean or analysis
        note: Human-readable summary of what was found
    """
    clean: Dict[str, Any] = field(default_factory=dict)
    analysis: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict)
    note: Optional[str] = None

    @property
    def has_camera_metadata(self) -> bool:
        """Whether any camera-derived field survived normalization."""
        return bool(self.analysis) or any(key in self.clean for key in CAMERA_FIELDS)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "clean": dict(self.clean),
            "analysis": dict(self.analysis),
            "raw": dict(self.raw),
            "note": self.note,
        }
