# -*- coding: utf-8 -*-
"""Analysis request data model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from eyescreen.constants import SUPPORTED_MIME_TYPES
from eyescreen.errors import UnsupportedImageError
from eyescreen.utils.image_utils import sniff_mime_type


@dataclass(frozen=True)
class AnalysisRequest:
    """Image payload for a single analysis call."""

    image_bytes: bytes
    mime_type: str
    source_name: str = ""

    def __post_init__(self) -> None:
        if not self.image_bytes:
            raise UnsupportedImageError("Image payload is empty")
        if self.mime_type not in SUPPORTED_MIME_TYPES:
            raise UnsupportedImageError(
                f"Unsupported MIME type {self.mime_type!r}; expected one of {', '.join(SUPPORTED_MIME_TYPES)}"
            )

    @property
    def size_mb(self) -> float:
        return len(self.image_bytes) / (1024 * 1024)

    @classmethod
    def from_bytes(cls, data: bytes, source_name: str = "") -> "AnalysisRequest":
        """Build a request, taking the MIME type from the image content."""
        return cls(image_bytes=data, mime_type=sniff_mime_type(data), source_name=source_name)

    @classmethod
    def from_path(cls, path: str | Path) -> "AnalysisRequest":
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as exc:
            raise UnsupportedImageError(f"Cannot read {file_path}: {exc}") from exc
        return cls.from_bytes(data, source_name=file_path.name)
