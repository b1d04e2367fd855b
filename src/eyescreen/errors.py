# -*- coding: utf-8 -*-
"""Error taxonomy for eye image analysis."""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for every failure of an analysis call."""


class ConfigurationError(AnalysisError):
    """Raised when the service credential is missing. Never retried."""


class UnsupportedImageError(AnalysisError):
    """Raised when an upload is not a PNG, JPEG or WEBP image."""


class TransportError(AnalysisError):
    """Raised on network failure or a non-success HTTP status."""

    def __init__(self, message: str, status: int = 0) -> None:
        super().__init__(message)
        self.status = status


class MalformedResponseError(AnalysisError):
    """Raised when the service reply does not match the response schema."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text
