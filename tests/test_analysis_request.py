# -*- coding: utf-8 -*-
"""Tests for request construction and image sniffing."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from conftest import make_image_bytes
from eyescreen.errors import UnsupportedImageError
from eyescreen.models.analysis_request import AnalysisRequest
from eyescreen.utils.image_utils import ImagePreview, encode_bytes_base64, sniff_mime_type


@pytest.mark.parametrize(
    ("image_format", "mime_type"),
    [("PNG", "image/png"), ("JPEG", "image/jpeg"), ("WEBP", "image/webp")],
)
def test_sniff_supported_formats(image_format: str, mime_type: str) -> None:
    assert sniff_mime_type(make_image_bytes(image_format)) == mime_type


def test_sniff_rejects_gif() -> None:
    with pytest.raises(UnsupportedImageError, match="GIF"):
        sniff_mime_type(make_image_bytes("GIF"))


def test_sniff_rejects_garbage() -> None:
    with pytest.raises(UnsupportedImageError):
        sniff_mime_type(b"definitely not an image")


def test_from_bytes_detects_type(png_bytes: bytes) -> None:
    request = AnalysisRequest.from_bytes(png_bytes, source_name="eye.png")
    assert request.mime_type == "image/png"
    assert request.source_name == "eye.png"
    assert request.size_mb < 0.01


def test_from_path_reads_file(sample_eye_png: Path, png_bytes: bytes) -> None:
    request = AnalysisRequest.from_path(sample_eye_png)
    assert request.image_bytes == png_bytes
    assert request.source_name == "eye.png"


def test_from_path_missing_file(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedImageError, match="Cannot read"):
        AnalysisRequest.from_path(tmp_path / "missing.png")


def test_empty_payload_rejected() -> None:
    with pytest.raises(UnsupportedImageError):
        AnalysisRequest(image_bytes=b"", mime_type="image/png")


def test_unsupported_mime_rejected(png_bytes: bytes) -> None:
    with pytest.raises(UnsupportedImageError):
        AnalysisRequest(image_bytes=png_bytes, mime_type="image/gif")


def test_encode_bytes_base64() -> None:
    assert encode_bytes_base64(b"eye") == "ZXll"


def test_preview_release(png_bytes: bytes) -> None:
    preview = ImagePreview.from_bytes(png_bytes)
    assert preview.size == (8, 6)
    assert preview.to_png_bytes().startswith(b"\x89PNG")

    preview.release()
    preview.release()

    assert preview.released is True
    with pytest.raises(RuntimeError):
        _ = preview.image


def test_decompression_bomb_is_unsupported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
    data = make_image_bytes("PNG", (64, 64))
    with pytest.raises(UnsupportedImageError):
        sniff_mime_type(data)
    with pytest.raises(UnsupportedImageError):
        ImagePreview.from_bytes(data)
