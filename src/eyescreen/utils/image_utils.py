# -*- coding: utf-8 -*-
"""Image helpers: encoding sniffing, base64 transport and previews."""

from __future__ import annotations

import base64
import io
import logging

from PIL import Image, UnidentifiedImageError

from eyescreen.constants import PIL_FORMAT_TO_MIME
from eyescreen.errors import UnsupportedImageError

logger = logging.getLogger(__name__)


def encode_bytes_base64(data: bytes) -> str:
    """Encode raw bytes as base64 text."""
    return base64.b64encode(data).decode("ascii")


def sniff_mime_type(data: bytes) -> str:
    """Return the MIME type of a supported image, judged by its content."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format or ""
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise UnsupportedImageError(f"Not a readable image: {exc}") from exc
    mime_type = PIL_FORMAT_TO_MIME.get(image_format.upper())
    if mime_type is None:
        raise UnsupportedImageError(f"Unsupported image format: {image_format or 'unknown'}")
    return mime_type


class ImagePreview:
    """Decoded copy of an uploaded image, held for display until released."""

    def __init__(self, image: Image.Image) -> None:
        self._image: Image.Image | None = image

    @classmethod
    def from_bytes(cls, data: bytes) -> "ImagePreview":
        try:
            with Image.open(io.BytesIO(data)) as source:
                image = source.convert("RGBA")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise UnsupportedImageError(f"Cannot decode image for preview: {exc}") from exc
        return cls(image)

    @property
    def released(self) -> bool:
        return self._image is None

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    @property
    def image(self) -> Image.Image:
        if self._image is None:
            raise RuntimeError("Preview has been released")
        return self._image

    def to_png_bytes(self) -> bytes:
        """Serialize for toolkits that load images from encoded bytes."""
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()

    def release(self) -> None:
        if self._image is not None:
            self._image.close()
            self._image = None
            logger.debug("Image preview released")
