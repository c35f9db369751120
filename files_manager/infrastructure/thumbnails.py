# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Pillow-backed thumbnail rendering."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

from files_manager.domain.files.repositories import ThumbnailRenderer

_FALLBACK_FORMAT = "PNG"


class PillowThumbnailRenderer(ThumbnailRenderer):
    """Scales an image to a target width, keeping its aspect ratio.

    The source format is kept when Pillow can write it; anything else is
    re-encoded as PNG. Raises ``PIL.UnidentifiedImageError`` for bytes that
    are not an image.
    """

    def render(self, data: bytes, width: int) -> bytes:
        if width <= 0:
            raise ValueError("thumbnail width must be positive")
        with Image.open(BytesIO(data)) as source:
            source.load()
            fmt = source.format or _FALLBACK_FORMAT
            height = max(1, round(source.height * width / source.width))
            resized = source.resize((width, height), Image.Resampling.LANCZOS)
        if fmt == "JPEG" and resized.mode not in ("RGB", "L"):
            resized = resized.convert("RGB")
        buffer = BytesIO()
        try:
            resized.save(buffer, format=fmt)
        except (KeyError, OSError):
            buffer = BytesIO()
            resized.save(buffer, format=_FALLBACK_FORMAT)
        return buffer.getvalue()


__all__ = ["PillowThumbnailRenderer"]
