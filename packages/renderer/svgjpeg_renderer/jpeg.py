"""JPEG encoding of opaque RGB buffers through Pillow."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

from svgjpeg_core.errors import EncodeFailure

from .models import RgbBuffer


MIN_QUALITY = 1
MAX_QUALITY = 100


def encode_jpeg(buffer: RgbBuffer, quality: int) -> bytes:
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise ValueError(f"JPEG quality must be within {MIN_QUALITY}-{MAX_QUALITY}, got {quality}")

    expected = buffer.width * buffer.height * 3
    if buffer.width < 1 or buffer.height < 1 or len(buffer.data) != expected:
        raise EncodeFailure(
            f"RGB buffer of {len(buffer.data)} bytes does not match declared size {buffer.width}x{buffer.height}"
        )

    try:
        image = Image.frombytes("RGB", (buffer.width, buffer.height), buffer.data)
        out = BytesIO()
        image.save(out, format="JPEG", quality=int(quality))
    except (OSError, ValueError) as exc:
        raise EncodeFailure(f"JPEG encoding failed: {exc}") from exc
    return out.getvalue()
