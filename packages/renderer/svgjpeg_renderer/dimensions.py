"""Output raster size resolution."""

from __future__ import annotations

import math

from svgjpeg_core.errors import InvalidDocumentSize

from .models import Dimensions


def round_half_away(value: float) -> int:
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def resolve_dimensions(
    intrinsic_width: float,
    intrinsic_height: float,
    requested_width: int | None = None,
) -> Dimensions:
    """Return the output pixel size, keeping the document aspect ratio.

    Without a requested width the intrinsic size is rounded. With one, the
    width is taken as-is and the height follows the intrinsic aspect ratio.
    Both sides are at least one pixel.
    """
    if not (math.isfinite(intrinsic_width) and math.isfinite(intrinsic_height)):
        raise InvalidDocumentSize(intrinsic_width, intrinsic_height)
    if intrinsic_width <= 0 or intrinsic_height <= 0:
        raise InvalidDocumentSize(intrinsic_width, intrinsic_height)

    if requested_width is None:
        return Dimensions(
            width=max(1, round_half_away(intrinsic_width)),
            height=max(1, round_half_away(intrinsic_height)),
        )

    if requested_width < 1:
        raise ValueError("Width must be greater than 0")
    height = round_half_away(requested_width * intrinsic_height / intrinsic_width)
    return Dimensions(width=int(requested_width), height=max(1, height))
