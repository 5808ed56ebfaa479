"""Background color token parsing."""

from __future__ import annotations

import re

from PIL import ImageColor

from svgjpeg_core.errors import InvalidColorFormat

from .models import Color


_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def named_colors() -> list[str]:
    return sorted(ImageColor.colormap.keys())


def _parse_hex(digits: str) -> Color:
    if len(digits) in (3, 4):
        r, g, b = (int(d * 2, 16) for d in digits[:3])
    else:
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    # Trailing alpha digits are accepted and dropped: JPEG has no transparency.
    return Color(r, g, b)


def parse_color(token: str) -> Color:
    """Parse a CSS color name or ``#RGB[A]`` / ``#RRGGBB[AA]`` hex token."""
    value = (token or "").strip()
    match = _HEX_RE.match(value)
    if match:
        return _parse_hex(match.group(1))

    name = value.lower()
    if name in ImageColor.colormap:
        r, g, b = ImageColor.getrgb(name)[:3]
        return Color(r, g, b)

    raise InvalidColorFormat(token)
