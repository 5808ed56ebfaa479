"""Failure kinds for a single SVG to JPEG conversion run."""

from __future__ import annotations


class ConversionError(RuntimeError):
    """Base class for every terminal conversion failure."""


class InvalidColorFormat(ConversionError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Invalid background color {token!r}: expected a color name or #RGB/#RRGGBB hex")


class InvalidDocumentSize(ConversionError):
    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        super().__init__(f"Invalid document size {width}x{height}: width and height must be greater than 0")


class ParseFailure(ConversionError):
    """Input bytes are not a usable SVG document."""


class RenderFailure(ConversionError):
    """Rendering engine could not produce a pixel buffer."""


class EncodeFailure(ConversionError):
    """JPEG encoder rejected the pixel buffer."""


class IoFailure(ConversionError):
    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"{reason}: {target}")
