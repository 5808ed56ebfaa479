"""Conversion stages: color parsing, sizing, rasterizing, compositing, and JPEG encoding."""

from .color import named_colors, parse_color
from .compositor import composite
from .dimensions import resolve_dimensions, round_half_away
from .engine import CairoSvgEngine, RenderingEngine, font_scope, intrinsic_size, render
from .jpeg import encode_jpeg
from .models import Color, Dimensions, Document, RgbaBuffer, RgbBuffer

__all__ = [
    "CairoSvgEngine",
    "Color",
    "Dimensions",
    "Document",
    "RenderingEngine",
    "RgbBuffer",
    "RgbaBuffer",
    "composite",
    "encode_jpeg",
    "font_scope",
    "intrinsic_size",
    "named_colors",
    "parse_color",
    "render",
    "resolve_dimensions",
    "round_half_away",
]
