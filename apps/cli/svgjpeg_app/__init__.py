"""Command-line SVG to JPEG converter."""

from .pipeline import ConversionOptions, ConversionResult, convert

__all__ = ["ConversionOptions", "ConversionResult", "convert"]
