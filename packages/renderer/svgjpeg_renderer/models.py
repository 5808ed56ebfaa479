"""Typed value models flowing through the conversion pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    @property
    def hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Dimensions must be at least 1x1, got {self.width}x{self.height}")

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Document:
    """Loaded SVG input with its intrinsic size in CSS pixels."""

    data: bytes
    width: float
    height: float


@dataclass(frozen=True)
class RgbaBuffer:
    width: int
    height: int
    data: bytes
    premultiplied: bool = False


@dataclass(frozen=True)
class RgbBuffer:
    width: int
    height: int
    data: bytes
