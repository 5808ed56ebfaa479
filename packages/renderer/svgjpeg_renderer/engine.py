"""Vector rendering engine adapter backed by cairosvg."""

from __future__ import annotations

import os
import re
import tempfile
from contextlib import contextmanager
from io import BytesIO
from pathlib import Path
from typing import Iterator, Protocol
from xml.sax.saxutils import escape

from PIL import Image

from svgjpeg_core.errors import ParseFailure, RenderFailure
from svgjpeg_core.logging_setup import get_logger

from .models import Dimensions, Document, RgbaBuffer

try:  # pragma: no cover - needs the native cairo library at import time
    import cairosvg
    from cairosvg.parser import Tree
except Exception:  # pragma: no cover
    cairosvg = None
    Tree = None


DEFAULT_DOCUMENT_SIZE = 100.0
SYSTEM_FONTCONFIG = "/etc/fonts/fonts.conf"

# CSS pixels per unit at 96 dpi, the resolution cairosvg renders with.
_UNITS_TO_PX = {
    "": 1.0,
    "px": 1.0,
    "in": 96.0,
    "cm": 96.0 / 2.54,
    "mm": 96.0 / 25.4,
    "q": 96.0 / 101.6,
    "pt": 96.0 / 72.0,
    "pc": 16.0,
    "em": 16.0,
    "ex": 8.0,
}

_LENGTH_RE = re.compile(
    r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*([a-zA-Z]*|%)\s*$"
)
_VIEWBOX_SPLIT = re.compile(r"[\s,]+")

_FONTCONFIG_TEMPLATE = """<?xml version="1.0"?>
<!DOCTYPE fontconfig SYSTEM "fonts.dtd">
<fontconfig>
  <include ignore_missing="yes">{system}</include>
  <dir>{fonts_dir}</dir>
</fontconfig>
"""


class RenderingEngine(Protocol):
    def load(self, data: bytes) -> Document: ...

    def rasterize(self, document: Document, dimensions: Dimensions) -> RgbaBuffer: ...


def parse_length(value: str | None) -> float | None:
    """Convert an SVG length to CSS pixels; None for absent or relative sizes."""
    if value is None:
        return None
    match = _LENGTH_RE.match(str(value))
    if not match:
        return None
    number, unit = float(match.group(1)), match.group(2).lower()
    if unit == "%" or unit not in _UNITS_TO_PX:
        return None
    return number * _UNITS_TO_PX[unit]


def parse_viewbox(value: str | None) -> tuple[float, float, float, float] | None:
    if not value:
        return None
    parts = [p for p in _VIEWBOX_SPLIT.split(value.strip()) if p]
    if len(parts) != 4:
        return None
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError:
        return None
    if w <= 0 or h <= 0:
        return None
    return (x, y, w, h)


def intrinsic_size(width: str | None, height: str | None, viewbox: str | None) -> tuple[float, float]:
    """Resolve root ``width``/``height``/``viewBox`` attributes to a pixel size.

    Missing or percentage sides come from the viewBox, keeping its aspect
    ratio when only one side is given, and default to 100 without a viewBox.
    """
    w = parse_length(width)
    h = parse_length(height)
    box = parse_viewbox(viewbox)

    if box is not None:
        _, _, box_w, box_h = box
        if w is None and h is None:
            w, h = box_w, box_h
        elif w is None:
            w = h * box_w / box_h
        elif h is None:
            h = w * box_h / box_w

    if w is None:
        w = DEFAULT_DOCUMENT_SIZE
    if h is None:
        h = DEFAULT_DOCUMENT_SIZE
    return w, h


class CairoSvgEngine:
    """Loads and rasterizes SVG documents with cairosvg."""

    def __init__(self, dpi: int = 96) -> None:
        self.dpi = dpi
        self._log = get_logger()

    @staticmethod
    def _require_cairosvg() -> None:
        if cairosvg is None:
            raise RenderFailure("cairosvg and the cairo library are required: pip install cairosvg")

    def load(self, data: bytes) -> Document:
        if not data or not data.strip():
            raise ParseFailure("Failed to parse SVG data: input is empty")
        self._require_cairosvg()
        try:
            tree = Tree(bytestring=data, unsafe=False)
        except Exception as exc:
            raise ParseFailure(f"Failed to parse SVG data: {exc}") from exc
        if tree.tag != "svg":
            raise ParseFailure(f"Failed to parse SVG data: root element is <{tree.tag}>, expected <svg>")

        width, height = intrinsic_size(tree.get("width"), tree.get("height"), tree.get("viewBox"))
        self._log.debug(
            f"loaded document intrinsic_size={width}x{height}", extra={"event": "document_loaded"}
        )
        return Document(data=bytes(data), width=width, height=height)

    def rasterize(self, document: Document, dimensions: Dimensions) -> RgbaBuffer:
        self._require_cairosvg()
        try:
            png = cairosvg.svg2png(
                bytestring=document.data,
                dpi=self.dpi,
                output_width=dimensions.width,
                output_height=dimensions.height,
            )
            with Image.open(BytesIO(png)) as image:
                rgba = image.convert("RGBA")
        except Exception as exc:
            raise RenderFailure(f"Failed to render SVG: {exc}") from exc

        # PNG output from cairo is un-premultiplied.
        return RgbaBuffer(width=rgba.width, height=rgba.height, data=rgba.tobytes(), premultiplied=False)


@contextmanager
def font_scope(fonts_dir: Path | str | None) -> Iterator[Path | None]:
    """Expose ``fonts_dir`` to fontconfig for the duration of the block.

    Yields the registered directory, or None when nothing was registered.
    """
    log = get_logger()
    if fonts_dir is None:
        yield None
        return

    directory = Path(fonts_dir).expanduser()
    if not directory.is_dir():
        log.warning(
            f"Fonts directory '{directory}' does not exist", extra={"event": "fonts_dir_missing"}
        )
        yield None
        return

    previous = os.environ.get("FONTCONFIG_FILE")
    system = previous or SYSTEM_FONTCONFIG
    payload = _FONTCONFIG_TEMPLATE.format(
        system=escape(system),
        fonts_dir=escape(str(directory.resolve())),
    )
    conf_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", suffix=".conf", prefix="svgjpeg-fonts-", encoding="utf-8", delete=False
        ) as handle:
            conf_path = Path(handle.name)
            handle.write(payload)
    except OSError as exc:
        if conf_path is not None:
            conf_path.unlink(missing_ok=True)
            conf_path = None
        log.warning(
            f"Failed to register fonts directory '{directory}': {exc}",
            extra={"event": "fonts_dir_unregistered"},
        )
    if conf_path is None:
        yield None
        return

    log.info(f"Loading fonts from: {directory}", extra={"event": "fonts_dir_loaded"})
    os.environ["FONTCONFIG_FILE"] = str(conf_path)
    try:
        yield directory
    finally:
        if previous is None:
            os.environ.pop("FONTCONFIG_FILE", None)
        else:
            os.environ["FONTCONFIG_FILE"] = previous
        conf_path.unlink(missing_ok=True)


def render(
    engine: RenderingEngine,
    document: Document,
    dimensions: Dimensions,
    fonts_dir: Path | str | None = None,
) -> RgbaBuffer:
    """Rasterize ``document`` at exactly ``dimensions`` with optional extra fonts."""
    with font_scope(fonts_dir):
        buffer = engine.rasterize(document, dimensions)

    if (buffer.width, buffer.height) != (dimensions.width, dimensions.height):
        raise RenderFailure(
            f"Renderer produced {buffer.width}x{buffer.height}, expected {dimensions.width}x{dimensions.height}"
        )
    if len(buffer.data) != dimensions.pixel_count * 4:
        raise RenderFailure("Renderer produced a truncated RGBA buffer")
    return buffer
