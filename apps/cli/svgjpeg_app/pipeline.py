"""Byte sources/sinks and the end-to-end SVG to JPEG conversion sequence."""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from svgjpeg_core.errors import IoFailure
from svgjpeg_core.logging_setup import get_logger
from svgjpeg_renderer import (
    CairoSvgEngine,
    Color,
    RenderingEngine,
    composite,
    encode_jpeg,
    render,
    resolve_dimensions,
)


@dataclass(frozen=True)
class ConversionOptions:
    input_path: Path | None = None
    output_path: Path | None = None
    width: int | None = None
    quality: int = 80
    background: Color = Color(255, 255, 255)
    fonts_dir: Path | None = None


@dataclass(frozen=True)
class ConversionResult:
    width: int
    height: int
    quality: int
    bytes_written: int
    output: str


class FileSource:
    def __init__(self, path: Path) -> None:
        self.path = path

    @property
    def name(self) -> str:
        return str(self.path)

    def read(self) -> bytes:
        try:
            return self.path.read_bytes()
        except OSError as exc:
            raise IoFailure(self.name, f"Failed to read input file ({exc.strerror or exc})") from exc


class StdinSource:
    name = "<stdin>"

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self._stream = stream

    def read(self) -> bytes:
        stream = self._stream if self._stream is not None else sys.stdin.buffer
        try:
            return stream.read()
        except OSError as exc:
            raise IoFailure(self.name, f"Failed to read from stdin ({exc})") from exc


class FileSink:
    """Writes through a sibling temp file so the target is never left truncated."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @property
    def name(self) -> str:
        return str(self.path)

    def write(self, payload: bytes) -> int:
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent), delete=False
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(payload)
            os.chmod(tmp_path, _default_file_mode())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise IoFailure(self.name, f"Failed to write output file ({exc.strerror or exc})") from exc
        return len(payload)


class StdoutSink:
    name = "<stdout>"

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self._stream = stream

    def write(self, payload: bytes) -> int:
        stream = self._stream if self._stream is not None else sys.stdout.buffer
        try:
            stream.write(payload)
            stream.flush()
        except OSError as exc:
            raise IoFailure(self.name, f"Failed to write to stdout ({exc})") from exc
        return len(payload)


def _default_file_mode() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


def open_source(options: ConversionOptions) -> FileSource | StdinSource:
    if options.input_path is not None:
        return FileSource(options.input_path)
    return StdinSource()


def open_sink(options: ConversionOptions) -> FileSink | StdoutSink:
    if options.output_path is not None:
        return FileSink(options.output_path)
    return StdoutSink()


def convert(
    options: ConversionOptions,
    engine: RenderingEngine | None = None,
    source: FileSource | StdinSource | None = None,
    sink: FileSink | StdoutSink | None = None,
) -> ConversionResult:
    """Run one conversion: read, load, size, render, composite, encode, write.

    Nothing reaches the sink unless every earlier stage succeeded.
    """
    log = get_logger()
    engine = engine or CairoSvgEngine()
    source = source or open_source(options)
    sink = sink or open_sink(options)

    data = source.read()
    log.debug(f"read {len(data)} bytes from {source.name}", extra={"event": "input_read"})

    document = engine.load(data)
    dimensions = resolve_dimensions(document.width, document.height, options.width)
    log.debug(
        f"resolved output size {dimensions.width}x{dimensions.height}", extra={"event": "dimensions_resolved"}
    )

    rgba = render(engine, document, dimensions, options.fonts_dir)
    rgb = composite(rgba, options.background)
    payload = encode_jpeg(rgb, options.quality)
    log.debug(f"encoded {len(payload)} bytes at quality {options.quality}", extra={"event": "jpeg_encoded"})

    written = sink.write(payload)
    log.info(
        f"wrote {dimensions.width}x{dimensions.height} JPEG to {sink.name}", extra={"event": "conversion_done"}
    )
    return ConversionResult(
        width=dimensions.width,
        height=dimensions.height,
        quality=options.quality,
        bytes_written=written,
        output=sink.name,
    )
