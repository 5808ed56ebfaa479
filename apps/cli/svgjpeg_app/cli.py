"""CLI entrypoint for converting SVG documents to JPEG images."""

from __future__ import annotations

import argparse
import sys
from importlib import metadata
from pathlib import Path

from svgjpeg_core import (
    ConversionError,
    ConverterConfig,
    configure_logging,
    get_logger,
    install_crash_hooks,
    load_config,
)
from svgjpeg_renderer import parse_color

from .pipeline import ConversionOptions, convert


def _installed_version() -> str:
    try:
        return metadata.version("svgjpeg")
    except metadata.PackageNotFoundError:
        return "0.1.0"


def _positive_width(value: str) -> int:
    try:
        width = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid width: {value!r}") from None
    if width <= 0:
        raise argparse.ArgumentTypeError("Width must be greater than 0")
    return width


def _quality(value: str) -> int:
    try:
        quality = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid quality: {value!r}") from None
    if not 1 <= quality <= 100:
        raise argparse.ArgumentTypeError(f"Invalid quality '{quality}': must be between 1 and 100")
    return quality


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svgjpeg",
        description="Render an SVG document to a JPEG image.",
    )
    parser.add_argument("-i", "--input", default=None, help="Input SVG file. Reads stdin when omitted")
    parser.add_argument("-o", "--output", default=None, help="Output JPEG file. Writes stdout when omitted")
    parser.add_argument(
        "-w",
        "--width",
        type=_positive_width,
        default=None,
        help="Target width in pixels, keeping the aspect ratio. Defaults to the document size",
    )
    parser.add_argument("-q", "--quality", type=_quality, default=None, help="JPEG quality 1-100 (default 80)")
    parser.add_argument(
        "-b",
        "--background",
        default=None,
        help='Background color name or hex, e.g. "white" or "#FFFFFF" (default white)',
    )
    parser.add_argument("--use-fonts-dir", dest="fonts_dir", default=None, help="Directory of extra font files")
    parser.add_argument("--config", default=None, help="JSON defaults file (default: per-user config path)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument("--log-json", action="store_true", help="Emit log lines as JSON on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_installed_version()}")
    return parser


def build_options(args: argparse.Namespace, cfg: ConverterConfig) -> ConversionOptions:
    """Merge parsed flags over config defaults. Raises InvalidColorFormat before any I/O."""
    defaults = cfg.defaults
    background = args.background if args.background is not None else defaults.background
    fonts_dir = args.fonts_dir if args.fonts_dir is not None else defaults.fonts_dir
    return ConversionOptions(
        input_path=Path(args.input) if args.input else None,
        output_path=Path(args.output) if args.output else None,
        width=args.width if args.width is not None else defaults.width,
        quality=args.quality if args.quality is not None else defaults.quality,
        background=parse_color(background),
        fonts_dir=Path(fonts_dir).expanduser() if fonts_dir else None,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = load_config(Path(args.config).expanduser() if args.config else None)
    configure_logging(
        level="DEBUG" if args.verbose else cfg.logging.level,
        json_format=bool(args.log_json or cfg.logging.json),
    )
    install_crash_hooks()
    log = get_logger()

    try:
        options = build_options(args, cfg)
        result = convert(options)
    except ConversionError as exc:
        log.debug("conversion failed", exc_info=True, extra={"event": "conversion_failed"})
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    log.debug(
        f"done width={result.width} height={result.height} bytes={result.bytes_written}",
        extra={"event": "run_complete"},
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
