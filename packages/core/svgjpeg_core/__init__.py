"""Core services shared by the converter: errors, settings, and logging."""

from .config import ConverterConfig, config_path, load_config, save_config
from .errors import (
    ConversionError,
    EncodeFailure,
    InvalidColorFormat,
    InvalidDocumentSize,
    IoFailure,
    ParseFailure,
    RenderFailure,
)
from .logging_setup import configure_logging, get_logger, install_crash_hooks

__all__ = [
    "ConversionError",
    "ConverterConfig",
    "EncodeFailure",
    "InvalidColorFormat",
    "InvalidDocumentSize",
    "IoFailure",
    "ParseFailure",
    "RenderFailure",
    "config_path",
    "configure_logging",
    "get_logger",
    "install_crash_hooks",
    "load_config",
    "save_config",
]
