"""Optional JSON defaults file schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .logging_setup import get_logger


CONFIG_VERSION = 1
CONFIG_ENV_VAR = "SVGJPEG_CONFIG"

DEFAULT_QUALITY = 80
DEFAULT_BACKGROUND = "white"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DefaultsConfig:
    quality: int = DEFAULT_QUALITY
    background: str = DEFAULT_BACKGROUND
    width: int | None = None
    fonts_dir: str | None = None


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    json: bool = False


@dataclass
class ConverterConfig:
    config_version: int = CONFIG_VERSION
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "svgjpeg" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "svgjpeg" / "config.json"
    return Path.home() / ".config" / "svgjpeg" / "config.json"


def _merge(dataclass_type, raw: Any):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_defaults(cfg: ConverterConfig) -> None:
    try:
        quality = int(cfg.defaults.quality)
    except (TypeError, ValueError):
        quality = DEFAULT_QUALITY
    cfg.defaults.quality = max(1, min(100, quality))

    if cfg.defaults.width is not None:
        try:
            width = int(cfg.defaults.width)
        except (TypeError, ValueError):
            width = 0
        cfg.defaults.width = width if width > 0 else None

    if not isinstance(cfg.defaults.background, str) or not cfg.defaults.background.strip():
        cfg.defaults.background = DEFAULT_BACKGROUND
    fonts_dir = cfg.defaults.fonts_dir
    cfg.defaults.fonts_dir = fonts_dir.strip() if isinstance(fonts_dir, str) and fonts_dir.strip() else None


def _normalize_logging(cfg: ConverterConfig) -> None:
    level = str(cfg.logging.level or "").upper()
    cfg.logging.level = level if level in _LOG_LEVELS else "WARNING"
    cfg.logging.json = bool(cfg.logging.json)


def load_config(path: Path | None = None) -> ConverterConfig:
    path = path or config_path()
    if not path.exists():
        return ConverterConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        get_logger().warning(
            f"ignoring unreadable config {path}: {exc}", extra={"event": "config_unreadable"}
        )
        return ConverterConfig()
    if not isinstance(raw, dict):
        return ConverterConfig()

    cfg = ConverterConfig(
        config_version=CONFIG_VERSION,
        defaults=_merge(DefaultsConfig, raw.get("defaults", {})),
        logging=_merge(LoggingConfig, raw.get("logging", {})),
    )

    _normalize_defaults(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: ConverterConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
