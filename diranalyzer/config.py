"""Configuration loading for diranalyzer (.diranalyzer.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logging import LEVEL_NAMES

CONFIG_FILENAME = ".diranalyzer.yml"

DEFAULT_DOCUMENTS_ROOT = "documents"
DEFAULT_TOP_N = 10
DEFAULT_MAX_WORKERS = 4
DEFAULT_ENCODING = "utf-8"
DEFAULT_STORE_PATH = ".diranalyzer/directories.json"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AnalysisConfig:
    """Settings for the word-frequency pipeline."""

    documents_root: Path
    top_n: int = DEFAULT_TOP_N
    max_workers: int = DEFAULT_MAX_WORKERS
    encoding: str = DEFAULT_ENCODING


@dataclass
class StoreConfig:
    """Location of the directory registry file."""

    path: Path


@dataclass
class ServiceConfig:
    """Bind address for service mode."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class LoggingConfig:
    """Log level and optional file sink."""

    level: str = "INFO"
    file: Optional[Path] = None


@dataclass
class AnalyzerSettings:
    """Represents the high-level settings defined in .diranalyzer.yml."""

    root: Path
    analysis: AnalysisConfig
    store: StoreConfig
    service: ServiceConfig = field(default_factory=ServiceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_settings(root: Path) -> AnalyzerSettings:
    root = root.resolve()
    return AnalyzerSettings(
        root=root,
        analysis=AnalysisConfig(documents_root=root / DEFAULT_DOCUMENTS_ROOT),
        store=StoreConfig(path=root / DEFAULT_STORE_PATH),
    )


def load_config(config_path: Path) -> AnalyzerSettings:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()
    settings = default_settings(root)

    if not config_file.exists():
        return settings

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    analysis_data = _as_dict(data.get("analysis"))
    if analysis_data:
        documents_root = _as_str(analysis_data.get("documents_root"))
        if documents_root:
            settings.analysis.documents_root = (root / documents_root).resolve()
        top_n = _as_int(analysis_data.get("top_n"))
        if top_n is not None:
            settings.analysis.top_n = _require_positive("analysis.top_n", top_n)
        max_workers = _as_int(analysis_data.get("max_workers"))
        if max_workers is not None:
            settings.analysis.max_workers = _require_positive("analysis.max_workers", max_workers)
        encoding = _as_str(analysis_data.get("encoding"))
        if encoding:
            settings.analysis.encoding = encoding

    store_data = _as_dict(data.get("store"))
    store_path = _as_str(store_data.get("path")) if store_data else None
    if store_path:
        settings.store.path = (root / store_path).resolve()

    service_data = _as_dict(data.get("service"))
    if service_data:
        host = _as_str(service_data.get("host"))
        if host:
            settings.service.host = host
        port = _as_int(service_data.get("port"))
        if port is not None:
            settings.service.port = port

    logging_data = _as_dict(data.get("logging"))
    if logging_data:
        level = _as_str(logging_data.get("level"))
        if level:
            if level.upper() not in LEVEL_NAMES:
                raise ConfigError(
                    f"logging.level must be one of {', '.join(LEVEL_NAMES)} (got {level!r})"
                )
            settings.logging.level = level.upper()
        log_file = _as_str(logging_data.get("file"))
        if log_file:
            settings.logging.file = (root / log_file).resolve()

    return settings


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _require_positive(key: str, value: int) -> int:
    if value < 1:
        raise ConfigError(f"{key} must be at least 1 (got {value})")
    return value


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None
