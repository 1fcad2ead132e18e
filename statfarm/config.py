"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

SOURCE_NAMES: tuple[str, ...] = ("info", "markets", "governance", "chart")

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ApiConfig:
    base_url: str = ""
    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class SourceConfig:
    path: str = ""
    refresh_interval_ms: int | None = None

    @property
    def refresh_interval(self) -> float | None:
        """Refresh interval in seconds, or None for a one-shot fetch."""
        if self.refresh_interval_ms is None:
            return None
        return self.refresh_interval_ms / 1000


DEFAULT_SOURCES: dict[str, SourceConfig] = {
    "info": SourceConfig(path="/api/compound/info", refresh_interval_ms=2000),
    "markets": SourceConfig(path="/api/compound/markets", refresh_interval_ms=5000),
    "governance": SourceConfig(
        path="/api/compound/governance", refresh_interval_ms=20000
    ),
    "chart": SourceConfig(path="/api/compound/chart", refresh_interval_ms=None),
}


@dataclass(frozen=True)
class PollingConfig:
    discard_stale: bool = False


@dataclass(frozen=True)
class DisplayConfig:
    width: int = 96
    clear_screen: bool = True


@dataclass(frozen=True)
class AppConfig:
    api: ApiConfig = field(default_factory=ApiConfig)
    sources: dict[str, SourceConfig] = field(
        default_factory=lambda: dict(DEFAULT_SOURCES)
    )
    polling: PollingConfig = field(default_factory=PollingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_api(raw: dict[str, Any]) -> ApiConfig:
    return ApiConfig(
        base_url=str(raw.get("base_url", "")).rstrip("/"),
        timeout_seconds=float(raw.get("timeout_seconds", 10.0)),
    )


def _build_sources(raw: dict[str, Any]) -> dict[str, SourceConfig]:
    sources = dict(DEFAULT_SOURCES)
    for name, cfg in raw.items():
        default = DEFAULT_SOURCES.get(name, SourceConfig())
        cfg = cfg or {}
        interval = cfg.get("refresh_interval_ms", default.refresh_interval_ms)
        sources[name] = SourceConfig(
            path=cfg.get("path", default.path),
            refresh_interval_ms=None if interval is None else int(interval),
        )
    return sources


def _build_polling(raw: dict[str, Any]) -> PollingConfig:
    return PollingConfig(discard_stale=bool(raw.get("discard_stale", False)))


def _build_display(raw: dict[str, Any]) -> DisplayConfig:
    return DisplayConfig(
        width=int(raw.get("width", 96)),
        clear_screen=bool(raw.get("clear_screen", True)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        api=_build_api(raw.get("api") or {}),
        sources=_build_sources(raw.get("sources") or {}),
        polling=_build_polling(raw.get("polling") or {}),
        display=_build_display(raw.get("display") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.api.base_url:
        raise ValueError("api.base_url must be configured")
    if not cfg.api.base_url.startswith(("http://", "https://")):
        raise ValueError(f"api.base_url '{cfg.api.base_url}' is not an http(s) URL")
    if cfg.api.timeout_seconds <= 0:
        raise ValueError("api.timeout_seconds must be positive")

    for name in SOURCE_NAMES:
        source = cfg.sources.get(name)
        if source is None:
            raise ValueError(f"Source '{name}' is not configured")
        if not source.path:
            raise ValueError(f"Source '{name}' has no path")
        if source.refresh_interval_ms is not None and source.refresh_interval_ms <= 0:
            raise ValueError(
                f"Source '{name}' has a non-positive refresh interval"
            )

    if cfg.display.width < 40:
        raise ValueError("display.width must be at least 40 columns")
