"""Configuration management for the admin API."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .store import DEFAULT_LATENCY

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
# Level names uvicorn accepts; TRACE has no stdlib logging equivalent.
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE"}

# Environment variables that override individual settings, in increasing priority.
_ENV_OVERRIDES = (
    ("host", "ACME_ADMIN_HOST"),
    ("port", "PORT"),
    ("port", "ACME_ADMIN_PORT"),
    ("environment", "ACME_ADMIN_ENV"),
    ("log_level", "ACME_ADMIN_LOG_LEVEL"),
    ("store_latency", "ACME_ADMIN_STORE_LATENCY"),
    ("seed_data", "ACME_ADMIN_SEED_DATA"),
)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the API process."""

    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "development"
    log_level: str = "INFO"
    store_latency: float = DEFAULT_LATENCY
    seed_data: bool = True

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Settings":
        """Create :class:`Settings` from raw configuration values."""
        known = {field.name for field in fields(Settings)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return Settings()._with_values(data)

    def _with_values(self, data: Mapping[str, Any]) -> "Settings":
        values: Dict[str, Any] = {}
        for key, raw in data.items():
            values[key] = _coerce(key, raw)
        return replace(self, **values)


def _parse_bool(key: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for '{key}': {raw!r}")


def _coerce(key: str, raw: Any) -> Any:
    if raw is None:
        raise ValueError(f"Invalid value for '{key}': None")
    try:
        if key == "port":
            port = int(raw)
            if port < 0 or port > 65535:
                raise ValueError
            return port
        if key == "store_latency":
            latency = float(raw)
            if latency < 0:
                raise ValueError
            return latency
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for '{key}': {raw!r}") from exc
    if key == "seed_data":
        return _parse_bool(key, raw)
    text = str(raw).strip()
    if not text:
        raise ValueError(f"Invalid value for '{key}': {raw!r}")
    if key == "log_level":
        level = text.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid value for 'log_level': {raw!r}")
        return level
    return text


def resolve_config_path(env_value: Optional[str]) -> Optional[Path]:
    """Resolve the optional YAML configuration file."""
    if not env_value:
        return None
    return Path(env_value).expanduser().resolve(strict=False)


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Load settings from a YAML file, then apply environment overrides."""
    env = os.environ if environ is None else environ
    if config_path is None:
        config_path = resolve_config_path(env.get("ACME_ADMIN_CONFIG"))

    settings = Settings()
    if config_path is not None:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
        if not isinstance(raw, dict):
            raise ValueError("Configuration file must contain a mapping of settings")
        settings = Settings.from_dict(raw)

    overrides: Dict[str, str] = {}
    for key, variable in _ENV_OVERRIDES:
        value = env.get(variable)
        if value is not None and value.strip():
            overrides[key] = value
    return settings._with_values(overrides)


__all__ = ["Settings", "load_settings", "resolve_config_path"]
