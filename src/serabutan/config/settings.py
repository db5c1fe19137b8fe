# src/serabutan/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/serabutan/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `SERABUTAN_CONFIG_PATH`
- a small whitelist of environment variables (see `_apply_env_overrides`)

Tuning knobs (search radius default, geocoder endpoint, cache TTLs) live in YAML,
not in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from serabutan.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `serabutan.config`."""
    text = resources.files("serabutan.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "Serabutan"
    http_timeout_seconds: float = 15
    log_level: str = "INFO"


class CacheSettings(BaseModel):
    enabled: bool = True
    dir: str = ".cache/serabutan"
    default_ttl_seconds: int = 60 * 60 * 24


class CatalogSettings(BaseModel):
    path: str = "data/catalogs/marketplace.json"


class SearchSettings(BaseModel):
    default_max_distance_km: float = Field(10.0, gt=0)
    earth_radius_km: float = Field(6371.0, gt=0)


class GeocoderSettings(BaseModel):
    base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "Serabutan/0.1 (set SERABUTAN_GEOCODER_USER_AGENT)"
    cache_ttl_seconds: int = 60 * 60 * 24 * 30


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    geocoder: GeocoderSettings = Field(default_factory=GeocoderSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload."""
    data = dict(data)
    overrides = {
        "SERABUTAN_LOG_LEVEL": ("app", "log_level"),
        "SERABUTAN_CACHE_DIR": ("cache", "dir"),
        "SERABUTAN_CATALOG_PATH": ("catalog", "path"),
        "SERABUTAN_GEOCODER_USER_AGENT": ("geocoder", "user_agent"),
    }
    for env_name, (section, key) in overrides.items():
        value = os.getenv(env_name)
        if value:
            data[section] = {**(data.get(section) or {}), key: value}
    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("SERABUTAN_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
