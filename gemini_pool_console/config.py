"""Console configuration management.

Configuration sources (in priority order):
1. Environment variables (GEMINI_POOL_ prefix)
2. Config file (console.yaml)
3. Defaults
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class HTTPConfig(BaseModel):
    """Admin API client configuration."""

    timeout: float = Field(default=30.0, gt=0)

    # User actions must not be repeated silently, so retries are off by default.
    max_retries: int = Field(default=0, ge=0, le=10)


class RefreshConfig(BaseModel):
    """Background refresh of the key table and dashboard."""

    interval_seconds: float = Field(default=30.0, gt=0)

    # Discard list responses older than the latest applied one.
    strict_ordering: bool = False


class UIConfig(BaseModel):
    """Presentation timings and defaults."""

    default_language: Literal["zh", "en"] = "zh"
    notice_ttl: float = 5.0
    login_notice_ttl: float = 3.0
    redirect_delay: float = 1.0


class StorageConfig(BaseModel):
    """Where the session token and language preference are kept."""

    path: Path = Field(
        default_factory=lambda: Path.home() / ".gemini_pool_console" / "state.json"
    )


class ConsoleSettings(BaseSettings):
    """Admin console settings."""

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_POOL_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    endpoint: str = "http://localhost:8080"
    api_prefix: str = "/admin/api"

    http: HTTPConfig = Field(default_factory=HTTPConfig)
    refresh: RefreshConfig = Field(default_factory=RefreshConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment first so it overrides values read from console.yaml.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @property
    def api_base_url(self) -> str:
        """Endpoint joined with the admin API prefix."""
        prefix = "/" + self.api_prefix.strip("/") if self.api_prefix.strip("/") else ""
        return self.endpoint.rstrip("/") + prefix


def _load_config_file() -> dict:
    """Load configuration from YAML file if exists.

    Looks for config file in order:
    1. GEMINI_POOL_CONFIG_FILE environment variable
    2. ./console.yaml
    """
    config_paths = [
        os.environ.get("GEMINI_POOL_CONFIG_FILE"),
        Path("console.yaml"),
    ]

    for path in config_paths:
        if path is None:
            continue
        path = Path(path)
        if path.exists():
            with open(path) as f:
                return yaml.safe_load(f) or {}

    return {}


@lru_cache
def get_settings() -> ConsoleSettings:
    """Get cached settings instance.

    Configuration is loaded from:
    1. YAML config file (if exists)
    2. Environment variables (override)
    3. Defaults
    """
    return ConsoleSettings(**_load_config_file())
