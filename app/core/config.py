"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
- PORT is honored directly so the service runs on common PaaS hosts
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Production might inject via env vars only; tests never read a file.
_env_file = (
    str(_env_path)
    if _env_path.is_file() and not os.getenv("TESTING")
    else None
)


# Nested BaseSettings don't inherit env_file, so populate os.environ first.
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_app_settings() -> "AppSettings":
    return AppSettings()


def _build_upstream_settings() -> "UpstreamSettings":
    return UpstreamSettings()


def _build_log_settings() -> "LogSettings":
    return LogSettings()


class AppSettings(BaseSettings):
    """Server, CORS and rate limiting configuration."""

    host: str = Field(
        "0.0.0.0",
        description="Interface the HTTP server binds to",
    )
    port: int = Field(
        3000,
        validation_alias=AliasChoices("PORT", "APP_PORT"),
        description="TCP port the HTTP server listens on",
    )
    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by CORS (JSON list). Defaults to all origins.",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client rate limiting on proxy routes",
    )
    rate_limit_requests: int = Field(
        100,
        description="Maximum number of admitted requests per client within the window",
        ge=1,
    )
    rate_limit_window_seconds: float = Field(
        60.0,
        description="Trailing sliding window size in seconds",
        gt=0,
    )
    rate_limit_eviction_interval_seconds: float | None = Field(
        None,
        description=(
            "If set, periodically drop clients with no requests inside the window. "
            "Disabled by default: entries are otherwise retained for the process lifetime."
        ),
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
        populate_by_name=True,
    )


class UpstreamSettings(BaseSettings):
    """Roblox API endpoints and outbound request options."""

    gamepass_details_url: str = Field(
        "https://apis.roblox.com/game-passes/v1/game-passes/{gamepass_id}/details",
        description="Template for the game pass details resource",
    )
    inventory_url: str = Field(
        "https://inventory.roblox.com/v1/users/{user_id}/assets/collectibles",
        description="Template for the user collectibles inventory resource",
    )
    creations_url: str = Field(
        "https://apis.roblox.com/toolbox-service/v1/creations/get-user-creations",
        description="Creator asset listing resource",
    )
    gamepass_asset_type_id: int = Field(
        34,
        description="Numeric asset type code for game passes on the creations API",
    )
    user_agent: str = Field(
        "RobloxGamepassProxy/1.0",
        description="User-Agent header sent on every outbound call",
    )
    timeout_seconds: float | None = Field(
        None,
        description="Outbound timeout in seconds. Unset keeps the HTTP client default.",
    )

    model_config = SettingsConfigDict(
        env_prefix="UPSTREAM_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="'json' or 'plain'")
    output: str = Field(
        "console",
        description=(
            "'console' splits records (below WARNING to stdout, the rest to stderr), "
            "'stdout' sends everything to stdout, 'file' writes to file_path"
        ),
    )
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(0, description="Rotate the log file at this size (0 disables)")
    backup_count: int = Field(5, description="Rotated files to keep")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read/write the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Environments:
    - development: Local development
    - testing: Automated tests (no .env file is read)
    - staging: Pre-production (uses .env.staging)
    - production: Production deployment (uses .env.production)
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=_build_app_settings)
    upstream: UpstreamSettings = Field(default_factory=_build_upstream_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
