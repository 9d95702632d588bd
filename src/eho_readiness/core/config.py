# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Configuration management using Pydantic Settings."""

from beartype import beartype
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
        frozen=True,
        validate_default=True,
        extra="forbid",
    )

    # API Configuration
    app_name: str = Field(
        default="EHO Readiness",
        description="Application name",
        min_length=1,
    )
    api_host: str = Field(
        default="0.0.0.0",  # nosec B104 - containerized deployment binds all interfaces
        description="API host to bind to",
    )
    api_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="API port to bind to",
    )
    api_env: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="API environment",
    )
    api_cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root log level",
    )

    # Readiness evaluation
    readiness_window_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Trailing window for completions and temperature logs",
    )
    expiring_soon_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Evidence expiring within this many days is flagged",
    )
    source_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Per-source fetch timeout for the snapshot loader",
    )

    # Evidence store (Supabase / PostgREST)
    evidence_api_url: str | None = Field(
        default=None,
        description="PostgREST base URL, e.g. https://<project>.supabase.co/rest/v1",
    )
    evidence_api_key: str | None = Field(
        default=None,
        description="Service key sent as apikey and bearer token",
    )
    evidence_api_timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP timeout for evidence store requests",
    )

    @field_validator("evidence_api_url")
    @classmethod
    def validate_evidence_api_url(cls: type["Settings"], v: str | None) -> str | None:
        """Ensure the evidence store URL is an http(s) URL without trailing slash."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid evidence API URL: {v}")
        return v.rstrip("/")

    @field_validator("evidence_api_key")
    @classmethod
    def validate_evidence_api_key(
        cls: type["Settings"], v: str | None
    ) -> str | None:
        """Reject publishable (anon) keys; the engine needs a service key."""
        if v is not None and v.startswith("sb_publishable_"):
            raise ValueError(
                "Publishable anon key cannot read evidence across tables. "
                "Set EVIDENCE_API_KEY to a service role key."
            )
        return v

    @property
    @beartype
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.api_env == "production"

    @property
    @beartype
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.api_env == "development"


_settings: Settings | None = None


@beartype
def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    global _settings
    _settings = None
