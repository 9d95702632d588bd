"""Tests for configuration, logging and result types."""

import logging

import pytest
from pydantic import ValidationError

from eho_readiness.core.config import Settings, clear_settings_cache, get_settings
from eho_readiness.core.logging_utils import get_logger
from eho_readiness.core.result_types import Err, Ok


class TestSettings:
    """Test settings defaults and validation."""

    def test_defaults(self) -> None:
        """Test readiness defaults."""
        settings = Settings()
        assert settings.readiness_window_days == 30
        assert settings.expiring_soon_days == 30
        assert settings.source_timeout_seconds == 10.0
        assert settings.evidence_api_url is None
        assert settings.is_development is True

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test environment variables feed the cached settings."""
        monkeypatch.setenv("READINESS_WINDOW_DAYS", "14")
        monkeypatch.setenv("API_ENV", "production")
        clear_settings_cache()

        settings = get_settings()
        assert settings.readiness_window_days == 14
        assert settings.is_production is True
        assert get_settings() is settings

    def test_url_normalised(self) -> None:
        """Test the trailing slash is stripped."""
        settings = Settings(evidence_api_url="https://example.supabase.co/rest/v1/")
        assert settings.evidence_api_url == "https://example.supabase.co/rest/v1"

    def test_invalid_url_rejected(self) -> None:
        """Test non-http URLs are refused."""
        with pytest.raises(ValidationError):
            Settings(evidence_api_url="ftp://example.com")

    def test_publishable_key_rejected(self) -> None:
        """Test anon keys cannot be configured."""
        with pytest.raises(ValidationError, match="service role key"):
            Settings(evidence_api_key="sb_publishable_abc")

    def test_frozen(self) -> None:
        """Test settings are immutable."""
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.api_port = 9000  # type: ignore[misc]


class TestResultTypes:
    """Test Ok and Err wrappers."""

    def test_ok(self) -> None:
        """Test success values."""
        result = Ok(3)
        assert result.is_ok() and not result.is_err()
        assert result.unwrap() == 3
        with pytest.raises(ValueError):
            result.unwrap_err()

    def test_err(self) -> None:
        """Test error values."""
        result: Err[str] = Err("cannot evaluate")
        assert result.is_err()
        assert result.unwrap_err() == "cannot evaluate"
        with pytest.raises(ValueError, match="cannot evaluate"):
            result.unwrap()

    @pytest.mark.parametrize("wrapper", [Ok, Err])
    def test_surface_is_what_callers_use(self, wrapper: type) -> None:
        """Test results expose only the checks and unwraps the engine and API rely on."""
        public = {name for name in vars(wrapper) if not name.startswith("_")}
        assert public - {"value", "error"} == {
            "is_ok",
            "is_err",
            "unwrap",
            "unwrap_err",
        }


class TestLogging:
    """Test logger helper."""

    def test_default_logger_name(self) -> None:
        """Test the package logger is returned by default."""
        assert get_logger().name == "eho_readiness"

    def test_level_override(self) -> None:
        """Test an explicit level is applied."""
        logger = get_logger("eho_readiness.test", level=logging.DEBUG)
        assert logger.level == logging.DEBUG
