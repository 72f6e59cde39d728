"""
Unit tests for configuration management.

Tests settings validation and environment variable handling.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from props_analyzer.core.config import Settings


class TestSettings:
    """Tests for Settings configuration."""

    def test_default_settings(self, temp_dir: Path) -> None:
        """Test that default settings are valid."""
        settings = Settings()

        assert settings.app_name == "AI Props Analyzer"
        assert settings.throttle_interval_seconds == 4.0
        assert settings.rate_limit_per_minute == 15
        assert settings.readme_max_chars == 3000
        assert settings.output_path == Path("analysis.json")
        assert settings.manifest_filename == "package.json"

    def test_bare_model_gets_default_provider(self) -> None:
        """Test model identifier validation."""
        settings = Settings(model="gemini-2.5-pro")

        assert settings.model == "gemini/gemini-2.5-pro"

    def test_prefixed_model_kept(self) -> None:
        settings = Settings(model="openai/gpt-4o-mini")

        assert settings.model == "openai/gpt-4o-mini"

    def test_environment_helpers(self) -> None:
        """Test environment check helper methods."""
        dev_settings = Settings(environment="development")
        prod_settings = Settings(environment="production")

        assert not dev_settings.is_production
        assert prod_settings.is_production

    def test_log_level_uppercase(self) -> None:
        """Test that log level is converted to uppercase."""
        settings = Settings(log_level="debug")

        assert settings.log_level == "DEBUG"

    def test_prefixed_environment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test PROPS_ variables and conventional credential names."""
        monkeypatch.setenv("PROPS_THROTTLE_STRATEGY", "window")
        monkeypatch.setenv("PROPS_RATE_LIMIT_PER_MINUTE", "30")
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")

        settings = Settings()

        assert settings.throttle_strategy == "window"
        assert settings.rate_limit_per_minute == 30
        assert settings.gemini_api_key == "from-env"

    def test_invalid_throttle_strategy(self) -> None:
        with pytest.raises(ValueError):
            Settings(throttle_strategy="adaptive")
