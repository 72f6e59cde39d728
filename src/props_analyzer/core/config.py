"""
Core configuration management using Pydantic V2 Settings.

This module provides type-safe, validated configuration management with support for:
- Environment variables
- .env file loading
- Runtime validation
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_PROVIDERS = ("gemini", "openai", "ollama")
DEFAULT_PROVIDER = "gemini"


def normalize_model_id(model_id: str) -> str:
    """Prefix bare model names with the default provider."""
    if "/" not in model_id:
        return f"{DEFAULT_PROVIDER}/{model_id}"
    return model_id


class Settings(BaseSettings):
    """
    Application-wide configuration with environment variable support.

    All settings can be overridden via environment variables or .env file.
    Most variables carry the ``PROPS_`` prefix; provider credentials keep
    their conventional names (``GEMINI_API_KEY``, ``OPENAI_API_KEY``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROPS_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ═══════════════════════════════════════════════════════════════════════
    # LLM Configuration
    # ═══════════════════════════════════════════════════════════════════════
    model: str = Field(
        default="gemini/gemini-2.5-flash",
        description="LLM model identifier (prefix: gemini/, openai/, ollama/)",
    )

    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("gemini_api_key", "GEMINI_API_KEY"),
        description="Google Generative Language API key",
    )

    gemini_api_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Generative Language REST API",
    )

    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("openai_api_key", "OPENAI_API_KEY"),
        description="OpenAI API key for GPT models",
    )

    ollama_url: str = Field(
        default="http://localhost:11434",
        validation_alias=AliasChoices("ollama_url", "OLLAMA_URL"),
        description="Ollama server URL for local models",
    )

    temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )

    request_timeout_seconds: float = Field(
        default=120.0,
        ge=1,
        le=3600,
        description="Per-call timeout for the generative service in seconds",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # Rate Budget Configuration
    # ═══════════════════════════════════════════════════════════════════════
    throttle_strategy: Literal["fixed", "window"] = Field(
        default="fixed",
        description="'fixed' spacing between calls or a sliding 'window' budget",
    )

    throttle_interval_seconds: float = Field(
        default=4.0,
        ge=0.0,
        description="Fixed delay between consecutive service calls",
    )

    rate_limit_per_minute: int = Field(
        default=15,
        ge=1,
        description="Requests-per-minute ceiling used by the window strategy",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # Project Context Configuration
    # ═══════════════════════════════════════════════════════════════════════
    manifest_filename: str = Field(
        default="package.json",
        description="Project manifest read for name, description and dependencies",
    )

    readme_filename: str = Field(
        default="README.md",
        description="Narrative document summarised into the project context",
    )

    readme_max_chars: int = Field(
        default=3000,
        ge=0,
        description="README characters kept before truncation",
    )

    max_file_bytes: int = Field(
        default=512_000,
        ge=1,
        description="Maximum bytes read from a single component file",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # Output Configuration
    # ═══════════════════════════════════════════════════════════════════════
    output_path: Path = Field(
        default=Path("analysis.json"),
        description="Location of the aggregated JSON artifact",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # Application Configuration
    # ═══════════════════════════════════════════════════════════════════════
    app_name: str = Field(
        default="AI Props Analyzer",
        description="Application display name",
    )

    app_version: str = Field(
        default="1.0.0",
        description="Application version",
    )

    environment: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Runtime environment",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # Logging Configuration
    # ═══════════════════════════════════════════════════════════════════════
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # Validators
    # ═══════════════════════════════════════════════════════════════════════
    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is uppercase."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("model")
    @classmethod
    def validate_model_format(cls, v: str) -> str:
        """Validate model identifier format."""
        return normalize_model_id(v)

    # ═══════════════════════════════════════════════════════════════════════
    # Helper Methods
    # ═══════════════════════════════════════════════════════════════════════
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Returns:
        Settings: Singleton settings object
    """
    return Settings()


# Convenience export
settings: Settings = get_settings()
