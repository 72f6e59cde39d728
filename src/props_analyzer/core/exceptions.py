"""
Custom exception hierarchy for the AI Props Analyzer.

Provides domain-specific exceptions with rich error context. Only
``NoTargetsError`` and ``SinkError`` are run-level failures; the rest are
contained per target by the batch orchestrator.
"""

from __future__ import annotations

from typing import Any, NoReturn


class AnalyzerError(Exception):
    """Base exception for all analyzer errors."""

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize exception with message and context.

        Args:
            message: Human-readable error message
            **context: Additional error context for logging
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ValidationError(AnalyzerError):
    """Raised when input validation fails."""


class NoTargetsError(ValidationError):
    """Raised when a batch is started without any input files."""


class MissingInputError(AnalyzerError):
    """Raised when an input path does not resolve to readable content."""


class ContextUnavailableError(AnalyzerError):
    """Raised when an optional project context source is missing or malformed."""


class LLMError(AnalyzerError):
    """Raised when the generative service call fails, is rejected or times out."""


class MalformedResponseError(AnalyzerError):
    """Raised when a completion cannot be parsed as structured data."""


class SinkError(AnalyzerError):
    """Raised when the analysis artifact cannot be written."""


class ConfigurationError(AnalyzerError):
    """Raised when configuration is invalid."""


# Convenience error creation functions
def raise_malformed_response(message: str, **context: Any) -> NoReturn:
    """Raise a malformed response error with context."""
    raise MalformedResponseError(message, **context)
