"""Core application components."""

from __future__ import annotations

from .config import settings
from .exceptions import AnalyzerError
from .logging import get_logger

__all__ = ["settings", "AnalyzerError", "get_logger"]
