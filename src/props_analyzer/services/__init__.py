"""Business services and batch orchestration."""

from __future__ import annotations

from .batch import BatchAnalyzer, analyze_files

__all__ = ["BatchAnalyzer", "analyze_files"]
