"""
AI Props Analyzer - realistic mock props for UI components, generated by an LLM.

Analyzes component source files one at a time under a rate budget and
aggregates the generated props and wrapper flags into a single JSON artifact.
"""

from __future__ import annotations

__version__ = "1.0.0"

from .core.config import settings
from .domain.models import (
    AnalysisResult,
    AnalysisTarget,
    BatchOutput,
    BatchRun,
    ProjectContext,
    TargetState,
)
from .services.batch import BatchAnalyzer, analyze_files

__all__ = [
    "__version__",
    "settings",
    "analyze_files",
    "BatchAnalyzer",
    "AnalysisResult",
    "AnalysisTarget",
    "BatchOutput",
    "BatchRun",
    "ProjectContext",
    "TargetState",
]
