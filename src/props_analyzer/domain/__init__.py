"""Domain models and business entities."""

from __future__ import annotations

from .models import (
    AnalysisResult,
    AnalysisTarget,
    BatchOutput,
    BatchRun,
    ProjectContext,
    TargetReport,
    TargetState,
)

__all__ = [
    "AnalysisResult",
    "AnalysisTarget",
    "BatchOutput",
    "BatchRun",
    "ProjectContext",
    "TargetReport",
    "TargetState",
]
