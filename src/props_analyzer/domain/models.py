"""
Domain models using Pydantic V2.

Defines the core data structures for the analyzer with:
- Strict type validation for everything the pipeline itself produces
- Open JSON values for everything the generative service produces
- Immutability for per-run inputs (context, targets)
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from pathlib import PurePath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, JsonValue

PLACEHOLDER_CONTEXT = "Unknown React Application"

# Suffixes whose files carry type/interface declarations the props must honour
TYPED_SUFFIXES = frozenset({".tsx", ".ts"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TargetState(str, Enum):
    """Lifecycle of a single target within a batch."""

    PENDING = "pending"
    READING = "reading"
    SKIPPED_MISSING = "skipped_missing"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    COMPOSING = "composing"
    INVOKING = "invoking"
    NORMALIZING = "normalizing"
    SUCCEEDED = "succeeded"
    FAILED_FALLBACK = "failed_fallback"


class ProjectContext(BaseModel):
    """
    Project-level description shared by every prompt of a run.

    Attributes:
        name: Declared project name
        description: Declared project description
        dependencies: Declared dependency names, in manifest order
        readme_summary: Narrative document, possibly truncated
        readme_truncated: Whether the narrative was cut short
        manifest_found: Whether the manifest contributed anything
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Declared project name")
    description: str = Field(default="", description="Declared project description")
    dependencies: tuple[str, ...] = Field(
        default=(),
        description="Declared dependency names",
    )
    readme_summary: str | None = Field(
        default=None,
        description="Narrative project summary",
    )
    readme_truncated: bool = Field(
        default=False,
        description="Whether the narrative summary was truncated",
    )
    manifest_found: bool = Field(
        default=False,
        description="Whether a project manifest was read",
    )

    @property
    def available(self) -> bool:
        """Check if any context source contributed."""
        return self.manifest_found or self.readme_summary is not None

    def render(self) -> str:
        """Render the context as the text block embedded in prompts."""
        if not self.available:
            return PLACEHOLDER_CONTEXT

        blocks: list[str] = []
        if self.manifest_found:
            blocks.append(
                f'Project Name: "{self.name or "Unnamed"}"\n'
                f'Description: "{self.description}"\n'
                f"Key Libraries: {', '.join(self.dependencies)}"
            )
        if self.readme_summary is not None:
            marker = "..." if self.readme_truncated else ""
            blocks.append(f"README Summary:\n{self.readme_summary}{marker}")
        return "\n\n".join(blocks)


class AnalysisTarget(BaseModel):
    """
    One input file of the batch.

    Attributes:
        path: Identifier exactly as supplied by the caller
        content: Raw textual content of the file
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1, description="Input identifier")
    content: str = Field(default="", description="Raw file content")

    @property
    def filename(self) -> str:
        """Base name of the file."""
        return PurePath(self.path).name

    @property
    def suffix(self) -> str:
        """Lower-cased file extension."""
        return PurePath(self.path).suffix.lower()

    @property
    def is_typed(self) -> bool:
        """Whether the file kind carries static type declarations."""
        return self.suffix in TYPED_SUFFIXES


class AnalysisResult(BaseModel):
    """
    Structured outcome for one target.

    ``props`` is whatever the service generated; ``wrappers`` is normally an
    object of named booleans (``router``, ``redux``, ``query``). Neither is
    validated beyond being JSON; extra top-level keys are preserved.
    """

    model_config = ConfigDict(extra="allow")

    props: JsonValue = Field(default_factory=dict, description="Generated props")
    wrappers: JsonValue = Field(
        default_factory=dict,
        description="Wrapper flags implied by the component",
    )

    @classmethod
    def empty(cls) -> AnalysisResult:
        """Fallback entry recorded when analysis fails."""
        return cls(props={}, wrappers={})

    @property
    def is_empty(self) -> bool:
        """Check if nothing was generated."""
        return not self.props and not self.wrappers


class TargetReport(BaseModel):
    """Per-target run record used for reporting."""

    model_config = ConfigDict(validate_assignment=True)

    path: str = Field(..., description="Input identifier")
    state: TargetState = Field(default=TargetState.PENDING)
    error: str | None = Field(default=None, description="Failure or skip reason")
    duration_seconds: float = Field(default=0.0, ge=0.0)


class BatchOutput(BaseModel):
    """
    Ordered mapping of target identifier to analysis result.

    This is the persisted artifact. Entries are insert-only.
    """

    entries: dict[str, AnalysisResult] = Field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    def __getitem__(self, path: str) -> AnalysisResult:
        return self.entries[path]

    def record(self, path: str, result: AnalysisResult) -> None:
        """Add the entry for ``path``; existing entries are never replaced."""
        if path in self.entries:
            raise ValueError(f"entry already recorded for {path!r}")
        self.entries[path] = result

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            path: result.model_dump(mode="json")
            for path, result in self.entries.items()
        }

    def to_json(self, indent: int = 2) -> str:
        """Pretty-printed JSON document, keys in input order."""
        return json.dumps(
            self.to_dict(), indent=indent, ensure_ascii=False, allow_nan=False
        )


class BatchRun(BaseModel):
    """
    Everything one batch run produced.

    Attributes:
        output: The aggregated results (persisted)
        reports: Per-target records, in input order
        throttle_waits: Number of rate-limit delays taken
        output_path: Where the artifact was written
        started_at: Run start timestamp
        completed_at: Run completion timestamp
    """

    output: BatchOutput = Field(default_factory=BatchOutput)
    reports: list[TargetReport] = Field(default_factory=list)
    throttle_waits: int = Field(default=0, ge=0)
    output_path: str | None = Field(default=None)
    started_at: datetime = Field(default_factory=_utcnow)
    completed_at: datetime | None = Field(default=None)

    def _count(self, *states: TargetState) -> int:
        return sum(1 for report in self.reports if report.state in states)

    @property
    def succeeded(self) -> int:
        return self._count(TargetState.SUCCEEDED)

    @property
    def failed(self) -> int:
        return self._count(TargetState.FAILED_FALLBACK)

    @property
    def skipped(self) -> int:
        return self._count(TargetState.SKIPPED_MISSING, TargetState.SKIPPED_DUPLICATE)

    @property
    def duration_seconds(self) -> float | None:
        """Get run duration in seconds."""
        if self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None
