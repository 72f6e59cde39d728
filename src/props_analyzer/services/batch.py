"""
Batch orchestration of component analyses.

Coordinates the per-file pipeline:
1. Project context (built once per run)
2. Reading each input file
3. Prompt composition
4. Throttled call to the generative service
5. Response normalization, with an empty fallback on any failure
6. A single write of the aggregated results
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Sequence

from ..core.config import Settings, settings
from ..core.exceptions import AnalyzerError, MissingInputError, NoTargetsError
from ..core.logging import LoggerMixin
from ..domain.models import (
    AnalysisResult,
    AnalysisTarget,
    BatchOutput,
    BatchRun,
    ProjectContext,
    TargetReport,
    TargetState,
)
from .context import build_project_context
from .llm import LLMClient
from .normalizer import normalize
from .prompts import compose_prompt
from .reader import read_target
from .sink import ResultSink
from .throttle import Throttle, build_throttle

Completion = Callable[[str], str]
Reader = Callable[[str], AnalysisTarget]
Sink = Callable[[BatchOutput], Path]
ProgressCallback = Callable[[TargetReport], None]


class BatchAnalyzer(LoggerMixin):
    """
    Analyzes a list of component files one at a time.

    Every collaborator is injectable; defaults come from ``Settings``. All
    state of a run lives in the ``BatchRun`` returned by ``run()``, so one
    analyzer can serve several batches.
    """

    def __init__(
        self,
        complete: Completion | None = None,
        *,
        throttle: Throttle | None = None,
        context: ProjectContext | None = None,
        project_root: Path | str = ".",
        reader: Reader | None = None,
        sink: Sink | None = None,
        on_progress: ProgressCallback | None = None,
        config: Settings | None = None,
    ) -> None:
        """
        Initialize the analyzer.

        Args:
            complete: Prompt -> completion callable (defaults to ``LLMClient``)
            throttle: Rate budget applied between service calls
            context: Pre-built project context (built from ``project_root`` if None)
            project_root: Directory holding the manifest and README
            reader: Path -> target callable
            sink: Persists the final output, returns the artifact path
            on_progress: Called with the target's report on every state change
            config: Settings (uses the global settings if None)
        """
        self.config = config or settings
        self.complete = complete or LLMClient(config=self.config)
        self.throttle = throttle or build_throttle(self.config)
        self.context = context
        self.project_root = Path(project_root)
        self.reader = reader or self._read
        self.sink = sink or ResultSink(self.config.output_path)
        self.on_progress = on_progress

    def _read(self, path: str) -> AnalysisTarget:
        return read_target(path, max_bytes=self.config.max_file_bytes)

    def build_context(self) -> ProjectContext:
        """Context shared by every prompt; built once and cached."""
        if self.context is None:
            self.context = build_project_context(
                self.project_root,
                manifest_filename=self.config.manifest_filename,
                readme_filename=self.config.readme_filename,
                readme_max_chars=self.config.readme_max_chars,
            )
        return self.context

    def run(self, paths: Sequence[str]) -> BatchRun:
        """
        Analyze ``paths`` in order and persist the aggregated output.

        Args:
            paths: Input identifiers, usually file paths

        Returns:
            The run record, including the persisted output

        Raises:
            NoTargetsError: If ``paths`` is empty (before any service call)
            SinkError: If the final artifact cannot be written
        """
        if not paths:
            raise NoTargetsError("No files provided to analyze")

        context = self.build_context()
        batch = BatchRun()
        calls = 0

        self.logger.info("batch_started", targets=len(paths))

        for path in paths:
            report = TargetReport(path=path)
            batch.reports.append(report)

            if path in batch.output:
                self._finish(report, TargetState.SKIPPED_DUPLICATE, "already analyzed")
                self.logger.warning("duplicate_target_skipped", path=path)
                continue

            self._advance(report, TargetState.READING)
            try:
                target = self.reader(path)
            except MissingInputError as e:
                self._finish(report, TargetState.SKIPPED_MISSING, str(e))
                self.logger.info("missing_target_skipped", path=path)
                continue

            if calls:
                self.throttle.wait()
                batch.throttle_waits += 1
            calls += 1

            batch.output.record(path, self._analyze(target, context, report))

        batch.completed_at = datetime.now(timezone.utc)
        self.logger.info(
            "batch_completed",
            succeeded=batch.succeeded,
            failed=batch.failed,
            skipped=batch.skipped,
            throttle_waits=batch.throttle_waits,
        )

        batch.output_path = str(self.sink(batch.output))
        return batch

    def _analyze(
        self,
        target: AnalysisTarget,
        context: ProjectContext,
        report: TargetReport,
    ) -> AnalysisResult:
        """Run one target through compose -> invoke -> normalize; never raises."""
        started = time.perf_counter()
        try:
            self._advance(report, TargetState.COMPOSING)
            prompt = compose_prompt(target, context)

            self._advance(report, TargetState.INVOKING)
            raw = self.complete(prompt)
        except AnalyzerError as e:
            error = str(e)
        except Exception as e:
            # The completion capability is injected; contain whatever it raises
            self.logger.exception("unexpected_target_error", path=target.path)
            error = f"{type(e).__name__}: {e}"
        else:
            self._advance(report, TargetState.NORMALIZING)
            normalized = normalize(raw)
            if normalized.ok and normalized.result is not None:
                report.duration_seconds = time.perf_counter() - started
                self._finish(report, TargetState.SUCCEEDED)
                self.logger.info("target_analyzed", path=target.path)
                return normalized.result
            error = normalized.error or "Malformed completion"

        report.duration_seconds = time.perf_counter() - started
        self._finish(report, TargetState.FAILED_FALLBACK, error)
        self.logger.warning("target_failed", path=target.path, error=error)
        return AnalysisResult.empty()

    def _advance(self, report: TargetReport, state: TargetState) -> None:
        report.state = state
        if self.on_progress is not None:
            self.on_progress(report)

    def _finish(
        self,
        report: TargetReport,
        state: TargetState,
        error: str | None = None,
    ) -> None:
        report.error = error
        self._advance(report, state)


def analyze_files(
    paths: Sequence[str],
    *,
    model: str | None = None,
    output_path: Path | str | None = None,
    project_root: Path | str = ".",
) -> BatchRun:
    """
    High-level convenience function to analyze component files.

    Args:
        paths: Component files to analyze
        model: Optional model override
        output_path: Optional artifact location override
        project_root: Directory holding the manifest and README

    Returns:
        The batch run record

    Example:
        >>> run = analyze_files(["src/Button.jsx"])
        >>> run.output["src/Button.jsx"].props
    """
    analyzer = BatchAnalyzer(
        LLMClient(model=model),
        project_root=project_root,
        sink=ResultSink(output_path or settings.output_path),
    )
    return analyzer.run(paths)
