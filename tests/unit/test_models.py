"""
Unit tests for domain models.

Tests Pydantic model validation and business logic.
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from props_analyzer.domain.models import (
    PLACEHOLDER_CONTEXT,
    AnalysisResult,
    AnalysisTarget,
    BatchOutput,
    BatchRun,
    ProjectContext,
    TargetReport,
    TargetState,
)


class TestProjectContext:
    """Tests for ProjectContext rendering."""

    def test_placeholder_when_nothing_available(self) -> None:
        context = ProjectContext()

        assert not context.available
        assert context.render() == PLACEHOLDER_CONTEXT

    def test_render_manifest_fields(self) -> None:
        context = ProjectContext(
            name="bookshelf",
            description="An online bookstore",
            dependencies=("react", "redux"),
            manifest_found=True,
        )

        assert context.render() == (
            'Project Name: "bookshelf"\n'
            'Description: "An online bookstore"\n'
            "Key Libraries: react, redux"
        )

    def test_unnamed_project(self) -> None:
        context = ProjectContext(manifest_found=True)

        assert 'Project Name: "Unnamed"' in context.render()

    def test_truncated_readme_is_marked(self) -> None:
        context = ProjectContext(readme_summary="Books", readme_truncated=True)

        assert context.render() == "README Summary:\nBooks..."

    def test_context_is_immutable(self) -> None:
        context = ProjectContext(name="x", manifest_found=True)

        with pytest.raises(ValidationError):
            context.name = "y"  # type: ignore[misc]


class TestAnalysisTarget:
    """Tests for AnalysisTarget derived fields."""

    @pytest.mark.parametrize(
        ("path", "typed"),
        [
            ("src/Card.tsx", True),
            ("src/hooks.ts", True),
            ("src/Card.TSX", True),
            ("src/Button.jsx", False),
            ("src/Button.js", False),
        ],
    )
    def test_typed_flag(self, path: str, typed: bool) -> None:
        assert AnalysisTarget(path=path).is_typed is typed

    def test_filename(self) -> None:
        target = AnalysisTarget(path="src/components/Button.jsx", content="")

        assert target.filename == "Button.jsx"

    def test_empty_path_invalid(self) -> None:
        with pytest.raises(ValidationError):
            AnalysisTarget(path="")


class TestAnalysisResult:
    """Tests for AnalysisResult."""

    def test_empty_fallback(self) -> None:
        result = AnalysisResult.empty()

        assert result.is_empty
        assert result.model_dump() == {"props": {}, "wrappers": {}}

    def test_open_props_and_extra_keys_preserved(self) -> None:
        result = AnalysisResult.model_validate(
            {"props": {"items": [1, 2]}, "wrappers": {"router": True}, "notes": "ok"}
        )

        assert result.model_dump() == {
            "props": {"items": [1, 2]},
            "wrappers": {"router": True},
            "notes": "ok",
        }

    def test_missing_keys_default_to_empty_objects(self) -> None:
        result = AnalysisResult.model_validate({"props": {"title": "X"}})

        assert result.wrappers == {}


class TestBatchOutput:
    """Tests for BatchOutput."""

    def test_insertion_order_preserved(self) -> None:
        output = BatchOutput()
        for path in ["b.jsx", "a.jsx", "c.jsx"]:
            output.record(path, AnalysisResult.empty())

        assert list(output.to_dict()) == ["b.jsx", "a.jsx", "c.jsx"]
        assert len(output) == 3
        assert "a.jsx" in output

    def test_entries_are_never_overwritten(self) -> None:
        output = BatchOutput()
        output.record("a.jsx", AnalysisResult(props={"x": 1}))

        with pytest.raises(ValueError):
            output.record("a.jsx", AnalysisResult.empty())

        assert output["a.jsx"].props == {"x": 1}

    def test_to_json_pretty_printed(self) -> None:
        output = BatchOutput()
        output.record("Card.tsx", AnalysisResult(props={"title": "Ü"}, wrappers={}))

        text = output.to_json()

        assert text.startswith('{\n  "Card.tsx": {\n')
        assert "Ü" in text
        assert json.loads(text) == {"Card.tsx": {"props": {"title": "Ü"}, "wrappers": {}}}


class TestBatchRun:
    """Tests for BatchRun counters."""

    def test_counts_by_state(self) -> None:
        run = BatchRun(
            reports=[
                TargetReport(path="a", state=TargetState.SUCCEEDED),
                TargetReport(path="b", state=TargetState.FAILED_FALLBACK),
                TargetReport(path="c", state=TargetState.SKIPPED_MISSING),
                TargetReport(path="a", state=TargetState.SKIPPED_DUPLICATE),
            ]
        )

        assert run.succeeded == 1
        assert run.failed == 1
        assert run.skipped == 2
        assert run.duration_seconds is None
