"""Integration tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from props_analyzer.cli import app as cli_app

runner = CliRunner()


@pytest.fixture
def fake_client(monkeypatch: pytest.MonkeyPatch, scripted):
    """Replace the LLM client used by the CLI with a scripted one."""
    completion = scripted('{"props": {"label": "Buy now"}, "wrappers": {"router": false}}')
    completion.model = "gemini/fake"

    monkeypatch.setattr(cli_app, "LLMClient", lambda model=None: completion)
    return completion


def test_no_files_exits_with_failure(fake_client) -> None:
    result = runner.invoke(cli_app.app, ["analyze"])

    assert result.exit_code == 1
    assert "No files provided" in result.output
    assert fake_client.prompts == []


def test_analyze_writes_artifact(sample_project: Path, fake_client) -> None:
    output = sample_project / "mocks.json"

    result = runner.invoke(
        cli_app.app,
        ["analyze", "src/Button.jsx", "src/Missing.jsx", "--output", str(output)],
    )

    assert result.exit_code == 0, result.output
    assert "Bulk analysis complete" in result.output
    assert "Analyzed src/Button.jsx" in result.output
    assert "Skipping src/Missing.jsx" in result.output
    assert json.loads(output.read_text()) == {
        "src/Button.jsx": {"props": {"label": "Buy now"}, "wrappers": {"router": False}}
    }
    assert 'Project Name: "bookshelf"' in fake_client.prompts[0]


def test_sink_failure_exits_with_failure(sample_project: Path, fake_client) -> None:
    blocked = sample_project / "analysis.json"
    blocked.mkdir()

    result = runner.invoke(
        cli_app.app, ["analyze", "src/Button.jsx", "--output", str(blocked)]
    )

    assert result.exit_code == 1
    assert "Failed to write analysis" in result.output


def test_unknown_model_rejected(sample_project: Path) -> None:
    result = runner.invoke(cli_app.app, ["analyze", "src/Button.jsx", "-m", "mystery/model"])

    assert result.exit_code == 1
    assert "Unknown LLM back-end" in result.output


def test_version_command() -> None:
    result = runner.invoke(cli_app.app, ["version"])

    assert result.exit_code == 0
    assert "AI Props Analyzer" in result.output


def test_config_command_masks_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_app.settings, "gemini_api_key", "AIzaSecretValue123")

    result = runner.invoke(cli_app.app, ["config"])

    assert result.exit_code == 0
    assert "AIzaSecretValue123" not in result.output
    assert "AIza" in result.output


def test_bare_model_name_uses_default_provider(
    monkeypatch: pytest.MonkeyPatch, sample_project: Path
) -> None:
    seen: list[str] = []

    def fake_generate(prompt: str, model_id: str, **kwargs) -> str:
        seen.append(model_id)
        return '{"props": {}, "wrappers": {}}'

    monkeypatch.setattr("props_analyzer.services.llm.generate_completion", fake_generate)

    result = runner.invoke(cli_app.app, ["analyze", "src/Button.jsx", "-m", "gemini-2.5-pro"])

    assert result.exit_code == 0, result.output
    assert seen == ["gemini/gemini-2.5-pro"]
