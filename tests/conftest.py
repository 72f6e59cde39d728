"""
Pytest configuration and fixtures.

Provides shared fixtures and configuration for all tests.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

from props_analyzer.core.config import Settings
from props_analyzer.domain.models import ProjectContext
from props_analyzer.services.throttle import FixedIntervalThrottle


class ScriptedCompletion:
    """
    Stand-in for the generative service.

    Replies are consumed in call order; an exception instance is raised
    instead of returned. Every prompt is recorded.
    """

    def __init__(self, *replies: str | Exception) -> None:
        self.replies = list(replies)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class RecordingSleep:
    """Replacement for ``time.sleep`` that only records the delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def temp_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary working directory; relative paths resolve inside it."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sample_project(temp_dir: Path) -> Path:
    """Create a small React project with a manifest, README and components."""
    (temp_dir / "package.json").write_text(
        json.dumps(
            {
                "name": "bookshelf",
                "description": "An online bookstore",
                "dependencies": {
                    "react": "^18.2.0",
                    "react-router-dom": "^6.20.0",
                    "@tanstack/react-query": "^5.0.0",
                },
            }
        )
    )
    (temp_dir / "README.md").write_text("# Bookshelf\nBrowse and buy second-hand books.")

    components = temp_dir / "src"
    components.mkdir()
    (components / "Button.jsx").write_text(
        "export default function Button({ label, onClick }) {\n"
        "  return <button onClick={onClick}>{label}</button>;\n"
        "}\n"
    )
    (components / "BookCard.tsx").write_text(
        "interface BookCardProps { title: string; author: string; cover?: string }\n"
        "export const BookCard = ({ title, author, cover }: BookCardProps) => (\n"
        "  <article><img src={cover} /><h2>{title}</h2><p>{author}</p></article>\n"
        ");\n"
    )
    return temp_dir


@pytest.fixture
def test_settings(temp_dir: Path) -> Settings:
    """Provide settings for testing."""
    return Settings(
        model="gemini/gemini-test",
        gemini_api_key="test-key",
        environment="testing",
        log_level="DEBUG",
        output_path=temp_dir / "analysis.json",
        request_timeout_seconds=5,
    )


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def throttle(recording_sleep: RecordingSleep) -> FixedIntervalThrottle:
    """Fixed 4 s throttle that never actually sleeps."""
    return FixedIntervalThrottle(4.0, sleep=recording_sleep)


@pytest.fixture
def empty_context() -> ProjectContext:
    return ProjectContext()


@pytest.fixture
def scripted() -> Callable[..., ScriptedCompletion]:
    """Factory for scripted completions."""
    return ScriptedCompletion
