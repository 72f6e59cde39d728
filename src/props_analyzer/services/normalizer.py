"""
Turning raw completions into ``AnalysisResult`` objects.

Models often wrap their JSON in Markdown code fences (```json ... ```).
Fence markers are stripped wherever they occur, then the remainder is parsed
strictly. ``normalize()`` is the non-raising form used by the orchestrator.
"""

from __future__ import annotations

import json
import re
from typing import NoReturn

from pydantic import BaseModel, ConfigDict

from ..core.exceptions import MalformedResponseError, raise_malformed_response
from ..domain.models import AnalysisResult

# Opening fence with optional language tag, or a bare closing fence
FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*")


class NormalizedResponse(BaseModel):
    """Outcome of normalizing one completion: a result or an error, never both."""

    model_config = ConfigDict(frozen=True)

    result: AnalysisResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def strip_fences(raw: str) -> str:
    """Remove every code-fence marker and surrounding whitespace."""
    return FENCE_RE.sub("", raw).strip()


def _reject_constant(name: str) -> NoReturn:
    # NaN and Infinity are not JSON
    raise_malformed_response("Completion is not valid JSON", error=f"bare {name}")


def parse_completion(raw: str) -> AnalysisResult:
    """
    Parse a completion into an ``AnalysisResult``.

    Raises:
        MalformedResponseError: If the stripped text is empty, is not valid
            JSON (NaN and Infinity included), is not a JSON object, or holds
            strings that cannot be encoded as UTF-8
    """
    text = strip_fences(raw or "")
    if not text:
        raise_malformed_response("Empty completion")
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(
            "Completion is not valid JSON", error=e.msg, line=e.lineno, column=e.colno
        ) from e
    if not isinstance(data, dict):
        raise_malformed_response(
            "Completion is not a JSON object", type=type(data).__name__
        )
    try:
        json.dumps(data, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError as e:
        raise MalformedResponseError(
            "Completion contains unpaired surrogates", position=e.start
        ) from e
    return AnalysisResult.model_validate(data)


def normalize(raw: str) -> NormalizedResponse:
    """Two-stage normalization: strip, parse, and report instead of raising."""
    try:
        return NormalizedResponse(result=parse_completion(raw))
    except MalformedResponseError as e:
        return NormalizedResponse(error=str(e))
