"""Persisting the aggregated analysis as a single JSON artifact."""

from __future__ import annotations

from pathlib import Path

from ..core.exceptions import SinkError
from ..core.logging import get_logger
from ..domain.models import BatchOutput

logger = get_logger(__name__)


def write_output(output: BatchOutput, path: Path | str) -> Path:
    """
    Write ``output`` to ``path``, replacing any previous artifact.

    Args:
        output: Aggregated batch results
        path: Artifact location; parent directories are created

    Returns:
        The path written

    Raises:
        SinkError: If the artifact cannot be written
    """
    path = Path(path)
    try:
        data = (output.to_json() + "\n").encode("utf-8")
    except ValueError as e:
        raise SinkError("Failed to serialize analysis", path=str(path), error=str(e)) from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise SinkError("Failed to write analysis", path=str(path), error=str(e)) from e

    logger.info("analysis_saved", path=str(path), entries=len(output))
    return path


class ResultSink:
    """Sink bound to one artifact location."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def __call__(self, output: BatchOutput) -> Path:
        return write_output(output, self.path)
