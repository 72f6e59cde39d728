"""
Reading component files into analysis targets.

Detects and handles text-file encodings robustly:
  • Attempts UTF-8
  • Falls back to a chardet-based guess, then latin-1
  • Always returns a Python str (with replacement characters if needed)
"""

from __future__ import annotations

from pathlib import Path

import chardet

from ..core.exceptions import MissingInputError
from ..core.logging import get_logger
from ..domain.models import AnalysisTarget

logger = get_logger(__name__)


def decode_text(raw_bytes: bytes) -> str:
    """
    Decode file bytes, handling unknown or mixed encodings.

    Strategy:
      1. Try decoding as UTF-8.
      2. If that fails, ask chardet for a guess.
      3. Decode using the guess (or latin-1), with errors='replace'.
    """
    try:
        return raw_bytes.decode("utf-8")
    except UnicodeDecodeError:
        pass

    guess = chardet.detect(raw_bytes)
    encoding = guess.get("encoding") or "latin-1"
    try:
        return raw_bytes.decode(encoding, errors="replace")
    except LookupError:
        return raw_bytes.decode("latin-1", errors="replace")


def read_target(path: str, *, max_bytes: int = 512_000) -> AnalysisTarget:
    """
    Resolve an input identifier into an ``AnalysisTarget``.

    Args:
        path: Identifier as supplied on the command line
        max_bytes: Read limit; longer files are cut at this size

    Returns:
        Target whose ``path`` is the identifier exactly as supplied

    Raises:
        MissingInputError: If the path is not an existing, readable file
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise MissingInputError("Input file not found", path=path)

    try:
        with file_path.open("rb") as fh:
            raw_bytes = fh.read(max_bytes + 1)
    except OSError as e:
        raise MissingInputError("Input file not readable", path=path, error=str(e)) from e

    if len(raw_bytes) > max_bytes:
        logger.warning("target_truncated", path=path, max_bytes=max_bytes)
        raw_bytes = raw_bytes[:max_bytes]

    return AnalysisTarget(path=path, content=decode_text(raw_bytes))
