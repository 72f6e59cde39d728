"""
Project context assembly.

Reads the optional project manifest and narrative document once per run and
condenses them into a ``ProjectContext``. Every failure degrades the context
instead of aborting the run.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..core.exceptions import ContextUnavailableError
from ..core.logging import get_logger
from ..domain.models import ProjectContext

logger = get_logger(__name__)


def load_manifest(path: Path) -> dict[str, Any]:
    """
    Load the project manifest as a JSON object.

    Raises:
        ContextUnavailableError: If the file is missing, unreadable or not a JSON object
    """
    if not path.is_file():
        raise ContextUnavailableError("Manifest not found", path=str(path))
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ContextUnavailableError(
            "Manifest not readable", path=str(path), error=str(e)
        ) from e
    except json.JSONDecodeError as e:
        raise ContextUnavailableError(
            "Manifest is not valid JSON", path=str(path), error=str(e)
        ) from e
    if not isinstance(data, dict):
        raise ContextUnavailableError("Manifest is not a JSON object", path=str(path))
    return data


def load_readme(path: Path, max_chars: int = 3000) -> tuple[str, bool]:
    """
    Load the narrative document, cut to ``max_chars``.

    Returns:
        The (possibly truncated) text and whether it was truncated

    Raises:
        ContextUnavailableError: If the file is missing or unreadable
    """
    if not path.is_file():
        raise ContextUnavailableError("README not found", path=str(path))
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ContextUnavailableError(
            "README not readable", path=str(path), error=str(e)
        ) from e
    if len(text) > max_chars:
        return text[:max_chars], True
    return text, False


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def build_project_context(
    root: Path | str = ".",
    *,
    manifest_filename: str = "package.json",
    readme_filename: str = "README.md",
    readme_max_chars: int = 3000,
) -> ProjectContext:
    """
    Build the shared project context. Never raises.

    Args:
        root: Project root holding the manifest and README
        manifest_filename: Manifest file name (name, description, dependencies)
        readme_filename: Narrative document file name
        readme_max_chars: Characters of README kept before truncation

    Returns:
        The context; renders as a placeholder when nothing could be read
    """
    root = Path(root)
    fields: dict[str, Any] = {}

    try:
        manifest = load_manifest(root / manifest_filename)
    except ContextUnavailableError as e:
        logger.debug("manifest_unavailable", reason=str(e))
    else:
        dependencies = manifest.get("dependencies")
        fields.update(
            name=_as_text(manifest.get("name")) or None,
            description=_as_text(manifest.get("description")),
            dependencies=tuple(dependencies) if isinstance(dependencies, dict) else (),
            manifest_found=True,
        )

    try:
        readme, truncated = load_readme(root / readme_filename, readme_max_chars)
    except ContextUnavailableError as e:
        logger.debug("readme_unavailable", reason=str(e))
    else:
        fields.update(readme_summary=readme, readme_truncated=truncated)

    context = ProjectContext(**fields)
    if context.available:
        logger.info(
            "project_context_built",
            name=context.name,
            dependencies=len(context.dependencies),
            readme_truncated=context.readme_truncated,
        )
    else:
        logger.warning("project_context_unavailable", root=str(root))
    return context
