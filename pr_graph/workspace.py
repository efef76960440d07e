"""
Workspace and source root discovery.

A workspace is a directory that declares several projects: a
``pyproject.toml`` with a ``[tool.uv.workspace]`` table, or a
``package.json`` with a ``workspaces`` entry. Results are reported
relative to the workspace root.
"""

import json
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pr_graph.exceptions import ConfigurationError, WorkspaceRootError
from pr_graph.models.config import DEFAULT_MAX_ROOT_DEPTH


def _read_toml(path: Path) -> Optional[Dict[str, Any]]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError):
        return None


def _read_json(path: Path) -> Optional[Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None


def declares_workspace(directory: Path) -> bool:
    """Return True if ``directory`` holds a multi-project workspace marker.

    Missing or unparsable marker files are treated as absent.
    """
    pyproject = _read_toml(directory / "pyproject.toml")
    if pyproject is not None:
        tool = pyproject.get("tool", {})
        uv = tool.get("uv", {}) if isinstance(tool, dict) else {}
        if isinstance(uv, dict) and isinstance(uv.get("workspace"), dict):
            return True

    package_json = _read_json(directory / "package.json")
    if isinstance(package_json, dict) and package_json.get("workspaces"):
        return True

    return False


def find_workspace_root(
    start: Union[str, Path], max_depth: int = DEFAULT_MAX_ROOT_DEPTH
) -> Path:
    """Find the nearest workspace root at or above ``start``.

    Args:
        start: Directory to start from.
        max_depth: Maximum number of directories examined.

    Returns:
        Absolute path of the workspace root.

    Raises:
        WorkspaceRootError: If no workspace is declared within ``max_depth``
            directories or before the filesystem root.
    """
    origin = Path(start).resolve()
    current = origin

    for _ in range(max_depth):
        if declares_workspace(current):
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent

    raise WorkspaceRootError(
        f"Could not find a workspace root above {origin} "
        f"(looked for [tool.uv.workspace] in pyproject.toml or "
        f"'workspaces' in package.json)",
        start=str(origin),
        max_depth=max_depth,
    )


def resolve_source_root(package_dir: Union[str, Path], source_dir: str = "src") -> Path:
    """Return the directory to analyse for a package.

    ``package_dir/source_dir`` is used when it exists (src layout),
    otherwise the package directory itself (flat layout).

    Raises:
        ConfigurationError: If ``package_dir`` is not a directory.
    """
    package = Path(package_dir).resolve()
    if not package.is_dir():
        raise ConfigurationError(f"Package directory not found: {package_dir}")

    if source_dir:
        candidate = package / source_dir
        if candidate.is_dir():
            return candidate
    return package
