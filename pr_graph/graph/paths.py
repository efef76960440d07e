"""
Path normalization between roots.

Dependency analysis reports paths relative to the analysed source root,
git reports paths relative to the repository root, and results are shown
relative to the workspace root. The functions here re-express relative
paths from one root to another.
"""

import os
from typing import Iterable, Mapping, Set

from pr_graph.models.relation import Node, Relation


def _check_absolute(root: str, name: str) -> None:
    if not os.path.isabs(root):
        raise ValueError(f"{name} must be an absolute path, got {root!r}")


def rebase_path(path: str, inner_root: str, outer_root: str) -> Node:
    """Re-express a path relative to ``inner_root`` as relative to ``outer_root``.

    The path is joined with the inner root, normalized, then made relative
    to the outer root. Output always uses forward slashes.

    Args:
        path: Path relative to ``inner_root``.
        inner_root: Absolute directory the path is currently relative to.
        outer_root: Absolute directory the result is relative to.

    Returns:
        The rebased, normalized relative path.

    Raises:
        ValueError: If either root is not absolute.

    Example:
        >>> rebase_path("a/b.py", "/repo/pkg/src", "/repo")
        'pkg/src/a/b.py'
        >>> rebase_path("pkg/src/a/b.py", "/repo", "/repo/pkg/src")
        'a/b.py'
    """
    _check_absolute(inner_root, "inner_root")
    _check_absolute(outer_root, "outer_root")

    absolute = os.path.normpath(os.path.join(inner_root, path))
    relative = os.path.relpath(absolute, os.path.normpath(outer_root))
    return relative.replace("\\", "/")


def rebase_paths(
    paths: Iterable[str], inner_root: str, outer_root: str
) -> Set[Node]:
    """Rebase every path of a collection. See ``rebase_path``."""
    return {rebase_path(p, inner_root, outer_root) for p in paths}


def rebase_relation(
    relation: Mapping[str, Iterable[str]], inner_root: str, outer_root: str
) -> Relation:
    """Rebase every key and every dependency target of a relation.

    Distinct inner-relative paths map to distinct outer-relative paths, so
    no two keys are merged. Applying the function again with the roots
    swapped restores the original paths.

    Args:
        relation: Relation whose nodes are relative to ``inner_root``.
        inner_root: Absolute directory the nodes are currently relative to.
        outer_root: Absolute directory the result is relative to.

    Returns:
        A new relation whose nodes are relative to ``outer_root``.
    """
    _check_absolute(inner_root, "inner_root")
    _check_absolute(outer_root, "outer_root")

    return {
        rebase_path(node, inner_root, outer_root): rebase_paths(
            deps, inner_root, outer_root
        )
        for node, deps in relation.items()
    }
