"""
Python import scanner.

This module defines the ImportScanner class, which builds a file-level
dependency relation for a Python source tree by parsing each file with
``ast`` and resolving its import statements to other files of the tree.
Imports of third-party or standard-library modules are ignored.
"""

import ast
import fnmatch
import warnings
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from pr_graph.analysis.provider import DependencyAnalyzer
from pr_graph.exceptions import DependencyAnalysisError
from pr_graph.models.relation import Relation

IGNORED_DIRS = frozenset(
    {
        ".git", ".hg", ".svn",
        ".venv", "venv", "env",
        "node_modules", "dist", "build",
        "__pycache__", ".mypy_cache", ".pytest_cache", ".ruff_cache", ".tox",
    }
)


class _ImportCollector(ast.NodeVisitor):
    """Collects ``import`` and ``from ... import`` statements of one module."""

    def __init__(self) -> None:
        self.imports: List[str] = []
        # (level, module, name)
        self.from_imports: List[Tuple[int, Optional[str], str]] = []

    def visit_Import(self, node: ast.Import) -> None:
        for alias in node.names:
            self.imports.append(alias.name)
        self.generic_visit(node)

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        for alias in node.names:
            self.from_imports.append((node.level, node.module, alias.name))
        self.generic_visit(node)


class ImportScanner(DependencyAnalyzer):
    """Dependency analyzer for Python source trees.

    Module names are computed relative to the source root, so
    ``pkg/sub/mod.py`` is ``pkg.sub.mod`` and ``pkg/__init__.py`` is
    ``pkg``. Import targets are resolved against the modules found in the
    tree:

    1. ``import a.b`` resolves to module ``a.b``.
    2. ``from x import y`` resolves to submodule ``x.y`` if it exists,
       otherwise to ``x`` itself. Relative forms follow PEP 328.
    3. Unless ``strict_resolution`` is set, an unresolved absolute target
       falls back to its nearest indexed parent package.

    Attributes:
        exclude: Glob patterns, matched against source-root-relative paths,
            of files to skip.
        strict_resolution: Disable the parent-package fallback.

    Example:
        >>> scanner = ImportScanner(exclude=["tests/*"])
        >>> relation = scanner.analyze("src")  # doctest: +SKIP
    """

    def __init__(
        self, exclude: Iterable[str] = (), strict_resolution: bool = False
    ) -> None:
        """Initialize an ImportScanner.

        Args:
            exclude: Glob patterns of files to skip.
            strict_resolution: Only resolve exactly matching modules.
        """
        self.exclude = tuple(exclude)
        self.strict_resolution = strict_resolution

    def analyze(self, source_root: Union[str, Path]) -> Relation:
        """Scan a source tree and return its file dependency relation.

        Files that cannot be read or parsed are skipped with a warning.

        Raises:
            DependencyAnalysisError: If ``source_root`` is not a directory.
        """
        root = Path(source_root).resolve()
        if not root.is_dir():
            raise DependencyAnalysisError(f"Source root is not a directory: {root}")

        # module name -> relative path, and the parsed imports of each file
        module_map: Dict[str, str] = {}
        parsed: Dict[str, Tuple[str, bool, _ImportCollector]] = {}

        for rel_path in self._iter_source_files(root):
            collector = self._parse(root / rel_path, rel_path)
            if collector is None:
                continue

            module, is_package = self._module_name(rel_path)
            if not module:
                warnings.warn(
                    f"Skipping file with empty module name: {rel_path}", UserWarning
                )
                continue

            previous = module_map.get(module)
            if previous is not None:
                warnings.warn(
                    f"Duplicate module name '{module}' for {rel_path} "
                    f"(already mapped to {previous})",
                    UserWarning,
                )
                continue

            module_map[module] = rel_path
            parsed[rel_path] = (module, is_package, collector)

        relation: Relation = {}
        for rel_path, (module, is_package, collector) in parsed.items():
            targets = [
                self._resolve_absolute(name, module_map) for name in collector.imports
            ]
            targets.extend(
                self._resolve_from(
                    level, from_module, name, module, is_package, module_map
                )
                for level, from_module, name in collector.from_imports
            )
            deps: Set[str] = {
                target for target in targets if target and target != rel_path
            }
            relation[rel_path] = deps

        return relation

    def _iter_source_files(self, root: Path) -> List[str]:
        files = []
        for file_path in root.rglob("*.py"):
            rel_path = file_path.relative_to(root)
            if any(part in IGNORED_DIRS for part in rel_path.parts[:-1]):
                continue
            if file_path.is_symlink() or not file_path.is_file():
                continue
            rel = rel_path.as_posix()
            if any(fnmatch.fnmatch(rel, pattern) for pattern in self.exclude):
                continue
            files.append(rel)
        return sorted(files)

    @staticmethod
    def _parse(file_path: Path, rel_path: str) -> Optional[_ImportCollector]:
        try:
            source = file_path.read_bytes()
            tree = ast.parse(source, filename=str(file_path))
        except (OSError, SyntaxError, ValueError) as e:
            warnings.warn(f"Skipping {rel_path}: {e}", UserWarning)
            return None

        collector = _ImportCollector()
        collector.visit(tree)
        return collector

    @staticmethod
    def _module_name(rel_path: str) -> Tuple[str, bool]:
        """Convert a source-root-relative path into (module name, is_package)."""
        parts = list(Path(rel_path).with_suffix("").parts)
        is_package = bool(parts) and parts[-1] == "__init__"
        if is_package:
            parts = parts[:-1]
        return ".".join(parts), is_package

    def _parent_fallback(
        self, module: str, module_map: Dict[str, str]
    ) -> Optional[str]:
        if self.strict_resolution or not module:
            return None
        parts = module.split(".")
        for i in range(len(parts) - 1, 0, -1):
            candidate = ".".join(parts[:i])
            if candidate in module_map:
                return module_map[candidate]
        return None

    def _resolve_absolute(
        self, module: str, module_map: Dict[str, str]
    ) -> Optional[str]:
        if module in module_map:
            return module_map[module]
        return self._parent_fallback(module, module_map)

    def _resolve_from(
        self,
        level: int,
        from_module: Optional[str],
        name: str,
        current_module: str,
        current_is_package: bool,
        module_map: Dict[str, str],
    ) -> Optional[str]:
        if level > 0:
            package_parts = current_module.split(".")
            if not current_is_package:
                package_parts = package_parts[:-1]

            ascend = level - 1
            if ascend > len(package_parts):
                return None

            base_parts = package_parts[: len(package_parts) - ascend]
            if from_module:
                base_parts = base_parts + from_module.split(".")
            base = ".".join(base_parts)
        else:
            base = from_module or ""

        if name != "*":
            candidate = f"{base}.{name}" if base else name
            if candidate in module_map:
                return module_map[candidate]

        if base in module_map:
            return module_map[base]

        if level == 0:
            return self._parent_fallback(base, module_map)
        return None
