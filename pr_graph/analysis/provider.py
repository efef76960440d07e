"""
Abstract dependency analyzer interface.

This module defines the DependencyAnalyzer abstract base class. An analyzer
extracts the module-level dependency relation of a source tree: for every
source file, the set of project files it directly imports.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from pr_graph.models.relation import Relation


class DependencyAnalyzer(ABC):
    """Abstract interface for dependency-analysis collaborators.

    Implementations may parse source files themselves or wrap an external
    tool. The pipeline only relies on the returned relation.

    Example:
        >>> class FixedAnalyzer(DependencyAnalyzer):
        ...     def analyze(self, source_root):
        ...         return {"a.py": {"b.py"}, "b.py": set()}
    """

    @abstractmethod
    def analyze(self, source_root: Union[str, Path]) -> Relation:
        """Return the dependency relation of a source tree.

        Args:
            source_root: Directory to analyse.

        Returns:
            Relation whose nodes are POSIX-style paths relative to
            ``source_root``. Every analysed file is a key, possibly with an
            empty dependency set.

        Raises:
            DependencyAnalysisError: If the tree cannot be analysed.
        """
        pass
