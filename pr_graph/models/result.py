"""
Result model for a git-pr-graph run.

This module defines the PrGraphResult class, which holds everything a run
produced: the changed files, their dependency order, the contracted graph
and the location of the rendered image.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from tabulate import tabulate

from pr_graph.models.relation import Relation


@dataclass
class PrGraphResult:
    """Outcome of a git-pr-graph run.

    All paths are relative to ``workspace_root``.

    Attributes:
        workspace_root: Absolute workspace root directory.
        source_root: Absolute directory the dependency analysis ran on.
        base_ref: Baseline revision requested.
        merge_base: Commit the change set was computed against.
        changed_files: Files that differ from the merge-base.
        ordered: Changed files present in the dependency graph, with
            dependencies before dependents.
        contracted: Dependency relation restricted to the changed files.
        graph_path: Path of the rendered graph image.
        relation: Full normalized dependency relation.
    """

    workspace_root: str
    source_root: str
    base_ref: str
    merge_base: str
    changed_files: Set[str]
    ordered: List[str]
    contracted: Relation
    graph_path: Optional[str] = None
    relation: Relation = field(default_factory=dict, repr=False)

    def get_unanalyzed_changes(self) -> List[str]:
        """Return changed files that are not part of the dependency graph.

        These are typically non-Python files or files outside the analysed
        source root.
        """
        return sorted(self.changed_files - set(self.ordered))

    def dependents_in_change_set(self, node: str) -> Set[str]:
        """Return the changed files that depend on ``node`` in the contracted graph."""
        return {
            other for other, deps in self.contracted.items() if node in deps
        }

    def to_list(self) -> str:
        """Render the ordered changed files, one per line."""
        return "\n".join(self.ordered)

    def to_table(self) -> str:
        """Render the ordered changed files as a table.

        Columns are the position in the order, the path, and the number of
        changed files it depends on and that depend on it.
        """
        rows = [
            [
                position,
                node,
                len(self.contracted.get(node, ())),
                len(self.dependents_in_change_set(node)),
            ]
            for position, node in enumerate(self.ordered, 1)
        ]
        return tabulate(
            rows,
            headers=["#", "file", "depends on", "depended on by"],
            tablefmt="simple",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (for serialization).

        Returns:
            Dictionary representation of the result, with sorted sets.
        """
        from pr_graph.graph.dependency_graph import DependencyGraph

        statistics = DependencyGraph.from_relation(self.contracted).get_statistics()
        return {
            "workspace_root": self.workspace_root,
            "source_root": self.source_root,
            "base_ref": self.base_ref,
            "merge_base": self.merge_base,
            "changed_files": sorted(self.changed_files),
            "ordered": list(self.ordered),
            "unanalyzed_changes": self.get_unanalyzed_changes(),
            "graph": {
                node: sorted(deps) for node, deps in sorted(self.contracted.items())
            },
            "graph_path": self.graph_path,
            "statistics": statistics,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize the result to JSON."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
