"""
Dependency graph for rendering and inspection.

This module defines the DependencyGraph class, which wraps a networkx
DiGraph built from a dependency relation. Edges point from a file to the
files it imports, the direction they are drawn in.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import networkx as nx
from networkx.drawing.nx_pydot import to_pydot


class DependencyGraph:
    """Directed file dependency graph.

    Attributes:
        graph: networkx DiGraph; an edge ``a -> b`` means ``a`` depends on
            ``b``.

    Example:
        >>> graph = DependencyGraph.from_relation({"a.py": {"b.py"}})
        >>> graph.dependencies("a.py")
        {'b.py'}
        >>> graph.dependents("b.py")
        {'a.py'}
    """

    def __init__(self) -> None:
        """Initialize an empty DependencyGraph."""
        self.graph = nx.DiGraph()

    @classmethod
    def from_relation(
        cls, relation: Mapping[str, Iterable[str]]
    ) -> "DependencyGraph":
        """Build a graph from a relation.

        Every key becomes a node, even when it has no edges, so that
        isolated files still show up when rendered.
        """
        dep_graph = cls()
        for node, deps in relation.items():
            dep_graph.add_node(node)
            for dep in deps:
                dep_graph.add_dependency(node, dep)
        return dep_graph

    def add_node(self, node: str) -> None:
        """Add a file node."""
        self.graph.add_node(node)

    def add_dependency(self, node: str, dependency: str) -> None:
        """Record that ``node`` depends on ``dependency``.

        Args:
            node: The depending file.
            dependency: The file it depends on.
        """
        self.add_node(node)
        self.add_node(dependency)
        self.graph.add_edge(node, dependency)

    def dependencies(self, node: str) -> set[str]:
        """Return the direct dependencies of a node (empty if unknown)."""
        if node not in self.graph:
            return set()
        return set(self.graph.successors(node))

    def dependents(self, node: str) -> set[str]:
        """Return the direct dependents of a node (empty if unknown)."""
        if node not in self.graph:
            return set()
        return set(self.graph.predecessors(node))

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Export graph to dictionary format.

        This method exports the graph to a dictionary format suitable
        for JSON serialization. Nodes and edges are sorted.

        Returns:
            Dictionary containing nodes and edges.

        Example:
            >>> graph = DependencyGraph.from_relation({"a.py": {"b.py"}})
            >>> graph.to_dict()["edges"]
            [{'source': 'a.py', 'target': 'b.py'}]
        """
        return {
            "nodes": [
                {
                    "id": node,
                    "dependencies": self.graph.out_degree(node),
                    "dependents": self.graph.in_degree(node),
                }
                for node in sorted(self.graph.nodes)
            ],
            "edges": [
                {"source": u, "target": v} for u, v in sorted(self.graph.edges)
            ],
        }

    def get_statistics(self) -> dict[str, int]:
        """Get graph statistics.

        Returns:
            Dictionary with node and edge counts, the number of isolated
            nodes, and the length of the longest dependency chain (0 for
            graphs with cycles).
        """
        longest = 0
        if nx.is_directed_acyclic_graph(self.graph):
            longest = nx.dag_longest_path_length(self.graph)

        return {
            "total_nodes": self.graph.number_of_nodes(),
            "total_edges": self.graph.number_of_edges(),
            "isolated_nodes": nx.number_of_isolates(self.graph),
            "max_depth": longest,
        }

    def to_pydot(self):
        """Convert to a pydot graph for rendering with Graphviz."""
        pydot_graph = to_pydot(self.graph)
        pydot_graph.set_graph_defaults(rankdir="LR")
        pydot_graph.set_node_defaults(shape="box", fontname="monospace")
        return pydot_graph

    def to_dot(self) -> str:
        """Export graph to Graphviz DOT format.

        Returns:
            DOT format string.

        Example:
            >>> graph = DependencyGraph.from_relation({"a.py": {"b.py"}})
            >>> "digraph" in graph.to_dot()
            True
        """
        return self.to_pydot().to_string()
