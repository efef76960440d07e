"""
Graph transformation engine.

This package contains the dependency-graph algorithms: path normalization,
bidirectional index construction, subset contraction, edge-list projection
and order extraction, plus the networkx-backed DependencyGraph used for
rendering.
"""

from pr_graph.graph.contraction import contract_index, contract_relation
from pr_graph.graph.dependency_graph import DependencyGraph
from pr_graph.graph.edges import (
    edges_to_relation,
    format_edge_lines,
    isolated_nodes,
    parse_edge_lines,
    relation_to_edges,
)
from pr_graph.graph.index import build_bidirectional_index
from pr_graph.graph.ordering import dependency_order, filter_order
from pr_graph.graph.paths import rebase_path, rebase_paths, rebase_relation

__all__ = [
    "DependencyGraph",
    "build_bidirectional_index",
    "contract_index",
    "contract_relation",
    "dependency_order",
    "edges_to_relation",
    "filter_order",
    "format_edge_lines",
    "isolated_nodes",
    "parse_edge_lines",
    "rebase_path",
    "rebase_paths",
    "rebase_relation",
    "relation_to_edges",
]
