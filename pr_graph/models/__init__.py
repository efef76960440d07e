"""
Data models for git-pr-graph.

This package contains the core data structures: graph type aliases and the
bidirectional index entry, run configuration, and run results.
"""

from pr_graph.models.config import OutputFormat, PrGraphConfig, SorterKind
from pr_graph.models.relation import (
    BidirectionalIndex,
    Edge,
    Node,
    NodeEdges,
    Relation,
    relation_nodes,
)
from pr_graph.models.result import PrGraphResult

__all__ = [
    "BidirectionalIndex",
    "Edge",
    "Node",
    "NodeEdges",
    "OutputFormat",
    "PrGraphConfig",
    "PrGraphResult",
    "Relation",
    "SorterKind",
    "relation_nodes",
]
