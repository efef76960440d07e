"""
Core graph data types.

A dependency relation maps a node (a normalized, root-relative file path)
to the set of nodes it directly depends on. The bidirectional index stores,
for every node, both its outgoing and its incoming neighbours.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Set, Tuple

Node = str
Relation = Dict[Node, Set[Node]]
Edge = Tuple[Node, Node]


@dataclass
class NodeEdges:
    """Outgoing and incoming neighbour sets of one node.

    Attributes:
        outgoing: Nodes this node depends on.
        incoming: Nodes that depend on this node.

    Example:
        >>> edges = NodeEdges(outgoing={"b.py"})
        >>> edges.incoming
        set()
    """

    outgoing: Set[Node] = field(default_factory=set)
    incoming: Set[Node] = field(default_factory=set)


BidirectionalIndex = Dict[Node, NodeEdges]


def relation_nodes(relation: Mapping[Node, Iterable[Node]]) -> Set[Node]:
    """Return every node appearing in a relation, as a key or as a target."""
    nodes: Set[Node] = set(relation)
    for deps in relation.values():
        nodes.update(deps)
    return nodes
