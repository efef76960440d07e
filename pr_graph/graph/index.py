"""
Bidirectional index construction.

Builds, for every node of a dependency relation, both its outgoing
(dependencies) and incoming (dependents) neighbour sets.
"""

from typing import Iterable, Mapping

from pr_graph.models.relation import BidirectionalIndex, NodeEdges


def build_bidirectional_index(
    relation: Mapping[str, Iterable[str]],
) -> BidirectionalIndex:
    """Build a bidirectional index from a dependency relation.

    Every node that appears as a key or as a dependency target gets an
    entry. Targets that are not keys get an empty outgoing set. Outgoing
    sets are copied, never aliased to the input relation, so the index can
    be mutated freely.

    The result does not depend on key order: outgoing sets are assigned
    once per key and incoming sets are only ever unioned into.

    Args:
        relation: Mapping from node to the nodes it depends on.

    Returns:
        Dictionary mapping every node to its NodeEdges.

    Example:
        >>> index = build_bidirectional_index({"a": ["b"]})
        >>> index["b"].incoming
        {'a'}
        >>> index["b"].outgoing
        set()
    """
    index: BidirectionalIndex = {}

    for node, deps in relation.items():
        entry = index.get(node)
        if entry is None:
            entry = index[node] = NodeEdges()
        entry.outgoing = set(deps)

        for target in entry.outgoing:
            target_entry = index.get(target)
            if target_entry is None:
                target_entry = index[target] = NodeEdges()
            target_entry.incoming.add(node)

    return index
