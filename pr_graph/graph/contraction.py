"""
Subset contraction of a dependency graph.

Contraction removes every node outside a keep set while rerouting edges
through the removed nodes, so that a kept node still points at every kept
node it could reach through unchanged files.

The algorithm works in two phases. First every removed node is eliminated
from the working index: its predecessors inherit its successors and the
node disappears, with both neighbour directions updated so the index stays
symmetric. A chain of removed nodes collapses one link at a time, whatever
order the nodes are eliminated in. Only once no removed node is left in
the index are the kept nodes' entries materialized.
"""

from typing import Iterable, Mapping

from pr_graph.graph.index import build_bidirectional_index
from pr_graph.models.relation import BidirectionalIndex, Node, Relation


def _eliminate(index: BidirectionalIndex, node: Node) -> None:
    """Remove a node, connecting each predecessor to each successor."""
    entry = index.pop(node)
    successors = entry.outgoing - {node}
    predecessors = entry.incoming - {node}

    for succ in successors:
        index[succ].incoming.discard(node)

    for pred in predecessors:
        pred_out = index[pred].outgoing
        pred_out.discard(node)
        for succ in successors:
            # A path pred -> ... -> pred through removed nodes is a cycle
            # artifact, not a dependency.
            if succ == pred:
                continue
            pred_out.add(succ)
            index[succ].incoming.add(pred)


def contract_index(index: BidirectionalIndex, keep: Iterable[Node]) -> Relation:
    """Contract a bidirectional index down to the kept nodes.

    The index is consumed: it is mutated in place and must not be reused
    or shared with another contraction.

    Args:
        index: Working bidirectional index, exclusively owned by this call.
        keep: Nodes that survive contraction. Nodes absent from the index
            are ignored.

    Returns:
        Relation keyed by every kept node present in the index. An edge
        ``u -> w`` exists iff ``w`` is reachable from ``u`` through nodes
        that are all outside the keep set.
    """
    keep_set = frozenset(keep)

    for node in sorted(n for n in index if n not in keep_set):
        _eliminate(index, node)

    return {node: entry.outgoing & keep_set for node, entry in index.items()}


def contract_relation(
    relation: Mapping[str, Iterable[str]], keep: Iterable[Node]
) -> Relation:
    """Contract a dependency relation down to the kept nodes.

    Builds a fresh bidirectional index for the relation and contracts it.
    See ``contract_index``.

    Example:
        >>> contract_relation({"A": ["B"], "B": ["C"], "C": []}, {"A", "C"})
        {'A': {'C'}, 'C': set()}
    """
    return contract_index(build_bidirectional_index(relation), keep)
