"""
Dependency-order extraction.

Derives a total order over a subset of nodes in which every dependency
comes before its dependents. The linear extension itself is computed by a
pluggable TopologicalSorter; this module only projects the relation into
edges and filters the sorter's answer down to the nodes of interest.
"""

from typing import TYPE_CHECKING, Iterable, List, Mapping, Sequence

from pr_graph.graph.edges import isolated_nodes, relation_to_edges
from pr_graph.models.relation import Node

if TYPE_CHECKING:
    from pr_graph.toposort.sorter import TopologicalSorter


def filter_order(order: Sequence[Node], subset: Iterable[Node]) -> List[Node]:
    """Restrict a total order to a subset, preserving relative order.

    Members of ``subset`` that do not occur in ``order`` are omitted.

    Example:
        >>> filter_order(["X", "Y", "Z", "W"], {"X", "W"})
        ['X', 'W']
    """
    wanted = frozenset(subset)
    return [node for node in order if node in wanted]


def dependency_order(
    relation: Mapping[str, Iterable[str]],
    subset: Iterable[Node],
    sorter: "TopologicalSorter",
) -> List[Node]:
    """Order the ``subset`` nodes so that dependencies precede dependents.

    The whole relation is sorted, not only the subset, so the order of two
    subset nodes connected only through other nodes is still respected.

    Args:
        relation: Mapping from node to the nodes it depends on.
        subset: Nodes to report.
        sorter: Topological sort back-end.

    Returns:
        Subset members present in the relation, in dependency order.

    Raises:
        CycleError: If the relation contains a cycle.
    """
    full_order = sorter.sort(
        relation_to_edges(relation), nodes=isolated_nodes(relation)
    )
    return filter_order(full_order, subset)
