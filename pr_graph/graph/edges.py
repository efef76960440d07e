"""
Edge-list projection of dependency relations.

Topological sorters and graph renderers consume flat lists of ordered
pairs rather than adjacency mappings. An edge ``(a, b)`` means ``a`` must
come before ``b``: ``a`` is a dependency of ``b``.
"""

from typing import Iterable, List, Mapping, Sequence, Tuple

from pr_graph.models.relation import Edge, Node, Relation, relation_nodes


def relation_to_edges(relation: Mapping[str, Iterable[str]]) -> List[Edge]:
    """Project a relation into ``(dependency, dependent)`` pairs.

    Self-dependencies carry no ordering constraint and are dropped.

    Args:
        relation: Mapping from node to the nodes it depends on.

    Returns:
        Sorted list of edges.

    Example:
        >>> relation_to_edges({"b": ["a"], "c": ["a", "b"]})
        [('a', 'b'), ('a', 'c'), ('b', 'c')]
    """
    return sorted(
        (dep, node)
        for node, deps in relation.items()
        for dep in deps
        if dep != node
    )


def isolated_nodes(relation: Mapping[str, Iterable[str]]) -> List[Node]:
    """Return the nodes that take part in no edge, sorted."""
    connected = set()
    for before, after in relation_to_edges(relation):
        connected.add(before)
        connected.add(after)
    return sorted(relation_nodes(relation) - connected)


def _check_edge(edge: Sequence[str]) -> Tuple[str, str]:
    if isinstance(edge, str) or len(edge) != 2:
        raise ValueError(f"Malformed edge, expected a pair: {edge!r}")
    before, after = edge
    if not isinstance(before, str) or not isinstance(after, str):
        raise ValueError(f"Edge nodes must be strings: {edge!r}")
    if not before or not after:
        raise ValueError(f"Edge nodes must be non-empty: {edge!r}")
    return before, after


def edges_to_relation(
    edges: Iterable[Sequence[str]], nodes: Iterable[Node] = ()
) -> Relation:
    """Rebuild a relation from ``(dependency, dependent)`` pairs.

    Every node seen on an edge, plus every node in ``nodes``, becomes a key.

    Args:
        edges: Pairs as produced by ``relation_to_edges``.
        nodes: Extra nodes with no edges.

    Returns:
        Relation keyed by dependent.

    Raises:
        ValueError: If an edge is not a pair of non-empty strings.
    """
    relation: Relation = {node: set() for node in nodes}
    for edge in edges:
        before, after = _check_edge(edge)
        relation.setdefault(before, set())
        relation.setdefault(after, set()).add(before)
    return relation


def _check_token(node: str) -> str:
    if not node or any(ch.isspace() for ch in node):
        raise ValueError(
            f"Node {node!r} cannot be written as a whitespace-separated token"
        )
    return node


def format_edge_lines(
    edges: Iterable[Sequence[str]], nodes: Iterable[Node] = ()
) -> str:
    """Format edges as ``tsort`` input: one whitespace-separated pair per line.

    Isolated nodes are written as ``node node``, which ``tsort`` reads as
    the node's presence without an ordering constraint.

    Raises:
        ValueError: If an edge is malformed or a node contains whitespace.
    """
    lines = []
    for edge in edges:
        before, after = _check_edge(edge)
        lines.append(f"{_check_token(before)} {_check_token(after)}")
    for node in nodes:
        lines.append(f"{_check_token(node)} {node}")
    return "\n".join(lines) + "\n" if lines else ""


def parse_edge_lines(text: str) -> Tuple[List[Edge], List[Node]]:
    """Parse ``format_edge_lines`` output back into edges and isolated nodes.

    Returns:
        Tuple of (edges, isolated nodes). A ``node node`` line is reported
        as an isolated node rather than a self-edge.

    Raises:
        ValueError: If the token count is odd.
    """
    tokens = text.split()
    if len(tokens) % 2:
        raise ValueError("Edge list has an odd number of tokens")

    edges: List[Edge] = []
    nodes: List[Node] = []
    for before, after in zip(tokens[::2], tokens[1::2]):
        if before == after:
            nodes.append(before)
        else:
            edges.append((before, after))
    return edges, nodes
