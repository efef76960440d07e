"""
Tests for the edge-list projection of relations.
"""

import pytest

from pr_graph.graph.edges import (
    edges_to_relation,
    format_edge_lines,
    isolated_nodes,
    parse_edge_lines,
    relation_to_edges,
)


class TestRelationToEdges:
    """Tests for relation_to_edges and isolated_nodes."""

    def test_edges_point_from_dependency_to_dependent(self):
        """Test that (a, b) means a must come before b."""
        edges = relation_to_edges({"b": ["a"], "c": ["a", "b"]})

        assert edges == [("a", "b"), ("a", "c"), ("b", "c")]

    def test_self_dependency_dropped(self):
        """Test that a node depending on itself yields no edge."""
        assert relation_to_edges({"a": ["a", "b"]}) == [("b", "a")]

    def test_isolated_nodes(self):
        """Test that nodes without edges are reported, sorted."""
        relation = {"z": [], "a": ["b"], "self": ["self"]}

        assert isolated_nodes(relation) == ["self", "z"]

    def test_round_trip_keeps_isolated_nodes(self):
        """Test that edges plus isolated nodes rebuild the relation."""
        relation = {"a": {"b", "c"}, "b": {"c"}, "c": set(), "lonely": set()}

        rebuilt = edges_to_relation(relation_to_edges(relation), isolated_nodes(relation))

        assert rebuilt == relation


class TestEdgesToRelation:
    """Tests for edges_to_relation."""

    def test_keyed_by_dependent(self):
        """Test that each edge adds the dependency to the dependent's set."""
        assert edges_to_relation([("a", "b")]) == {"a": set(), "b": {"a"}}

    @pytest.mark.parametrize(
        "edge",
        [("a",), ("a", "b", "c"), "ab", ("a", ""), ("a", 1)],
    )
    def test_malformed_edge(self, edge):
        """Test that anything but a pair of non-empty strings is rejected."""
        with pytest.raises(ValueError):
            edges_to_relation([edge])


class TestEdgeLines:
    """Tests for the tsort line format."""

    def test_format(self):
        """Test one pair per line with isolated nodes as self pairs."""
        text = format_edge_lines([("a", "b"), ("b", "c")], nodes=["z"])

        assert text == "a b\nb c\nz z\n"

    def test_format_empty(self):
        """Test that nothing to write gives an empty string."""
        assert format_edge_lines([]) == ""

    def test_format_rejects_whitespace(self):
        """Test that a node with a space cannot be written."""
        with pytest.raises(ValueError, match="whitespace"):
            format_edge_lines([("a b.py", "c.py")])

    def test_parse(self):
        """Test parsing edges and self pairs back."""
        edges, nodes = parse_edge_lines("a b\nb c\nz z\n")

        assert edges == [("a", "b"), ("b", "c")]
        assert nodes == ["z"]

    def test_parse_tolerates_extra_whitespace(self):
        """Test that tokens may be separated by any whitespace."""
        edges, nodes = parse_edge_lines("  a\tb\n\n c   d ")

        assert edges == [("a", "b"), ("c", "d")]
        assert nodes == []

    def test_parse_odd_tokens(self):
        """Test that an odd token count is an error."""
        with pytest.raises(ValueError, match="odd"):
            parse_edge_lines("a b c")
