"""
Topological sort back-ends.

A TopologicalSorter turns a list of ``(before, after)`` edges into a
linear extension of all the nodes involved, or raises CycleError when no
such order exists. Two implementations are provided: an in-process one
based on networkx and one that shells out to the POSIX ``tsort`` utility.
"""

import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence

import networkx as nx

from pr_graph.exceptions import CollaboratorError, CycleError
from pr_graph.graph.edges import format_edge_lines
from pr_graph.models.relation import Node


class TopologicalSorter(ABC):
    """Abstract interface for total-order collaborators.

    Example:
        >>> sorter = NetworkxSorter()
        >>> sorter.sort([("a", "b"), ("b", "c")])
        ['a', 'b', 'c']
    """

    @abstractmethod
    def sort(
        self, edges: Iterable[Sequence[str]], nodes: Iterable[Node] = ()
    ) -> List[Node]:
        """Return every node in an order consistent with the edges.

        Args:
            edges: Pairs ``(before, after)``: ``before`` must precede
                ``after`` in the result.
            nodes: Additional nodes without edges, included in the result.

        Returns:
            All nodes appearing in ``edges`` or ``nodes``, each exactly once.

        Raises:
            CycleError: If the edges contain a cycle.
            CollaboratorError: If the sorter itself fails.
        """
        pass


class NetworkxSorter(TopologicalSorter):
    """In-process topological sort using networkx.

    Ties are broken lexicographically, so the same input always gives the
    same order.
    """

    def sort(
        self, edges: Iterable[Sequence[str]], nodes: Iterable[Node] = ()
    ) -> List[Node]:
        graph = nx.DiGraph()
        graph.add_nodes_from(nodes)
        graph.add_edges_from(edges)

        try:
            return list(nx.lexicographical_topological_sort(graph))
        except nx.NetworkXUnfeasible:
            cycle_edges = nx.find_cycle(graph)
            raise CycleError(
                "Dependency graph contains a cycle",
                cycle=[u for u, _ in cycle_edges],
            ) from None


class TsortSorter(TopologicalSorter):
    """Topological sort delegated to the external ``tsort`` program.

    Edges are written to the program's standard input, one
    whitespace-separated pair per line, so nodes must not contain
    whitespace.

    Attributes:
        executable: Name or path of the tsort binary.
    """

    LOOP_MARKERS = ("loop", "cycle")

    def __init__(self, executable: str = "tsort") -> None:
        """Initialize a TsortSorter.

        Args:
            executable: Name or path of the tsort binary.
        """
        self.executable = executable

    def sort(
        self, edges: Iterable[Sequence[str]], nodes: Iterable[Node] = ()
    ) -> List[Node]:
        text = format_edge_lines(edges, nodes)
        if not text:
            return []

        if shutil.which(self.executable) is None:
            raise CollaboratorError(
                f"'{self.executable}' was not found on PATH",
                command=[self.executable],
            )

        command = [self.executable]
        proc = subprocess.run(
            command, input=text, capture_output=True, text=True, check=False
        )

        # Some tsort implementations report a loop but still exit 0.
        stderr = proc.stderr or ""
        if any(marker in stderr.lower() for marker in self.LOOP_MARKERS):
            raise CycleError(
                "Dependency graph contains a cycle",
                cycle=self._parse_loop(stderr),
                command=command,
                returncode=proc.returncode,
            )
        if proc.returncode != 0:
            raise CollaboratorError(
                f"'{self.executable}' failed with exit code {proc.returncode}",
                command=command,
                returncode=proc.returncode,
                stderr=stderr,
            )

        return [line.strip() for line in proc.stdout.splitlines() if line.strip()]

    def _parse_loop(self, stderr: str) -> List[Node]:
        """Extract the loop members GNU tsort prints after its loop notice."""
        members: List[Node] = []
        in_loop = False
        for line in stderr.splitlines():
            if any(marker in line.lower() for marker in self.LOOP_MARKERS):
                if in_loop:
                    break
                in_loop = True
                continue
            if in_loop:
                _, _, node = line.rpartition(": ")
                node = node.strip()
                if node:
                    members.append(node)
        return members
