"""
Graph rendering.

This module defines the GraphRenderer interface and the GraphvizRenderer
implementation, which draws a dependency relation to an image file using
networkx, pydot and the Graphviz layout programs.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Mapping, Union

from pr_graph.exceptions import RenderError
from pr_graph.graph.dependency_graph import DependencyGraph


class GraphRenderer(ABC):
    """Abstract interface for graph-rendering collaborators."""

    @abstractmethod
    def render(
        self,
        relation: Mapping[str, Iterable[str]],
        output_path: Union[str, Path],
        fmt: str = "svg",
    ) -> Path:
        """Render a dependency relation to an image file.

        Args:
            relation: Relation to draw; each key is a node and each
                dependency an edge from the key to the dependency.
            output_path: File to write.
            fmt: Output format understood by the renderer.

        Returns:
            The path written.

        Raises:
            RenderError: If the image cannot be produced.
        """
        pass


class GraphvizRenderer(GraphRenderer):
    """Renderer that runs a Graphviz layout program through pydot.

    Attributes:
        prog: Graphviz layout program (``dot``, ``neato``, ...).

    Example:
        >>> renderer = GraphvizRenderer()
        >>> renderer.render({"a.py": {"b.py"}}, "/tmp/g.svg")  # doctest: +SKIP
        PosixPath('/tmp/g.svg')
    """

    def __init__(self, prog: str = "dot") -> None:
        """Initialize a GraphvizRenderer.

        Args:
            prog: Graphviz layout program.
        """
        self.prog = prog

    def render(
        self,
        relation: Mapping[str, Iterable[str]],
        output_path: Union[str, Path],
        fmt: str = "svg",
    ) -> Path:
        path = Path(output_path)
        pydot_graph = DependencyGraph.from_relation(relation).to_pydot()

        # pydot raises OSError when the program is missing and
        # AssertionError when it exits with a non-zero status.
        try:
            pydot_graph.write(str(path), prog=self.prog, format=fmt)
        except (OSError, AssertionError) as e:
            raise RenderError(
                f"Failed to render graph to {path} with '{self.prog}': {e}",
                command=[self.prog, f"-T{fmt}", "-o", str(path)],
            ) from e

        return path
