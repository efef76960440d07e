"""
Graph rendering collaborators.

This package provides the GraphRenderer interface and the Graphviz-based
renderer.
"""

from pr_graph.render.renderer import GraphRenderer, GraphvizRenderer

__all__ = ["GraphRenderer", "GraphvizRenderer"]
