"""
Topological sort back-ends.

This package provides the total-order collaborators used to put changed
files in dependency order.
"""

from pr_graph.toposort.sorter import NetworkxSorter, TopologicalSorter, TsortSorter

__all__ = ["NetworkxSorter", "TopologicalSorter", "TsortSorter"]
