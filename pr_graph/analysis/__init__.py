"""
Dependency analysis collaborators.

This package provides the DependencyAnalyzer interface and the built-in
Python import scanner.
"""

from pr_graph.analysis.import_scanner import ImportScanner
from pr_graph.analysis.provider import DependencyAnalyzer

__all__ = ["DependencyAnalyzer", "ImportScanner"]
