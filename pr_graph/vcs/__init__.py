"""
Version-control collaborators.

This package provides the git client used to find the change set.
"""

from pr_graph.vcs.git import GitClient

__all__ = ["GitClient"]
