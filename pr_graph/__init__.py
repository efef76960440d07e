"""
git-pr-graph v1.0

Show the files changed on a branch in dependency order, together with the
dependency graph between them. Edges that run through unchanged files are
kept, so indirect dependencies between changed files stay visible.

Example:
    >>> from pr_graph import contract_relation
    >>> contract_relation({"a.py": ["b.py"], "b.py": ["c.py"]}, {"a.py", "c.py"})
    {'a.py': {'c.py'}, 'c.py': set()}
"""

from pr_graph.version import __version__, __version_info__

__author__ = "git-pr-graph Contributors"

from pr_graph.analysis.import_scanner import ImportScanner
from pr_graph.analysis.provider import DependencyAnalyzer
from pr_graph.exceptions import (
    CollaboratorError,
    ConfigurationError,
    CycleError,
    DependencyAnalysisError,
    PrGraphError,
    RenderError,
    VersionControlError,
    WorkspaceRootError,
)
from pr_graph.graph.contraction import contract_index, contract_relation
from pr_graph.graph.dependency_graph import DependencyGraph
from pr_graph.graph.edges import edges_to_relation, relation_to_edges
from pr_graph.graph.index import build_bidirectional_index
from pr_graph.graph.ordering import dependency_order, filter_order
from pr_graph.graph.paths import rebase_path, rebase_paths, rebase_relation
from pr_graph.models.config import OutputFormat, PrGraphConfig, SorterKind
from pr_graph.models.relation import NodeEdges
from pr_graph.models.result import PrGraphResult
from pr_graph.pipeline import PrGraphPipeline
from pr_graph.render.renderer import GraphRenderer, GraphvizRenderer
from pr_graph.toposort.sorter import NetworkxSorter, TopologicalSorter, TsortSorter
from pr_graph.vcs.git import GitClient
from pr_graph.workspace import find_workspace_root, resolve_source_root

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Pipeline
    "PrGraphPipeline",
    "PrGraphResult",
    # Configuration
    "PrGraphConfig",
    "OutputFormat",
    "SorterKind",
    # Graph engine
    "NodeEdges",
    "build_bidirectional_index",
    "contract_index",
    "contract_relation",
    "dependency_order",
    "filter_order",
    "edges_to_relation",
    "relation_to_edges",
    "rebase_path",
    "rebase_paths",
    "rebase_relation",
    "DependencyGraph",
    # Collaborators
    "DependencyAnalyzer",
    "ImportScanner",
    "GitClient",
    "TopologicalSorter",
    "NetworkxSorter",
    "TsortSorter",
    "GraphRenderer",
    "GraphvizRenderer",
    "find_workspace_root",
    "resolve_source_root",
    # Exceptions
    "PrGraphError",
    "ConfigurationError",
    "WorkspaceRootError",
    "CollaboratorError",
    "DependencyAnalysisError",
    "VersionControlError",
    "CycleError",
    "RenderError",
]
