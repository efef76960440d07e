"""
Pipeline orchestration for git-pr-graph.

This module defines the PrGraphPipeline class, which runs the collaborators
and the graph engine in order and produces a PrGraphResult.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from pr_graph.analysis.import_scanner import ImportScanner
from pr_graph.analysis.provider import DependencyAnalyzer
from pr_graph.exceptions import ConfigurationError, RenderError
from pr_graph.graph.contraction import contract_relation
from pr_graph.graph.ordering import dependency_order
from pr_graph.graph.paths import rebase_paths, rebase_relation
from pr_graph.models.config import PrGraphConfig, SorterKind
from pr_graph.models.relation import Relation
from pr_graph.models.result import PrGraphResult
from pr_graph.render.renderer import GraphRenderer, GraphvizRenderer
from pr_graph.toposort.sorter import NetworkxSorter, TopologicalSorter, TsortSorter
from pr_graph.vcs.git import GitClient
from pr_graph.workspace import find_workspace_root, resolve_source_root


def make_sorter(kind: SorterKind) -> TopologicalSorter:
    """Return the topological sorter for a SorterKind."""
    if kind == SorterKind.TSORT:
        return TsortSorter()
    return NetworkxSorter()


class PrGraphPipeline:
    """git-pr-graph main entry point.

    Steps:
    1. Locate the source root and the workspace root
    2. Extract the dependency relation of the source root
    3. Ask git for the merge-base and the changed files
    4. Re-express everything relative to the workspace root
    5. Order the changed files (a dependency cycle aborts here)
    6. Contract the graph to the changed files and render it

    Nothing is written to standard output by the pipeline; either every
    step succeeds and a result is returned, or an exception propagates.

    Usage:
        pipeline = PrGraphPipeline(PrGraphConfig.from_env())
        result = pipeline.run("packages/api")
        print(result.to_list())

    Collaborators default to the built-in implementations and can be
    replaced, for example with in-memory fakes in tests.
    """

    def __init__(
        self,
        config: Optional[PrGraphConfig] = None,
        analyzer: Optional[DependencyAnalyzer] = None,
        sorter: Optional[TopologicalSorter] = None,
        renderer: Optional[GraphRenderer] = None,
        git: Optional[GitClient] = None,
    ) -> None:
        """Initialize a PrGraphPipeline.

        Args:
            config: Run configuration.
            analyzer: Dependency analyzer. Defaults to an ImportScanner.
            sorter: Topological sorter. Defaults to the one named by
                ``config.sorter``.
            renderer: Graph renderer. Defaults to GraphvizRenderer.
            git: Git client. Defaults to a GitClient running in the
                workspace root.
        """
        self.config = config or PrGraphConfig()
        self.analyzer = analyzer or ImportScanner(
            exclude=self.config.exclude,
            strict_resolution=self.config.strict_resolution,
        )
        self.sorter = sorter or make_sorter(self.config.sorter)
        self.renderer = renderer or GraphvizRenderer()
        self.git = git

    def _workspace_root(self, source_root: Path) -> Path:
        if self.config.workspace_root:
            root = Path(self.config.workspace_root).resolve()
            if not root.is_dir():
                raise ConfigurationError(
                    f"Workspace root not found: {self.config.workspace_root}"
                )
            return root
        return find_workspace_root(source_root, self.config.max_root_depth)

    def _render(self, contracted: Relation) -> Path:
        fmt = self.config.graph_format
        if self.config.graph_output:
            return self.renderer.render(contracted, self.config.graph_output, fmt)

        fd, tmp_name = tempfile.mkstemp(prefix="git-pr-graph-", suffix=f".{fmt}")
        os.close(fd)
        try:
            return self.renderer.render(contracted, tmp_name, fmt)
        except RenderError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def run(self, package_dir: Union[str, Path]) -> PrGraphResult:
        """Analyse a package and produce its change-set graph.

        Args:
            package_dir: Package directory; its ``source_dir`` subdirectory
                (or the directory itself) is analysed.

        Returns:
            PrGraphResult with the ordered changed files and graph path.

        Raises:
            ConfigurationError: If the package or workspace root is invalid.
            CollaboratorError: If analysis, git, sorting or rendering fails.
        """
        source_root = resolve_source_root(package_dir, self.config.source_dir)
        workspace_root = self._workspace_root(source_root)

        raw_relation = self.analyzer.analyze(source_root)

        git = self.git or GitClient(workspace_root)
        repo_root = git.repository_root()
        merge_base = git.merge_base(self.config.base_ref)
        changed_in_repo = git.changed_files(merge_base)

        relation = rebase_relation(raw_relation, str(source_root), str(workspace_root))
        changed = rebase_paths(changed_in_repo, str(repo_root), str(workspace_root))

        ordered = dependency_order(relation, changed, self.sorter)
        contracted = contract_relation(relation, changed)
        graph_path = self._render(contracted)

        return PrGraphResult(
            workspace_root=str(workspace_root),
            source_root=str(source_root),
            base_ref=self.config.base_ref,
            merge_base=merge_base,
            changed_files=changed,
            ordered=ordered,
            contracted=contracted,
            graph_path=str(graph_path),
            relation=relation,
        )
