"""
Configuration model for git-pr-graph.

This module defines the PrGraphConfig class and the OutputFormat and
SorterKind enums, which control how a run locates its inputs, which
collaborators it uses, and how the results are written.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple

DEFAULT_BASE_REF = "origin/main"
BASE_REF_ENV_VAR = "MERGE_BASE"
DEFAULT_MAX_ROOT_DEPTH = 20


class OutputFormat(str, Enum):
    """Format of the ordered change list written to standard output.

    Attributes:
        LIST: One path per line, in dependency order.
        TABLE: A table with the position, path and degree in the
            contracted graph.
        JSON: The full result as a JSON document.

    Example:
        >>> OutputFormat.values()
        ['list', 'table', 'json']
    """

    LIST = "list"
    TABLE = "table"
    JSON = "json"

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all possible output format values."""
        return [member.value for member in cls]


class SorterKind(str, Enum):
    """Topological sort back-end.

    Attributes:
        NETWORKX: In-process sort with networkx.
        TSORT: The external ``tsort`` program.
    """

    NETWORKX = "networkx"
    TSORT = "tsort"

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all possible sorter values."""
        return [member.value for member in cls]


@dataclass
class PrGraphConfig:
    """Configuration settings for a git-pr-graph run.

    Attributes:
        base_ref: Baseline revision the change set is computed against.
            The merge-base of HEAD and this revision is used. Defaults to
            ``$MERGE_BASE`` when built through ``from_env``, otherwise
            ``origin/main``.
        source_dir: Source directory inside the package directory. When it
            does not exist the package directory itself is analysed.
        workspace_root: Explicit workspace root. When None, the root is
            discovered by walking up from the source directory.
        max_root_depth: Number of ancestor directories examined while
            looking for the workspace root.
        exclude: Glob patterns (relative to the source root) excluded from
            dependency analysis.
        strict_resolution: If True, imports are only resolved to exactly
            matching modules, with no parent-package fallback.
        sorter: Topological sort back-end.
        graph_output: Path of the rendered graph. When None, a fresh file
            in the system temporary directory is used.
        graph_format: Graphviz output format (svg, png, pdf, ...).
        output_format: Format of the standard output listing.

    Example:
        >>> config = PrGraphConfig(base_ref="origin/develop")
        >>> config.sorter
        <SorterKind.NETWORKX: 'networkx'>
    """

    base_ref: str = DEFAULT_BASE_REF
    source_dir: str = "src"
    workspace_root: Optional[str] = None
    max_root_depth: int = DEFAULT_MAX_ROOT_DEPTH
    exclude: Tuple[str, ...] = field(default_factory=tuple)
    strict_resolution: bool = False
    sorter: SorterKind = SorterKind.NETWORKX
    graph_output: Optional[str] = None
    graph_format: str = "svg"
    output_format: OutputFormat = OutputFormat.LIST

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        if not isinstance(self.base_ref, str) or not self.base_ref.strip():
            raise ValueError("base_ref must be a non-empty string")
        if not isinstance(self.source_dir, str):
            raise TypeError("source_dir must be a string")
        if not isinstance(self.max_root_depth, int) or self.max_root_depth < 1:
            raise ValueError("max_root_depth must be a positive integer")
        if not isinstance(self.strict_resolution, bool):
            raise TypeError("strict_resolution must be a boolean")
        if not isinstance(self.sorter, SorterKind):
            raise TypeError("sorter must be a SorterKind instance")
        if not isinstance(self.output_format, OutputFormat):
            raise TypeError("output_format must be an OutputFormat instance")
        if not self.graph_format or not self.graph_format.isalnum():
            raise ValueError(f"Invalid graph format: {self.graph_format!r}")
        self.exclude = tuple(self.exclude)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides
    ) -> "PrGraphConfig":
        """Build a configuration, taking defaults from the environment.

        ``MERGE_BASE`` supplies the baseline revision unless ``base_ref``
        is passed explicitly. Overrides whose value is None are ignored so
        that unset command-line options fall through to the defaults.

        Args:
            environ: Environment mapping. Defaults to ``os.environ``.
            **overrides: Field values that take precedence.

        Returns:
            A validated PrGraphConfig.
        """
        env = os.environ if environ is None else environ
        values = {key: value for key, value in overrides.items() if value is not None}
        if "base_ref" not in values:
            values["base_ref"] = env.get(BASE_REF_ENV_VAR) or DEFAULT_BASE_REF
        return cls(**values)
