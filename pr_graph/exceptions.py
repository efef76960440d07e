"""
Custom exception classes for git-pr-graph.

This module defines all custom exceptions used throughout the pr_graph
package. Configuration problems and collaborator failures (dependency
analysis, git, topological sorting, rendering) each get their own type so
the command line can report them uniformly and abort the run.
"""

from typing import List, Optional, Sequence


class PrGraphError(Exception):
    """Base exception class for all git-pr-graph errors.

    Every error raised by the pipeline derives from this class, so callers
    can catch it to handle any failure of a run.

    Attributes:
        message: Human-readable error message describing the error.
    """

    def __init__(self, message: str) -> None:
        """Initialize a PrGraphError with a message.

        Args:
            message: Error message describing what went wrong.
        """
        self.message = message
        super().__init__(self.message)


class ConfigurationError(PrGraphError):
    """Exception raised when the run is misconfigured.

    Raised for invalid arguments, a missing package directory, or a
    workspace root that cannot be determined. Reported immediately and no
    output is produced.
    """


class WorkspaceRootError(ConfigurationError):
    """Exception raised when no workspace root is found above a directory.

    Attributes:
        message: Error message.
        start: Directory the search started from.
        max_depth: Number of ancestor directories that were examined.
    """

    def __init__(self, message: str, start: str, max_depth: int) -> None:
        """Initialize a WorkspaceRootError.

        Args:
            message: Error message describing the failure.
            start: Directory the search started from.
            max_depth: Maximum number of ancestors examined.
        """
        super().__init__(message)
        self.start = start
        self.max_depth = max_depth


class CollaboratorError(PrGraphError):
    """Exception raised when an external collaborator fails.

    Collaborator failures are fatal and never retried. When the
    collaborator is an external process, the command line, exit code and
    standard error are kept for reporting.

    Attributes:
        message: Error message.
        command: Command that was executed, if any.
        returncode: Exit status of the command, if any.
        stderr: Captured standard error of the command, if any.
    """

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ) -> None:
        """Initialize a CollaboratorError.

        Args:
            message: Error message describing the failure.
            command: Optional command line of the failed process.
            returncode: Optional exit status of the failed process.
            stderr: Optional standard error output of the failed process.
        """
        self.command: Optional[List[str]] = list(command) if command else None
        self.returncode = returncode
        self.stderr = stderr

        if stderr and stderr.strip():
            message = f"{message}\n{stderr.strip()}"

        super().__init__(message)


class DependencyAnalysisError(CollaboratorError):
    """Exception raised when the dependency relation cannot be extracted."""


class VersionControlError(CollaboratorError):
    """Exception raised when a git command fails or git is unavailable."""


class CycleError(CollaboratorError):
    """Exception raised when a dependency relation contains a cycle.

    No topological order exists for a cyclic relation. This reflects a
    circular import in the analysed code and is not recoverable.

    Attributes:
        cycle: Nodes along one detected cycle, when the sorter reports one.
    """

    def __init__(
        self,
        message: str,
        cycle: Optional[Sequence[str]] = None,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ) -> None:
        """Initialize a CycleError.

        Args:
            message: Error message describing the cycle.
            cycle: Optional list of nodes forming the cycle, in order.
            command: Optional command line of the sorter process.
            returncode: Optional exit status of the sorter process.
            stderr: Optional standard error output of the sorter process.
        """
        self.cycle: List[str] = list(cycle) if cycle else []
        if self.cycle:
            chain = " -> ".join(self.cycle + self.cycle[:1])
            message = f"{message}: {chain}"
        super().__init__(
            message, command=command, returncode=returncode, stderr=stderr
        )


class RenderError(CollaboratorError):
    """Exception raised when the graph cannot be rendered to an image."""
