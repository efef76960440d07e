"""
Git integration.

This module defines the GitClient class, which runs the git commands the
pipeline needs: locating the repository root, computing the merge-base
with a baseline revision, and listing files changed since a commit.
"""

import shutil
import subprocess
from pathlib import Path
from typing import Set, Union

from pr_graph.exceptions import VersionControlError


class GitClient:
    """Thin wrapper around the ``git`` command line.

    Every command runs in ``cwd``. Failures are fatal: a missing git
    binary or a non-zero exit status raises VersionControlError carrying
    the command and its standard error.

    Attributes:
        cwd: Directory git commands are run from.
        executable: Name or path of the git binary.

    Example:
        >>> git = GitClient("/path/to/checkout")  # doctest: +SKIP
        >>> base = git.merge_base("origin/main")  # doctest: +SKIP
        >>> git.changed_files(base)  # doctest: +SKIP
        {'pkg/src/a.py', 'README.md'}
    """

    def __init__(self, cwd: Union[str, Path], executable: str = "git") -> None:
        """Initialize a GitClient.

        Args:
            cwd: Directory inside the repository.
            executable: Name or path of the git binary.
        """
        self.cwd = Path(cwd)
        self.executable = executable

    def _run(self, *args: str) -> str:
        """Run a git command and return its standard output."""
        command = [self.executable, *args]
        if shutil.which(self.executable) is None:
            raise VersionControlError(
                f"'{self.executable}' was not found on PATH", command=command
            )

        proc = subprocess.run(
            command, cwd=self.cwd, capture_output=True, text=True, check=False
        )
        if proc.returncode != 0:
            raise VersionControlError(
                f"Command failed: {' '.join(command)}",
                command=command,
                returncode=proc.returncode,
                stderr=proc.stderr,
            )
        return proc.stdout

    def repository_root(self) -> Path:
        """Return the absolute top-level directory of the working tree."""
        return Path(self._run("rev-parse", "--show-toplevel").strip()).resolve()

    def merge_base(self, base_ref: str, head: str = "HEAD") -> str:
        """Return the best common ancestor of ``head`` and ``base_ref``.

        Raises:
            VersionControlError: If either revision is unknown or the two
                have no common history.
        """
        commit = self._run("merge-base", head, base_ref).strip()
        if not commit:
            raise VersionControlError(
                f"No merge-base between {head} and {base_ref}"
            )
        return commit

    def changed_files(self, since: str) -> Set[str]:
        """Return files that differ between the working tree and ``since``.

        Committed and uncommitted changes to tracked files are included.
        Paths are relative to the repository root and use forward slashes.
        """
        output = self._run("diff", "--name-only", "-z", since, "--")
        return {path for path in output.split("\0") if path.strip()}

