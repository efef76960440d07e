"""
Tests for CLI functionality.

This module runs the command line both as a subprocess, for argument
handling and exit codes, and in-process with the pipeline replaced by a
stub, for output formatting and error reporting.
"""

import json
import os
import subprocess
import sys
import warnings
from pathlib import Path

import pytest

from pr_graph import CycleError, PrGraphResult, __version__, cli

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _result():
    return PrGraphResult(
        workspace_root="/w",
        source_root="/w/pkg/src",
        base_ref="origin/main",
        merge_base="0123456789abcdef",
        changed_files={"pkg/src/a.py", "pkg/src/c.py", "README.md"},
        ordered=["pkg/src/c.py", "pkg/src/a.py"],
        contracted={"pkg/src/a.py": {"pkg/src/c.py"}, "pkg/src/c.py": set()},
        graph_path="/tmp/git-pr-graph-x.svg",
    )


class StubPipeline:
    def __init__(self, config, outcome=None, warning=None):
        self.config = config
        self.outcome = outcome
        self.warning = warning
        self.package_dirs = []

    def run(self, package_dir):
        self.package_dirs.append(package_dir)
        if self.warning:
            warnings.warn(self.warning, UserWarning)
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome or _result()


class TestCLISubprocess:
    """Test the CLI as a separate process."""

    def run_cli(self, *args):
        """Run CLI command."""
        env = dict(os.environ)
        env["PYTHONIOENCODING"] = "utf-8"
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")])
        )
        cmd = [sys.executable, "-m", "pr_graph.cli"] + list(args)
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            cwd=PROJECT_ROOT,
            env=env,
        )

    def test_no_arguments(self):
        """Test that a missing package directory is a usage error."""
        result = self.run_cli()

        assert result.returncode == 2
        assert "usage" in result.stderr.lower()
        assert result.stdout == ""

    def test_version(self):
        """Test --version."""
        result = self.run_cli("--version")

        assert result.returncode == 0
        assert __version__ in result.stdout

    def test_help(self):
        """Test that --help lists the main options."""
        result = self.run_cli("--help")

        assert result.returncode == 0
        for option in ("--base", "--sorter", "--format", "--output", "MERGE_BASE"):
            assert option in result.stdout

    def test_invalid_choice(self):
        """Test that an unknown sorter is a usage error."""
        result = self.run_cli("pkg", "--sorter", "quicksort")

        assert result.returncode == 2

    def test_nonexistent_package(self, tmp_path):
        """Test that a missing package directory exits with status 1."""
        result = self.run_cli(str(tmp_path / "missing"), "--no-color")

        assert result.returncode == 1
        assert "[ERROR]" in result.stderr
        assert "not found" in result.stderr
        assert result.stdout == ""


class TestCLIInProcess:
    """Test CLI output with a stubbed pipeline."""

    def install(self, monkeypatch, outcome=None, warning=None):
        """Replace the pipeline factory and record the stubs it creates."""
        self.stubs = []

        def build(config):
            stub = StubPipeline(config, outcome=outcome, warning=warning)
            self.stubs.append(stub)
            return stub

        monkeypatch.setattr(cli, "build_pipeline", build)
        monkeypatch.delenv("MERGE_BASE", raising=False)

    def test_list_output(self, monkeypatch, capsys):
        """Test that stdout holds only the ordered paths."""
        self.install(monkeypatch)

        cli.main(["pkg", "--no-color"])

        captured = capsys.readouterr()
        assert captured.out == "pkg/src/c.py\npkg/src/a.py\n"
        assert "3 file(s) changed since 0123456789ab" in captured.err
        assert "1 changed file(s) outside the analysed sources" in captured.err
        assert "[OK] Wrote graph to /tmp/git-pr-graph-x.svg" in captured.err
        assert self.stubs[0].package_dirs == ["pkg"]

    def test_quiet(self, monkeypatch, capsys):
        """Test that --quiet leaves only the listing."""
        self.install(monkeypatch)

        cli.main(["pkg", "--quiet", "--no-color"])

        captured = capsys.readouterr()
        assert captured.out == "pkg/src/c.py\npkg/src/a.py\n"
        assert captured.err == ""

    def test_json_output(self, monkeypatch, capsys):
        """Test --format json."""
        self.install(monkeypatch)

        cli.main(["pkg", "--format", "json", "-q"])

        data = json.loads(capsys.readouterr().out)
        assert data["ordered"] == ["pkg/src/c.py", "pkg/src/a.py"]
        assert data["unanalyzed_changes"] == ["README.md"]

    def test_table_output(self, monkeypatch, capsys):
        """Test --format table."""
        self.install(monkeypatch)

        cli.main(["pkg", "-f", "table", "-q"])

        out = capsys.readouterr().out
        assert "depended on by" in out
        assert "pkg/src/c.py" in out

    def test_options_reach_config(self, monkeypatch, capsys):
        """Test that command-line options end up in the configuration."""
        self.install(monkeypatch)

        cli.main(
            [
                "pkg",
                "--base", "origin/dev",
                "--source-dir", "lib",
                "--root", "/w",
                "--exclude", "tests/*",
                "--exclude", "docs/*",
                "--strict-resolution",
                "--sorter", "tsort",
                "-o", "out.png",
                "--graph-format", "png",
                "-q",
            ]
        )

        config = self.stubs[0].config
        assert config.base_ref == "origin/dev"
        assert config.source_dir == "lib"
        assert config.workspace_root == "/w"
        assert config.exclude == ("tests/*", "docs/*")
        assert config.strict_resolution is True
        assert config.sorter.value == "tsort"
        assert config.graph_output == "out.png"
        assert config.graph_format == "png"

    def test_merge_base_environment_variable(self, monkeypatch, capsys):
        """Test that MERGE_BASE is the default baseline."""
        self.install(monkeypatch)
        monkeypatch.setenv("MERGE_BASE", "origin/release")

        cli.main(["pkg", "-q"])

        assert self.stubs[0].config.base_ref == "origin/release"

    def test_base_option_beats_environment(self, monkeypatch, capsys):
        """Test that --base overrides MERGE_BASE."""
        self.install(monkeypatch)
        monkeypatch.setenv("MERGE_BASE", "origin/release")

        cli.main(["pkg", "-b", "v2", "-q"])

        assert self.stubs[0].config.base_ref == "v2"

    def test_invalid_graph_format(self, monkeypatch, capsys):
        """Test that a bad graph format is reported before running."""
        self.install(monkeypatch)

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["pkg", "--graph-format", "svg;rm", "--no-color"])

        assert exc_info.value.code == 1
        assert "[ERROR] Invalid configuration" in capsys.readouterr().err
        assert self.stubs == []

    def test_cycle_exits_with_error(self, monkeypatch, capsys):
        """Test that a cycle is fatal and nothing is listed."""
        self.install(
            monkeypatch,
            outcome=CycleError("Dependency graph contains a cycle", cycle=["a", "b"]),
        )

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["pkg", "--no-color"])

        captured = capsys.readouterr()
        assert exc_info.value.code == 1
        assert captured.out == ""
        assert "[ERROR] Dependency graph contains a cycle: a -> b -> a" in captured.err

    def test_interrupt(self, monkeypatch, capsys):
        """Test the exit status when interrupted."""
        self.install(monkeypatch, outcome=KeyboardInterrupt())

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["pkg", "--no-color"])

        assert exc_info.value.code == 130

    def test_unexpected_error(self, monkeypatch, capsys):
        """Test that unexpected exceptions are reported with a traceback."""
        self.install(monkeypatch, outcome=RuntimeError("boom"))

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["pkg", "--no-color"])

        err = capsys.readouterr().err
        assert exc_info.value.code == 1
        assert "[ERROR] Unexpected error: boom" in err
        assert "Traceback" in err

    def test_warnings_are_shown(self, monkeypatch, capsys):
        """Test that analysis warnings are reported on stderr."""
        self.install(monkeypatch, warning="Skipping broken.py: invalid syntax")

        cli.main(["pkg", "--no-color", "-q"])

        captured = capsys.readouterr()
        assert "[WARN] Skipping broken.py: invalid syntax" in captured.err
        assert captured.out == "pkg/src/c.py\npkg/src/a.py\n"

    def test_warnings_shown_on_failure(self, monkeypatch, capsys):
        """Test that warnings are still reported when the run fails."""
        self.install(
            monkeypatch,
            outcome=CycleError("Dependency graph contains a cycle"),
            warning="Skipping broken.py: invalid syntax",
        )

        with pytest.raises(SystemExit):
            cli.main(["pkg", "--no-color"])

        err = capsys.readouterr().err
        assert err.index("[WARN]") < err.index("[ERROR]")
