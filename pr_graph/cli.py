"""
Command-line interface for git-pr-graph.

This module provides the ``git-pr-graph`` command (also usable as
``git pr-graph``). It prints the files changed since the merge-base in
dependency order on standard output and renders the dependency graph of
those files to an image. All diagnostics go to standard error so the
output can be piped.
"""

import argparse
import sys
import traceback
import warnings
from typing import List, Optional

from colorama import Fore, Style, just_fix_windows_console

from pr_graph import __version__
from pr_graph.exceptions import PrGraphError
from pr_graph.models.config import (
    BASE_REF_ENV_VAR,
    DEFAULT_BASE_REF,
    OutputFormat,
    PrGraphConfig,
    SorterKind,
)
from pr_graph.models.result import PrGraphResult
from pr_graph.pipeline import PrGraphPipeline

just_fix_windows_console()
USE_COLOR = True
QUIET = False


def _emit(color: str, symbol: str, tag: str, msg: str) -> None:
    """Write one diagnostic line to stderr."""
    try:
        if USE_COLOR:
            print(f"{color}{symbol} {msg}{Style.RESET_ALL}", file=sys.stderr)
        else:
            print(f"[{tag}] {msg}", file=sys.stderr)
    except UnicodeEncodeError:
        # Fallback for console encodings without the symbols
        print(f"[{tag}] {msg}", file=sys.stderr)


def print_success(msg: str) -> None:
    """Print success message."""
    if not QUIET:
        _emit(Fore.GREEN, "✓", "OK", msg)


def print_error(msg: str) -> None:
    """Print error message."""
    _emit(Fore.RED, "✗", "ERROR", msg)


def print_warning(msg: str) -> None:
    """Print warning message."""
    _emit(Fore.YELLOW, "⚠", "WARN", msg)


def print_info(msg: str) -> None:
    """Print info message."""
    if QUIET:
        return
    if USE_COLOR:
        print(f"{Fore.CYAN}{msg}{Style.RESET_ALL}", file=sys.stderr)
    else:
        print(msg, file=sys.stderr)


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="git-pr-graph",
        description=(
            "List the files changed on this branch in dependency order and "
            "render the dependency graph between them."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Changed files of packages/api, dependencies first
  %(prog)s packages/api

  # Compare against another baseline
  %(prog)s packages/api --base origin/develop
  {BASE_REF_ENV_VAR}=origin/develop %(prog)s packages/api

  # Write the graph as PNG to a known place
  %(prog)s packages/api -o changes.png --graph-format png

  # Run the changed test files in dependency order
  %(prog)s packages/api | grep test_ | xargs pytest
        """,
    )

    # === Input parameters ===
    input_group = parser.add_argument_group("Input Options")
    input_group.add_argument("package_dir", help="Package directory to analyse")
    input_group.add_argument(
        "--base",
        "-b",
        metavar="REF",
        help=(
            f"Baseline revision (default: ${BASE_REF_ENV_VAR}, "
            f"else {DEFAULT_BASE_REF})"
        ),
    )
    input_group.add_argument(
        "--source-dir",
        default="src",
        metavar="NAME",
        help="Source directory inside the package (default: src; "
        "falls back to the package directory)",
    )
    input_group.add_argument(
        "--root",
        metavar="DIR",
        help="Workspace root (default: discovered from pyproject.toml or package.json)",
    )
    input_group.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help='Glob of source files to ignore (repeatable). Example: --exclude "tests/*"',
    )
    input_group.add_argument(
        "--strict-resolution",
        action="store_true",
        help="Only resolve imports that exactly match a module (no parent-package fallback)",
    )

    # === Ordering parameters ===
    order_group = parser.add_argument_group("Ordering Options")
    order_group.add_argument(
        "--sorter",
        choices=SorterKind.values(),
        default=SorterKind.NETWORKX.value,
        help="Topological sort back-end (default: networkx)",
    )

    # === Output parameters ===
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--format",
        "-f",
        choices=OutputFormat.values(),
        default=OutputFormat.LIST.value,
        help="Standard output format (default: list)",
    )
    output_group.add_argument(
        "--output", "-o", metavar="FILE", help="Rendered graph path (default: temp file)"
    )
    output_group.add_argument(
        "--graph-format",
        default="svg",
        metavar="FMT",
        help="Graphviz output format (default: svg)",
    )
    output_group.add_argument(
        "--no-color", action="store_true", help="Disable colored diagnostics"
    )
    output_group.add_argument(
        "--quiet", "-q", action="store_true", help="Only report warnings and errors"
    )
    output_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def build_config(args: argparse.Namespace) -> PrGraphConfig:
    """Build the run configuration from parsed arguments and the environment."""
    return PrGraphConfig.from_env(
        base_ref=args.base,
        source_dir=args.source_dir,
        workspace_root=args.root,
        exclude=tuple(args.exclude),
        strict_resolution=args.strict_resolution,
        sorter=SorterKind(args.sorter),
        graph_output=args.output,
        graph_format=args.graph_format,
        output_format=OutputFormat(args.format),
    )


def build_pipeline(config: PrGraphConfig) -> PrGraphPipeline:
    """Create the pipeline for a configuration."""
    return PrGraphPipeline(config)


def show_warnings(caught: List[warnings.WarningMessage]) -> None:
    """Report warnings raised during the run."""
    for warning in caught:
        print_warning(str(warning.message))


def write_result(result: PrGraphResult, output_format: OutputFormat) -> None:
    """Write the result to standard output."""
    if output_format == OutputFormat.JSON:
        print(result.to_json())
    elif output_format == OutputFormat.TABLE:
        print(result.to_table())
    else:
        for path in result.ordered:
            print(path)


def main(argv: Optional[List[str]] = None) -> None:
    """
    CLI main entry point.

    Exit status is 0 on success, 1 if the run fails, 2 on usage errors and
    130 when interrupted.
    """
    global USE_COLOR, QUIET

    parser = create_parser()
    args = parser.parse_args(argv)

    USE_COLOR = not args.no_color
    QUIET = args.quiet

    try:
        config = build_config(args)
    except (TypeError, ValueError) as e:
        print_error(f"Invalid configuration: {e}")
        sys.exit(1)

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                result = build_pipeline(config).run(args.package_dir)
            finally:
                show_warnings(caught)
    except PrGraphError as e:
        print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print_error("Interrupted")
        sys.exit(130)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        traceback.print_exc()
        sys.exit(1)

    print_info(
        f"{len(result.changed_files)} file(s) changed since "
        f"{result.merge_base[:12]} ({config.base_ref}); "
        f"{len(result.ordered)} in the dependency graph"
    )
    unanalyzed = result.get_unanalyzed_changes()
    if unanalyzed:
        print_info(f"{len(unanalyzed)} changed file(s) outside the analysed sources")
    print_success(f"Wrote graph to {result.graph_path}")

    write_result(result, config.output_format)


if __name__ == "__main__":
    main()
