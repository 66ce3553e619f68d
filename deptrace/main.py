"""Main CLI entry point for deptrace.

Provides commands: analyze, cycles
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from deptrace.cli.analyze import analyze_command
from deptrace.cli.cycles import cycles_command
from deptrace.config import OutputFormat
from deptrace.graph import DepthMode

logger = logging.getLogger("deptrace.cli")


def setup_logging(
    verbose: bool = False,
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        log_file: Also write log records to this file (optional).
        console: Rich Console instance for coordinated output (optional).
    """
    level = logging.DEBUG if verbose else logging.WARNING

    # Log to stderr so rendered output on stdout stays clean
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )
    handlers = [handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] [%(levelname)s] %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def _add_traversal_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "source",
        help="Adjacency file (name: dep1 dep2 ...) or a package.json manifest",
    )
    parser.add_argument(
        "-p",
        "--package-name",
        help="Root package to start the traversal from",
    )
    parser.add_argument(
        "-d",
        "--max-depth",
        type=int,
        help="Maximum traversal depth (default: 3)",
    )
    parser.add_argument(
        "-f",
        "--filter",
        help="Exclude every package whose name contains this substring",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in DepthMode],
        help=(
            "Depth accounting: 'inclusive' (default) always visits the root and "
            "admits nodes up to max depth; 'strict' counts the root as the first "
            "level and admits nodes below max depth"
        ),
    )
    parser.add_argument(
        "--reverse",
        action="store_true",
        help="Traverse dependents (who depends on the package) instead of dependencies",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional traversal configuration. Can be a path to a TOML/JSON "
            "file or an inline TOML/JSON string. Command-line options take "
            "precedence over its values."
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write the result to this file instead of stdout",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        description="Deptrace - Dependency Graph Inspection Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        help="Output log to file (optional). When specified, logs are written to this file in addition to console.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Traverse the dependency graph and render it as a tree or edge list",
    )
    _add_traversal_arguments(analyze_parser)
    analyze_parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        help="Output style (default: tree)",
    )

    cycles_parser = subparsers.add_parser(
        "cycles",
        help="Report dependency cycles reachable from the package",
    )
    _add_traversal_arguments(cycles_parser)
    cycles_parser.add_argument(
        "--fail-on-cycle",
        action="store_true",
        help=(
            "Exit with non-zero status when dependency cycles are found. "
            "Useful for CI validation."
        ),
    )

    return parser


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(args.verbose, getattr(args, "log_file", None))

    if args.command == "analyze":
        return analyze_command(args)
    elif args.command == "cycles":
        return cycles_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
