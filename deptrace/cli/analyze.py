"""Analyze command: traverse a dependency graph and render it."""

# Analyze command intentionally guards against unexpected exceptions to report failures cleanly.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from rich.console import Console

from deptrace.config import OutputFormat, TraversalConfig, load_traversal_config
from deptrace.errors import DepTraceError
from deptrace.export.edges import render_edges
from deptrace.export.tree import render_tree
from deptrace.graph import (
    DepthMode,
    TraversalResult,
    build_tree,
    graph_stats,
    load_source,
    reverse_graph,
    traverse,
)

logger = logging.getLogger("deptrace.cli.analyze")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_ROOT_NOT_FOUND = 2


def build_config(args) -> TraversalConfig:
    """Merge the optional config file with command-line overrides."""
    overrides = {
        "package_name": getattr(args, "package_name", None),
        "max_depth": getattr(args, "max_depth", None),
        "filter": getattr(args, "filter", None),
        "mode": getattr(args, "mode", None),
        "output": getattr(args, "format", None),
        "reverse": True if getattr(args, "reverse", False) else None,
    }
    return load_traversal_config(getattr(args, "config", None), overrides)


def run_traversal(args) -> Tuple[TraversalConfig, TraversalResult]:
    """Load the source named in ``args`` and traverse it.

    Raises:
        DepTraceError: On invalid configuration or unreadable source.
    """
    config = build_config(args)
    logger.info("Package: %s", config.package_name)
    logger.info("Source: %s", args.source)
    logger.info(
        "Max depth: %d (%s), filter: %r, reverse: %s",
        config.max_depth,
        config.mode.value,
        config.filter,
        config.reverse,
    )

    graph = load_source(args.source)
    if config.reverse:
        graph = reverse_graph(graph)

    stats = graph_stats(graph)
    logger.info(
        "Graph: %d packages, %d dependencies, acyclic: %s",
        stats["total_packages"],
        stats["total_dependencies"],
        stats["is_dag"],
    )

    result = traverse(
        config.package_name,
        graph,
        config.max_depth,
        name_filter=config.filter,
        mode=config.mode,
    )
    return config, result


def render_result(config: TraversalConfig, result: TraversalResult) -> str:
    """Render ``result`` in the style selected by ``config``."""
    if config.output is OutputFormat.EDGES:
        return render_edges(result.edges)

    tree = build_tree(result.root if not result.is_empty else None, result.edges)
    # Strict mode admits depths below max_depth, so the deepest rendered level is one less
    max_depth = config.max_depth
    if config.mode is DepthMode.STRICT:
        max_depth = max(max_depth - 1, 0)
    return render_tree(tree, max_depth=max_depth)


def emit(text: str, output: Optional[str], console: Optional[Console] = None) -> None:
    """Write ``text`` to ``output`` or print it on the console."""
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n", encoding="utf-8")
        logger.info("Output written to %s", output_path)
        return

    console = console or Console(markup=False, highlight=False, emoji=False, soft_wrap=True)
    console.print(text)


def analyze_command(args) -> int:
    """Execute analyze command.

    Args:
        args: Parsed command-line arguments containing:
            - source: Adjacency file or package.json manifest
            - package_name, max_depth, filter, mode, format, reverse (optional)
            - config: Config file or inline TOML/JSON (optional)
            - output: Output file (optional, stdout otherwise)

    Returns:
        int: Exit code (0 success, 1 failure, 2 root not found).
    """
    try:
        config, result = run_traversal(args)

        if not result.root_found:
            logger.error("Package %s not found in %s", config.package_name, args.source)
            return EXIT_ROOT_NOT_FOUND

        if result.is_empty:
            logger.warning("Traversal from %s produced no packages", config.package_name)

        for cycle in result.cycles:
            logger.warning("Cycle: %s", " -> ".join(cycle))

        emit(render_result(config, result), getattr(args, "output", None))
        return EXIT_OK

    except DepTraceError as e:
        logger.error("%s", e)
        return EXIT_ERROR
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Analyze command failed: %s", e, exc_info=True)
        return EXIT_ERROR
