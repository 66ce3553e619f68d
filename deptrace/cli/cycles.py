"""CLI command to report dependency cycles reachable from a package.

Cycles are collected by the same bounded traversal used for rendering, so
only loops within the depth and filter limits are reported. When requested,
the command fails the process so CI pipelines can enforce acyclicity.
"""

from __future__ import annotations

import logging

from deptrace.cli.analyze import EXIT_ERROR, EXIT_OK, EXIT_ROOT_NOT_FOUND, emit, run_traversal
from deptrace.errors import DepTraceError
from deptrace.export.edges import render_cycles

logger = logging.getLogger("deptrace.cli.cycles")


def cycles_command(args) -> int:
    """Execute cycle inspection command.

    Args:
        args: Parsed command-line arguments (see ``analyze_command``) plus
            ``fail_on_cycle``.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        fail_on_cycle = getattr(args, "fail_on_cycle", False)
        config, result = run_traversal(args)

        if not result.root_found:
            logger.error("Package %s not found in %s", config.package_name, args.source)
            return EXIT_ROOT_NOT_FOUND

        if not result.cycles:
            logger.info("No dependency cycles reachable from %s", config.package_name)
            return EXIT_OK

        logger.warning(
            "Detected %d cycle(s) reachable from %s", len(result.cycles), config.package_name
        )
        emit(render_cycles(result.cycles), getattr(args, "output", None))

        if fail_on_cycle:
            logger.error("Cycle validation failed: dependency cycles detected")
            return EXIT_ERROR

        return EXIT_OK

    except DepTraceError as e:
        logger.error("%s", e)
        return EXIT_ERROR
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Cycles command failed: %s", e, exc_info=True)
        return EXIT_ERROR
