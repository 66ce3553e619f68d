"""Breadth-first dependency traversal with per-branch cycle detection.

The traversal walks a :data:`deptrace.graph.store.Graph` from one root,
bounded by a maximum depth and a name filter. Each queue entry carries the
ancestry path of its own branch; an edge pointing back into that path is
recorded as a cycle witness instead of being followed. A visited map
guarantees every package is expanded at most once, so the walk terminates
on any finite graph.

Two depth accounting modes are supported:

* ``DepthMode.INCLUSIVE`` (default): the root sits at depth 0 and is always
  visited, even for ``max_depth == 0``. A node at depth ``d`` is admitted
  while ``d <= max_depth``.
* ``DepthMode.STRICT``: ``max_depth`` counts the levels of the result,
  root included. A node at depth ``d`` is admitted while ``d < max_depth``,
  so ``max_depth == 0`` yields nothing and ``max_depth == 1`` only the root.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

import networkx as nx

from deptrace.errors import InvalidConfiguration

logger = logging.getLogger("deptrace.graph.traversal")


class DepthMode(str, Enum):
    """How ``max_depth`` bounds a traversal."""

    INCLUSIVE = "inclusive"
    STRICT = "strict"

    def admits(self, depth: int, max_depth: int) -> bool:
        """Return True when a node at ``depth`` may be part of the result."""
        if self is DepthMode.STRICT:
            return depth < max_depth
        return depth <= max_depth


class Edge(NamedTuple):
    """A dependency edge ``parent -> child``."""

    parent: str
    child: str


@dataclass
class TraversalResult:
    """Outcome of a single traversal.

    Attributes:
        root: Requested root package.
        visited: Package -> depth of first visit, in BFS expansion order.
        edges: Deduplicated edges in discovery order.
        cycles: Cycle witnesses, each a path whose last name closes the loop.
        root_found: False when the root is not declared in the graph.
    """

    root: str
    visited: Dict[str, int] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)
    cycles: List[List[str]] = field(default_factory=list)
    root_found: bool = True

    @property
    def nodes(self) -> List[str]:
        return list(self.visited)

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycles)

    @property
    def is_empty(self) -> bool:
        return not self.visited

    def depth_of(self, name: str) -> Optional[int]:
        return self.visited.get(name)

    def to_networkx(self) -> nx.DiGraph:
        """Return the traversed subgraph with a ``depth`` attribute per node."""
        digraph = nx.DiGraph()
        for name, depth in self.visited.items():
            digraph.add_node(name, depth=depth)
        digraph.add_edges_from(self.edges)
        return digraph


def _matches(name: str, name_filter: str) -> bool:
    return bool(name_filter) and name_filter in name


def _validate(root: str, max_depth: int, mode) -> DepthMode:
    if not isinstance(root, str) or not root:
        raise InvalidConfiguration("Package name must be a non-empty string")
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise InvalidConfiguration(f"max_depth must be an integer, got {max_depth!r}")
    if max_depth < 0:
        raise InvalidConfiguration(f"max_depth must be non-negative, got {max_depth}")
    try:
        return DepthMode(mode)
    except ValueError as exc:
        raise InvalidConfiguration(f"Unknown depth mode: {mode!r}") from exc


def traverse(
    root: str,
    graph: Mapping[str, Sequence[str]],
    max_depth: int,
    name_filter: str = "",
    mode: DepthMode = DepthMode.INCLUSIVE,
) -> TraversalResult:
    """Walk ``graph`` breadth-first from ``root``.

    Args:
        root: Package to start from. Must be declared in ``graph``.
        graph: Package -> ordered dependency names. Never mutated.
        max_depth: Non-negative depth bound, interpreted by ``mode``.
        name_filter: Substring excluding matching packages. Empty disables it.
        mode: Depth accounting mode.

    Returns:
        TraversalResult: Empty with ``root_found=False`` when the root is
        not declared.

    Raises:
        InvalidConfiguration: If ``root`` is empty, ``max_depth`` is not a
            non-negative integer or ``mode`` is unknown.
    """
    mode = _validate(root, max_depth, mode)
    result = TraversalResult(root=root)

    if root not in graph:
        logger.warning("Root package not found in graph: %s", root)
        result.root_found = False
        return result

    if _matches(root, name_filter):
        logger.info("Root package %s is excluded by filter %r", root, name_filter)
        return result

    if not mode.admits(0, max_depth):
        logger.debug("max_depth=%d admits no levels in %s mode", max_depth, mode.value)
        return result

    seen_edges = set()
    queue: Deque[Tuple[str, int, Tuple[str, ...]]] = deque([(root, 0, (root,))])

    while queue:
        name, depth, path = queue.popleft()
        if name in result.visited:
            continue
        result.visited[name] = depth

        for dep in graph.get(name, ()):
            if _matches(dep, name_filter):
                logger.debug("Skipping %s (filter %r)", dep, name_filter)
                continue

            if not mode.admits(depth + 1, max_depth):
                continue

            if dep in path:
                witness = list(path) + [dep]
                if witness not in result.cycles:
                    logger.debug("Cycle detected: %s", " -> ".join(witness))
                    result.cycles.append(witness)
                continue

            edge = Edge(name, dep)
            if edge not in seen_edges:
                seen_edges.add(edge)
                result.edges.append(edge)

            if dep not in result.visited:
                queue.append((dep, depth + 1, path + (dep,)))

    logger.info(
        "Traversal from %s: %d packages, %d edges, %d cycles",
        root,
        len(result.visited),
        len(result.edges),
        len(result.cycles),
    )
    return result
