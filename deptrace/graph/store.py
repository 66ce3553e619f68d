"""Graph store: parse adjacency descriptions into an in-memory graph.

The adjacency format is line oriented::

    # comment
    name: dep1 dep2 dep3

Parsing is permissive. Lines that cannot be interpreted are skipped and
never raised as errors. Only I/O failures are fatal and surface as
:class:`deptrace.errors.SourceUnavailable`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import networkx as nx

from deptrace.errors import SourceUnavailable

logger = logging.getLogger("deptrace.graph.store")

Graph = Dict[str, List[str]]

DEFAULT_MANIFEST_NAME = "root-project"


def parse_graph(text: str) -> Graph:
    """Parse adjacency text into a mapping of package -> dependencies.

    Args:
        text: Raw adjacency description.

    Returns:
        Graph: Dependency lists keep their declared order and duplicates.
        When a package is declared twice the last declaration wins.
    """
    graph: Graph = {}
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        name, sep, deps = line.partition(":")
        name = name.strip()
        if not sep or not name or len(name.split()) != 1:
            logger.debug("Skipping malformed line %d: %r", lineno, raw_line)
            continue

        if name in graph:
            logger.debug("Package %s redeclared on line %d, overriding", name, lineno)
        graph[name] = deps.split()

    logger.debug("Parsed %d package declarations", len(graph))
    return graph


def load_graph(path: Union[str, Path]) -> Graph:
    """Read and parse an adjacency file.

    Raises:
        SourceUnavailable: If the file cannot be read as UTF-8.
    """
    source = Path(path)
    try:
        with source.open("r", encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnavailable(source, str(exc)) from exc

    logger.info("Loaded adjacency source: %s", source)
    return parse_graph(text)


def load_manifest(path: Union[str, Path]) -> Graph:
    """Build a one-level graph from an npm-style ``package.json`` manifest.

    The manifest name maps to the keys of its ``dependencies`` object, in
    declared order. Version ranges are ignored.

    Raises:
        SourceUnavailable: If the file cannot be read or is not valid JSON.
    """
    source = Path(path)
    try:
        with source.open("r", encoding="utf-8") as handle:
            data: Any = json.load(handle)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SourceUnavailable(source, str(exc)) from exc

    if not isinstance(data, dict):
        raise SourceUnavailable(source, "manifest root is not an object")

    name = data.get("name") or DEFAULT_MANIFEST_NAME
    deps = data.get("dependencies") or {}
    if not isinstance(deps, dict):
        logger.warning("Manifest %s has non-object dependencies, ignoring them", source)
        deps = {}

    logger.info("Loaded manifest %s: %s with %d direct dependencies", source, name, len(deps))
    return {str(name): [str(dep) for dep in deps]}


def load_source(path: Union[str, Path]) -> Graph:
    """Load a graph, choosing the reader from the file suffix."""
    source = Path(path)
    if source.suffix.lower() == ".json":
        return load_manifest(source)
    return load_graph(source)


def reverse_graph(graph: Graph) -> Graph:
    """Return the dependents view of ``graph``.

    Every package mentioned in ``graph`` becomes a key. Each key lists the
    packages that depend on it, in first-seen order and without duplicates.
    """
    reversed_graph: Graph = {name: [] for name in graph}
    for name, deps in graph.items():
        for dep in deps:
            dependents = reversed_graph.setdefault(dep, [])
            if name not in dependents:
                dependents.append(name)
    return reversed_graph


def to_networkx(graph: Graph) -> nx.DiGraph:
    """Project ``graph`` into a directed networkx graph.

    Implicit leaves become nodes. Duplicate dependencies collapse into a
    single edge.
    """
    digraph = nx.DiGraph()
    for name, deps in graph.items():
        digraph.add_node(name)
        for dep in deps:
            digraph.add_edge(name, dep)
    return digraph


def graph_stats(graph: Graph) -> Dict[str, Any]:
    """Get summary statistics about ``graph``."""
    digraph = to_networkx(graph)
    return {
        "declared_packages": len(graph),
        "total_packages": digraph.number_of_nodes(),
        "total_dependencies": digraph.number_of_edges(),
        "is_dag": nx.is_directed_acyclic_graph(digraph),
    }
