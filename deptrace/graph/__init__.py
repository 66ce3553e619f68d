"""Public graph API surface."""

from deptrace.graph.store import (
    Graph,
    graph_stats,
    load_graph,
    load_manifest,
    load_source,
    parse_graph,
    reverse_graph,
    to_networkx,
)
from deptrace.graph.traversal import DepthMode, Edge, TraversalResult, traverse
from deptrace.graph.tree import RootedTree, build_tree

__all__ = [
    "DepthMode",
    "Edge",
    "Graph",
    "RootedTree",
    "TraversalResult",
    "build_tree",
    "graph_stats",
    "load_graph",
    "load_manifest",
    "load_source",
    "parse_graph",
    "reverse_graph",
    "to_networkx",
    "traverse",
]
