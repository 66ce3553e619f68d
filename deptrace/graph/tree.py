"""Rooted tree view of a traversal, rebuilt from its edges only."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass
class RootedTree:
    """Parent -> children adjacency used for rendering.

    The tree does not own the graph. A name that appears under several
    parents, or that closes a loop between branches, is listed under each
    parent; renderers are responsible for guarding against repeats.
    """

    root: Optional[str]
    children: Dict[str, List[str]] = field(default_factory=dict)

    def children_of(self, name: str) -> List[str]:
        return self.children.get(name, [])

    def is_leaf(self, name: str) -> bool:
        return not self.children.get(name)

    @property
    def is_empty(self) -> bool:
        return self.root is None


def build_tree(root: Optional[str], edges: Iterable[Tuple[str, str]]) -> RootedTree:
    """Build a :class:`RootedTree` from traversal edges.

    Args:
        root: Root package, or None for an empty traversal.
        edges: ``(parent, child)`` pairs in discovery order.

    Returns:
        RootedTree: Children keep edge order; repeated edges are dropped.
    """
    tree = RootedTree(root=root)
    for parent, child in edges:
        siblings = tree.children.setdefault(parent, [])
        if child not in siblings:
            siblings.append(child)
    return tree
