"""Indented ASCII tree rendering."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from deptrace.graph.tree import RootedTree

logger = logging.getLogger("deptrace.export.tree")

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "
CYCLE_MARK = " (cycle)"
REPEAT_MARK = " (*)"


def render_tree(tree: RootedTree, max_depth: Optional[int] = None) -> str:
    """Render ``tree`` as an indented box-drawing tree.

    Nodes are emitted depth-first in pre-order using an explicit stack.
    A child that already appears on its own ancestor chain is printed with
    a cycle marker and not descended into. Any other package that was
    already expanded is listed again with a repeat marker but not expanded,
    so output size is linear in the number of edges.

    Args:
        tree: Tree to render.
        max_depth: Stop descending below this depth (root is depth 0).

    Returns:
        str: Rendered text without a trailing newline; empty for an empty tree.
    """
    if tree.is_empty:
        return ""

    root = tree.root
    lines: List[str] = [root]
    expanded = {root}
    if max_depth is not None and max_depth <= 0:
        return root

    # (name, depth, prefix, is_last, ancestors)
    stack: List[Tuple[str, int, str, bool, Tuple[str, ...]]] = []
    top = tree.children_of(root)
    for index in range(len(top) - 1, -1, -1):
        stack.append((top[index], 1, "", index == len(top) - 1, (root,)))

    while stack:
        name, depth, prefix, is_last, ancestors = stack.pop()
        connector = LAST_BRANCH if is_last else BRANCH

        if name in ancestors:
            lines.append(f"{prefix}{connector}{name}{CYCLE_MARK}")
            continue

        if name in expanded:
            lines.append(f"{prefix}{connector}{name}{REPEAT_MARK}")
            continue
        lines.append(f"{prefix}{connector}{name}")
        if max_depth is not None and depth >= max_depth:
            continue
        # A node cut off by max_depth may still expand at a shallower repeat
        expanded.add(name)

        children = tree.children_of(name)
        child_prefix = prefix + (SPACE if is_last else PIPE)
        chain = ancestors + (name,)
        for index in range(len(children) - 1, -1, -1):
            stack.append((children[index], depth + 1, child_prefix, index == len(children) - 1, chain))

    logger.debug("Rendered tree for %s: %d lines", root, len(lines))
    return "\n".join(lines)
