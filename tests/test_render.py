"""Tests for tree and edge-list rendering."""

from __future__ import annotations

from deptrace.export.edges import EMPTY_EDGES, render_cycles, render_edges
from deptrace.export.tree import render_tree
from deptrace.graph import build_tree, parse_graph, traverse


def _render(text: str, root: str, max_depth: int = 10) -> str:
    result = traverse(root, parse_graph(text), max_depth=max_depth)
    return render_tree(build_tree(result.root, result.edges), max_depth=max_depth)


def test_render_tree_uses_last_sibling_rule() -> None:
    rendered = _render("A: B C\nB: D E\nC: F\n", "A")

    assert rendered == "\n".join(
        [
            "A",
            "├── B",
            "│   ├── D",
            "│   └── E",
            "└── C",
            "    └── F",
        ]
    )


def test_render_tree_single_root() -> None:
    assert _render("A:\n", "A") == "A"


def test_render_tree_empty() -> None:
    assert render_tree(build_tree(None, [])) == ""


def test_render_tree_marks_shared_dependencies_once() -> None:
    """A shared dependency is expanded under its first parent only."""
    rendered = _render("A: B C\nB: D\nC: D\nD: E\n", "A")

    assert rendered.splitlines() == [
        "A",
        "├── B",
        "│   └── D",
        "│       └── E",
        "└── C",
        "    └── D (*)",
    ]


def test_render_tree_grows_linearly_on_layered_graph() -> None:
    """Two nodes per layer, each depending on both nodes of the next layer."""
    layers = 18
    lines = ["r: a0 b0"]
    for i in range(layers):
        lines.append(f"a{i}: a{i + 1} b{i + 1}")
        lines.append(f"b{i}: a{i + 1} b{i + 1}")
    result = traverse("r", parse_graph("\n".join(lines)), max_depth=50)

    rendered = render_tree(build_tree(result.root, result.edges), max_depth=50)

    assert len(result.edges) == 4 * layers + 2
    assert len(rendered.splitlines()) == len(result.edges) + 1


def test_render_tree_expands_node_first_reached_at_cutoff() -> None:
    """A node cut off by max_depth is expanded where it appears shallower."""
    tree = build_tree("A", [("A", "B"), ("A", "C"), ("B", "C"), ("C", "D")])

    assert render_tree(tree, max_depth=2).splitlines() == [
        "A",
        "├── B",
        "│   └── C",
        "└── C",
        "    └── D",
    ]


def test_render_tree_marks_loops_between_branches() -> None:
    """Edges closing a loop across branches are cut at the ancestor."""
    rendered = _render("A: B C\nB: C\nC: B\n", "A")

    assert rendered.splitlines() == [
        "A",
        "├── B",
        "│   └── C",
        "│       └── B (cycle)",
        "└── C (*)",
    ]


def test_render_tree_respects_max_depth() -> None:
    tree = build_tree("A", [("A", "B"), ("B", "C"), ("C", "D")])

    assert render_tree(tree, max_depth=2).splitlines() == [
        "A",
        "└── B",
        "    └── C",
    ]
    assert render_tree(tree, max_depth=0) == "A"


def test_render_tree_handles_deep_chains() -> None:
    """Rendering is iterative, so depth is not limited by the call stack."""
    depth = 5000
    edges = [(f"n{i}", f"n{i + 1}") for i in range(depth)]

    lines = render_tree(build_tree("n0", edges)).splitlines()

    assert len(lines) == depth + 1
    assert lines[-1].endswith(f"└── n{depth}")


def test_render_edges_lists_edges_in_order() -> None:
    result = traverse("A", parse_graph("A: C B\nB: C\n"), max_depth=3)

    assert render_edges(result.edges) == "A -> C\nA -> B\nB -> C"


def test_render_edges_empty() -> None:
    assert render_edges([]) == EMPTY_EDGES
    assert render_edges([]).startswith("#")


def test_render_cycles() -> None:
    assert render_cycles([["A", "B", "A"], ["C", "C"]]) == "A -> B -> A\nC -> C"
    assert render_cycles([]) == ""
