"""Edge-list and cycle rendering."""

from typing import Iterable, List, Sequence, Tuple

EMPTY_EDGES = "# no edges"


def render_edges(edges: Iterable[Tuple[str, str]]) -> str:
    """Render one ``"<from> -> <to>"`` line per edge, in the given order."""
    lines = [f"{parent} -> {child}" for parent, child in edges]
    if not lines:
        return EMPTY_EDGES
    return "\n".join(lines)


def render_cycles(cycles: Sequence[List[str]]) -> str:
    """Render each cycle witness as an arrow-joined path."""
    return "\n".join(" -> ".join(cycle) for cycle in cycles)
