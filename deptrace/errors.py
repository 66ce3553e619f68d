"""Exception hierarchy for deptrace.

Root-not-found and dependency cycles are not exceptions: both are reported
through :class:`deptrace.graph.traversal.TraversalResult` so the acyclic
portion of a traversal stays usable.
"""

from pathlib import Path
from typing import Optional, Union


class DepTraceError(Exception):
    """Base class for all deptrace errors."""
    pass


class InvalidConfiguration(DepTraceError, ValueError):
    """Traversal configuration is invalid.

    Raised before any traversal work starts, e.g. for a negative depth or an
    empty package name.
    """
    pass


class SourceUnavailable(DepTraceError):
    """The graph source file could not be read or decoded.

    No partial graph is returned when this is raised.
    """

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot read graph source: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
