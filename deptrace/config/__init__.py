"""Configuration schema and loading for deptrace."""

from .loader import load_traversal_config
from .schema import OutputFormat, TraversalConfig

__all__ = [
    "OutputFormat",
    "TraversalConfig",
    "load_traversal_config",
]
