"""Configuration schema definitions using Pydantic for validation.

The CLI builds one :class:`TraversalConfig` per invocation and hands it to
the traversal core. Validation failures surface as
:class:`deptrace.errors.InvalidConfiguration` so callers never need to know
about Pydantic.
"""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field, StrictInt, ValidationError, field_validator

from deptrace.errors import InvalidConfiguration
from deptrace.graph.traversal import DepthMode


class OutputFormat(str, Enum):
    """Rendering style for a traversal."""

    TREE = "tree"
    EDGES = "edges"


class TraversalConfig(BaseModel):
    """Validated traversal parameters.

    Attributes:
        package_name: Root package to start from (stripped, non-empty).
        max_depth: Maximum traversal depth, interpreted according to ``mode``.
        filter: Substring excluding matching package names; empty disables it.
        mode: Depth accounting mode, inclusive root expansion by default.
        output: Rendering style.
        reverse: Traverse dependents instead of dependencies.
    """

    package_name: str
    max_depth: StrictInt = Field(default=3, ge=0)
    filter: str = ""
    mode: DepthMode = DepthMode.INCLUSIVE
    output: OutputFormat = OutputFormat.TREE
    reverse: bool = False

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("package_name")
    @classmethod
    def validate_package_name(cls, v: str) -> str:
        """Strip the package name and reject empty values."""
        name = v.strip()
        if not name:
            raise ValueError("package_name must not be empty")
        return name

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TraversalConfig":
        """Build a config from a plain mapping.

        Hyphenated keys (``package-name``, ``max-depth``) are accepted as
        aliases of their underscored forms.

        Raises:
            InvalidConfiguration: If the mapping fails validation.
        """
        normalized = {str(key).replace("-", "_"): value for key, value in data.items()}
        try:
            return cls.model_validate(normalized)
        except ValidationError as exc:
            raise InvalidConfiguration(f"Invalid traversal configuration: {exc}") from exc
