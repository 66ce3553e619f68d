"""Helpers for loading traversal configuration from TOML/JSON sources.

``load_traversal_config`` accepts:

* None -> only the overrides are used
* dict -> already-parsed configuration mapping
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from deptrace.config.schema import TraversalConfig
from deptrace.errors import InvalidConfiguration

logger = logging.getLogger("deptrace.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _parse_text(text: str, fmt: str) -> Dict[str, Any]:
    try:
        if fmt == "json":
            data = json.loads(text)
        else:
            data = tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise InvalidConfiguration(f"Cannot parse {fmt.upper()} configuration: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidConfiguration("Top-level configuration must be a mapping/dict")

    # A [traversal] table may wrap the settings
    section = data.get("traversal")
    if isinstance(section, dict):
        return section
    return data


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        # Long inline configuration strings are not valid file names
        return False


CONFIG_SUFFIXES = {".toml", ".tml", ".json"}


def _looks_like_path(source: Union[str, Path], path: Path) -> bool:
    if isinstance(source, Path):
        return True
    return "\n" not in source and path.suffix.lower() in CONFIG_SUFFIXES


def _read_source(source: ConfigSource) -> Dict[str, Any]:
    if source is None:
        return {}

    if isinstance(source, dict):
        logger.debug("Loading TraversalConfig from provided dict")
        return dict(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        if _is_file(path):
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise InvalidConfiguration(f"Cannot read configuration file {path}: {exc}") from exc
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = "json" if text.lstrip().startswith("{") else "toml"
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        elif _looks_like_path(source, path):
            raise InvalidConfiguration(f"Configuration file not found: {path}")
        else:
            text = str(source)
            fmt = "json" if text.lstrip().startswith("{") else "toml"
            logger.info("Loading configuration from inline %s string", fmt)
        return _parse_text(text, fmt)

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


def load_traversal_config(
    source: ConfigSource = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> TraversalConfig:
    """Load a TraversalConfig, applying explicit overrides on top.

    Args:
        source: Configuration file path, inline TOML/JSON, mapping or None.
        overrides: Values taken from the command line. ``None`` values are
            ignored so unset flags do not mask the file.

    Returns:
        TraversalConfig instance.

    Raises:
        InvalidConfiguration: If the merged settings are invalid.
    """
    data = _read_source(source)
    if overrides:
        data.update({key: value for key, value in overrides.items() if value is not None})
    return TraversalConfig.from_dict(data)


__all__ = ["load_traversal_config"]
