"""Project-level configuration from pyproject.toml.

Reads the [tool.chainview] section to provide named snapshot shortcuts
and the element types treated as group containers.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

from chainview._common import DEFAULT_GROUP_TYPES


@dataclass(frozen=True)
class ChainviewConfig:
    """Configuration from [tool.chainview] in pyproject.toml."""

    snapshots: dict[str, str] = field(default_factory=dict)
    group_element_types: frozenset[str] = DEFAULT_GROUP_TYPES


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from start directory to find pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_config(start: Path | None = None) -> ChainviewConfig:
    """Load [tool.chainview] from the nearest pyproject.toml.

    Returns default config if no pyproject.toml or no [tool.chainview] section.
    """
    path = find_pyproject(start)
    if path is None:
        return ChainviewConfig()

    if sys.version_info >= (3, 11):
        import tomllib
    else:
        import tomli as tomllib

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("tool", {}).get("chainview", {})
    if not section:
        return ChainviewConfig()

    group_types = section.get("group_element_types")
    return ChainviewConfig(
        snapshots=section.get("snapshots", {}),
        group_element_types=frozenset(group_types) if group_types is not None else DEFAULT_GROUP_TYPES,
    )
