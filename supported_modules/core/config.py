"""Typed configuration for major-line resolution and merge-up planning.

The defaults below track the current Silverstripe CMS support policy. A TOML
file can override them:

    [planning]
    lowest_supported_major = 5
    highest_stable_major = 6
    skip_for_merge_up = ["silverstripe/cow"]

    [planning.do_not_merge_up_from_major]
    "silverstripe/silverstripe-graphql" = 3

    [planning.runtime_versions]
    "5" = ["8.1", "8.2", "8.3"]
    "6" = ["8.3", "8.4"]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_obj_list,
    as_str_dict,
    get_int,
    get_list,
    get_str,
    get_table,
    str_items,
)

__all__ = [
    "PlanningConfig",
    "ConfigError",
    "load_config",
    "LOWEST_SUPPORTED_MAJOR",
    "HIGHEST_STABLE_MAJOR",
    "RUNTIME_DEPENDENCY",
    "RUNTIME_VERSIONS_FOR_RELEASES",
    "DO_NOT_MERGE_UP_FROM_MAJOR",
    "SKIP_FOR_MERGE_UP",
]

# Update after a major release line goes EOL.
LOWEST_SUPPORTED_MAJOR = 4

# Update after a major release line gets its stable release.
HIGHEST_STABLE_MAJOR = 5

RUNTIME_DEPENDENCY = "php"

# Ascending. Update after each beta release.
RUNTIME_VERSIONS_FOR_RELEASES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("4.9", ("7.1", "7.2", "7.3", "7.4")),
    ("4.10", ("7.3", "7.4", "8.0")),
    ("4.11", ("7.4", "8.0", "8.1")),
    ("4", ("7.4", "8.0", "8.1")),
    ("5.0", ("8.1", "8.2")),
    ("5.1", ("8.1", "8.2")),
    ("5.2", ("8.1", "8.2", "8.3")),
    ("5", ("8.1", "8.2", "8.3")),
    ("6", ("8.1", "8.2", "8.3")),
)

# Branch majors (not platform majors) at or below which merge-up stops.
# For repos with gaps in their support history, or where a second module
# covered the same release line.
DO_NOT_MERGE_UP_FROM_MAJOR: dict[str, int] = {
    "bringyourownideas/silverstripe-composer-update-checker": 2,
    "silverstripe/silverstripe-graphql": 3,
    "silverstripe/silverstripe-linkfield": 3,
    "tractorcow-farm/silverstripe-fluent": 4,
}

# Only for repos that break the planning logic outright.
SKIP_FOR_MERGE_UP: frozenset[str] = frozenset({"silverstripe/cow"})


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


def _default_floors() -> dict[str, int]:
    return dict(DO_NOT_MERGE_UP_FROM_MAJOR)


@dataclass(frozen=True, slots=True)
class PlanningConfig:
    """Constants consumed by the resolver and the planner."""

    lowest_supported_major: int = LOWEST_SUPPORTED_MAJOR
    highest_stable_major: int = HIGHEST_STABLE_MAJOR
    runtime_dependency: str = RUNTIME_DEPENDENCY
    runtime_versions: tuple[tuple[str, tuple[str, ...]], ...] = RUNTIME_VERSIONS_FOR_RELEASES
    do_not_merge_up_from_major: dict[str, int] = field(default_factory=_default_floors)
    skip_for_merge_up: frozenset[str] = SKIP_FOR_MERGE_UP

    def merge_up_floor(self, repository: str) -> int | None:
        return self.do_not_merge_up_from_major.get(repository)

    def skips_merge_up(self, repository: str) -> bool:
        return repository in self.skip_for_merge_up

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> PlanningConfig:
        """Create from a mapping (parsed TOML). Missing keys keep their defaults.

        Raises:
            ValueError: If a present value has the wrong shape.
        """
        planning: StrDict = get_table(data, "planning") or {}

        lowest = get_int(planning, "lowest_supported_major")
        highest = get_int(planning, "highest_stable_major")
        if "lowest_supported_major" in planning and lowest is None:
            raise ValueError("planning.lowest_supported_major must be an integer")
        if "highest_stable_major" in planning and highest is None:
            raise ValueError("planning.highest_stable_major must be an integer")

        lowest = LOWEST_SUPPORTED_MAJOR if lowest is None else lowest
        highest = HIGHEST_STABLE_MAJOR if highest is None else highest
        if highest < lowest:
            raise ValueError(
                f"highest_stable_major ({highest}) is below lowest_supported_major ({lowest})"
            )

        skip = get_list(planning, "skip_for_merge_up")
        floors = get_table(planning, "do_not_merge_up_from_major")
        runtime = get_table(planning, "runtime_versions")

        return cls(
            lowest_supported_major=lowest,
            highest_stable_major=highest,
            runtime_dependency=get_str(planning, "runtime_dependency") or RUNTIME_DEPENDENCY,
            runtime_versions=(
                _parse_runtime_versions(runtime)
                if runtime is not None
                else RUNTIME_VERSIONS_FOR_RELEASES
            ),
            do_not_merge_up_from_major=(
                _parse_floors(floors) if floors is not None else _default_floors()
            ),
            skip_for_merge_up=(
                frozenset(str_items(skip)) if skip is not None else SKIP_FOR_MERGE_UP
            ),
        )


def _parse_floors(table: StrDict) -> dict[str, int]:
    floors: dict[str, int] = {}
    for repository in table:
        value = get_int(table, repository)
        if value is None:
            raise ValueError(f"do_not_merge_up_from_major.{repository} must be an integer")
        floors[repository] = value
    return floors


def _parse_runtime_versions(table: StrDict) -> tuple[tuple[str, tuple[str, ...]], ...]:
    # TOML tables keep document order, which is the lookup order.
    entries: list[tuple[str, tuple[str, ...]]] = []
    for label, value in table.items():
        versions = as_obj_list(value)
        if not versions:
            raise ValueError(f"runtime_versions.{label} must be a non-empty array")
        entries.append((label, tuple(str_items(versions))))
    return tuple(entries)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[PlanningConfig, ConfigError]:
    """Load planning configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(PlanningConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(PlanningConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
