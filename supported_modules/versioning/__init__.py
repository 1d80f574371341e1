"""Version values, branch/tag labels, constraints and manifests."""

from .constraint import Constraint, parse_constraint
from .manifest import Manifest, ManifestError, load_manifest
from .version import (
    Version,
    branch_major,
    branch_sort_key,
    is_major_branch,
    is_numeric_branch,
    parse_version,
    stable_tag_minor,
)

__all__ = [
    # version
    "Version",
    "parse_version",
    "is_numeric_branch",
    "is_major_branch",
    "branch_major",
    "branch_sort_key",
    "stable_tag_minor",
    # constraint
    "Constraint",
    "parse_constraint",
    # manifest
    "Manifest",
    "ManifestError",
    "load_manifest",
]
