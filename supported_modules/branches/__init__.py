"""Major line resolution and merge-up planning."""

from .planner import MergeUpPlanner, index_stable_minors
from .resolver import VersionResolver, module_display_name

__all__ = [
    "VersionResolver",
    "MergeUpPlanner",
    "index_stable_minors",
    "module_display_name",
]
