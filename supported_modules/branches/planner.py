from __future__ import annotations

from collections.abc import Iterable, Sequence

from supported_modules.catalog import RepositoryMetadata
from supported_modules.core.config import PlanningConfig
from supported_modules.output.console import ConsoleProtocol, Style
from supported_modules.versioning import (
    Manifest,
    Version,
    branch_major,
    branch_sort_key,
    is_major_branch,
    is_numeric_branch,
    stable_tag_minor,
)

from .resolver import VersionResolver

__all__ = ["MergeUpPlanner", "index_stable_minors"]


def index_stable_minors(tags: Iterable[str]) -> dict[str, frozenset[str]]:
    """Major -> ``major.minor`` labels that have at least one stable tag."""
    index: dict[str, set[str]] = {}
    for tag in tags:
        parsed = stable_tag_minor(tag)
        if parsed is None:
            continue
        major, minor = parsed
        index.setdefault(major, set()).add(minor)
    return {major: frozenset(minors) for major, minors in index.items()}


def _minor_label(branch: str) -> str:
    major, minor = branch_sort_key(branch)
    return f"{major}.{int(minor)}"


class MergeUpPlanner:
    """Works out which branches a fix is merged up through, oldest first."""

    def __init__(self, resolver: VersionResolver, console: ConsoleProtocol | None = None) -> None:
        self.resolver = resolver
        self.console = console

    @property
    def config(self) -> PlanningConfig:
        return self.resolver.config

    def _note(self, message: str) -> None:
        if self.console is not None:
            self.console.print(message, Style.DIM)

    def plan_merge_up(
        self,
        repo_id: str,
        metadata: RepositoryMetadata | None,
        default_branch: str,
        tags: Sequence[str],
        branches: Sequence[str],
        manifest: Manifest | None = None,
    ) -> list[str]:
        """Branches to merge up through, oldest first.

        Args:
            repo_id: GitHub ``org/repo`` reference
            metadata: Catalog record for the repository, if any
            default_branch: Default branch on GitHub, used when metadata is missing
            tags: Every tag on the repository
            branches: Every branch on the repository
            manifest: composer.json from the default branch

        Raises:
            UnresolvableMajorError: If the default branch cannot be linked to a
                platform major.
        """
        if self.config.skips_merge_up(repo_id):
            self._note(f"{repo_id}: skipped for merge-up")
            return []

        # Non-numeric branches (main, PR branches) never take part.
        ordered = sorted(
            (b for b in branches if is_numeric_branch(b)),
            key=branch_sort_key,
            reverse=True,
        )
        if not ordered:
            return []

        major_branches = [b for b in ordered if is_major_branch(b)]
        major_diff = self.resolver.get_major_offset(
            metadata, major_branches, default_branch, manifest
        )
        stable_minors = index_stable_minors(tags)

        supported = self._drop_unsupported(metadata, ordered, major_diff)
        pruned = self._prune_minors(supported, stable_minors)
        result = self._apply_floor(repo_id, pruned)

        result.reverse()
        return result

    def _drop_unsupported(
        self,
        metadata: RepositoryMetadata | None,
        branches: list[str],
        major_diff: int,
    ) -> list[str]:
        lowest = self.config.lowest_supported_major
        kept: list[str] = []
        for branch in branches:
            # Metadata first: some repos have several branch majors per platform major.
            mapped = self.resolver.major_from_branch(metadata, branch)
            if mapped:
                platform_major = int(mapped)
            else:
                number = branch_major(branch)
                assert number is not None
                platform_major = number + major_diff
            if platform_major < lowest:
                self._note(f"drop {branch}: CMS {platform_major} is below {lowest}")
                continue
            kept.append(branch)
        return kept

    def _prune_minors(
        self,
        branches: list[str],
        stable_minors: dict[str, frozenset[str]],
    ) -> list[str]:
        """Keep, per major, minors newer than the newest stable minor, plus that one.

        ``branches`` is newest first. Major branches are always kept.
        """
        found_minor: set[str] = set()
        found_stable: set[str] = set()
        kept: list[str] = []
        for branch in branches:
            if is_major_branch(branch):
                kept.append(branch)
                continue
            major = str(branch_major(branch))
            if major in found_minor and major in found_stable:
                self._note(f"drop {branch}: superseded by a newer {major}.x minor")
                continue
            if _minor_label(branch) in stable_minors.get(major, frozenset()):
                found_stable.add(major)
            found_minor.add(major)
            kept.append(branch)
        return kept

    def _apply_floor(self, repo_id: str, branches: list[str]) -> list[str]:
        floor = self.config.merge_up_floor(repo_id)
        if floor is None:
            return branches
        ceiling = Version((floor, 999999, 999999))
        kept: list[str] = []
        for branch in branches:
            if Version.parse(branch) <= ceiling:
                self._note(f"drop {branch}: not merged up from major {floor} or below")
                continue
            kept.append(branch)
        return kept
