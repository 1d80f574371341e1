"""Platform major release line resolution.

A branch maps to a platform major through, in order:

1. the repository's own ``majorVersionMapping``
2. the lower bound of a manifest requirement on a catalogued package, mapped
   through that package's ``majorVersionMapping``
3. optionally, the manifest's runtime (PHP) constraint against the minimum
   runtime version of each platform major
"""

from __future__ import annotations

from collections.abc import Sequence

from supported_modules.catalog import MetadataCatalog, RepositoryMetadata
from supported_modules.core.config import PlanningConfig
from supported_modules.core.errors import UnresolvableMajorError
from supported_modules.versioning import Manifest, branch_major, parse_constraint, parse_version

__all__ = ["VersionResolver", "module_display_name"]


class VersionResolver:
    """Resolves branches and manifests to platform major labels.

    Holds no state besides the injected catalog and config; every call is
    independent.
    """

    def __init__(self, catalog: MetadataCatalog, config: PlanningConfig | None = None) -> None:
        self.catalog = catalog
        self.config = config or PlanningConfig()

    def get_major_line(
        self,
        metadata: RepositoryMetadata | None,
        branch: str,
        manifest: Manifest | None = None,
        *,
        allow_runtime_fallback: bool = False,
    ) -> str:
        """Platform major label for a branch, or ``""`` when nothing links them.

        Args:
            metadata: Catalog record for the repository, if it has one
            branch: Branch name (``"5"``, ``"5.1"``, ``"main"``...)
            manifest: Decoded composer.json for that branch
            allow_runtime_fallback: Use the runtime constraint as a last resort
        """
        major = self.major_from_branch(metadata, branch)
        if major == "" and manifest is not None:
            major = self.major_from_manifest(manifest, allow_runtime_fallback=allow_runtime_fallback)
        return major

    def major_from_branch(self, metadata: RepositoryMetadata | None, branch: str) -> str:
        if metadata is None:
            return ""
        number = branch_major(branch)
        if number is None:
            return ""
        return metadata.platform_major_for(str(number))

    def major_from_manifest(self, manifest: Manifest, *, allow_runtime_fallback: bool) -> str:
        # First hit in catalog order wins.
        for repo in self.catalog.composer_packages():
            raw = manifest.constraint_for(repo.packagist or "")
            if raw is None:
                continue
            constraint = parse_constraint(raw)
            if constraint is None:
                continue
            # Branch aliases and floor-less ranges have no usable major.
            floor_major = constraint.lower_bound().major
            if floor_major == 0:
                continue
            major = repo.platform_major_for(str(floor_major))
            if major:
                return major

        if allow_runtime_fallback:
            return self.major_from_runtime(manifest)
        return ""

    def major_from_runtime(self, manifest: Manifest) -> str:
        """First platform major whose lowest runtime version satisfies the manifest."""
        raw = manifest.constraint_for(self.config.runtime_dependency)
        if raw is None:
            return ""
        constraint = parse_constraint(raw)
        if constraint is None:
            return ""

        for release, runtime_versions in self.config.runtime_versions:
            # Majors only: minor releases overlap with their major.
            if not release.isdigit() or not runtime_versions:
                continue
            lowest = parse_version(runtime_versions[0])
            if lowest is not None and constraint.matches(lowest):
                return release
        return ""

    def get_major_offset(
        self,
        metadata: RepositoryMetadata | None,
        major_branches: Sequence[str],
        default_branch: str,
        manifest: Manifest | None = None,
    ) -> int:
        """Offset to add to a branch major to get its platform major.

        e.g. silverstripe/admin ``2`` is CMS 5, so the offset is 3.

        Args:
            metadata: Catalog record for the repository, if any
            major_branches: Bare major branches, newest first
            default_branch: The repository's default branch
            manifest: composer.json from the default branch

        Raises:
            UnresolvableMajorError: If no source links the default branch to a
                platform major and the repository is not a maintenance repo
                (no manifest, or a wildcard mapping).
        """
        candidates = list(major_branches)
        default_number = branch_major(default_branch)
        default_major = None if default_number is None else str(default_number)
        if default_major is not None and default_major not in candidates:
            # Checked last.
            candidates.append(default_major)

        for branch in candidates:
            major = self.major_from_branch(metadata, branch)
            if major:
                return int(major) - int(branch)

        if manifest is not None and default_major is not None:
            major = self.major_from_manifest(manifest, allow_runtime_fallback=True)
            if major:
                return int(major) - int(default_major)

        # Maintenance repos (CI actions, tooling) track the highest stable line.
        wildcard = metadata is not None and metadata.has_wildcard_mapping
        if default_major is not None and (manifest is None or wildcard):
            return self.config.highest_stable_major - int(default_major)

        raise UnresolvableMajorError(module_display_name(metadata, manifest))


def module_display_name(metadata: RepositoryMetadata | None, manifest: Manifest | None) -> str:
    """Best available name for messages: manifest name, packagist, github."""
    if manifest is not None and manifest.name:
        return manifest.name
    if metadata is not None:
        if metadata.packagist:
            return metadata.packagist
        if metadata.github:
            return metadata.github
    return "this module"
