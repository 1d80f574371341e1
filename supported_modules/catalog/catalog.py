from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from supported_modules.core.errors import InvalidReferenceError
from supported_modules.core.structured import as_obj_list, as_str_dict

from .model import Category, MajorVersionMapping, RepositoryMetadata

__all__ = ["MetadataCatalog"]


class MetadataCatalog:
    """Read-only table of repository metadata.

    Built once (see ``catalog.loader``) and passed to the resolver and the
    planner. Iteration follows document order: categories as they appear, then
    records within each category. Manifest inference depends on that order.
    """

    def __init__(self, categories: Mapping[Category, Sequence[RepositoryMetadata]]) -> None:
        self._categories: dict[Category, tuple[RepositoryMetadata, ...]] = {
            category: tuple(records) for category, records in categories.items()
        }
        self._check_unique()

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> MetadataCatalog:
        """Build from the decoded JSON document.

        Raises:
            ValueError: If the document does not follow the catalog schema.
        """
        categories: dict[Category, list[RepositoryMetadata]] = {}
        for key, value in data.items():
            try:
                category = Category(key)
            except ValueError:
                raise ValueError(f"unknown catalog category: {key!r}") from None
            records = as_obj_list(value)
            if records is None:
                raise ValueError(f"catalog category {key!r} must be an array")
            parsed: list[RepositoryMetadata] = []
            for record in records:
                table = as_str_dict(record)
                if table is None:
                    raise ValueError(f"catalog category {key!r} contains a non-object entry")
                parsed.append(RepositoryMetadata.from_dict(table, category))
            categories[category] = parsed
        return cls(categories)

    def _check_unique(self) -> None:
        seen_github: set[str] = set()
        seen_packagist: set[str] = set()
        seen_ids: set[int] = set()
        for repo in self:
            if repo.github in seen_github:
                raise ValueError(f"duplicate github reference: {repo.github}")
            seen_github.add(repo.github)
            if repo.packagist is not None:
                if repo.packagist in seen_packagist:
                    raise ValueError(f"duplicate packagist reference: {repo.packagist}")
                seen_packagist.add(repo.packagist)
            if repo.github_id is not None:
                if repo.github_id in seen_ids:
                    raise ValueError(f"duplicate githubId: {repo.github_id}")
                seen_ids.add(repo.github_id)

    def __iter__(self) -> Iterator[RepositoryMetadata]:
        for records in self._categories.values():
            yield from records

    def __len__(self) -> int:
        return sum(len(records) for records in self._categories.values())

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(self._categories)

    def category(self, category: Category) -> tuple[RepositoryMetadata, ...]:
        return self._categories.get(category, ())

    def for_repository(
        self,
        github_reference: str,
        *,
        allow_partial_match: bool = False,
    ) -> RepositoryMetadata | None:
        """Metadata for a GitHub ``org/repo`` reference, if any.

        With ``allow_partial_match``, a record with the same repository name
        under another organisation (a fork) is returned when there is no exact
        match. The last such record wins.

        Raises:
            InvalidReferenceError: If the reference is not ``org/repo``.
        """
        parts = github_reference.split("/")
        if len(parts) != 2:
            raise InvalidReferenceError(github_reference, "github reference")

        candidate: RepositoryMetadata | None = None
        for repo in self:
            if repo.github == github_reference:
                return repo
            if repo.repo_name == parts[1]:
                candidate = repo
        if allow_partial_match:
            return candidate
        return None

    def by_packagist(self, packagist_name: str) -> RepositoryMetadata | None:
        """Metadata for a Packagist ``org/name``, if any.

        Raises:
            InvalidReferenceError: If the name contains no ``/``.
        """
        if "/" not in packagist_name:
            raise InvalidReferenceError(packagist_name, "packagist name")
        for repo in self:
            if repo.packagist == packagist_name:
                return repo
        return None

    def lockstepped(self) -> dict[str, MajorVersionMapping]:
        """Packagist name -> mapping for lock-stepped supported modules."""
        repos: dict[str, MajorVersionMapping] = {}
        for repo in self.category(Category.SUPPORTED):
            if repo.lockstepped and repo.packagist:
                repos[repo.packagist] = repo.major_version_mapping
        return repos

    def composer_packages(self) -> Iterator[RepositoryMetadata]:
        """Records with a Packagist name, in document order."""
        for repo in self:
            if repo.packagist is not None:
                yield repo
