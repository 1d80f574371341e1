from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, cast, get_args

from supported_modules.core.structured import as_obj_list, as_str_dict, get_bool, get_int, get_str

__all__ = [
    "Category",
    "ModuleType",
    "MajorVersionMapping",
    "RepositoryMetadata",
    "WILDCARD_MAJOR",
]


WILDCARD_MAJOR = "*"

ModuleType = Literal["module", "recipe", "theme", "other"]

# Platform major label -> branch major labels, in document order.
MajorVersionMapping = tuple[tuple[str, tuple[str, ...]], ...]


class Category(StrEnum):
    SUPPORTED = "supportedModules"
    WORKFLOW = "workflow"
    TOOLING = "tooling"
    MISC = "misc"


@dataclass(frozen=True, slots=True)
class RepositoryMetadata:
    """One catalog record.

    Attributes:
        github: ``org/repo`` reference on GitHub
        category: Catalog section the record came from
        packagist: ``org/name`` on Packagist, if the repo is a Composer package
        github_id: Numeric GitHub repository ID
        is_core: Part of the core recipe
        lockstepped: Branch numbering follows platform majors release by release
        type: Kind of package (supported modules only)
        major_version_mapping: Platform major -> branch majors used for it
    """

    github: str
    category: Category
    packagist: str | None = None
    github_id: int | None = None
    is_core: bool = False
    lockstepped: bool = False
    type: ModuleType | None = None
    major_version_mapping: MajorVersionMapping = ()

    @property
    def repo_name(self) -> str:
        return self.github.split("/", 1)[1]

    @property
    def has_wildcard_mapping(self) -> bool:
        return any(label == WILDCARD_MAJOR for label, _ in self.major_version_mapping)

    def platform_major_for(self, branch_major: str) -> str:
        """Platform major whose branch set contains ``branch_major``, or ``""``.

        The wildcard entry never matches.
        """
        for label, branches in self.major_version_mapping:
            if label.isdigit() and branch_major in branches:
                return label
        return ""

    @classmethod
    def from_dict(cls, data: Mapping[str, object], category: Category) -> RepositoryMetadata:
        """Build a record from its JSON form.

        Raises:
            ValueError: If the record does not follow the catalog schema.
        """
        github = get_str(data, "github")
        if github is None or not _is_reference(github):
            raise ValueError(f"github must be an org/repo reference (got {data.get('github')!r})")

        packagist = data.get("packagist")
        if packagist is not None and not (isinstance(packagist, str) and _is_reference(packagist)):
            raise ValueError(f"{github}: packagist must be null or an org/name reference")

        github_id = data.get("githubId")
        if github_id is not None and get_int(data, "githubId") is None:
            raise ValueError(f"{github}: githubId must be an integer")

        module_type = data.get("type")
        if module_type is not None and module_type not in get_args(ModuleType):
            raise ValueError(f"{github}: unknown type {module_type!r}")

        return cls(
            github=github,
            category=category,
            packagist=cast(str | None, packagist),
            github_id=get_int(data, "githubId"),
            is_core=get_bool(data, "isCore") or False,
            lockstepped=get_bool(data, "lockstepped") or False,
            type=cast(ModuleType | None, module_type),
            major_version_mapping=_parse_mapping(github, data.get("majorVersionMapping")),
        )


def _is_reference(value: str) -> bool:
    parts = value.split("/")
    return len(parts) == 2 and all(parts)


def _parse_mapping(github: str, raw: object) -> MajorVersionMapping:
    if raw is None:
        return ()
    table = as_str_dict(raw)
    if table is None:
        raise ValueError(f"{github}: majorVersionMapping must be an object")
    if WILDCARD_MAJOR in table and len(table) > 1:
        raise ValueError(f"{github}: a '{WILDCARD_MAJOR}' mapping must be the only key")

    entries: list[tuple[str, tuple[str, ...]]] = []
    for label, value in table.items():
        branches = as_obj_list(value)
        if branches is None:
            raise ValueError(f"{github}: majorVersionMapping[{label!r}] must be an array")
        if label != WILDCARD_MAJOR:
            if not label.isdigit():
                raise ValueError(f"{github}: majorVersionMapping key {label!r} is not a major")
            if not branches:
                raise ValueError(f"{github}: majorVersionMapping[{label!r}] is empty")
        entries.append((label, tuple(str(b).strip() for b in branches)))
    return tuple(entries)
