from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

__all__ = [
    "Version",
    "parse_version",
    "is_numeric_branch",
    "is_major_branch",
    "branch_major",
    "stable_tag_minor",
    "branch_sort_key",
]


_VERSION_RE = re.compile(r"^v?(\d+(?:\.\d+)*)(?:-([0-9A-Za-z][0-9A-Za-z.\-]*))?$")
_PRERELEASE_RE = re.compile(r"^([A-Za-z]+)[.\-]?(\d*)$")

_NUMERIC_BRANCH_RE = re.compile(r"^(\d+)(?:\.(\d+))?$")
_MAJOR_BRANCH_RE = re.compile(r"^\d+$")
_STABLE_TAG_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")

# Lower rank sorts first. Unknown labels sort below dev, then by number and label.
_PRERELEASE_RANK = {
    "dev": 0,
    "alpha": 1,
    "a": 1,
    "beta": 2,
    "b": 2,
    "rc": 3,
}


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class Version:
    """A parsed version or numeric branch label.

    Components compare numerically, missing components count as zero, and a
    stable version ranks above any pre-release sharing its numeric prefix.
    ``Version.parse("5") == Version.parse("5.0.0")``.
    """

    parts: tuple[int, ...]
    prerelease: str | None = None

    @classmethod
    def parse(cls, label: str) -> Version:
        """Parse a version label.

        Raises:
            ValueError: If the label is not a dotted numeric version.
        """
        v = parse_version(label)
        if v is None:
            raise ValueError(f"invalid version: {label!r}")
        return v

    @property
    def major(self) -> int:
        return self.parts[0]

    def _key(self) -> tuple[tuple[int, ...], tuple[int, int, int, str]]:
        parts = list(self.parts)
        while len(parts) > 1 and parts[-1] == 0:
            parts.pop()
        return (tuple(parts), _prerelease_key(self.prerelease))

    def _cmp_parts(self, other: Version) -> int:
        width = max(len(self.parts), len(other.parts))
        left = self.parts + (0,) * (width - len(self.parts))
        right = other.parts + (0,) * (width - len(other.parts))
        if left == right:
            return 0
        return -1 if left < right else 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        c = self._cmp_parts(other)
        if c != 0:
            return c < 0
        return _prerelease_key(self.prerelease) < _prerelease_key(other.prerelease)

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        text = ".".join(str(p) for p in self.parts)
        if self.prerelease is not None:
            text += f"-{self.prerelease}"
        return text

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"


def _prerelease_key(prerelease: str | None) -> tuple[int, int, int, str]:
    if prerelease is None:
        return (1, 0, 0, "")
    m = _PRERELEASE_RE.match(prerelease)
    if m is None:
        return (0, -1, 0, prerelease.lower())
    label = m.group(1).lower()
    number = int(m.group(2)) if m.group(2) else 0
    rank = _PRERELEASE_RANK.get(label, -1)
    return (0, rank, number, label if rank == -1 else "")


def parse_version(label: str) -> Version | None:
    """Parse ``N[.N...][-prerelease]``; None for anything else."""
    m = _VERSION_RE.match(label.strip())
    if m is None:
        return None
    parts = tuple(int(p) for p in m.group(1).split("."))
    return Version(parts=parts, prerelease=m.group(2))


def is_numeric_branch(branch: str) -> bool:
    """True for ``N`` and ``N.M`` branches, the only ones that take part in merge-up."""
    return _NUMERIC_BRANCH_RE.match(branch) is not None


def is_major_branch(branch: str) -> bool:
    return _MAJOR_BRANCH_RE.match(branch) is not None


def branch_major(branch: str) -> int | None:
    """Major component of a numeric branch (``"5"`` -> 5, ``"5.1"`` -> 5)."""
    m = _NUMERIC_BRANCH_RE.match(branch)
    if m is None:
        return None
    return int(m.group(1))


def stable_tag_minor(tag: str) -> tuple[str, str] | None:
    """Return ``(major, "major.minor")`` for a stable ``N.M.P`` tag."""
    m = _STABLE_TAG_RE.match(tag)
    if m is None:
        return None
    major = str(int(m.group(1)))
    return (major, f"{major}.{int(m.group(2))}")


def branch_sort_key(branch: str) -> tuple[int, float]:
    """Planning order for numeric branches.

    A bare major branch behaves as if its minor were infinite, so ``"5"``
    sorts after ``"5.0"``, ``"5.1"``... and before ``"6.0"``.

    Raises:
        ValueError: If the branch is not numeric.
    """
    m = _NUMERIC_BRANCH_RE.match(branch)
    if m is None:
        raise ValueError(f"not a numeric branch: {branch!r}")
    minor: float = float("inf") if m.group(2) is None else int(m.group(2))
    return (int(m.group(1)), minor)
