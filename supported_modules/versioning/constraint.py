"""Composer-style version constraints.

Supports the subset of the Composer constraint grammar that shows up in module
manifests:

- ``^5.0``, ``~4.11``: caret and tilde ranges
- ``5.x``, ``5.*``, ``5.x-dev``, ``5.0.x-dev``: wildcard ranges
- ``>=4.0 <6``, ``>=4.0, <6``: conjunctions (space or comma separated)
- ``^7.4 || ^8.0``, ``^7.4 | ^8.0``: disjunctions
- ``1.2 - 2.3``: hyphen ranges
- ``5.1.2``, ``==5.1.2``, ``!=5.1.2``: exact (in)equality
- ``*``: anything
- ``dev-main``: branch references, which have no numeric floor

Stability flags (``@dev``) and inline aliases (``dev-main as 5.x-dev``) are
accepted and ignored.

Each alternative is rewritten into npm range syntax and handed to
``semantic_version.NpmSpec``. Alternatives using ``!=`` go to ``SimpleSpec``
instead, which is the only one of the two that understands it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import semantic_version
from semantic_version.base import AllOf, AnyOf, Clause, Range

from .version import Version

__all__ = [
    "Constraint",
    "parse_constraint",
]


type Spec = semantic_version.NpmSpec | semantic_version.SimpleSpec

_ZERO = Version((0,))

_OR_SPLIT_RE = re.compile(r"\s*\|\|?\s*")
_AND_SPLIT_RE = re.compile(r"[,\s]+")
_OP_SPACE_RE = re.compile(r"(>=|<=|!=|<>|==|=|>|<|\^|~)\s+")
_HYPHEN_RE = re.compile(r"^v?(\d+(?:\.\d+){0,2})\s+-\s+v?(\d+(?:\.\d+){0,2})$")
_CARET_RE = re.compile(r"^\^v?(\d+(?:\.\d+){0,2}(?:-[0-9A-Za-z.]+)?)$")
_TILDE_RE = re.compile(r"^~v?(\d+)(?:\.(\d+))?(?:\.(\d+))?$")
_WILDCARD_RE = re.compile(r"^v?(\d+(?:\.\d+)?)\.[xX*](?:-dev)?$")
_PRIMITIVE_RE = re.compile(
    r"^(>=|<=|!=|<>|==|=|>|<)?v?(\d+(?:\.\d+)*)(?:-([0-9A-Za-z][0-9A-Za-z.]*))?$"
)
_STABILITY_FLAG_RE = re.compile(r"@(?:dev|alpha|beta|rc|stable)$", re.IGNORECASE)

_FLOOR_OPERATORS = (Range.OP_GTE, Range.OP_GT, Range.OP_EQ)


@dataclass(frozen=True, slots=True)
class Constraint:
    """A parsed constraint: one spec per ``||`` alternative.

    A ``None`` alternative is a branch reference (``dev-main``): it matches no
    numeric version and has no floor.
    """

    raw: str
    alternatives: tuple[Spec | None, ...]

    @classmethod
    def parse(cls, raw: str) -> Constraint:
        """Parse a constraint string.

        Raises:
            ValueError: If any part of the constraint cannot be understood.
        """
        text = raw.strip()
        if not text:
            raise ValueError("empty constraint")

        alternatives: list[Spec | None] = []
        for part in _OR_SPLIT_RE.split(text):
            if not part:
                raise ValueError(f"invalid constraint: {raw!r}")
            alternatives.append(_parse_alternative(part))
        return cls(raw=raw, alternatives=tuple(alternatives))

    def matches(self, candidate: Version | str) -> bool:
        version = Version.parse(candidate) if isinstance(candidate, str) else candidate
        target = semantic_version.Version.coerce(str(version))
        return any(spec is not None and spec.match(target) for spec in self.alternatives)

    def lower_bound(self) -> Version:
        """Lowest version the constraint can admit.

        Alternatives without a floor (``*``, ``<6``, branch references) give
        version zero, which callers treat as "no usable floor".
        """
        return min(
            _ZERO if spec is None else _clause_floor(spec.clause) for spec in self.alternatives
        )


def _parse_alternative(part: str) -> Spec | None:
    part = part.split(" as ", 1)[0].strip()

    m = _HYPHEN_RE.match(part)
    if m is not None:
        return semantic_version.NpmSpec(f"{m.group(1)} - {m.group(2)}")

    atoms = [a for a in _AND_SPLIT_RE.split(_OP_SPACE_RE.sub(r"\1", part)) if a]
    if not atoms:
        raise ValueError(f"invalid constraint: {part!r}")
    if any(a.startswith("dev-") for a in atoms):
        return None

    terms = [term for atom in atoms for term in _normalize_atom(atom)]
    if not terms:
        return semantic_version.NpmSpec("*")
    if any(t.startswith("!=") for t in terms):
        return semantic_version.SimpleSpec(",".join(terms))
    return semantic_version.NpmSpec(" ".join(terms))


def _normalize_atom(atom: str) -> list[str]:
    """Rewrite one Composer atom into npm comparator terms."""
    atom = _STABILITY_FLAG_RE.sub("", atom.split("#", 1)[0])

    if atom in ("*", "x", "X"):
        return []

    m = _WILDCARD_RE.match(atom)
    if m is not None:
        parts = [int(p) for p in m.group(1).split(".")]
        upper = parts[:-1] + [parts[-1] + 1]
        return [f">={_full(parts)}", f"<{_full(upper)}"]

    m = _CARET_RE.match(atom)
    if m is not None:
        return [f"^{m.group(1)}"]

    m = _TILDE_RE.match(atom)
    if m is not None:
        major, minor, patch = m.group(1), m.group(2), m.group(3)
        # ~A.B allows every later minor of A.
        if minor is not None and patch is None:
            return [f">={_full([int(major), int(minor)])}", f"<{_full([int(major) + 1])}"]
        return [f"~{atom[1:].lstrip('v')}"]

    m = _PRIMITIVE_RE.match(atom)
    if m is None:
        raise ValueError(f"invalid constraint atom: {atom!r}")
    op = m.group(1) or "="
    if op == "==":
        op = "="
    elif op == "<>":
        op = "!="
    version = _full([int(p) for p in m.group(2).split(".")])
    if m.group(3):
        version += f"-{m.group(3)}"
    return [f"{op}{version}"]


def _full(parts: list[int]) -> str:
    """``major.minor.patch`` from up to three numeric parts."""
    padded = (parts + [0, 0, 0])[:3]
    return ".".join(str(p) for p in padded)


def _clause_floor(clause: Clause) -> Version:
    match clause:
        case AnyOf():
            return min((_clause_floor(c) for c in clause.clauses), default=_ZERO)
        case AllOf():
            return max((_clause_floor(c) for c in clause.clauses), default=_ZERO)
        case Range() if clause.operator in _FLOOR_OPERATORS:
            target = clause.target
            prerelease = ".".join(target.prerelease) if target.prerelease else None
            return Version((target.major, target.minor, target.patch), prerelease)
    return _ZERO


def parse_constraint(raw: str) -> Constraint | None:
    """Parse a constraint, returning None when it cannot be understood."""
    try:
        return Constraint.parse(raw)
    except ValueError:
        return None
