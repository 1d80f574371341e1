from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from supported_modules.core.result import Err, Ok, Result
from supported_modules.core.structured import as_str_dict, get_str, get_table

__all__ = ["Manifest", "ManifestError", "load_manifest"]


def _empty_require() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class Manifest:
    """The parts of a decoded ``composer.json`` used for major-line inference."""

    name: str | None = None
    require: dict[str, str] = field(default_factory=_empty_require)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Manifest:
        """Build from decoded JSON. Non-string requirement entries are ignored."""
        require: dict[str, str] = {}
        table = get_table(data, "require") or {}
        for package, constraint in table.items():
            if isinstance(constraint, str):
                require[package] = constraint
        return cls(name=get_str(data, "name"), require=require)

    def constraint_for(self, package: str) -> str | None:
        return self.require.get(package)


@dataclass(frozen=True, slots=True)
class ManifestError:
    message: str
    path: Path | None = None


def load_manifest(path: Path) -> Result[Manifest, ManifestError]:
    """Read and decode a ``composer.json`` file."""
    try:
        data_obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ManifestError(f"Manifest not found: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestError(f"Error reading manifest: {e}", path=path))
    except json.JSONDecodeError as e:
        return Err(ManifestError(f"Invalid JSON in manifest: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ManifestError("Manifest root must be a JSON object", path=path))
    return Ok(Manifest.from_dict(data))
