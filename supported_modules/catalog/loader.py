"""Catalog loading.

The catalog is loaded once, up front, by whoever drives the resolver (the CLI
context, a test fixture) and then passed around. Sources:

- the copy bundled with the package (``data/repositories.json``)
- a local JSON file
- a remote URL, through an injectable ``HttpClient``
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from supported_modules.core.result import Err, Ok, Result
from supported_modules.core.structured import StrDict, as_str_dict
from supported_modules.tools.http import HttpClient, RealHttpClient

from .catalog import MetadataCatalog

__all__ = [
    "CatalogError",
    "load_bundled_catalog",
    "load_catalog",
    "load_catalog_file",
    "load_catalog_url",
    "BUNDLED_CATALOG",
]

BUNDLED_CATALOG = "repositories.json"


@dataclass(frozen=True, slots=True)
class CatalogError:
    """Error when the catalog document cannot be read or validated."""

    message: str
    source: str


def _build(data: StrDict, source: str) -> Result[MetadataCatalog, CatalogError]:
    try:
        return Ok(MetadataCatalog.from_dict(data))
    except ValueError as e:
        return Err(CatalogError(f"Invalid catalog: {e}", source=source))


def _decode(text: str, source: str) -> Result[StrDict, CatalogError]:
    try:
        data_obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(CatalogError(f"Could not parse catalog JSON: {e}", source=source))
    data = as_str_dict(data_obj)
    if data is None:
        return Err(CatalogError("Catalog root must be a JSON object", source=source))
    return Ok(data)


def load_catalog_file(path: Path) -> Result[MetadataCatalog, CatalogError]:
    source = str(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(CatalogError(f"Catalog file not found: {path}", source=source))
    except (OSError, UnicodeDecodeError) as e:
        return Err(CatalogError(f"Error reading catalog: {e}", source=source))

    decoded = _decode(text, source)
    if isinstance(decoded, Err):
        return decoded
    return _build(decoded.value, source)


def load_bundled_catalog() -> Result[MetadataCatalog, CatalogError]:
    resource = resources.files("supported_modules.catalog").joinpath("data", BUNDLED_CATALOG)
    source = f"<bundled {BUNDLED_CATALOG}>"
    try:
        text = resource.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(CatalogError(f"Error reading bundled catalog: {e}", source=source))

    decoded = _decode(text, source)
    if isinstance(decoded, Err):
        return decoded
    return _build(decoded.value, source)


def load_catalog_url(url: str, http: HttpClient) -> Result[MetadataCatalog, CatalogError]:
    fetched = http.get_json(url)
    if isinstance(fetched, Err):
        return Err(CatalogError(f"Could not fetch catalog: {fetched.error}", source=url))
    return _build(fetched.value, url)


def load_catalog(
    source: str | Path | None = None,
    *,
    http: HttpClient | None = None,
) -> Result[MetadataCatalog, CatalogError]:
    """Load a catalog from a path, an http(s) URL, or the bundled copy (None)."""
    if source is None:
        return load_bundled_catalog()
    if isinstance(source, str) and source.startswith(("http://", "https://")):
        return load_catalog_url(source, http or RealHttpClient())
    return load_catalog_file(Path(source).expanduser())
