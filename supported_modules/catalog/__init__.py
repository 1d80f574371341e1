"""Repository metadata catalog."""

from .catalog import MetadataCatalog
from .loader import (
    CatalogError,
    load_bundled_catalog,
    load_catalog,
    load_catalog_file,
    load_catalog_url,
)
from .model import WILDCARD_MAJOR, Category, MajorVersionMapping, ModuleType, RepositoryMetadata

__all__ = [
    "MetadataCatalog",
    "RepositoryMetadata",
    "Category",
    "ModuleType",
    "MajorVersionMapping",
    "WILDCARD_MAJOR",
    "CatalogError",
    "load_catalog",
    "load_catalog_file",
    "load_catalog_url",
    "load_bundled_catalog",
]
