"""Tests for supported_modules.catalog.loader."""

from __future__ import annotations

import json
from pathlib import Path

from supported_modules.catalog import (
    load_bundled_catalog,
    load_catalog,
    load_catalog_file,
    load_catalog_url,
)
from supported_modules.core.result import Err, Ok
from supported_modules.tools.http import HttpError, MockHttpClient

_URL = "https://example.com/repositories.json"

_DOCUMENT: dict[str, object] = {
    "supportedModules": [
        {
            "github": "lorem/ipsum",
            "packagist": "lorem/ipsum",
            "githubId": 1,
            "majorVersionMapping": {"5": ["2"]},
        }
    ],
    "workflow": [
        {"github": "lorem/gha-ci", "packagist": None, "majorVersionMapping": {"*": []}},
    ],
}


class TestLoadCatalogFile:
    def test_loads(self, tmp_path: Path) -> None:
        path = tmp_path / "repositories.json"
        path.write_text(json.dumps(_DOCUMENT), encoding="utf-8")
        result = load_catalog_file(path)
        assert isinstance(result, Ok)
        assert len(result.value) == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_catalog_file(tmp_path / "nope.json")
        assert isinstance(result, Err)
        assert "not found" in result.error.message
        assert result.error.source == str(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "repositories.json"
        path.write_text("{", encoding="utf-8")
        result = load_catalog_file(path)
        assert isinstance(result, Err)
        assert "Could not parse" in result.error.message

    def test_root_must_be_object(self, tmp_path: Path) -> None:
        path = tmp_path / "repositories.json"
        path.write_text("[]", encoding="utf-8")
        result = load_catalog_file(path)
        assert isinstance(result, Err)
        assert "JSON object" in result.error.message

    def test_schema_violation(self, tmp_path: Path) -> None:
        path = tmp_path / "repositories.json"
        path.write_text(json.dumps({"misc": [{"github": "nope"}]}), encoding="utf-8")
        result = load_catalog_file(path)
        assert isinstance(result, Err)
        assert result.error.message.startswith("Invalid catalog:")


class TestLoadCatalogUrl:
    def test_loads(self) -> None:
        http = MockHttpClient()
        http.set_json(_URL, _DOCUMENT)
        result = load_catalog_url(_URL, http)
        assert isinstance(result, Ok)
        assert result.value.for_repository("lorem/ipsum") is not None
        assert http.calls == [_URL]

    def test_http_error(self) -> None:
        http = MockHttpClient()
        http.set_json(_URL, HttpError(url=_URL, status=503, message="Unavailable"))
        result = load_catalog_url(_URL, http)
        assert isinstance(result, Err)
        assert "HTTP 503" in result.error.message
        assert result.error.source == _URL


class TestLoadCatalog:
    def test_bundled_by_default(self) -> None:
        result = load_catalog()
        assert isinstance(result, Ok)
        assert result.value.for_repository("silverstripe/silverstripe-cms") is not None

    def test_bundled_has_every_category(self) -> None:
        result = load_bundled_catalog()
        assert isinstance(result, Ok)
        assert len(result.value.categories) == 4

    def test_dispatches_urls_to_http_client(self) -> None:
        http = MockHttpClient()
        http.set_json(_URL, _DOCUMENT)
        result = load_catalog(_URL, http=http)
        assert isinstance(result, Ok)
        assert http.calls == [_URL]

    def test_dispatches_paths_to_file_loader(self, tmp_path: Path) -> None:
        path = tmp_path / "repositories.json"
        path.write_text(json.dumps(_DOCUMENT), encoding="utf-8")
        result = load_catalog(str(path))
        assert isinstance(result, Ok)
        assert len(result.value) == 2
