"""Tests for supported_modules.versioning.manifest."""

from __future__ import annotations

import json
from pathlib import Path

from supported_modules.core.result import Err, Ok
from supported_modules.versioning import Manifest, load_manifest


class TestManifest:
    def test_from_dict(self) -> None:
        manifest = Manifest.from_dict(
            {
                "name": "silverstripe/admin",
                "require": {"php": "^8.1", "silverstripe/framework": "^5"},
            }
        )
        assert manifest.name == "silverstripe/admin"
        assert manifest.constraint_for("php") == "^8.1"

    def test_non_string_requirements_are_ignored(self) -> None:
        manifest = Manifest.from_dict({"require": {"php": 8, "ext-json": "*"}})
        assert manifest.require == {"ext-json": "*"}

    def test_missing_sections(self) -> None:
        manifest = Manifest.from_dict({})
        assert manifest.name is None
        assert manifest.require == {}
        assert manifest.constraint_for("php") is None


class TestLoadManifest:
    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "composer.json"
        path.write_text(
            json.dumps({"name": "lorem/ipsum", "require": {"silverstripe/cms": "^5.1"}}),
            encoding="utf-8",
        )
        result = load_manifest(path)
        assert isinstance(result, Ok)
        assert result.value.name == "lorem/ipsum"
        assert result.value.constraint_for("silverstripe/cms") == "^5.1"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_manifest(tmp_path / "composer.json")
        assert isinstance(result, Err)
        assert "not found" in result.error.message
        assert result.error.path == tmp_path / "composer.json"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "composer.json"
        path.write_text("{not json", encoding="utf-8")
        result = load_manifest(path)
        assert isinstance(result, Err)
        assert "Invalid JSON" in result.error.message

    def test_root_must_be_object(self, tmp_path: Path) -> None:
        path = tmp_path / "composer.json"
        path.write_text("[]", encoding="utf-8")
        result = load_manifest(path)
        assert isinstance(result, Err)
        assert "JSON object" in result.error.message
