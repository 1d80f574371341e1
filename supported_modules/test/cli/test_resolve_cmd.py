from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer

from supported_modules.catalog import load_bundled_catalog
from supported_modules.cli.context import CLIContext
from supported_modules.core.config import PlanningConfig
from supported_modules.core.errors import ErrorCode
from supported_modules.core.result import Ok
from supported_modules.output.console import MockConsole


def _ctx(console: MockConsole) -> CLIContext:
    catalog = load_bundled_catalog()
    assert isinstance(catalog, Ok)
    return CLIContext(catalog=catalog.value, config=PlanningConfig(), console=console)


def _patch(monkeypatch: pytest.MonkeyPatch) -> MockConsole:
    import supported_modules.cli.commands.resolve as resolve_cmd

    console = MockConsole()
    monkeypatch.setattr(resolve_cmd, "build_context", lambda: _ctx(console))
    return console


def test_major_from_branch(monkeypatch: pytest.MonkeyPatch) -> None:
    import supported_modules.cli.commands.resolve as resolve_cmd

    console = _patch(monkeypatch)
    resolve_cmd.major("silverstripe/silverstripe-admin", "2.1", manifest=None, runtime_fallback=False)
    assert console.messages == ["5"]


def test_major_from_manifest(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import supported_modules.cli.commands.resolve as resolve_cmd

    composer = tmp_path / "composer.json"
    composer.write_text(json.dumps({"require": {"php": "^7.4"}}), encoding="utf-8")
    console = _patch(monkeypatch)

    resolve_cmd.major("lorem/ipsum", "main", manifest=composer, runtime_fallback=True)

    assert console.messages == ["4"]


def test_major_not_found(monkeypatch: pytest.MonkeyPatch) -> None:
    import supported_modules.cli.commands.resolve as resolve_cmd

    console = _patch(monkeypatch)
    with pytest.raises(typer.Exit) as exc:
        resolve_cmd.major("lorem/ipsum", "main", manifest=None, runtime_fallback=False)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert console.find("no CMS major found")


def test_major_invalid_reference(monkeypatch: pytest.MonkeyPatch) -> None:
    import supported_modules.cli.commands.resolve as resolve_cmd

    console = _patch(monkeypatch)
    with pytest.raises(typer.Exit) as exc:
        resolve_cmd.major("framework", "5", manifest=None, runtime_fallback=False)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert console.has_error()


def test_major_missing_manifest(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import supported_modules.cli.commands.resolve as resolve_cmd

    _patch(monkeypatch)
    with pytest.raises(typer.Exit) as exc:
        resolve_cmd.major(
            "lorem/ipsum", "main", manifest=tmp_path / "composer.json", runtime_fallback=False
        )

    assert exc.value.exit_code == int(ErrorCode.IO_ERROR)
