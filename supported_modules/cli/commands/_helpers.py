"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import typer

from supported_modules.catalog import RepositoryMetadata
from supported_modules.core.errors import ErrorCode, InvalidReferenceError
from supported_modules.core.result import Err
from supported_modules.output.errors import AppError, app_error_exit_code, print_app_error
from supported_modules.versioning import Manifest, load_manifest

if TYPE_CHECKING:
    from supported_modules.cli.context import CLIContext


def fail(error: AppError, ctx: CLIContext) -> NoReturn:
    """Print an error and exit with its mapped code."""
    print_app_error(error, ctx.console)
    raise typer.Exit(code=app_error_exit_code(error))


def repository_metadata(
    ctx: CLIContext, repo: str, *, partial: bool = False
) -> RepositoryMetadata | None:
    try:
        return ctx.catalog.for_repository(repo, allow_partial_match=partial)
    except InvalidReferenceError as e:
        fail(e, ctx)


def manifest_or_none(ctx: CLIContext, path: Path | None) -> Manifest | None:
    if path is None:
        return None
    result = load_manifest(path)
    if isinstance(result, Err):
        fail(result.error, ctx)
    return result.value


def read_labels(ctx: CLIContext, path: Path | None) -> list[str]:
    """One label per line; blank lines and ``#`` comments are skipped."""
    if path is None:
        return []
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        ctx.console.error(f"Error reading {path}: {e}")
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))
    labels: list[str] = []
    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            labels.append(line)
    return labels
