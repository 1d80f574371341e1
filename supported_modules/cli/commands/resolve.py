from __future__ import annotations

from pathlib import Path

import typer

from supported_modules.cli.context import build_context
from supported_modules.core.errors import ErrorCode

from ._helpers import manifest_or_none, repository_metadata


def major(
    repo: str = typer.Argument(..., help="GitHub org/repo reference"),
    branch: str = typer.Argument(..., help="Branch name (e.g. 5, 5.1, main)"),
    manifest: Path | None = typer.Option(
        None, "--manifest", help="composer.json from that branch"
    ),
    runtime_fallback: bool = typer.Option(
        False,
        "--runtime-fallback",
        help="Fall back to the PHP constraint when no catalogued dependency matches",
    ),
) -> None:
    """Print the CMS major release line a branch belongs to."""
    ctx = build_context()
    metadata = repository_metadata(ctx, repo)
    composer = manifest_or_none(ctx, manifest)

    line = ctx.resolver().get_major_line(
        metadata, branch, composer, allow_runtime_fallback=runtime_fallback
    )
    if not line:
        ctx.console.warning(f"{repo} {branch}: no CMS major found")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    ctx.console.print(line)
