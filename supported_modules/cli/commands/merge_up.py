from __future__ import annotations

import json
from pathlib import Path

import typer

from supported_modules.cli.context import build_context
from supported_modules.core.errors import UnresolvableMajorError

from ._helpers import fail, manifest_or_none, read_labels, repository_metadata


def merge_up(
    repo: str = typer.Argument(..., help="GitHub org/repo reference"),
    default_branch: str = typer.Option(
        ..., "--default-branch", help="Default branch of the repository on GitHub"
    ),
    branch: list[str] = typer.Option([], "--branch", "-b", help="Branch name (repeatable)"),
    tag: list[str] = typer.Option([], "--tag", "-t", help="Tag name (repeatable)"),
    branches_file: Path | None = typer.Option(
        None, "--branches-file", help="File with one branch name per line"
    ),
    tags_file: Path | None = typer.Option(
        None, "--tags-file", help="File with one tag name per line"
    ),
    manifest: Path | None = typer.Option(
        None, "--manifest", help="composer.json from the default branch"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as a JSON array"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Explain dropped branches"),
) -> None:
    """Print the branches a fix is merged up through, oldest first."""
    ctx = build_context()
    metadata = repository_metadata(ctx, repo)
    composer = manifest_or_none(ctx, manifest)
    branches = [*branch, *read_labels(ctx, branches_file)]
    tags = [*tag, *read_labels(ctx, tags_file)]

    try:
        plan = ctx.planner(verbose=verbose).plan_merge_up(
            repo, metadata, default_branch, tags, branches, composer
        )
    except UnresolvableMajorError as e:
        fail(e, ctx)

    if as_json:
        ctx.console.print(json.dumps(plan))
        return
    if not plan:
        ctx.console.info(f"{repo}: nothing to merge up")
        return
    for name in plan:
        ctx.console.print(name)
