from __future__ import annotations

import typer

from supported_modules.catalog import Category, RepositoryMetadata
from supported_modules.cli.context import build_context
from supported_modules.core.errors import ErrorCode, InvalidReferenceError
from supported_modules.output.console import ConsoleProtocol

from ._helpers import fail, repository_metadata

catalog_app = typer.Typer(add_completion=False, no_args_is_help=True)


def _format_mapping(repo: RepositoryMetadata) -> str:
    return "; ".join(
        f"{label}: {', '.join(branches) or '-'}" for label, branches in repo.major_version_mapping
    )


def _print_record(repo: RepositoryMetadata, console: ConsoleProtocol) -> None:
    console.header(repo.github)
    console.print(f"category: {repo.category}")
    console.print(f"packagist: {repo.packagist or '-'}")
    if repo.github_id is not None:
        console.print(f"githubId: {repo.github_id}")
    if repo.type is not None:
        console.print(f"type: {repo.type}")
    console.print(f"core: {'yes' if repo.is_core else 'no'}")
    console.print(f"lockstepped: {'yes' if repo.lockstepped else 'no'}")
    console.print(f"majors: {_format_mapping(repo) or '-'}")


@catalog_app.command("show")
def show_cmd(
    repo: str = typer.Argument(..., help="GitHub org/repo reference"),
    partial: bool = typer.Option(
        False, "--partial", help="Match forks by repository name when there is no exact match"
    ),
) -> None:
    """Show the catalog record for a GitHub repository."""
    ctx = build_context()
    record = repository_metadata(ctx, repo, partial=partial)
    if record is None:
        ctx.console.error(f"{repo} is not in the catalog")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    _print_record(record, ctx.console)


@catalog_app.command("packagist")
def packagist_cmd(
    name: str = typer.Argument(..., help="Packagist org/name"),
) -> None:
    """Show the catalog record for a Packagist package."""
    ctx = build_context()
    try:
        record = ctx.catalog.by_packagist(name)
    except InvalidReferenceError as e:
        fail(e, ctx)
    if record is None:
        ctx.console.error(f"{name} is not in the catalog")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    _print_record(record, ctx.console)


@catalog_app.command("list")
def list_cmd(
    category: Category | None = typer.Option(
        None, "--category", help="Only list one catalog section"
    ),
) -> None:
    """List catalogued repositories."""
    ctx = build_context()
    sections = [category] if category is not None else list(ctx.catalog.categories)
    for section in sections:
        rows = [
            (repo.github, repo.packagist or "-", _format_mapping(repo) or "-")
            for repo in ctx.catalog.category(section)
        ]
        ctx.console.table(str(section), ("github", "packagist", "majors"), rows)


@catalog_app.command("lockstepped")
def lockstepped_cmd() -> None:
    """List supported modules whose majors move in step with CMS."""
    ctx = build_context()
    rows = [
        (name, "; ".join(f"{label}: {', '.join(branches)}" for label, branches in mapping))
        for name, mapping in ctx.catalog.lockstepped().items()
    ]
    ctx.console.table("lockstepped", ("packagist", "majors"), rows)
