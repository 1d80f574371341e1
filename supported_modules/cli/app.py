from __future__ import annotations

import os
from pathlib import Path

import typer

from supported_modules import __version__
from supported_modules.cli.commands.catalog_cmd import catalog_app
from supported_modules.cli.commands.merge_up import merge_up
from supported_modules.cli.commands.resolve import major
from supported_modules.cli.context import CATALOG_ENV, CONFIG_ENV
from supported_modules.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(major)
app.command("merge-up")(merge_up)

# Sub-apps
app.add_typer(catalog_app, name="catalog")


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    catalog: str | None = typer.Option(
        None,
        "--catalog",
        help="Catalog JSON file or http(s) URL (defaults to the bundled copy)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="TOML file overriding the planning defaults",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if catalog is not None:
        os.environ[CATALOG_ENV] = catalog

    if config is not None:
        try:
            path = config.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --config: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not path.is_file():
            typer.echo(f"error: --config '{path}' is not a file", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[CONFIG_ENV] = str(path)


def main() -> None:
    app()
