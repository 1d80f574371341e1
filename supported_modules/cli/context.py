from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from supported_modules.branches import MergeUpPlanner, VersionResolver
from supported_modules.catalog import MetadataCatalog, load_catalog
from supported_modules.core.config import PlanningConfig, load_config
from supported_modules.core.result import Err
from supported_modules.output.console import ConsoleProtocol, RichConsole
from supported_modules.output.errors import app_error_exit_code, print_app_error

__all__ = ["CLIContext", "build_context", "CATALOG_ENV", "CONFIG_ENV"]

CATALOG_ENV = "SUPPORTED_MODULES_CATALOG"
CONFIG_ENV = "SUPPORTED_MODULES_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    catalog: MetadataCatalog
    config: PlanningConfig
    console: ConsoleProtocol

    def resolver(self) -> VersionResolver:
        return VersionResolver(self.catalog, self.config)

    def planner(self, *, verbose: bool = False) -> MergeUpPlanner:
        return MergeUpPlanner(self.resolver(), console=self.console if verbose else None)


def build_context() -> CLIContext:
    """Load config and catalog once for the command being run."""
    console = RichConsole()

    config = PlanningConfig()
    config_path = os.environ.get(CONFIG_ENV)
    if config_path:
        config_result = load_config(Path(config_path).expanduser())
        if isinstance(config_result, Err):
            print_app_error(config_result.error, console)
            raise typer.Exit(code=app_error_exit_code(config_result.error))
        config = config_result.value

    catalog_result = load_catalog(os.environ.get(CATALOG_ENV) or None)
    if isinstance(catalog_result, Err):
        print_app_error(catalog_result.error, console)
        raise typer.Exit(code=app_error_exit_code(catalog_result.error))

    return CLIContext(catalog=catalog_result.value, config=config, console=console)
