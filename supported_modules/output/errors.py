"""Error presentation utilities.

Centralized error formatting and exit code mapping for the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from supported_modules.catalog import CatalogError
from supported_modules.core.config import ConfigError
from supported_modules.core.errors import ErrorCode, InvalidReferenceError, UnresolvableMajorError
from supported_modules.output.console import Style
from supported_modules.versioning import ManifestError

if TYPE_CHECKING:
    from supported_modules.output.console import ConsoleProtocol

__all__ = ["AppError", "print_app_error", "app_error_exit_code"]

type AppError = (
    CatalogError | ConfigError | ManifestError | InvalidReferenceError | UnresolvableMajorError
)


def print_app_error(error: AppError, console: ConsoleProtocol) -> None:
    match error:
        case CatalogError(message=message, source=source):
            console.error(message)
            console.print(f"catalog: {source}", Style.DIM)
        case ConfigError(message=message):
            console.error(message)
        case ManifestError(message=message):
            console.error(message)
        case InvalidReferenceError():
            console.error(str(error))
        case UnresolvableMajorError(repository=repository):
            console.error(str(error))
            console.print(
                f"hint: add {repository} to the catalog, or set a numeric default branch",
                Style.DIM,
            )


def app_error_exit_code(error: AppError) -> int:
    match error:
        case CatalogError() | ConfigError():
            return int(ErrorCode.ENV_ERROR)
        case ManifestError():
            return int(ErrorCode.IO_ERROR)
        case InvalidReferenceError() | UnresolvableMajorError():
            return int(ErrorCode.USER_ERROR)
    return int(ErrorCode.USER_ERROR)
