"""Exit codes and exception types.

Exit codes map to shell exit status for CLI commands. The exceptions are the
two hard failures of catalog lookups and merge-up planning; everything else
(unknown repository, unknown branch, no matching dependency) is a soft failure
that yields an empty value.
"""

from __future__ import annotations

from enum import IntEnum

__all__ = ["ErrorCode", "InvalidReferenceError", "UnresolvableMajorError"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (bad reference, unresolvable repository)
    - 2: Environment error (catalog or config could not be loaded)
    - 5: I/O error (input file missing or malformed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK


class InvalidReferenceError(ValueError):
    """A repository reference is not of the form ``org/name``."""

    def __init__(self, reference: str, argument: str = "reference") -> None:
        self.reference = reference
        self.argument = argument
        super().__init__(f"{argument} must be a valid org/repo reference (got {reference!r})")


class UnresolvableMajorError(RuntimeError):
    """No inference path links a repository's default branch to a platform major."""

    def __init__(self, repository: str) -> None:
        self.repository = repository
        super().__init__(f"Could not work out what default CMS major version for {repository}")
