"""Exception taxonomy mapped onto process exit statuses."""

from __future__ import annotations

from typing import NoReturn, Optional

from cfgdb.core.constants import (
    EXIT_MISSING_DEPENDENCY,
    EXIT_OK,
    EXIT_STORE_MISSING,
    EXIT_UNKNOWN_COMMAND,
    EXIT_USAGE,
)


class CLIError(Exception):
    """An expected failure that ends the process with a known status."""

    status = EXIT_USAGE

    def __init__(self, message: str = "", status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class UsageError(CLIError):
    """Malformed flags, missing values or wrong argument counts."""


class UnknownCommandError(CLIError):
    status = EXIT_UNKNOWN_COMMAND


class MissingDependencyError(CLIError):
    status = EXIT_MISSING_DEPENDENCY


class StoreMissingError(CLIError):
    status = EXIT_STORE_MISSING


class Terminate(CLIError):
    """Explicit termination; the top-level boundary skips trace rendering."""

    status = EXIT_OK


def die(status: int, message: str = "") -> NoReturn:
    """Stop processing and exit with ``status``."""
    raise Terminate(message, status=status)
