"""Exception types raised by the azb core.

Every error raised on purpose by azb derives from AzbError so the CLI can
report it with a single handler. CancelledError signals that the user
declined a prompt and is reported without the "Error:" prefix.
"""

import shlex
from typing import Optional, Sequence


class AzbError(Exception):
    """Base class for azb errors."""


class ConfigurationError(AzbError, ValueError):
    """Invalid configuration value (flag, environment variable, column list)."""


class ColumnError(AzbError):
    """Base class for column state machine errors."""

    def __init__(self, column: str, message: str) -> None:
        super().__init__(message)
        self.column = column


class UnknownColumnError(ColumnError):
    """The current column is not part of the configured sequence."""

    def __init__(self, column: str) -> None:
        super().__init__(column, f"unknown current column {column!r}")


class BoundaryReachedError(ColumnError):
    """The item already sits in the first or last column."""

    def __init__(self, column: str, edge: str) -> None:
        super().__init__(column, f"already in {edge} column {column!r}")
        self.edge = edge


class UnrecognizedShapeError(AzbError):
    """A query response did not contain any work item identifiers."""

    def __init__(self, message: str = "unrecognized WIQL JSON shape; cannot find IDs") -> None:
        super().__init__(message)


class WorkItemError(AzbError):
    """A work item could not be used for the requested operation."""


class RepositoryError(AzbError):
    """A repository could not be found or az returned an unusable repository."""


class CancelledError(AzbError):
    """The user declined or interrupted a confirmation prompt."""

    def __init__(self, command: str = "") -> None:
        super().__init__("cancelled")
        self.command = command


class ExecutionFailure(AzbError):
    """An outbound az invocation failed.

    Attributes:
        argv: Arguments passed to az (without the program name)
        cause: Description of the process or transport error
        stderr: Diagnostic output captured from the process
        returncode: Exit status when the process ran to completion
    """

    def __init__(
        self,
        argv: Sequence[str],
        cause: str,
        stderr: str = "",
        returncode: Optional[int] = None,
    ) -> None:
        self.argv = tuple(argv)
        self.cause = cause
        self.stderr = stderr
        self.returncode = returncode
        command = shlex.join(("az",) + self.argv)
        message = f"{command} failed: {cause}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)
