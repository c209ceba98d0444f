"""Error hierarchy for cordova-build.

Every error carries a human readable message plus a ``context`` dictionary
with structured details (paths, commands, exit codes) and the build phase
in which it was raised. The CLI turns any of them into a non-zero exit.
"""

from pathlib import Path
from typing import Any


class CordovaBuildError(Exception):
    """Base class for all cordova-build errors."""

    default_phase = "build"

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        phase: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context or {})
        self.phase = phase or self.default_phase

    def __str__(self) -> str:
        return self.message


class ConfigError(CordovaBuildError):
    """Invalid or missing configuration value."""

    default_phase = "configuration"


class ToolInvocationError(CordovaBuildError):
    """The external build tool failed or could not be started.

    ``transport_failure`` is True when the process never ran (executable
    missing, spawn failure, timeout) as opposed to a non-zero exit status.
    """

    default_phase = "compile"

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        exit_code: int | None = None,
        output: list[str] | None = None,
        transport_failure: bool = False,
        context: dict[str, Any] | None = None,
        phase: str | None = None,
    ) -> None:
        super().__init__(message, context, phase)
        self.command = list(command or [])
        self.exit_code = exit_code
        self.output = list(output or [])
        self.transport_failure = transport_failure
        self.context.setdefault("command", " ".join(self.command))
        if exit_code is not None:
            self.context.setdefault("exit_code", exit_code)


class FileSystemError(CordovaBuildError):
    """Traversal, stat, copy or archive failure on a specific path."""

    default_phase = "export"

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        operation: str | None = None,
        context: dict[str, Any] | None = None,
        phase: str | None = None,
    ) -> None:
        super().__init__(message, context, phase)
        self.path = Path(path) if path is not None else None
        self.operation = operation
        if path is not None:
            self.context.setdefault("path", str(path))
        if operation:
            self.context.setdefault("operation", operation)


class UnresolvedSymlinkError(FileSystemError):
    """A discovered artifact is a symlink to a missing target or another symlink."""


class MissingArtifactError(CordovaBuildError):
    """The produced artifacts do not satisfy the build-completeness policy."""

    default_phase = "classification"


class ExportError(CordovaBuildError):
    """A named output value could not be recorded."""

    default_phase = "export"


__all__ = [
    "CordovaBuildError",
    "ConfigError",
    "ToolInvocationError",
    "FileSystemError",
    "UnresolvedSymlinkError",
    "MissingArtifactError",
    "ExportError",
]
