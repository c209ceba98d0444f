"""Helpers for building errors with consistent messages and context."""

from pathlib import Path
from typing import Any

from cordova_build.core.errors import FileSystemError, ToolInvocationError


def create_file_error(
    path: Path | str,
    operation: str,
    original_error: Exception,
    additional_context: dict[str, Any] | None = None,
    phase: str | None = None,
) -> FileSystemError:
    """Create a FileSystemError for a failed file operation.

    Args:
        path: Path the operation failed on
        operation: Name of the operation (e.g. "copy_file", "walk")
        original_error: Underlying exception
        additional_context: Extra context to attach
        phase: Build phase the operation belongs to

    Returns:
        FileSystemError with message and context populated
    """
    context = {"error_type": type(original_error).__name__}
    if additional_context:
        context.update(additional_context)

    message = f"File operation '{operation}' failed on '{path}': {original_error}"
    return FileSystemError(
        message, path=path, operation=operation, context=context, phase=phase
    )


def create_tool_error(
    message: str,
    command: list[str],
    exit_code: int | None = None,
    output: list[str] | None = None,
    original_error: Exception | None = None,
    phase: str | None = None,
) -> ToolInvocationError:
    """Create a ToolInvocationError for a failed external command.

    A missing ``exit_code`` marks the failure as transport level.
    """
    context: dict[str, Any] = {}
    if original_error is not None:
        context["error_type"] = type(original_error).__name__
        context["error"] = str(original_error)

    return ToolInvocationError(
        message,
        command=command,
        exit_code=exit_code,
        output=output,
        transport_failure=exit_code is None,
        context=context,
        phase=phase,
    )
