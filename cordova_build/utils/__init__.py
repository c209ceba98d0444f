"""Utility helpers."""

from .error_utils import create_file_error, create_tool_error
from .stream_process import DefaultOutputMiddleware, OutputMiddleware, run_command


__all__ = [
    "DefaultOutputMiddleware",
    "OutputMiddleware",
    "create_file_error",
    "create_tool_error",
    "run_command",
]
