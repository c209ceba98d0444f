from .errors import (
    ConfigError,
    CordovaBuildError,
    ExportError,
    FileSystemError,
    MissingArtifactError,
    ToolInvocationError,
    UnresolvedSymlinkError,
)
from .logging import get_logger, get_struct_logger, setup_logging


__all__ = [
    "setup_logging",
    "get_logger",
    "get_struct_logger",
    "CordovaBuildError",
    "ConfigError",
    "ToolInvocationError",
    "FileSystemError",
    "UnresolvedSymlinkError",
    "MissingArtifactError",
    "ExportError",
]
