"""Adapters package for external system interfaces."""

from cordova_build.protocols import (
    FileAdapterProtocol,
    OutputExporterProtocol,
    ToolRunnerProtocol,
)

from .file_adapter import FileSystemAdapter, create_file_adapter
from .js_package_manager import JsPackageManager, PackageManager
from .output_exporter import (
    EnvFileExporter,
    EnvmanExporter,
    MemoryExporter,
    create_output_exporter,
)
from .tool_adapter import LoggerOutputMiddleware, ToolAdapter, create_tool_adapter


__all__ = [
    "EnvFileExporter",
    "EnvmanExporter",
    "FileAdapterProtocol",
    "FileSystemAdapter",
    "JsPackageManager",
    "LoggerOutputMiddleware",
    "MemoryExporter",
    "OutputExporterProtocol",
    "PackageManager",
    "ToolAdapter",
    "ToolRunnerProtocol",
    "create_file_adapter",
    "create_output_exporter",
    "create_tool_adapter",
]
