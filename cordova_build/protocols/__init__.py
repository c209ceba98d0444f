"""Protocol definitions for cordova-build adapters.

These protocols use Python's typing.Protocol system with the
@runtime_checkable decorator to enable both static type checking and
runtime isinstance() checks.
"""

from .file_adapter_protocol import FileAdapterProtocol
from .output_exporter_protocol import OutputExporterProtocol
from .tool_runner_protocol import ToolRunnerProtocol


__all__ = [
    "FileAdapterProtocol",
    "OutputExporterProtocol",
    "ToolRunnerProtocol",
]
