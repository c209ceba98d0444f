"""Exporters recording named output values (artifact paths) for later steps."""

import logging
from pathlib import Path

from cordova_build.core.errors import ExportError, ToolInvocationError
from cordova_build.protocols.output_exporter_protocol import OutputExporterProtocol
from cordova_build.protocols.tool_runner_protocol import ToolRunnerProtocol


logger = logging.getLogger(__name__)


class EnvmanExporter:
    """Exports values with ``envman add`` so following CI steps can read them."""

    def __init__(self, tool_runner: ToolRunnerProtocol, envman: str = "envman") -> None:
        self.tool_runner = tool_runner
        self.envman = envman

    def export(self, key: str, value: str) -> None:
        try:
            self.tool_runner.run_and_capture(
                [self.envman, "add", "--key", key, "--value", value], phase="export"
            )
        except ToolInvocationError as e:
            raise ExportError(
                f"Failed to export {key}: {e}", context={"key": key, "value": value}
            ) from e
        logger.debug("Exported %s=%s with envman", key, value)


class EnvFileExporter:
    """Appends ``KEY=VALUE`` lines to a file (dotenv / CI output file format)."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def export(self, key: str, value: str) -> None:
        if "\n" in value:
            raise ExportError(
                f"Failed to export {key}: value contains a newline",
                context={"key": key, "path": str(self.path)},
            )
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(f"{key}={value}\n")
        except OSError as e:
            raise ExportError(
                f"Failed to export {key} to {self.path}: {e}",
                context={"key": key, "path": str(self.path)},
            ) from e
        logger.debug("Exported %s=%s to %s", key, value, self.path)


class MemoryExporter:
    """Keeps exported values in memory."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def export(self, key: str, value: str) -> None:
        self.values[key] = value


def create_output_exporter(
    kind: str,
    tool_runner: ToolRunnerProtocol | None = None,
    env_file: Path | None = None,
) -> OutputExporterProtocol:
    """Create the output exporter selected by settings.

    Args:
        kind: "envman", "env_file" or "none"
        tool_runner: Runner used by the envman exporter
        env_file: Target file of the env_file exporter

    Returns:
        OutputExporterProtocol: Exporter instance
    """
    if kind == "envman":
        if tool_runner is None:
            from cordova_build.adapters.tool_adapter import create_tool_adapter

            tool_runner = create_tool_adapter()
        return EnvmanExporter(tool_runner)
    if kind == "env_file":
        if env_file is None:
            raise ExportError("env_file exporter requires a file path")
        return EnvFileExporter(env_file)
    if kind == "none":
        return MemoryExporter()
    raise ExportError(f"Unknown output exporter: {kind}")
