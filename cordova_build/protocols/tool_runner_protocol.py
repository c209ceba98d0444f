"""Protocol definition for running the external build tool."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ToolRunnerProtocol(Protocol):
    """Runs one command of the external build tool to completion."""

    def run(
        self,
        args: list[str],
        phase: str,
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> list[str]:
        """Run ``args``, streaming output live.

        Args:
            args: Full argument list, executable first
            phase: Build phase label used in errors and logs
            cwd: Working directory for the command
            timeout: Seconds before the command is killed

        Returns:
            Combined captured output lines (stdout then stderr)

        Raises:
            ToolInvocationError: On non-zero exit or when the command could not run
        """
        ...

    def run_and_capture(self, args: list[str], phase: str) -> str:
        """Run ``args`` quietly and return the trimmed combined output.

        Raises:
            ToolInvocationError: On non-zero exit or when the command could not run
        """
        ...
