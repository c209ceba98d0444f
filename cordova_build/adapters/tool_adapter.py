"""Adapter running the external build tool (Cordova, npm, yarn, envman)."""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import cast

from cordova_build.protocols.tool_runner_protocol import ToolRunnerProtocol
from cordova_build.utils import stream_process
from cordova_build.utils.error_utils import create_tool_error
from cordova_build.utils.stream_process import OutputMiddleware


logger = logging.getLogger(__name__)


class LoggerOutputMiddleware(OutputMiddleware[str]):
    """Forwards process output to a logger as it arrives.

    stdout lines are logged at INFO and stderr lines at WARNING so the build
    tool's progress is visible live at the default log level.
    """

    def __init__(
        self, logger: logging.Logger, stdout_prefix: str = "", stderr_prefix: str = ""
    ) -> None:
        self.logger = logger
        self.stdout_prefix = stdout_prefix
        self.stderr_prefix = stderr_prefix

    def process(self, line: str, stream_type: str) -> str:
        if stream_type == "stdout":
            self.logger.info("%s%s", self.stdout_prefix, line)
        else:
            self.logger.warning("%s%s", self.stderr_prefix, line)
        return line


class CaptureOutputMiddleware(OutputMiddleware[str]):
    """Captures output without echoing it."""

    def process(self, line: str, stream_type: str) -> str:
        return line


def printable_command(args: list[str]) -> str:
    """Shell-quoted command line for logs and error messages."""
    return " ".join(shlex.quote(arg) for arg in args)


class ToolAdapter:
    """Implementation of the tool runner on top of stream_process."""

    def __init__(self, middleware: OutputMiddleware[str] | None = None) -> None:
        self.middleware = middleware or LoggerOutputMiddleware(logger)

    def run(
        self,
        args: list[str],
        phase: str,
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> list[str]:
        """Run a command, streaming its output through the middleware."""
        logger.info("$ %s", printable_command(args))
        return_code, stdout, stderr = self._execute(
            args, self.middleware, phase, cwd, timeout
        )
        output = stdout + stderr

        if return_code != 0:
            logger.error(
                "Command exited with code %d: %s", return_code, printable_command(args)
            )
            raise create_tool_error(
                f"{phase} failed: '{printable_command(args)}' exited with code {return_code}",
                args,
                exit_code=return_code,
                output=output,
                phase=phase,
            )

        return output

    def run_and_capture(self, args: list[str], phase: str) -> str:
        """Run a command quietly and return its trimmed combined output."""
        logger.debug("$ %s", printable_command(args))
        return_code, stdout, stderr = self._execute(
            args, CaptureOutputMiddleware(), phase, None, None
        )
        output = "\n".join(stdout + stderr).strip()

        if return_code != 0:
            raise create_tool_error(
                f"$ {printable_command(args)} failed, output: {output}",
                args,
                exit_code=return_code,
                output=stdout + stderr,
                phase=phase,
            )

        return output

    def _execute(
        self,
        args: list[str],
        middleware: OutputMiddleware[str],
        phase: str,
        cwd: Path | None,
        timeout: float | None,
    ) -> stream_process.ProcessResult[str]:
        cmd_str = printable_command(args)
        try:
            return cast(
                stream_process.ProcessResult[str],
                stream_process.run_command(args, middleware, cwd=cwd, timeout=timeout),
            )
        except FileNotFoundError as e:
            logger.error("Executable not found: %s", args[0])
            raise create_tool_error(
                f"{phase} failed: executable not found: {args[0]}",
                args,
                original_error=e,
                phase=phase,
            ) from e
        except subprocess.TimeoutExpired as e:
            logger.error("Command timed out after %ss: %s", timeout, cmd_str)
            raise create_tool_error(
                f"{phase} failed: '{cmd_str}' timed out after {timeout} seconds",
                args,
                original_error=e,
                phase=phase,
            ) from e
        except (OSError, subprocess.SubprocessError) as e:
            logger.error("Failed to run %s: %s", cmd_str, e)
            raise create_tool_error(
                f"{phase} failed: could not run '{cmd_str}': {e}",
                args,
                original_error=e,
                phase=phase,
            ) from e


def create_tool_adapter(
    middleware: OutputMiddleware[str] | None = None,
) -> ToolRunnerProtocol:
    """Create a tool adapter instance.

    Args:
        middleware: Output middleware, logs output lines when None

    Returns:
        ToolRunnerProtocol: Tool runner
    """
    return ToolAdapter(middleware)
