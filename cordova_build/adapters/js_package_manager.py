"""JavaScript package manager helpers for pinning the Cordova version."""

import logging
from enum import Enum
from pathlib import Path

from cordova_build.core.errors import ToolInvocationError
from cordova_build.protocols.tool_runner_protocol import ToolRunnerProtocol


logger = logging.getLogger(__name__)


class PackageManager(str, Enum):
    NPM = "npm"
    YARN = "yarn"


def detect_package_manager(workdir: Path) -> PackageManager:
    """Yarn when the project has a yarn.lock, npm otherwise."""
    if (workdir / "yarn.lock").is_file():
        return PackageManager.YARN
    return PackageManager.NPM


def remove_local_args(manager: PackageManager, package: str) -> list[str]:
    if manager is PackageManager.YARN:
        return ["yarn", "remove", package]
    return ["npm", "remove", package]


def add_global_args(manager: PackageManager, package: str) -> list[str]:
    if manager is PackageManager.YARN:
        return ["yarn", "global", "add", package]
    return ["npm", "install", "-g", package]


class JsPackageManager:
    """Installs a pinned global tool version through npm or yarn."""

    def __init__(self, tool_runner: ToolRunnerProtocol, workdir: Path) -> None:
        self.tool_runner = tool_runner
        self.workdir = workdir
        self.manager = detect_package_manager(workdir)

    def install_global(self, package: str, version: str) -> None:
        """Replace any project-local ``package`` with a global ``package@version``.

        A failed local removal is tolerated for yarn, which errors when the
        package is not a dependency.

        Raises:
            ToolInvocationError: If removal (npm) or installation fails
        """
        logger.info("Js package manager used: %s", self.manager.value)

        try:
            self.tool_runner.run(
                remove_local_args(self.manager, package), phase="install", cwd=self.workdir
            )
        except ToolInvocationError:
            if self.manager is not PackageManager.YARN:
                raise
            logger.debug("yarn could not remove local %s, continuing", package)

        self.tool_runner.run(
            add_global_args(self.manager, f"{package}@{version}"),
            phase="install",
            cwd=self.workdir,
        )
