"""Build service running one Cordova build from settings to exported outputs."""

import logging
import os
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from cordova_build.adapters.file_adapter import create_file_adapter
from cordova_build.adapters.js_package_manager import JsPackageManager
from cordova_build.adapters.output_exporter import create_output_exporter
from cordova_build.adapters.tool_adapter import create_tool_adapter
from cordova_build.artifacts.classifier import OutputClassifier, create_output_classifier
from cordova_build.config.build_config import BuildConfiguration, PrepareMode
from cordova_build.config.settings import BuildSettings
from cordova_build.cordova.command_builder import CommandBuilder, create_command_builder
from cordova_build.models.results import BuildResult
from cordova_build.protocols import (
    FileAdapterProtocol,
    OutputExporterProtocol,
    ToolRunnerProtocol,
)


logger = logging.getLogger(__name__)


@contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """Change into ``path`` for the duration of the block."""
    previous = Path.cwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(previous)


def parse_tool_version(output: str) -> str:
    """Version reported by ``cordova -v``: the last line of its output.

    Cordova may print update notices before the version itself.
    """
    lines = output.strip().splitlines()
    return lines[-1].strip() if lines else ""


class BuildService:
    """Runs prepare, compile and output collection for a Cordova project.

    Attributes:
        tool_runner: Runner for cordova, npm and yarn commands
        file_adapter: Adapter for file system operations
        exporter: Exporter receiving output paths, chosen from settings when None
        classifier: Output classifier, built from settings when None
    """

    def __init__(
        self,
        tool_runner: ToolRunnerProtocol,
        file_adapter: FileAdapterProtocol,
        exporter: OutputExporterProtocol | None = None,
        classifier: OutputClassifier | None = None,
    ) -> None:
        self.tool_runner = tool_runner
        self.file_adapter = file_adapter
        self.exporter = exporter
        self.classifier = classifier
        logger.debug(
            "BuildService initialized with tool runner: %s, file adapter: %s",
            type(self.tool_runner).__name__,
            type(self.file_adapter).__name__,
        )

    def run(self, settings: BuildSettings) -> BuildResult:
        """Run a complete build.

        Args:
            settings: Validated step settings

        Returns:
            BuildResult: Exported artifact paths and timing

        Raises:
            ToolInvocationError: If a cordova or package manager command fails
            FileSystemError: If outputs cannot be traversed or copied
            MissingArtifactError: If a requested platform produced no package
            ExportError: If an output value cannot be exported
        """
        started = time.monotonic()
        result = BuildResult(platforms=list(settings.platform))

        with working_directory(settings.workdir) as workdir:
            if settings.cordova_version:
                self.install_cordova(settings.cordova_version, workdir, settings.tool_name)

            config = BuildConfiguration.from_settings(settings)
            builder = create_command_builder(config)

            result.cordova_version = self.query_version(builder)
            logger.info("Using cordova version: %s", result.cordova_version)

            self.prepare(builder, settings.prepare_mode, workdir, settings.command_timeout)

            compile_started_at = self.compile(builder, workdir, settings.command_timeout)
            result.compile_started_at = compile_started_at

            classifier = self.classifier or create_output_classifier(
                file_adapter=self.file_adapter,
                exporter=self.exporter or self._create_exporter(settings),
                emit_aab=settings.emit_aab,
            )
            outputs = classifier.classify(
                workdir=workdir,
                deploy_dir=settings.deploy_dir,
                cutoff=compile_started_at,
                platforms=settings.platform,
                target=settings.target,
                configuration=settings.configuration,
                ios_platform_version=settings.ios_platform_version,
            )

        result.artifacts = dict(outputs.export.paths)
        result.archives = dict(outputs.export.archives)
        result.exported_values = dict(outputs.export.exported_values)
        result.build_time_seconds = time.monotonic() - started
        result.add_message(
            f"Exported {len(result.artifacts)} artifact(s) to {settings.deploy_dir}"
        )
        return result

    def install_cordova(self, version: str, workdir: Path, package: str = "cordova") -> None:
        """Install ``package@version`` globally with the project's package manager."""
        logger.info("Updating cordova version to: %s", version)
        JsPackageManager(self.tool_runner, workdir).install_global(package, version)

    def query_version(self, builder: CommandBuilder) -> str:
        output = self.tool_runner.run_and_capture(builder.version_args(), phase="prepare")
        return parse_tool_version(output)

    def prepare(
        self,
        builder: CommandBuilder,
        mode: PrepareMode,
        workdir: Path,
        timeout: float | None = None,
    ) -> None:
        """Ready the platforms according to ``mode``."""
        if mode is PrepareMode.SKIP:
            logger.info("Skipping platform preparation")
            return

        logger.info("Preparing project (%s)", mode.value)
        if mode is PrepareMode.PREPARE:
            plans = [builder.prepare_args()]
        elif mode is PrepareMode.READD_PLATFORM:
            plans = [builder.platform_args("rm"), builder.platform_args("add")]
        else:
            plans = [builder.platform_args("add")]

        for args in plans:
            self.tool_runner.run(args, phase="prepare", cwd=workdir, timeout=timeout)

    def compile(
        self, builder: CommandBuilder, workdir: Path, timeout: float | None = None
    ) -> float:
        """Run ``cordova compile`` and return the timestamp taken just before it."""
        logger.info("Building project")
        compile_started_at = time.time()
        self.tool_runner.run(
            builder.compile_args(), phase="compile", cwd=workdir, timeout=timeout
        )
        return compile_started_at

    def _create_exporter(self, settings: BuildSettings) -> OutputExporterProtocol:
        return create_output_exporter(
            settings.output_exporter,
            tool_runner=self.tool_runner,
            env_file=settings.output_env_file,
        )


def create_build_service(
    tool_runner: ToolRunnerProtocol | None = None,
    file_adapter: FileAdapterProtocol | None = None,
    exporter: OutputExporterProtocol | None = None,
    classifier: OutputClassifier | None = None,
) -> BuildService:
    """Create a BuildService instance with optional dependency injection.

    Args:
        tool_runner: Optional tool runner (creates default if None)
        file_adapter: Optional file adapter (creates default if None)
        exporter: Optional output exporter (chosen from settings if None)
        classifier: Optional output classifier (created per run if None)

    Returns:
        Configured BuildService instance
    """
    if tool_runner is None:
        tool_runner = create_tool_adapter()

    if file_adapter is None:
        file_adapter = create_file_adapter()

    return BuildService(tool_runner, file_adapter, exporter, classifier)
