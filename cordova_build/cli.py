"""Command-line interface for cordova-build using Typer."""

import logging
import sys
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from cordova_build import __version__
from cordova_build.config.settings import load_settings
from cordova_build.core.errors import CordovaBuildError
from cordova_build.core.logging import get_struct_logger, setup_logging
from cordova_build.models.results import BuildResult
from cordova_build.services import create_build_service


logger = get_struct_logger(__name__)

console = Console()

app = typer.Typer(
    name="cordova-build",
    help=f"Build Cordova projects and export their packages v{__version__}",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator turning build errors into a logged message and exit code 1.

    Args:
        func: The function to decorate

    Returns:
        Decorated function with error handling
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except CordovaBuildError as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error(
                f"{e.phase}_failed",
                error=e.message,
                phase=e.phase,
                error_type=type(e).__name__,
                exc_info=exc_info,
                **{
                    k: v
                    for k, v in e.context.items()
                    if k not in ("error", "phase", "error_type")
                },
            )
            raise typer.Exit(1) from e
        except Exception as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            raise typer.Exit(1) from e

    return wrapper


def print_summary(result: BuildResult) -> None:
    """Print exported outputs as a table."""
    logger.info("build_completed", summary=result.get_summary())
    table = Table(
        title=f"Build outputs (cordova {result.cordova_version})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")

    for key, value in result.exported_values.items():
        table.add_row(key, value)

    console.print(table)
    if result.build_time_seconds is not None:
        console.print(f"Finished in {result.build_time_seconds:.1f}s")


@app.command(name="run")
@handle_errors
def run_build(
    platform: Annotated[
        str | None,
        typer.Option(
            "--platform", "-p", help="Comma separated platforms (ios,android)"
        ),
    ] = None,
    configuration: Annotated[
        str | None,
        typer.Option("--configuration", "-c", help="Build variant (debug, release)"),
    ] = None,
    target: Annotated[
        str | None, typer.Option("--target", "-t", help="device or emulator")
    ] = None,
    build_config: Annotated[
        Path | None, typer.Option("--build-config", help="Path to build.json")
    ] = None,
    android_app_type: Annotated[
        str | None, typer.Option("--android-app-type", help="apk or aab")
    ] = None,
    emit_aab: Annotated[
        bool | None,
        typer.Option("--emit-aab/--no-emit-aab", help="Collect Android App Bundles"),
    ] = None,
    run_prepare: Annotated[
        bool | None,
        typer.Option(
            "--prepare/--no-prepare", help="Ready platforms before compiling"
        ),
    ] = None,
    add_platform: Annotated[
        bool | None,
        typer.Option("--add-platform/--no-add-platform", help="Use 'platform add'"),
    ] = None,
    readd_platform: Annotated[
        bool | None,
        typer.Option(
            "--readd-platform/--no-readd-platform",
            help="Remove platforms before adding them again",
        ),
    ] = None,
    cordova_version: Annotated[
        str | None,
        typer.Option("--cordova-version", help="Cordova version to install first"),
    ] = None,
    ios_platform_version: Annotated[
        str | None,
        typer.Option("--ios-platform-version", help="cordova-ios version in use"),
    ] = None,
    workdir: Annotated[
        Path | None, typer.Option("--workdir", "-w", help="Cordova project root")
    ] = None,
    options: Annotated[
        str | None,
        typer.Option(
            "--options", help="Extra compile arguments, '--' starts platform options"
        ),
    ] = None,
    deploy_dir: Annotated[
        Path | None, typer.Option("--deploy-dir", "-o", help="Artifact destination")
    ] = None,
    command_timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Seconds before a cordova command is killed"),
    ] = None,
    output_exporter: Annotated[
        str | None,
        typer.Option("--exporter", help="Output exporter: envman, env_file or none"),
    ] = None,
    output_env_file: Annotated[
        Path | None, typer.Option("--env-file", help="File for the env_file exporter")
    ] = None,
    debug: Annotated[
        bool, typer.Option("--debug", "-v", help="Enable debug logging")
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Write JSON logs to file")
    ] = None,
    json_logs: Annotated[
        bool, typer.Option("--json-logs", help="Render console logs as JSON")
    ] = False,
) -> None:
    """Prepare, compile and export the packages of a Cordova project.

    Every option falls back to the environment variable of the same name
    (e.g. PLATFORM, CONFIGURATION, TARGET, BITRISE_DEPLOY_DIR).
    """
    log_level_name = "DEBUG" if debug else "INFO"
    setup_logging(json_logs=json_logs, log_level_name=log_level_name, log_file=log_file)

    settings = load_settings(
        platform=platform,
        configuration=configuration,
        target=target,
        build_config=build_config,
        android_app_type=android_app_type,
        emit_aab=emit_aab,
        run_prepare=run_prepare,
        add_platform=add_platform,
        readd_platform=readd_platform,
        cordova_version=cordova_version,
        ios_platform_version=ios_platform_version,
        workdir=workdir,
        options=options,
        deploy_dir=deploy_dir,
        command_timeout=command_timeout,
        output_exporter=output_exporter,
        output_env_file=output_env_file,
        log_level="DEBUG" if debug else None,
    )
    if settings.log_level != log_level_name:
        setup_logging(
            json_logs=json_logs, log_level_name=settings.log_level, log_file=log_file
        )
    logger.info("build_settings", **settings.summary())

    service = create_build_service()
    result = service.run(settings)
    print_summary(result)


@app.command(name="version")
def show_version() -> None:
    """Show version and exit."""
    console.print(f"cordova-build v{__version__}")


def main() -> int:
    """Main CLI entry point."""
    try:
        app()
        return 0
    except Exception as e:
        logger.error("unexpected_error", error=str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
