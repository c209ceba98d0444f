"""Tests for the cordova-build command line interface."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import typer

from cordova_build.cli import app, handle_errors
from cordova_build.core.errors import (
    ConfigError,
    MissingArtifactError,
    ToolInvocationError,
)
from cordova_build.core.logging import configure_structlog
from cordova_build.models.results import BuildResult


@pytest.fixture(autouse=True)
def mock_setup_logging():
    """Configure structlog without replacing the root handlers."""
    with patch(
        "cordova_build.cli.setup_logging", side_effect=lambda **_: configure_structlog()
    ) as mock:
        yield mock


@pytest.fixture
def mock_build_service():
    service = Mock()
    service.run.return_value = BuildResult(
        cordova_version="12.0.0",
        platforms=["android"],
        artifacts={"apk": Path("/deploy/app.apk")},
        exported_values={"BITRISE_APK_PATH": "/deploy/app.apk"},
        build_time_seconds=12.5,
    )
    with patch("cordova_build.cli.create_build_service", return_value=service):
        yield service


def test_version_command(cli_runner):
    result = cli_runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "cordova-build v" in result.output


def test_run_success(cli_runner, mock_build_service, tmp_path):
    """Test a successful run prints the exported outputs."""
    result = cli_runner.invoke(
        app,
        [
            "run",
            "--platform",
            "android",
            "--configuration",
            "release",
            "--target",
            "device",
            "--workdir",
            str(tmp_path),
            "--options",
            "--release -- --keystore=x",
            "--no-emit-aab",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "BITRISE_APK_PATH" in result.output
    settings = mock_build_service.run.call_args[0][0]
    assert settings.platform == ["android"]
    assert settings.options == ["--release", "--", "--keystore=x"]
    assert settings.emit_aab is False
    assert settings.workdir == tmp_path.resolve()


def test_run_reads_environment(cli_runner, mock_build_service, tmp_path):
    """Test options fall back to environment variables."""
    result = cli_runner.invoke(
        app,
        ["run", "--workdir", str(tmp_path)],
        env={"CONFIGURATION": "debug", "TARGET": "emulator", "PLATFORM": "ios"},
    )

    assert result.exit_code == 0, result.output
    settings = mock_build_service.run.call_args[0][0]
    assert settings.configuration == "debug"
    assert settings.target == "emulator"
    assert settings.platform == ["ios"]


def test_flags_override_environment(cli_runner, mock_build_service, tmp_path):
    result = cli_runner.invoke(
        app,
        ["run", "--workdir", str(tmp_path), "--target", "device", "-c", "release"],
        env={"TARGET": "emulator"},
    )

    assert result.exit_code == 0, result.output
    assert mock_build_service.run.call_args[0][0].target == "device"


def test_debug_flag_sets_log_level(
    cli_runner, mock_build_service, mock_setup_logging, tmp_path
):
    result = cli_runner.invoke(
        app,
        ["run", "-w", str(tmp_path), "-c", "debug", "-t", "device", "--debug"],
    )

    assert result.exit_code == 0, result.output
    assert mock_setup_logging.call_args.kwargs["log_level_name"] == "DEBUG"
    assert mock_build_service.run.call_args[0][0].log_level == "DEBUG"


def test_invalid_configuration_exits_1(cli_runner, mock_build_service, tmp_path):
    """Test configuration errors exit before any build step runs."""
    result = cli_runner.invoke(
        app, ["run", "-w", str(tmp_path), "-c", "debug", "-t", "tablet"]
    )

    assert result.exit_code == 1
    mock_build_service.run.assert_not_called()


@pytest.mark.parametrize(
    "error",
    [
        MissingArtifactError("no android package produced"),
        ToolInvocationError(
            "compile failed", command=["cordova", "compile"], exit_code=1
        ),
    ],
)
def test_build_errors_exit_1(cli_runner, mock_build_service, tmp_path, error):
    mock_build_service.run.side_effect = error

    result = cli_runner.invoke(
        app, ["run", "-w", str(tmp_path), "-c", "debug", "-t", "device"]
    )

    assert result.exit_code == 1


def test_handle_errors_converts_to_exit():
    """Test the decorator turns build errors into typer.Exit(1)."""
    configure_structlog()

    @handle_errors
    def failing():
        raise ConfigError("bad value", context={"errors": ["target: bad"]})

    with pytest.raises(typer.Exit) as exc:
        failing()

    assert exc.value.exit_code == 1


def test_handle_errors_unexpected_exception():
    configure_structlog()

    @handle_errors
    def failing():
        raise RuntimeError("kaboom")

    with pytest.raises(typer.Exit):
        failing()


def test_handle_errors_passes_result():
    @handle_errors
    def ok():
        return 42

    assert ok() == 42


def test_result_summary():
    result = BuildResult(
        cordova_version="12.0.0",
        platforms=["ios", "android"],
        exported_values={"BITRISE_IPA_PATH": "/deploy/a.ipa"},
        build_time_seconds=3.0,
    )

    summary = result.get_summary()

    assert summary["success"] is True
    assert summary["cordova_version"] == "12.0.0"
    assert summary["platforms"] == "ios,android"
    assert summary["exported"] == {"BITRISE_IPA_PATH": "/deploy/a.ipa"}
    assert summary["timestamp"] == result.timestamp.isoformat()


def test_run_logs_build_summary(cli_runner, mock_build_service, tmp_path):
    """Test the completed build is logged with its summary fields."""
    with patch("cordova_build.cli.logger") as mock_logger:
        result = cli_runner.invoke(
            app, ["run", "-w", str(tmp_path), "-c", "debug", "-t", "device"]
        )

    assert result.exit_code == 0, result.output
    mock_logger.info.assert_any_call(
        "build_completed",
        summary=mock_build_service.run.return_value.get_summary(),
    )
