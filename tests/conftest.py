"""Core test fixtures for the cordova-build project."""

import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest
from typer.testing import CliRunner

from cordova_build.config.build_config import BuildConfiguration
from cordova_build.protocols import (
    FileAdapterProtocol,
    OutputExporterProtocol,
    ToolRunnerProtocol,
)


SETTINGS_ENV_VARS = (
    "platform",
    "configuration",
    "target",
    "build_config",
    "android_app_type",
    "emit_aab",
    "run_prepare",
    "add_platform",
    "readd_platform",
    "tool_name",
    "cordova_version",
    "ios_platform_version",
    "workdir",
    "options",
    "deploy_dir",
    "bitrise_deploy_dir",
    "command_timeout",
    "output_exporter",
    "output_env_file",
    "log_level",
)


# ---- Base Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_file_adapter() -> Mock:
    """Create a mock file adapter for testing."""
    adapter = Mock(spec=FileAdapterProtocol)
    return adapter


@pytest.fixture
def mock_tool_runner() -> Mock:
    """Create a mock tool runner for testing."""
    runner = Mock(spec=ToolRunnerProtocol)
    runner.run.return_value = []
    runner.run_and_capture.return_value = "12.0.0"
    return runner


@pytest.fixture
def mock_exporter() -> Mock:
    """Create a mock output exporter for testing."""
    return Mock(spec=OutputExporterProtocol)


# ---- Test Isolation Fixtures ----


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment variables that would leak into BuildSettings."""
    for key in list(os.environ):
        if key.lower() in SETTINGS_ENV_VARS:
            monkeypatch.delenv(key, raising=False)


# ---- Factories ----


@pytest.fixture
def build_config_factory() -> Callable[..., BuildConfiguration]:
    """Factory for BuildConfiguration with sensible defaults."""

    def _factory(**overrides: object) -> BuildConfiguration:
        values: dict[str, object] = {
            "tool_name": "cordova",
            "platforms": ("android",),
        }
        values.update(overrides)
        return BuildConfiguration(**values)  # type: ignore[arg-type]

    return _factory


@pytest.fixture
def set_mtime() -> Callable[[Path, float], Path]:
    """Set both access and modification time of a path without following symlinks."""

    def _set(path: Path, mtime: float) -> Path:
        os.utime(path, (mtime, mtime), follow_symlinks=False)
        return path

    return _set


@pytest.fixture
def cordova_project(tmp_path: Path) -> Path:
    """Empty Cordova project root with a ``platforms`` directory."""
    project = tmp_path / "project"
    (project / "platforms").mkdir(parents=True)
    return project
