"""Tests for the error hierarchy and error helpers."""

import pytest

from cordova_build.core.errors import (
    ConfigError,
    CordovaBuildError,
    ExportError,
    FileSystemError,
    MissingArtifactError,
    ToolInvocationError,
    UnresolvedSymlinkError,
)
from cordova_build.utils.error_utils import create_file_error, create_tool_error


@pytest.mark.parametrize(
    ("error_cls", "phase"),
    [
        (CordovaBuildError, "build"),
        (ConfigError, "configuration"),
        (ToolInvocationError, "compile"),
        (FileSystemError, "export"),
        (UnresolvedSymlinkError, "export"),
        (MissingArtifactError, "classification"),
        (ExportError, "export"),
    ],
)
def test_default_phases(error_cls, phase):
    error = error_cls("message")

    assert isinstance(error, CordovaBuildError)
    assert error.phase == phase
    assert str(error) == "message"


def test_explicit_phase_wins():
    assert FileSystemError("walk failed", phase="discovery").phase == "discovery"


def test_create_file_error_message_and_context():
    """Test the message format and context of file errors."""
    error = create_file_error(
        "/deploy/app.apk",
        "copy_file",
        PermissionError("Permission denied"),
        {"destination": "/deploy"},
    )

    assert str(error) == (
        "File operation 'copy_file' failed on '/deploy/app.apk': Permission denied"
    )
    assert error.operation == "copy_file"
    assert error.context["path"] == "/deploy/app.apk"
    assert error.context["error_type"] == "PermissionError"
    assert error.context["destination"] == "/deploy"


def test_create_tool_error_exit_code():
    error = create_tool_error(
        "compile failed", ["cordova", "compile"], exit_code=2, output=["x"]
    )

    assert error.transport_failure is False
    assert error.exit_code == 2
    assert error.output == ["x"]
    assert error.context["command"] == "cordova compile"
    assert error.context["exit_code"] == 2


def test_create_tool_error_transport_failure():
    """Test errors without an exit code are transport failures."""
    error = create_tool_error(
        "not found",
        ["cordova"],
        original_error=FileNotFoundError("cordova"),
        phase="prepare",
    )

    assert error.transport_failure is True
    assert error.phase == "prepare"
    assert error.context["error_type"] == "FileNotFoundError"
