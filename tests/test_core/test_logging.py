"""Tests for logging setup."""

import json
import logging

import pytest

from cordova_build.core.logging import get_struct_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_sets_level(restore_root_logger):
    setup_logging(log_level_name="DEBUG")

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1


def test_setup_logging_unknown_level_defaults_to_info(restore_root_logger):
    setup_logging(log_level_name="chatty")

    assert restore_root_logger.level == logging.INFO


def test_log_file_receives_json(restore_root_logger, tmp_path):
    """Test structlog and stdlib records both reach the JSON log file."""
    log_file = tmp_path / "logs" / "build.log"
    setup_logging(log_level_name="INFO", log_file=log_file)

    get_struct_logger("cordova_build.test").info("artifact_exported", key="APK")
    logging.getLogger("cordova_build.test").info("plain %s", "message")
    for handler in restore_root_logger.handlers:
        handler.flush()

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    assert records[0]["event"] == "artifact_exported"
    assert records[0]["key"] == "APK"
    assert records[1]["event"] == "plain message"
