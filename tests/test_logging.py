"""Structured logging configuration tests."""

import json
import logging

import pytest
import structlog

from users_api.config import Settings
from users_api.core.logging import configure_logging


@pytest.fixture()
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    config = structlog.get_config()
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.configure(**config)


def _output_lines(capsys):
    return [line for line in capsys.readouterr().out.splitlines() if line.strip()]


def test_production_lines_are_flat_json(capsys, restore_logging):
    configure_logging(Settings(ENVIRONMENT="production"))

    structlog.get_logger("users_api.tests.prod").info("User signed up", user_id=7)

    record = json.loads(_output_lines(capsys)[-1])
    assert record["event"] == "User signed up"
    assert record["user_id"] == 7
    assert record["level"] == "info"
    assert record["logger"] == "users_api.tests.prod"
    assert "timestamp" in record


def test_stdlib_records_share_the_json_renderer(capsys, restore_logging):
    configure_logging(Settings(ENVIRONMENT="production"))

    logging.getLogger("uvicorn.error").warning("Port %s busy", 8000)

    record = json.loads(_output_lines(capsys)[-1])
    assert record["event"] == "Port 8000 busy"
    assert record["level"] == "warning"


def test_development_line_is_rendered_once(capsys, restore_logging):
    configure_logging(Settings(ENVIRONMENT="development"))

    structlog.get_logger("users_api.tests.dev").info("User logged in", user_id=3)

    line = _output_lines(capsys)[-1]
    assert "User logged in" in line
    assert line.count("user_id") == 1
    assert not line.lstrip().startswith("{")
