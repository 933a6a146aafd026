"""Tests for structured logging setup."""

from __future__ import annotations

import io
import json

import pytest
import structlog

from changelog_promoter.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_production_logs_are_json():
    stream = io.StringIO()
    setup_logging(environment="production", log_level="INFO", stream=stream)

    get_logger("tests").info("entry_extracted", adapter="release-it", version="1.0.1")

    record = json.loads(stream.getvalue().strip())
    assert record["event"] == "entry_extracted"
    assert record["version"] == "1.0.1"
    assert record["level"] == "info"
    assert "timestamp" in record


def test_level_filters_debug_events():
    stream = io.StringIO()
    setup_logging(environment="production", log_level="WARNING", stream=stream)

    logger = get_logger("tests")
    logger.debug("command_started", program="git")
    logger.warning("extraction_degraded", step="date")

    lines = stream.getvalue().strip().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["step"] == "date"


def test_env_vars(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    stream = io.StringIO()
    setup_logging(stream=stream)

    get_logger("tests").debug("command_started", program="git-chglog")
    assert json.loads(stream.getvalue())["program"] == "git-chglog"
