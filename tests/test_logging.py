"""Tests for setup_logging."""

import io
import json
import logging
import os
from unittest.mock import patch

import pytest
import structlog

from authorship.core.logging import setup_logging


class TestSetupLogging:
    def test_explicit_level(self):
        setup_logging("debug", "json")
        assert logging.getLogger("authorship").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_level_from_env(self):
        with patch.dict(os.environ, {"AUTHORSHIP_LOG_LEVEL": "WARNING"}):
            setup_logging()
        assert logging.getLogger("authorship").level == logging.WARNING

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="log level"):
            setup_logging("LOUD")

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="log format"):
            setup_logging("INFO", "xml")

    def test_json_events(self):
        buf = io.StringIO()
        setup_logging("INFO", "json", stream=buf)
        structlog.get_logger("authorship.engine").info("blame.timeout", path="a.go")

        event = json.loads(buf.getvalue().splitlines()[-1])
        assert event["event"] == "blame.timeout"
        assert event["path"] == "a.go"
        assert event["level"] == "info"
        assert event["logger"] == "authorship.engine"

    def test_stdlib_records_share_renderer(self):
        buf = io.StringIO()
        setup_logging("INFO", "json", stream=buf)
        logging.getLogger("authorship.engines.blame.provider").warning("git missing")

        event = json.loads(buf.getvalue().splitlines()[-1])
        assert event["event"] == "git missing"
        assert event["level"] == "warning"
