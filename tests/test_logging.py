"""Tests for mboxscan.utils.logging_utils."""

import json
import logging
import sys

import structlog

from mboxscan.utils.logging_utils import setup_logging


class TestSetupLogging:
    def test_json_mode(self):
        setup_logging(json=True, level="INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_console_mode(self):
        setup_logging(json=False, level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG

    def test_default_level_is_warning(self):
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_level_case_insensitive(self):
        setup_logging(level="error")
        root = logging.getLogger()
        assert root.level == logging.ERROR

    def test_replaces_existing_handlers(self):
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        root.addHandler(logging.StreamHandler())
        assert len(root.handlers) >= 2
        setup_logging()
        assert len(root.handlers) == 1

    def test_logs_to_stderr(self):
        setup_logging()
        handler = logging.getLogger().handlers[0]
        assert handler.stream is sys.stderr

    def test_json_output(self, capsys):
        setup_logging(json=True, level="DEBUG")
        structlog.get_logger("test_json_output").warning("mbox_scan_failed", position=42)

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "mbox_scan_failed"
        assert record["position"] == 42
        assert record["level"] == "warning"
