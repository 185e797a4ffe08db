"""Tests for envcascade.logger."""

import io
import json
import logging

import pytest

from envcascade.logger import (
    DefaultLogger,
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
)


class TestLoggerInterface:
    def test_logger_is_abstract(self):
        with pytest.raises(TypeError):
            Logger()  # type: ignore


class TestDefaultLogger:
    def test_writes_level_name_and_message(self):
        output = io.StringIO()
        logger = DefaultLogger(name="boot", output=output, include_timestamp=False)
        logger.error("Failed to load", env_file="/srv/.env")

        line = output.getvalue()
        assert line.startswith("[ERROR] [boot]")
        assert "Failed to load" in line
        assert "(env_file=/srv/.env)" in line
        assert logger.get_session_id()[:8] in line

    def test_min_level_filters(self):
        output = io.StringIO()
        logger = DefaultLogger(output=output, min_level="WARNING")
        logger.debug("hidden")
        logger.info("hidden")
        logger.warning("shown")
        logger.critical("shown too")

        text = output.getvalue()
        assert "hidden" not in text
        assert "[WARNING]" in text
        assert "[CRITICAL]" in text

    def test_defaults_to_stderr(self, capsys: pytest.CaptureFixture):
        DefaultLogger(include_timestamp=False).error("to stderr")
        captured = capsys.readouterr()
        assert "to stderr" in captured.err
        assert captured.out == ""


class TestStructuredLogger:
    def test_text_format_appends_fields(self):
        stream = io.StringIO()
        logger = StructuredLogger(name="envcascade-test-text", stream=stream)
        logger.info("Structured config loaded", environment="prod")

        text = stream.getvalue()
        assert "[INFO]" in text
        assert "Structured config loaded" in text
        assert "environment=prod" in text

    def test_json_format(self):
        stream = io.StringIO()
        logger = StructuredLogger(name="envcascade-test-json", json_format=True, stream=stream)
        logger.warning("blocked", file_key="app_env")

        record = json.loads(stream.getvalue().strip())
        assert record["level"] == "WARNING"
        assert record["message"] == "blocked"
        assert record["file_key"] == "app_env"
        assert record["session_id"] == logger.get_session_id()

    def test_reserved_keys_are_prefixed(self):
        stream = io.StringIO()
        logger = StructuredLogger(name="envcascade-test-reserved", json_format=True, stream=stream)
        logger.error("oops", filename="x.py", lineno=3)

        record = json.loads(stream.getvalue().strip())
        assert record["_filename"] == "x.py"
        assert record["_lineno"] == 3

    def test_level_filtering(self):
        stream = io.StringIO()
        logger = StructuredLogger(name="envcascade-test-level", level=logging.WARNING, stream=stream)
        logger.info("quiet")
        assert stream.getvalue() == ""

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "out.log"
        logger = StructuredLogger(name="envcascade-test-file", log_file=str(log_file), stream=io.StringIO())
        logger.info("to file")
        for handler in logging.getLogger("envcascade-test-file").handlers:
            handler.flush()
        assert "to file" in log_file.read_text()


class TestFactories:
    def test_create_logger_reads_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ENVCASCADE_FACTORY_LOG_LEVEL", "DEBUG")
        create_logger("envcascade-factory")
        assert logging.getLogger("envcascade-factory").level == logging.DEBUG

    def test_get_logger_returns_logger(self):
        assert isinstance(get_logger(), Logger)
