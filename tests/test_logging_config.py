"""
Unit tests for logging configuration
"""

import io
import json
import logging
import sys

from syslog_common.logging_config import log_audit_event, setup_logging


class TestLoggingSetup:
    """Test logging configuration"""

    def test_setup_logging_creates_logger(self):
        """Test that setup_logging creates a logger"""
        logger = setup_logging("test_service")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "test_service"

    def test_logger_default_level(self):
        """Test default log level is INFO"""
        logger = setup_logging("test_service")

        assert logger.level == logging.INFO

    def test_logger_level_from_env(self, monkeypatch):
        """Test LOG_LEVEL env is honoured"""
        monkeypatch.setenv("LOG_LEVEL", "warning")
        logger = setup_logging("test_service")

        assert logger.level == logging.WARNING

    def test_logger_custom_level(self):
        """Test custom log level"""
        logger = setup_logging("test_service", log_level="DEBUG")

        assert logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        logger = setup_logging("test_service", log_level="chatty")

        assert logger.level == logging.INFO

    def test_default_stream_is_stderr(self):
        """Log output must not mix with converted records on stdout"""
        logger = setup_logging("test_service")

        assert logger.handlers[0].stream is sys.stderr

    def test_json_output(self):
        """Test records are rendered as JSON with renamed fields"""
        stream = io.StringIO()
        logger = setup_logging("test_service", stream=stream)
        logger.warning("Syslog line rejected", extra={"line_no": 3})

        record = json.loads(stream.getvalue().splitlines()[0])
        assert record["message"] == "Syslog line rejected"
        assert record["level"] == "WARNING"
        assert record["line_no"] == 3
        assert "timestamp" in record
        assert "file" in record

    def test_log_file(self, tmp_path, monkeypatch):
        """Test LOG_FILE adds a file handler"""
        log_file = tmp_path / "logs" / "bridge.log"
        monkeypatch.setenv("LOG_FILE", str(log_file))
        logger = setup_logging("test_service", stream=io.StringIO())
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert "hello" in log_file.read_text()
        for handler in logger.handlers:
            handler.close()

    def test_audit_event_logging(self, caplog):
        """Test audit event logging"""
        logger = setup_logging("test_service")
        # setup_logging sets propagate=False; re-enable for caplog
        logger.propagate = True

        with caplog.at_level(logging.INFO):
            log_audit_event(logger, "conversion_completed", converted=2, failed=0)

        assert any("AUDIT_EVENT" in record.message for record in caplog.records)
        record = caplog.records[-1]
        assert record.audit is True
        assert record.event_type == "conversion_completed"
        assert record.converted == 2


class TestLoggerIsolation:
    """Test that loggers don't interfere with each other"""

    def test_multiple_loggers_independent(self):
        logger1 = setup_logging("service1", log_level="DEBUG")
        logger2 = setup_logging("service2", log_level="WARNING")

        assert logger1.level == logging.DEBUG
        assert logger2.level == logging.WARNING

    def test_setup_is_repeatable(self):
        setup_logging("service1")
        logger = setup_logging("service1")

        assert len(logger.handlers) == 1
