"""
Tests for Configuration & Logging Module
========================================
Logging configuration, JSON formatting, and error types.
"""

import json
import logging

import pytest

from config_logging import (
    JsonFormatter,
    LogConfig,
    ProcessingError,
    StructuredLogger,
    TextCompareError,
    ValidationError,
    get_config,
    get_logger,
    handle_errors,
    reset_config
)


@pytest.fixture(autouse=True)
def fresh_config():
    """Reset the cached logging configuration around each test."""
    reset_config()
    yield
    reset_config()


class TestLogConfig:
    """Tests for LogConfig."""

    def test_from_env(self, monkeypatch):
        """Test that TC_LOG_* variables are applied."""
        monkeypatch.setenv('TC_LOG_LEVEL', 'debug')
        monkeypatch.setenv('TC_LOG_FORMAT', 'json')
        monkeypatch.delenv('TC_LOG_TO_FILE', raising=False)
        config = LogConfig.from_env()
        assert config.log_level == 'DEBUG'
        assert config.log_format == 'json'
        assert config.log_to_file is False

    def test_invalid_values_fall_back(self):
        """Test that unknown level and format names fall back to defaults."""
        config = LogConfig(log_level='loud', log_format='xml')
        assert config.log_level == 'INFO'
        assert config.log_format == 'text'

    def test_get_config_cached(self):
        """Test that get_config returns the same instance until reset."""
        assert get_config() is get_config()

    def test_file_logging(self, tmp_path):
        """Test that file logging writes into the configured directory."""
        config = LogConfig(log_to_file=True, log_to_console=False, log_dir=tmp_path / 'logs')
        logger = StructuredLogger('text_compare.filetest', config)
        logger.info("hello file")
        for handler in logger.logger.handlers:
            handler.flush()
        assert "hello file" in (tmp_path / 'logs' / 'text_compare.filetest.log').read_text()
        for handler in list(logger.logger.handlers):
            handler.close()
            logger.logger.removeHandler(handler)


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_get_logger(self):
        """Test the logger factory."""
        logger = get_logger('text_compare.test')
        assert isinstance(logger, StructuredLogger)
        assert logger.logger.name == 'text_compare.test'

    def test_correlation_id(self):
        """Test that a new correlation ID is kept for the thread."""
        cid = StructuredLogger.new_correlation_id()
        assert StructuredLogger.get_correlation_id() == cid

    def test_json_message(self, caplog):
        """Test that JSON format renders the message as a JSON record."""
        logger = StructuredLogger('text_compare.jsontest', LogConfig(log_format='json'))
        with caplog.at_level(logging.INFO, logger='text_compare.jsontest'):
            logger.info("rows ready", rows=3)
        record = json.loads(caplog.records[-1].getMessage())
        assert record['message'] == "rows ready"
        assert record['rows'] == 3
        assert record['level'] == 'INFO'

    def test_log_operation_reraises(self, caplog):
        """Test that failures inside log_operation are logged and re-raised."""
        logger = StructuredLogger('text_compare.optest', LogConfig())
        with caplog.at_level(logging.ERROR, logger='text_compare.optest'):
            with pytest.raises(RuntimeError):
                with logger.log_operation('work'):
                    raise RuntimeError("boom")
        assert "work failed: boom" in caplog.text


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_format_with_extra(self):
        """Test that extra fields are included in the JSON output."""
        record = logging.LogRecord('x', logging.WARNING, __file__, 1, "msg %s", ('a',), None)
        record.stage = 'inline'
        data = json.loads(JsonFormatter().format(record))
        assert data['message'] == 'msg a'
        assert data['level'] == 'WARNING'
        assert data['stage'] == 'inline'


class TestErrors:
    """Tests for the error types and handle_errors()."""

    def test_error_to_dict(self):
        """Test error serialization."""
        error = ValidationError("bad range", field='range', start=3)
        assert error.to_dict() == {
            'success': False,
            'error': {
                'code': 'VALIDATION_ERROR',
                'message': 'bad range',
                'details': {'field': 'range', 'start': 3}
            }
        }
        assert isinstance(error, TextCompareError)

    def test_value_error_converted(self):
        """Test that ValueError becomes ValidationError."""
        @handle_errors()
        def fail():
            raise ValueError("nope")

        with pytest.raises(ValidationError, match="nope"):
            fail()

    def test_unexpected_error_converted(self):
        """Test that other exceptions become ProcessingError."""
        @handle_errors()
        def fail():
            raise KeyError("k")

        with pytest.raises(ProcessingError) as info:
            fail()
        assert info.value.details['stage'] == 'fail'

    def test_own_errors_pass_through(self):
        """Test that package errors are re-raised unchanged."""
        @handle_errors()
        def fail():
            raise ValidationError("original")

        with pytest.raises(ValidationError, match="original"):
            fail()
