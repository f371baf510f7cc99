"""Tests for package logger setup."""

import logging

import pytest

from avoidscape.utils.logging_utils import resolve_level, setup_logger


@pytest.fixture
def logger_name():
    """Throwaway logger name, cleaned up after the test."""
    name = "avoidscape_test_logger"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestResolveLevel:
    """Tests for resolve_level."""

    def test_numeric_passthrough(self):
        """Numeric levels are returned as given."""
        assert resolve_level(logging.WARNING) == logging.WARNING

    def test_names_any_case(self):
        """Level names are matched case-insensitively."""
        assert resolve_level("debug") == logging.DEBUG
        assert resolve_level("INFO") == logging.INFO

    def test_unknown_name(self):
        """Unknown level names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown logging level"):
            resolve_level("chatty")


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_console_handler(self, logger_name):
        """A console handler is attached at the requested level."""
        logger = setup_logger(logger_name, level="debug")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.DEBUG
        assert not logger.propagate

    def test_repeat_calls_replace_handlers(self, logger_name):
        """Calling twice does not duplicate output."""
        setup_logger(logger_name)
        logger = setup_logger(logger_name)
        assert len(logger.handlers) == 1

    def test_file_only(self, logger_name, tmp_path):
        """File output works without a console handler."""
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logger(logger_name, log_file=log_file, console=False)
        assert len(logger.handlers) == 1
        logger.info("obstacle 2 marked destroyed")
        logger.handlers[0].flush()
        assert "obstacle 2 marked destroyed" in log_file.read_text()

    def test_custom_format(self, logger_name, tmp_path):
        """A custom format string is applied."""
        log_file = tmp_path / "run.log"
        logger = setup_logger(
            logger_name, log_file=log_file, console=False, format_string="%(levelname)s|%(message)s"
        )
        logger.warning("clamped")
        logger.handlers[0].flush()
        assert log_file.read_text().strip() == "WARNING|clamped"
