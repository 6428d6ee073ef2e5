"""Tests for logging helpers."""

import io
import logging

import pytest

from license_detector.log import PACKAGE_LOGGER_NAME, configure_logging, get_logger


@pytest.fixture
def package_logger():
    """Restore the package logger after each test."""
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestGetLogger:
    """Tests for get_logger function."""

    def test_default_is_package_logger(self) -> None:
        """Test that no name returns the package logger."""
        assert get_logger().name == PACKAGE_LOGGER_NAME

    def test_named_logger(self) -> None:
        """Test that module loggers are children of the package logger."""
        logger = get_logger("license_detector.detector")
        assert logger.parent is logging.getLogger(PACKAGE_LOGGER_NAME)

    def test_null_handler_installed(self) -> None:
        """Test that importing the package installs a NullHandler."""
        handlers = logging.getLogger(PACKAGE_LOGGER_NAME).handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_writes_to_stream(self, package_logger: logging.Logger) -> None:
        """Test that records reach the given stream."""
        stream = io.StringIO()
        configure_logging(level="debug", stream=stream, fmt="%(levelname)s %(message)s")
        get_logger("license_detector.test").debug("hello %s", "world")
        assert stream.getvalue() == "DEBUG hello world\n"
        assert package_logger.level == logging.DEBUG

    def test_does_not_stack_handlers(self, package_logger: logging.Logger) -> None:
        """Test that configuring twice replaces the handler."""
        before = len(package_logger.handlers)
        configure_logging(stream=io.StringIO())
        configure_logging(stream=io.StringIO())
        assert len(package_logger.handlers) == before + 1

    def test_unknown_level_name(self, package_logger: logging.Logger) -> None:
        """Test that an unknown level name falls back to INFO."""
        configure_logging(level="chatty", stream=io.StringIO())
        assert package_logger.level == logging.INFO
