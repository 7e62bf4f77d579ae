"""
Logging setup unit tests
"""
import logging
from logging.handlers import RotatingFileHandler

import pytest
from pythonjsonlogger import jsonlogger

import m365_assistant.logger as logger_module
from m365_assistant.config import LoggingConfig
from m365_assistant.logger import (
    DEFAULT_LOG_LEVEL,
    _configure_logging,
    get_logger,
    setup_logging,
)


class TestLogger:
    """Logging setup unit tests"""

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        """Reset the configured flag and root handlers around each test"""
        logger_module._logging_configured = False
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
        root_logger.setLevel(logging.WARNING)

        yield

        logger_module._logging_configured = False
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

    def test_get_logger_returns_named_logger(self):
        logger = get_logger("m365_assistant.test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "m365_assistant.test"
        assert get_logger("m365_assistant.test") is logger

    def test_configure_logging_with_defaults(self):
        _configure_logging()

        root_logger = logging.getLogger()
        assert logger_module._logging_configured is True
        assert root_logger.level == DEFAULT_LOG_LEVEL
        assert len(root_logger.handlers) == 1

    def test_configure_logging_runs_once(self):
        _configure_logging(log_level=logging.WARNING)
        _configure_logging(log_level=logging.DEBUG)
        assert logging.getLogger().level == logging.WARNING

    def test_json_formatter(self):
        _configure_logging(use_json_formatter=True)
        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, jsonlogger.JsonFormatter)

    def test_file_logging(self, tmp_path):
        log_dir = tmp_path / "logs"
        _configure_logging(log_to_console=False, log_to_file=True, log_dir=str(log_dir))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RotatingFileHandler)
        assert log_dir.is_dir()

        get_logger("m365_assistant.test").info("written to file")
        handlers[0].close()
        assert "written to file" in (log_dir / "assistant.log").read_text(encoding="utf-8")

    def test_setup_logging_from_config(self):
        setup_logging(LoggingConfig(level="debug", use_json=True))

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert isinstance(root_logger.handlers[0].formatter, jsonlogger.JsonFormatter)

    def test_setup_logging_unknown_level_falls_back(self):
        setup_logging(LoggingConfig(level="chatty"))
        assert logging.getLogger().level == DEFAULT_LOG_LEVEL
