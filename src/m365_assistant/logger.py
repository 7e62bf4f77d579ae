"""
Logging setup

Provides one-time configuration of the root logger with console and file
output, and optional JSON formatting for structured log shipping.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from pythonjsonlogger import jsonlogger

from .config import LoggingConfig

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_DIR = "logs"

# Root logger is configured at most once per process
_logging_configured = False


def _configure_logging(
    log_level=DEFAULT_LOG_LEVEL,
    log_format=DEFAULT_LOG_FORMAT,
    json_format=DEFAULT_JSON_FORMAT,
    log_to_console=True,
    log_to_file=False,
    log_dir=DEFAULT_LOG_DIR,
    log_file_name="assistant.log",
    log_file_max_size=10 * 1024 * 1024,  # 10MB
    log_file_backup_count=5,
    use_json_formatter=False,
):
    """
    Configure the root logger

    Args:
        log_level: Logging level
        log_format: Plain-text format string
        json_format: JSON format string
        log_to_console: Whether to log to stdout
        log_to_file: Whether to log to a rotating file
        log_dir: Directory for the log file
        log_file_name: Log file name
        log_file_max_size: Max log file size in bytes before rotation
        log_file_backup_count: Number of rotated files to keep
        use_json_formatter: Whether to emit JSON records
    """
    global _logging_configured

    if _logging_configured:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_json_formatter:
        formatter = jsonlogger.JsonFormatter(json_format)
    else:
        formatter = logging.Formatter(log_format)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, log_file_name),
            maxBytes=log_file_max_size,
            backupCount=log_file_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _logging_configured = True


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """Configure logging from a LoggingConfig (defaults when None)"""
    config = config or LoggingConfig()
    log_level = getattr(logging, config.level.upper(), DEFAULT_LOG_LEVEL)
    _configure_logging(
        log_level=log_level,
        log_to_console=config.to_console,
        log_to_file=config.to_file,
        log_dir=config.dir,
        log_file_name=config.file,
        use_json_formatter=config.use_json,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
