"""Logging configuration for Trip Budget.

The CLI renders its output (dashboard, lists, confirmations) through the
``tripbudget`` logger, so the console handler prints INFO records as plain
text and only tags warnings and errors. Everything, including DEBUG records
of snapshot writes, also goes to a dated log file.
"""

import logging
from datetime import date
from pathlib import Path
from config import Config

LOGGER_NAME = "tripbudget"


class ConsoleFormatter(logging.Formatter):
    """Plain messages for INFO and below, "LEVEL - message" above."""

    def __init__(self):
        super().__init__("%(levelname)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno <= logging.INFO:
            return record.getMessage()
        return super().format(record)


def get_log_file_path(config: Config, day: date = None) -> Path:
    """Path of the log file for a given day (today by default)."""
    day = day or date.today()
    return config.log_dir / f"tripbudget-{day.isoformat()}.log"


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.

    Returns:
        Configured logger instance.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)
    level = logging.getLevelName(config.log_level.upper())

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Clear any existing handlers (in case this is called multiple times)
    logger.handlers.clear()

    # The file keeps the full history at the configured level
    file_handler = logging.FileHandler(get_log_file_path(config), encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    # The console is the CLI's output and never shows DEBUG noise
    console_handler = logging.StreamHandler()
    console_handler.setLevel(max(level, logging.INFO))
    console_handler.setFormatter(ConsoleFormatter())

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The tripbudget logger instance.
    """
    return logging.getLogger(LOGGER_NAME)
