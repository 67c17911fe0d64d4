from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes (INFO|WARN|ERROR|SUMMARY).

Standard logging only. One application logger ("offer_funnel") writes to
stdout; module loggers obtained with logging.getLogger(__name__) inside the
package propagate into it.
"""

__all__ = [
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
]

LOGGER_NAME = "offer_funnel"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter producing ``LABEL message`` lines."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure the application logger (idempotent).

    Returns:
        Configured logger instance for the application
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # 既存ハンドラを除去して重複出力を防ぐ
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    # Prevent propagation to root logger to avoid duplicate output
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the configured application logger, configuring it on first use."""
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None
