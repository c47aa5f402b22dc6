"""
Logging setup for the tracker.

Usage:
    from unity_tracker.logging_config import setup_logging
    setup_logging(settings)

Modules log through ``logging.getLogger(__name__)``; this only attaches the
handler and formatter to the package logger.
"""

from datetime import datetime, timezone
import json
import logging
import sys

from .config import Settings


PACKAGE_LOGGER = "unity_tracker"


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record):
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


class ConsoleFormatter(logging.Formatter):
    """Human-readable, colored by level."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.now().strftime("%H:%M:%S")
        line = f"{timestamp} {color}{record.levelname:8}{self.RESET} [{record.name}] {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(settings: Settings) -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Only configure once
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if settings.log_format == "json":
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(ConsoleFormatter())
        logger.addHandler(handler)
        logger.propagate = False

    return logger
