"""
Centralized Logging for Beatcut

This module provides a configured logger with:
- Console output with emoji support for user-facing messages
- File logging for debugging
- Configurable log levels via LOG_LEVEL environment variable

Usage:
    from beatcut.logger import logger

    logger.info("Placing cuts...")
    logger.debug("Detailed debug info")
    logger.warning("Something unexpected")

    # For user-facing output with emojis:
    logger.info("   ✅ 7 cuts placed")
"""

import logging
import os
import sys
from pathlib import Path


# =============================================================================
# Log Level Configuration
# =============================================================================
LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

def get_log_level() -> int:
    """Get log level from environment variable."""
    level_str = os.environ.get("LOG_LEVEL", "INFO").upper()
    return LOG_LEVEL_MAP.get(level_str, logging.INFO)


# =============================================================================
# Custom Formatter
# =============================================================================
class BeatcutFormatter(logging.Formatter):
    """
    Custom formatter that preserves emoji output and adds context.

    For user-facing messages (INFO level), output is clean.
    For debug/warning/error, includes timestamp and level.
    """

    FORMATS = {
        logging.DEBUG: "%(asctime)s [DEBUG] %(name)s: %(message)s",
        logging.INFO: "%(message)s",
        logging.WARNING: "%(asctime)s [WARN] %(message)s",
        logging.ERROR: "%(asctime)s [ERROR] %(message)s",
        logging.CRITICAL: "%(asctime)s [CRITICAL] %(message)s",
    }

    def __init__(self):
        super().__init__(datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        log_fmt = self.FORMATS.get(record.levelno, self.FORMATS[logging.INFO])
        formatter = logging.Formatter(log_fmt, datefmt="%H:%M:%S")
        return formatter.format(record)


class FileFormatter(logging.Formatter):
    """Detailed formatter for file logging."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


# =============================================================================
# Logger Setup
# =============================================================================
def setup_logger(name: str = "beatcut") -> logging.Logger:
    """
    Create and configure a logger instance at the LOG_LEVEL env var level.

    Args:
        name: Logger name (default: beatcut)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    log_level = get_log_level()
    logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(BeatcutFormatter())
    logger.addHandler(console_handler)

    return logger


def configure_file_logging(log_file: Path) -> None:
    """
    Enable file logging on the package logger.

    Args:
        log_file: Destination of the detailed log
    """
    root_logger = logging.getLogger("beatcut")

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(FileFormatter())
    root_logger.addHandler(file_handler)


# =============================================================================
# Global Logger Instance
# =============================================================================
logger = setup_logger()


# =============================================================================
# Convenience Functions
# =============================================================================
def log_step(step: str, emoji: str = "▶") -> None:
    """Log a processing step."""
    logger.info(f"{emoji} {step}")


def log_success(message: str) -> None:
    """Log a success message with checkmark."""
    logger.info(f"   ✅ {message}")


def log_warning(message: str) -> None:
    """Log a warning message."""
    logger.warning(f"   ⚠️  {message}")
