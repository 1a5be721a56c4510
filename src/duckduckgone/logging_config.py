#!/usr/bin/env python
# logging_config.py - Centralized logging configuration

import logging
import os
import re
import sys
from pathlib import Path
from typing import Optional

# Define log format with function name
LOG_FORMAT = "%(asctime)s - %(name)s - %(funcName)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LEVEL = "WARNING"
QUIET_LIBRARIES = ("aiohttp", "asyncio")

_BEARER_RE = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)


class RedactTokenFilter(logging.Filter):
    """Masks bearer tokens in log messages"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _BEARER_RE.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def resolve_level(level: Optional[str]) -> int:
    """Level name from the argument or DDG_LOG_LEVEL, WARNING if unknown"""
    name = (level or os.getenv("DDG_LOG_LEVEL") or DEFAULT_LEVEL).upper()
    level_no = getattr(logging, name, None)
    return level_no if isinstance(level_no, int) else logging.WARNING


def _attach(root: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(RedactTokenFilter())
    root.addHandler(handler)


def setup_logging(
    level: Optional[str] = None, log_file: Optional[str] = None, console: bool = False
) -> None:
    """
    Setup logging for the ddg command.

    Args:
        level: Logging level name; DDG_LOG_LEVEL or WARNING when omitted
        log_file: Path to log file (optional)
        console: Log to stderr, stdout is reserved for the generated address
    """
    log_level = resolve_level(level)

    # Configure root logger from scratch on every run
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    # Console handler
    if console:
        _attach(root_logger, logging.StreamHandler(sys.stderr), log_level)

    # File handler (optional)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        _attach(root_logger, logging.FileHandler(log_file, encoding="utf-8"), log_level)

    # Prevent lastResort (stderr) if no handlers
    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    # Third-party chatter stays at WARNING
    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging initialized at level: {logging.getLevelName(log_level)}"
        + (f", file: {log_file}" if log_file else "")
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
