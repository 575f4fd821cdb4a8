"""Centralized logging configuration for launchdeck."""

import logging
import sys
from pathlib import Path
from typing import Optional

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


def level_from_name(name: str) -> int:
    """Map a configured level name (DEBUG, INFO, WARN, ERROR) to a logging level."""
    try:
        return _LEVELS[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {name!r} (supported: {list(_LEVELS)})") from None


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Configure structured logging for launchdeck.

    Args:
        level: Logging level (default WARNING)
        log_file: Optional path to log file; stderr only when omitted
        format_string: Optional custom format string
    """
    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        # Ensure log directory exists
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.insert(0, logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=format_string,
        handlers=handlers,
        force=True,
    )

    # Suppress noisy third-party loggers
    logging.getLogger('asyncio').setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module."""
    return logging.getLogger(f"launchdeck.{name}")
