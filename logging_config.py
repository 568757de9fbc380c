"""
Logging Configuration

Centralized logging configuration for the orbit tracker.
Package modules log through ``logging.getLogger(__name__)``; entry points
(the demo script, host applications) call ``configure_logging`` once.

Usage:
    from logging_config import get_logger, configure_logging

    configure_logging(logging.DEBUG)
    logger = get_logger(__name__)
    logger.info("Catalog loaded")
    logger.warning("Record dropped: missing line 2")

The level can also be taken from the TRACKER_LOG_LEVEL environment variable.
"""

import logging
import os
import sys
from typing import Optional

# Default logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_from_env(default: int = logging.INFO) -> int:
    """Logging level named by TRACKER_LOG_LEVEL, or default."""
    name = os.environ.get("TRACKER_LOG_LEVEL", "").upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def configure_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the entire application.

    Parameters
    ----------
    level : int, optional
        Logging level (e.g., logging.DEBUG). Defaults to TRACKER_LOG_LEVEL or INFO.
    log_file : str, optional
        Path to log file. If None, logs only to console.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level if level is not None else level_from_env(),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Parameters
    ----------
    name : str
        Name of the logger (typically __name__)

    Returns
    -------
    logging.Logger
        Configured logger instance
    """
    return logging.getLogger(name)
