#!/usr/bin/env python3
"""
Logging utilities for dotrepo.

This module provides a centralized logging system: rich console output on
stderr and optional file logging.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = 'dotrepo'

FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(filename)s:%(lineno)d - %(message)s"
)


class DotrepoLogger:
    """Main logger class for dotrepo."""

    def __init__(self, name: str = ROOT_LOGGER_NAME):
        self.name = name
        self.logger = logging.getLogger(name)

        # Child loggers propagate to the root dotrepo logger
        if name != ROOT_LOGGER_NAME:
            return

        self.logger.setLevel(logging.WARNING)

        # Prevent duplicate handlers
        if self.logger.handlers:
            return

        self._setup_handlers()

    def _setup_handlers(self):
        """Setup the console logging handler."""
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            rich_tracebacks=True
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        console_handler.setLevel(logging.WARNING)
        self.logger.addHandler(console_handler)

    def add_file_handler(self, log_file: Union[str, Path]):
        """Log everything from DEBUG up to log_file."""
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            FILE_FORMAT,
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        file_handler.setLevel(logging.DEBUG)
        self.logger.addHandler(file_handler)
        return file_handler

    def set_level(self, level: str):
        """Set the logging level."""
        level_map = {
            'DEBUG': logging.DEBUG,
            'INFO': logging.INFO,
            'WARNING': logging.WARNING,
            'ERROR': logging.ERROR,
            'CRITICAL': logging.CRITICAL,
        }

        log_level = level_map.get(level.upper(), logging.INFO)
        self.logger.setLevel(log_level)

        # File handlers keep logging at DEBUG
        for handler in self.logger.handlers:
            if isinstance(handler, RichHandler):
                handler.setLevel(log_level)

    def debug(self, message: str, *args, **kwargs):
        """Log debug message."""
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        """Log info message."""
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        """Log warning message."""
        self.logger.warning(message, *args, **kwargs)


# Global logger instances
_loggers: Dict[str, DotrepoLogger] = {}


def get_logger(name: str = ROOT_LOGGER_NAME) -> DotrepoLogger:
    """Get or create a logger instance."""
    if name not in _loggers:
        _loggers[name] = DotrepoLogger(name)
    return _loggers[name]


def setup_logging(
    level: str = 'WARNING',
    log_file: Optional[Path] = None,
    verbose: bool = False
):
    """Setup logging configuration."""
    if verbose:
        level = 'DEBUG'

    # Setup main logger
    logger = get_logger()
    logger.set_level(level)

    if log_file:
        try:
            logger.add_file_handler(log_file)
            logger.info(f"Logging to file: {log_file}")
        except OSError as e:
            logger.warning(f"Could not setup custom log file {log_file}: {e}")

    return logger
