"""Defines the :class:`.Logger` class and the one-liner logging helpers."""

from __future__ import annotations

# Standard Library Imports
import logging
import sys
from logging.handlers import RotatingFileHandler
from os import makedirs
from os.path import exists, join

# Local Imports
from . import pathSafeTime
from .behavioral_config import BehavioralConfig

LOGGER_NAME: str = "v2xtime"
"""``str``: name of the top-level library logger."""


class Logger:
    """Extended logger wraps the standard Python logging package.

    It also creates a standard file name and log format for any log files that are saved.
    """

    def __init__(self, name, level=None, path=None, allow_multiple_handlers=None):
        """Configure the logging information for this Logger instance.

        Args:
            name (``string``): Name of the the logger instance
            level (``logging.LOG_LEVEL``): Determines what level of log messages are published
            path (``string``): Path to where the log file will be stored, or ``"stdout"`` / ``"stderr"``
            allow_multiple_handlers (``bool``, optional): whether multiple log handlers are permitted
        """
        config = BehavioralConfig.getConfig().logging
        if not level:
            level = config.Level
        if not path:
            path = config.OutputLocation
        if not allow_multiple_handlers:
            allow_multiple_handlers = config.AllowMultipleHandlers

        self.logger = logging.getLogger(name)
        if not self.logger.handlers or allow_multiple_handlers is True:
            if path in ("stdout", "stderr"):
                self.filename = path
                handler = logging.StreamHandler(getattr(sys, path))

            else:
                if not exists(path):
                    self.logger.info(f"Path did not exist: {path!r}. Creating path...")
                    makedirs(path)

                log_name = f"{name}_{pathSafeTime()}.log"
                self.filename = join(path, log_name)

                handler = RotatingFileHandler(
                    self.filename,
                    maxBytes=config.MaxFileSize,
                    backupCount=config.MaxFileCount,
                )

            formatter = logging.Formatter("%(asctime)s - %(module)s - %(levelname)s - %(message)s")
            handler.setFormatter(formatter)

            self.logger.setLevel(level)
            self.logger.addHandler(handler)

    def __getattr__(self, name):
        """Forward everything else to the wrapped :class:`logging.Logger`."""
        return getattr(self.logger, name)


def _v2xtimeLog(message: str, level: int):
    """Log a message to the top-level log record.

    This provides a simple one-liner that doesn't require pre-initializing a logger object, for
    plain functions that need to log messages.

    Args:
        message (``str``): message to record with in the log.
        level (``int``): level at which to log this message, corresponding to `logging.LOG_LEVEL`.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.log(msg=message, level=level)


def v2xtimeLogError(message: str):
    """Log a ERROR message to the top-level log record.

    Args:
        message (``str``): message to record with in the log.
    """
    _v2xtimeLog(message, level=logging.ERROR)


def v2xtimeLogWarning(message: str):
    """Log a WARNING message to the top-level log record.

    Args:
        message (``str``): message to record with in the log.
    """
    _v2xtimeLog(message, level=logging.WARNING)


def v2xtimeLogInfo(message: str):
    """Log a INFO message to the top-level log record.

    Args:
        message (``str``): message to record with in the log.
    """
    _v2xtimeLog(message, level=logging.INFO)


def v2xtimeLogDebug(message: str):
    """Log a DEBUG message to the top-level log record.

    Args:
        message (``str``): message to record with in the log.
    """
    _v2xtimeLog(message, level=logging.DEBUG)
