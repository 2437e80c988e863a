"""Logging setup for pinbar.

Library modules log under the ``pinbar`` namespace and stay silent unless
a handler is installed. Terminal failures and lifecycle changes are logged
at DEBUG; a log file can collect that trail without it scrolling past the
pinned bar on stderr.
"""

import logging
import os
import sys
from pathlib import Path

from pinbar.shared.colors import Colors

LOGGER_NAME = "pinbar"

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class ColorFormatter(logging.Formatter):
    """Stderr formatter: colored level tag, then the message."""

    LEVEL_COLORS = {
        logging.DEBUG: ('CYAN', '[DEBUG]'),
        logging.INFO: ('GREEN', '[INFO]'),
        logging.WARNING: ('YELLOW', '[WARN]'),
        logging.ERROR: ('RED', '[ERROR]'),
        logging.CRITICAL: ('RED', '[CRITICAL]'),
    }

    def format(self, record):
        color_name, tag = self.LEVEL_COLORS.get(record.levelno, ('NC', '[LOG]'))
        text = record.getMessage()
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return f"{getattr(Colors, color_name, '')}{tag}{Colors.NC} {text}"


def _stderr_handler(logger):
    for handler in logger.handlers:
        if type(handler) is logging.StreamHandler:
            return handler
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColorFormatter())
    logger.addHandler(handler)
    return handler


def _lower_level(logger, level):
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)


def setup_logging(verbose=False, quiet=False, log_file=None):
    """Route the ``pinbar`` loggers to stderr, and optionally to a file.

    Args:
        verbose: Show DEBUG records (geometry failures, init/deinit) on stderr
        quiet: Show only WARNING and above on stderr
        log_file: Path receiving every DEBUG record regardless of verbosity

    Returns:
        The ``pinbar`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)

    if verbose:
        stderr_level = logging.DEBUG
    elif quiet:
        stderr_level = logging.WARNING
    else:
        stderr_level = logging.INFO
    _stderr_handler(logger).setLevel(stderr_level)
    logger.setLevel(stderr_level)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            _lower_level(logger, handler.level)

    if log_file:
        attach_log_file(log_file)

    return logger


def attach_log_file(path, level=logging.DEBUG):
    """Add a plain-text file handler to the ``pinbar`` logger.

    Calling it again with the same path returns the existing handler.
    The parent directory is created when missing.
    """
    path = Path(os.path.expanduser(str(path))).resolve()
    logger = logging.getLogger(LOGGER_NAME)

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == path:
            return handler

    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    _lower_level(logger, level)

    logger.debug("Logging to %s", path)
    return handler


def log_file_from_config(config):
    """Return ``logging.file`` from a config dict, or None."""
    section = (config or {}).get("logging")
    if not isinstance(section, dict):
        return None
    log_file = section.get("file")
    return log_file if isinstance(log_file, str) and log_file else None
