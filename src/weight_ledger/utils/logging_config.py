"""
Logging setup for Weight Ledger.

Diagnostics never go to stdout, which carries reports and listings.
They go to stderr when console logging is on, to a log file when one is
configured, and nowhere otherwise.
"""

import logging
import sys
from collections.abc import Iterator
from pathlib import Path

from weight_ledger.utils.parameters import LoggingConfig

PACKAGE_LOGGER = "weight_ledger"


def _handlers(config: LoggingConfig) -> Iterator[logging.Handler]:
    if config.console:
        yield logging.StreamHandler(sys.stderr)
    if config.file:
        log_file = Path(config.file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        yield logging.FileHandler(log_file, encoding="utf-8")


def setup_logging(config: LoggingConfig, logger_name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Attach the configured handlers to the package logger.

    Calling it again replaces the handlers from the previous call, so a
    process that loads several settings files logs only to the last set
    of destinations. With no destination configured a NullHandler is
    attached, which keeps Python's last-resort handler from printing
    warnings on stderr.

    Raises:
        OSError: If the log file or its directory cannot be created.
    """
    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(config.level.upper())
    formatter = logging.Formatter(config.format)
    for handler in _handlers(config):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger; records reach the handlers set up on the package logger."""
    return logging.getLogger(name)
