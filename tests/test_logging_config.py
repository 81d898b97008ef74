"""Unit tests for logging setup."""

import logging
from pathlib import Path

from weight_ledger.utils.logging_config import setup_logging
from weight_ledger.utils.parameters import LoggingConfig


def test_no_destination_installs_null_handler() -> None:
    """Test that without console or file logging nothing is printed."""
    logger = setup_logging(LoggingConfig(), "weight_ledger_test_null")

    kinds = [type(handler) for handler in logger.handlers]
    if kinds != [logging.NullHandler]:
        raise AssertionError(f"Expected only a NullHandler, got {kinds}")
    if logger.level != logging.WARNING:
        raise AssertionError(f"Expected WARNING level, got {logger.level}")


def test_file_handler_creates_directory(tmp_path: Path) -> None:
    """Test that the log file and its missing parent directory are created."""
    log_file = tmp_path / "logs" / "nested" / "ledger.log"
    config = LoggingConfig(level="info", format="%(levelname)s %(message)s", file=str(log_file))

    logger = setup_logging(config, "weight_ledger_test_file")
    logging.getLogger("weight_ledger_test_file.store").info("inserted measurement 1")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    if content != "INFO inserted measurement 1\n":
        raise AssertionError(f"Unexpected log content {content!r}")


def test_setup_replaces_previous_handlers(tmp_path: Path) -> None:
    """Test that a second setup drops the destinations of the first."""
    first = tmp_path / "first.log"
    setup_logging(LoggingConfig(file=str(first)), "weight_ledger_test_replace")
    logger = setup_logging(LoggingConfig(console=True), "weight_ledger_test_replace")

    kinds = [type(handler) for handler in logger.handlers]
    if kinds != [logging.StreamHandler]:
        raise AssertionError(f"Expected a single console handler, got {kinds}")
