"""Tests for logging setup."""

import logging

from modeled.utils.logger import get_logger, setup_logger


def test_setup_logger_is_idempotent(tmp_path):
    log_file = tmp_path / "logs" / "app.log"

    setup_logger(name="modeled.test", log_level="DEBUG", log_file=str(log_file))
    logger = setup_logger(name="modeled.test", log_level="DEBUG", log_file=str(log_file))

    assert len(logger.handlers) == 2
    assert logger.level == logging.DEBUG
    assert log_file.parent.is_dir()

    logger.debug("written to file only")
    for handler in logger.handlers:
        handler.flush()
    assert "written to file only" in log_file.read_text()

    assert get_logger("modeled.test") is logger


def test_setup_logger_without_file():
    logger = setup_logger(name="modeled.console", log_file=None)

    assert len(logger.handlers) == 1
