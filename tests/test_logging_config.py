"""Tests for artie_lens.logging_config."""

import logging

from artie_lens.logging_config import get_logger, log_level, setup_logging


def test_log_level():
    assert log_level() == logging.WARNING
    assert log_level(verbose=True) == logging.DEBUG
    assert log_level(quiet=True) == logging.ERROR
    assert log_level(verbose=True, quiet=True) == logging.ERROR


def test_setup_logging_replaces_handler():
    setup_logging()
    logger = setup_logging(verbose=True)
    assert logger.name == "artie_lens"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_get_logger_namespace():
    assert get_logger().name == "artie_lens"
    assert get_logger("engine").name == "artie_lens.engine"
    assert get_logger("artie_lens.config").name == "artie_lens.config"
