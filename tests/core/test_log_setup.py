"""Unit tests for /src/core/log_setup.py"""

import logging
from typing import Iterator

import pytest

from src.core.log_setup import PACKAGE_LOGGER, setup_logging
from src.dama.game import Game


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """Restore the package logger after each test, so handlers never pile up across tests."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


def test_setup_logging_sets_level(package_logger: logging.Logger) -> None:
    assert setup_logging("debug") is package_logger
    assert package_logger.level == logging.DEBUG


def test_setup_logging_adds_a_single_handler(package_logger: logging.Logger) -> None:
    before = len(package_logger.handlers)
    setup_logging("info")
    setup_logging("warning")
    assert len(package_logger.handlers) == before + 1
    assert package_logger.level == logging.WARNING


def test_setup_logging_level_from_settings(
    monkeypatch: pytest.MonkeyPatch, package_logger: logging.Logger
) -> None:
    monkeypatch.setenv("DAMA_LOG_LEVEL", "error")
    setup_logging()
    assert package_logger.level == logging.ERROR


def test_module_loggers_propagate_to_the_package_logger(
    package_logger: logging.Logger, caplog: pytest.LogCaptureFixture
) -> None:
    setup_logging("info")
    with caplog.at_level(logging.INFO, logger="src.dama.game"):
        Game.new_game(starting_board="/".join(["8"] * 8))
    assert any("Game over" in record.getMessage() for record in caplog.records)
