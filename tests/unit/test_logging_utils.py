"""Tests for utils/logging.py: configure_logging and get_logger."""
from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog

from tracelite.utils.logging import LOGGER_NAME, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    target = logging.getLogger(LOGGER_NAME)
    saved = (list(root.handlers), root.level, list(target.handlers), target.level)
    yield
    structlog.reset_defaults()
    root.handlers[:], root.level = saved[0], saved[1]
    target.handlers[:] = saved[2]
    target.setLevel(saved[3])
    target.propagate = True


def test_configure_logging_default_args_do_not_raise() -> None:
    configure_logging()


def test_configure_logging_text_does_not_raise() -> None:
    configure_logging("DEBUG", json=False)


@pytest.mark.parametrize(
    ("name", "level"),
    [("DEBUG", logging.DEBUG), ("info", logging.INFO), ("WARNING", logging.WARNING)],
)
def test_configure_logging_sets_package_level(name: str, level: int) -> None:
    logger = configure_logging(name)
    assert logger is logging.getLogger(LOGGER_NAME)
    assert logger.level == level


def test_configure_logging_unknown_level_falls_back_to_info() -> None:
    assert configure_logging("NOPE").level == logging.INFO


def test_configure_logging_installs_single_handler() -> None:
    configure_logging()
    configure_logging()
    assert len(logging.getLogger(LOGGER_NAME).handlers) == 1


def test_configure_logging_leaves_root_logger_alone() -> None:
    root = logging.getLogger()
    sentinel = logging.NullHandler()
    root.addHandler(sentinel)
    root_level = root.level
    configure_logging("DEBUG")
    assert sentinel in root.handlers
    assert root.level == root_level
    assert logging.getLogger(LOGGER_NAME).propagate is False


def test_custom_logger_name() -> None:
    logger = configure_logging("WARNING", logger_name="tracelite.custom")
    assert logger.name == "tracelite.custom"
    assert logger.level == logging.WARNING


def test_json_output_reaches_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("INFO", json=True)
    get_logger("tracelite.test").info("bucket_created", bucket="db")
    out = capsys.readouterr().out
    assert '"event": "bucket_created"' in out
    assert '"bucket": "db"' in out


def test_level_filters_package_events(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("WARNING", json=True)
    get_logger("tracelite.test").debug("trace_enabled")
    assert capsys.readouterr().out == ""


def test_get_logger_returns_usable_logger() -> None:
    logger = get_logger("tracelite.test")
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
