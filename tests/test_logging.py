"""Tests for diranalyzer.logging."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from diranalyzer.logging import configure_logging, get_logger, resolve_level


@pytest.fixture(autouse=True)
def _reset_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("diranalyzer")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_resolve_level() -> None:
    assert resolve_level(None) == logging.INFO
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level("ERROR", verbose=True) == logging.DEBUG
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_reconfiguring_does_not_stack_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_file_sink_records_thread_name(tmp_path: Path) -> None:
    log_path = tmp_path / "nested" / "run.log"
    logger = configure_logging(level="INFO", log_file=log_path)

    get_logger("tokenizer").info("hello from worker")
    get_logger("tokenizer").debug("hidden")
    for handler in logger.handlers:
        handler.flush()

    content = log_path.read_text(encoding="utf-8")
    assert "INFO diranalyzer.tokenizer [MainThread]: hello from worker" in content
    assert "hidden" not in content
