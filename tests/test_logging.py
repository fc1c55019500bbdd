"""Tests for vite2next.logging."""

from __future__ import annotations

import logging

import pytest

from vite2next.logging import StepProgress, configure_logging, get_logger


def test_get_logger_uses_package_hierarchy() -> None:
    assert get_logger().name == "vite2next"
    assert get_logger("steps").name == "vite2next.steps"


def test_configure_logging_replaces_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    record = logging.LogRecord(
        "vite2next.steps.cleanup", logging.INFO, __file__, 1, "Removed %s", ("index.html",), None
    )
    assert (
        logger.handlers[0].format(record)
        == "[vite2next] INFO vite2next.steps.cleanup: Removed index.html"
    )

    quiet = configure_logging()
    assert quiet.handlers[0].format(record) == "[vite2next] INFO Removed index.html"


def test_step_progress_advances_immutably(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.progress")
    start = StepProgress(total=3)

    with caplog.at_level(logging.INFO, logger="tests.progress"):
        first = start.advance("Cleaning up", logger)
        second = first.advance("Installing", logger)

    assert start.current == 0
    assert (first.current, second.current) == (1, 2)
    assert second.label == "2/3"
    assert StepProgress(current=4).label == "4"
    assert [record.getMessage() for record in caplog.records] == [
        "Step 1/3: Cleaning up",
        "Step 2/3: Installing",
    ]
