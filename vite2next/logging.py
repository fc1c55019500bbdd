"""Console logging for migration runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass

_LOGGER_NAME = "vite2next"
_FORMAT = "[vite2next] %(levelname)s %(message)s"
# Verbose runs also name the emitting module, e.g. vite2next.steps.cleanup.
_VERBOSE_FORMAT = "[vite2next] %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``vite2next`` or a child such as ``vite2next.steps.cleanup``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Send migration output to stderr.

    INFO covers step progress and the files each step touches; ``--verbose``
    adds the DEBUG detail behind detection and locator decisions.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # main() may run several times in one process (tests, wrappers).
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _FORMAT))
    logger.addHandler(handler)
    return logger


@dataclass(frozen=True)
class StepProgress:
    """Position within a migration run; advance() returns the next value."""

    current: int = 0
    total: int = 0

    def advance(self, title: str, logger: logging.Logger | None = None) -> "StepProgress":
        progress = StepProgress(current=self.current + 1, total=self.total)
        (logger or get_logger()).info("Step %s: %s", progress.label, title)
        return progress

    @property
    def label(self) -> str:
        if self.total:
            return f"{self.current}/{self.total}"
        return str(self.current)


__all__ = ["StepProgress", "configure_logging", "get_logger"]
