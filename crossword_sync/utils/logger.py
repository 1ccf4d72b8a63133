"""Logging setup for the shared crossword session."""

from __future__ import annotations

import logging
from typing import IO, Optional, Union


ROOT_LOGGER_NAME = "crossword_sync"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[IO[str]] = None) -> None:
    """Attach one formatted handler to the ``crossword_sync`` logger.

    Session lifecycle (players joining and leaving, puzzles loaded, queued
    actions discarded) is logged at INFO. Per-keystroke transitions and relay
    deliveries stay at DEBUG. ``level`` accepts a name such as ``"debug"``;
    unknown names fall back to WARNING. Only the package logger is touched so
    an embedding application keeps its own root configuration.
    """

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under ``crossword_sync``, installing defaults on first use."""

    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        configure_logging()
    return logging.getLogger(name or ROOT_LOGGER_NAME)
