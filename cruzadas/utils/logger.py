"""Logging utilities for puzzle generation and solving sessions."""

from __future__ import annotations

import logging
from typing import IO, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
PACKAGE_LOGGER = "cruzadas"

# Library code stays silent until an application configures logging.
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def configure_logging(level: int = logging.INFO, stream: Optional[IO[str]] = None) -> None:
    """Configure root logging with a single stream handler.

    Generation logs one line per puzzle at INFO and one line per word at
    DEBUG; session intents only log at DEBUG, so INFO stays readable while
    playing in a terminal.
    """

    handler = logging.StreamHandler(stream)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S")
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace; handlers are left to the caller."""

    return logging.getLogger(name or PACKAGE_LOGGER)
