"""Logging setup shared by all enumer modules."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "enumer"


def setup_logging(level: int = logging.WARNING, verbose: bool = False) -> None:
    """Install a rich handler on the package logger.

    Args:
        level: Minimum level for the package logger.
        verbose: Force DEBUG level and show module paths.
    """
    if verbose:
        level = logging.DEBUG

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        show_time=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the enumer namespace."""
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
