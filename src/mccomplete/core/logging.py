"""Logging setup: Rich handler on stderr for the ``mccomplete`` namespace."""

from __future__ import annotations

import logging
import logging.config

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _stderr_handler() -> RichHandler:
    return RichHandler(console=Console(stderr=True), show_path=False)


def configure_logging(level: str = "WARNING") -> None:
    """Configure the ``mccomplete`` logger tree.

    Output goes to stderr so that ``--json`` output on stdout stays clean.
    Unknown level names fall back to WARNING.
    """
    level = level.upper()
    if level not in _LEVELS:
        level = "WARNING"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": "%(name)s: %(message)s"},
            },
            "handlers": {
                "console": {
                    "()": f"{__name__}._stderr_handler",
                    "formatter": "default",
                    "level": level,
                }
            },
            "loggers": {
                "mccomplete": {
                    "level": level,
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }
    )
