# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup for envscan.

The library only logs through ``logging.getLogger(__name__)`` and stays quiet
unless an application (or the CLI's ``--verbose``) calls :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "envscan"


def setup_logging(level: int | str | None = None, *, verbose: bool = False) -> logging.Logger:
    """Attach a Rich stderr handler to the ``envscan`` logger.

    Args:
        level: Log level name or number. Defaults to ``ENVSCAN_LOG_LEVEL``, then WARNING.
        verbose: Shortcut for DEBUG; wins over *level*.

    Returns:
        The configured package logger.
    """
    if verbose:
        level = logging.DEBUG
    elif level is None:
        level = os.environ.get("ENVSCAN_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Invalid log level: {level}")
        level = resolved

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=verbose,
            markup=False,
            rich_tracebacks=True,
        )
    )
    return logger
