"""Mini README: Application-wide logging helpers for sequential_sfm.

Structure:
    * get_logger - factory returning module loggers with shared formatting.
    * configure_root_logger - attach the root handler once and set the level.

Usage:
    Modules import ``get_logger`` and keep a module-level ``LOGGER``. The
    command line calls ``configure_root_logger`` with the level taken from
    the settings (or DEBUG when ``--verbose`` is given). Repeated calls only
    adjust the level so handlers are never duplicated.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger, or only update its level if already set up."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root_logger.setLevel(level)
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger."""

    return logging.getLogger(name)
