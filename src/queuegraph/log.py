"""Package logging: one stream handler with the level taken from the environment."""

from __future__ import annotations

import logging
import os
from typing import Final

_HANDLER_ATTACHED: bool = False
_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_ROOT_LOGGER: Final[str] = "queuegraph"


def _resolve_level() -> int:
    level_name = os.getenv("QUEUEGRAPH_LOG_LEVEL", "WARNING").upper()
    return getattr(logging, level_name, logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the ``queuegraph`` hierarchy.

    A single stream handler is attached to the package logger the first time
    this is called so that library use does not touch the root logger.
    """
    global _HANDLER_ATTACHED

    package_logger = logging.getLogger(_ROOT_LOGGER)
    if not _HANDLER_ATTACHED:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        package_logger.addHandler(handler)
        package_logger.setLevel(_resolve_level())
        _HANDLER_ATTACHED = True

    return logging.getLogger(name)


def set_verbose(enabled: bool = True) -> None:
    """Switch the package logger between DEBUG and the configured level."""
    level = logging.DEBUG if enabled else _resolve_level()
    logging.getLogger(_ROOT_LOGGER).setLevel(level)
