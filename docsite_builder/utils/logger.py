"""Central logging configuration for the builder."""
from __future__ import annotations

import logging
from typing import Optional, Union

_DEFAULT_LEVEL = logging.INFO
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger with default configuration applied."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_DEFAULT_LEVEL, format=_FORMAT)
    return logger


def set_level(level: Union[int, str]) -> None:
    """Adjust the root level, e.g. from a ``--log-level`` flag."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), _DEFAULT_LEVEL)
    get_logger().setLevel(level)
