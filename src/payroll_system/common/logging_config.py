"""Logging setup for the payroll_system logger hierarchy."""

from __future__ import annotations

import logging
import sys
import threading
from typing import Optional, Union

_LOGGER_PREFIX = "payroll_system"
_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

_lock = threading.Lock()
_configured = False


def configure_logging(*, level: Union[int, str] = logging.INFO, handler: Optional[logging.Handler] = None) -> None:
    """Attach one handler to the package logger (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False

    h = handler or logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Drop handlers installed by configure_logging."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
