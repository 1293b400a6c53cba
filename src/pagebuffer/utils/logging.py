"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide helper to obtain loggers under the ``pagebuffer`` namespace.
    - Allow optional verbose/debug modes from the CLI or configuration.

Notes/Edge cases:
    - Configuration is idempotent; repeated calls only adjust the level.

Dependencies:
    - Python `logging` module.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "pagebuffer"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_ATTR = "_pagebuffer_handler"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger inside the package namespace.

    ``name`` may be a dotted module name (``pagebuffer.stream``) or a short
    suffix (``trace``); both resolve below ``pagebuffer``.
    """

    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Install a single stderr handler on the package logger and set ``level``."""

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError("unknown log level")

    # sys.stderr may have been swapped since the last call
    for old in [h for h in root.handlers if getattr(h, _HANDLER_ATTR, False)]:
        root.removeHandler(old)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)

    root.setLevel(level)
    return root


__all__ = ["ROOT_LOGGER_NAME", "configure_logging", "get_logger"]
