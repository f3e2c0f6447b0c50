"""Logging helpers shared by the library modules and the CLI.

Library code only asks for loggers under ``revolut_tax.*`` via
:func:`get_logger`; until an entrypoint calls :func:`configure_logging` the
package logger carries a ``NullHandler`` and stays quiet. The CLI configures a
single stderr handler at startup, with the level taken from ``--log-level`` or
``REVOLUT_TAX_LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "revolut_tax"
_LEVEL_ENV = "REVOLUT_TAX_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _level_from_text(value: str) -> int | None:
    # Numeric strings or standard level names (INFO/DEBUG/etc.).
    value = value.strip().upper()
    if value.isdigit():
        return int(value)
    numeric = logging.getLevelName(value)
    return numeric if isinstance(numeric, int) else None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        numeric = _level_from_text(level)
        if numeric is not None:
            return numeric
    env_val = os.getenv(_LEVEL_ENV)
    if env_val:
        numeric = _level_from_text(env_val)
        if numeric is not None:
            return numeric
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure the package root logger exactly once.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level-name string (e.g., ``"DEBUG"``). If
        ``None``, defaults to ``REVOLUT_TAX_LOG_LEVEL`` when set, otherwise
        ``logging.INFO``.
    fmt:
        Optional logging format string.
    stream:
        Output stream for the handler (defaults to ``sys.stderr`` at call time).
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)

    # Drop NullHandlers added by get_logger() before configuration.
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def reset_logging() -> None:
    """Undo :func:`configure_logging` (used by tests and long-lived hosts)."""

    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, attaching a ``NullHandler`` to the package root
    logger when nothing has been configured yet."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
