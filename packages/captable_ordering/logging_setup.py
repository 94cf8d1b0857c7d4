"""Logging for ``captable_ordering``.

Library modules only ever call ``get_logger(__name__)``; the package root
logger (``"captable_ordering"``) carries a ``NullHandler`` until a host
application or the CLI calls :func:`configure_logging`.

Level precedence when configuring:

1. an explicit ``level`` (``--log-level`` on the CLI)
2. ``verbose=True`` (``--debug`` on the CLI), meaning ``DEBUG``
3. the ``CAPTABLE_ORDERING_LOG_LEVEL`` environment variable
4. ``WARNING``, so CLI output on stdout is not mixed with progress chatter
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "captable_ordering"
LEVEL_ENV_VAR = "CAPTABLE_ORDERING_LOG_LEVEL"
DEFAULT_LEVEL = logging.WARNING

_FORMAT = "%(levelname)s %(name)s: %(message)s"

# The one handler owned by configure_logging, reused on reconfiguration.
_handler: logging.Handler | None = None


def parse_level(value: int | str) -> int:
    """Convert ``"debug"``, ``"10"`` or ``10`` to a numeric level.

    Raises ``ValueError`` for names the ``logging`` module does not know.
    """

    if isinstance(value, int):
        return value
    name = value.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelNamesMapping().get(name)
    if numeric is None:
        raise ValueError(f"unknown log level: {value!r}")
    return numeric


def resolve_level(level: int | str | None = None, *, verbose: bool = False) -> int:
    """Apply the precedence rules above and return a numeric level."""

    if level is not None:
        return parse_level(level)
    if verbose:
        return logging.DEBUG
    env_val = os.getenv(LEVEL_ENV_VAR)
    if env_val and env_val.strip():
        return parse_level(env_val)
    return DEFAULT_LEVEL


def configure_logging(
    level: int | str | None = None,
    *,
    verbose: bool = False,
    stream: IO[str] | None = None,
) -> int:
    """Attach (or retune) the package's single stderr handler.

    Calling this again replaces the level and stream of the existing handler
    instead of stacking a second one. Returns the level that was applied.
    """

    global _handler
    resolved = resolve_level(level, verbose=verbose)
    logger = logging.getLogger(PACKAGE_LOGGER)

    if _handler is not None:
        logger.removeHandler(_handler)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(resolved)
    # Avoid double emission via the root logger.
    logger.propagate = False
    return resolved


def get_logger(name: str) -> logging.Logger:
    """Return the package logger ``name`` (usually ``__name__``)."""

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


__all__ = [
    "DEFAULT_LEVEL",
    "LEVEL_ENV_VAR",
    "configure_logging",
    "get_logger",
    "parse_level",
    "resolve_level",
]
