"""Pytest configuration for test isolation.

Tests run against the source tree: ``packages/`` is put on ``sys.path`` ahead
of the repo root so ``captable_ordering`` resolves without an install.

The package reads ``CAPTABLE_ORDERING_LOG_LEVEL`` when configuring logging.
To keep tests hermetic regardless of the developer's shell, the variable is
removed for every test via an autouse fixture. The CLI attaches a handler
bound to the runner's captured stderr, so the package logger is put back to
its unconfigured state after every test as well.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

import captable_ordering.logging_setup as logging_setup  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CAPTABLE_ORDERING_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    logger = logging.getLogger(logging_setup.PACKAGE_LOGGER)
    saved_handlers, saved_propagate, saved_level = logger.handlers[:], logger.propagate, logger.level

    yield

    logging_setup._handler = None
    logger.handlers = saved_handlers
    logger.propagate = saved_propagate
    logger.setLevel(saved_level)
