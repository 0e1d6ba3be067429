"""Shared test fixtures for the sunset test suite.

Provides mock external tools so no test ever spawns ``light`` or
``redshift``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest

from sunset.state import BrightnessState
from sunset.system.backlight import BacklightTool
from sunset.system.redshift import RedshiftDaemon


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def sunset_logger() -> Iterator[logging.Logger]:
    """The ``sunset`` logger, with handlers and level restored after each test."""
    logger = logging.getLogger("sunset")
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


# ---------------------------------------------------------------------------
# External tool fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_backlight() -> MagicMock:
    """A BacklightTool that reports 50% and accepts every level."""
    tool = MagicMock(spec=BacklightTool)
    tool.read.return_value = 50.0
    return tool


@pytest.fixture
def mock_redshift() -> MagicMock:
    """A RedshiftDaemon whose spawned processes look alive."""
    daemon = MagicMock(spec=RedshiftDaemon)

    def _spawn(factor: float) -> MagicMock:
        process = MagicMock()
        process.factor = factor
        process.poll.return_value = None
        return process

    daemon.spawn.side_effect = _spawn
    return daemon


# ---------------------------------------------------------------------------
# State fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def state(mock_backlight: MagicMock, mock_redshift: MagicMock) -> BrightnessState:
    """A started BrightnessState at value 150 with mocked tools."""
    s = BrightnessState(backlight=mock_backlight, redshift=mock_redshift)
    s.start()
    return s
