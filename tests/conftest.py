"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

from tilechess.core.board import Board
from tilechess.core.enums import Color, PieceType
from tilechess.core.types import Coordinate

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def kings_only() -> Board:
    """Empty board apart from both kings on their home squares."""
    board = Board()
    board.add(PieceType.KING, Color.WHITE, Coordinate(5, 1))
    board.add(PieceType.KING, Color.BLACK, Coordinate(5, 8))
    return board
