"""Shared fixtures for NoGo tests."""

from __future__ import annotations

import pytest

from engine.board import Board
from engine.stones import PlaceResult


def play_out(board: Board) -> Board:
    """Play the lowest legal cell for each side until the side to move is stuck."""
    while True:
        for cell in range(Board.cells):
            if board.place(cell) is PlaceResult.LEGAL:
                break
        else:
            return board


@pytest.fixture
def empty_board() -> Board:
    return Board()


@pytest.fixture
def terminal_board() -> Board:
    return play_out(Board())
