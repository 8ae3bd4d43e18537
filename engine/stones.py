"""Stone colours and placement outcomes."""

from __future__ import annotations

from enum import Enum
from typing import Dict


class Color(str, Enum):
    """Player colour. Black moves first."""

    BLACK = "black"
    WHITE = "white"

    def opponent(self) -> "Color":
        return Color.WHITE if self is Color.BLACK else Color.BLACK


class PlaceResult(str, Enum):
    """Outcome of a placement attempt."""

    LEGAL = "legal"
    ILLEGAL_TURN = "illegal_turn"
    ILLEGAL_POSITION = "illegal_position"
    ILLEGAL_PIECE = "illegal_piece"
    ILLEGAL_TAKE = "illegal_take"
    ILLEGAL_SUICIDE = "illegal_suicide"

    @property
    def is_legal(self) -> bool:
        return self is PlaceResult.LEGAL


STONE_SYMBOL: Dict[Color, str] = {
    Color.BLACK: "X",
    Color.WHITE: "O",
}

EMPTY_SYMBOL = "."
