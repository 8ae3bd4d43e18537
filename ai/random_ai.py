"""Uniform random legal-move player."""

from __future__ import annotations

import logging

from ai.base_ai import RandomizedAI
from engine.board import NULL_MOVE, Board, Move
from engine.rules import BOARD_CELLS

LOGGER = logging.getLogger(__name__)


class RandomAI(RandomizedAI):
    """Plays a uniformly random legal placement for its colour."""

    def __init__(self, args: str = "") -> None:
        super().__init__("name=random " + args)
        self.space = [Move.place(cell, self.color) for cell in range(BOARD_CELLS)]

    def choose_move(self, board: Board) -> Move:
        self._rng.shuffle(self.space)
        for move in self.space:
            after = board.clone()
            if move.apply(after).is_legal:
                return move
        LOGGER.debug("%s has no legal placement", self.name())
        return NULL_MOVE
