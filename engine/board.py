"""NoGo board state, placement legality, and state encoding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from engine.rules import BOARD_CELLS, BOARD_COLS, BOARD_ROWS, NEIGHBORS, index_to_pos, is_valid_cell
from engine.stones import EMPTY_SYMBOL, STONE_SYMBOL, Color, PlaceResult

Cell = Optional[Color]

_SYMBOL_TO_STONE = {symbol: color for color, symbol in STONE_SYMBOL.items()}


@dataclass(frozen=True)
class Move:
    """A placement of one stone, or the null move when both fields are unset."""

    cell: Optional[int] = None
    color: Optional[Color] = None

    @classmethod
    def place(cls, cell: int, color: Color) -> "Move":
        return cls(cell=cell, color=color)

    @property
    def is_null(self) -> bool:
        return self.cell is None

    def apply(self, board: "Board") -> PlaceResult:
        """Attempt this placement on board, mutating it only when legal."""
        if self.cell is None:
            return PlaceResult.ILLEGAL_POSITION
        return board.place(self.cell, self.color)

    def __str__(self) -> str:
        if self.cell is None or self.color is None:
            return "null"
        row, col = index_to_pos(self.cell)
        return f"{self.color.value}@({row},{col})"


NULL_MOVE = Move()


class Board:
    """9x9 NoGo board. Capturing and suicide are both illegal; a side with no legal placement loses."""

    rows: int = BOARD_ROWS
    cols: int = BOARD_COLS
    cells: int = BOARD_CELLS

    def __init__(self, first_turn: Color = Color.BLACK) -> None:
        self.grid: List[Cell] = [None] * BOARD_CELLS
        self.current_turn = first_turn
        self.last_move: Optional[int] = None
        self.ply_count = 0

    @classmethod
    def from_rows(cls, rows: Sequence[str], turn: Color = Color.BLACK) -> "Board":
        """Build a position from text rows using ``X`` (black), ``O`` (white) and ``.``."""
        if len(rows) != BOARD_ROWS or any(len(row) != BOARD_COLS for row in rows):
            raise ValueError(f"Expected {BOARD_ROWS} rows of {BOARD_COLS} cells.")
        board = cls(first_turn=turn)
        for row_idx, row in enumerate(rows):
            for col_idx, symbol in enumerate(row):
                if symbol == EMPTY_SYMBOL:
                    continue
                if symbol not in _SYMBOL_TO_STONE:
                    raise ValueError(f"Unknown cell symbol: {symbol!r}")
                board.grid[row_idx * BOARD_COLS + col_idx] = _SYMBOL_TO_STONE[symbol]
        return board

    def clone(self) -> "Board":
        """Copy board state."""
        cloned = Board.__new__(Board)
        cloned.grid = list(self.grid)
        cloned.current_turn = self.current_turn
        cloned.last_move = self.last_move
        cloned.ply_count = self.ply_count
        return cloned

    def get_cell(self, cell: int) -> Cell:
        """Return the stone at a cell index."""
        return self.grid[cell]

    def place(self, cell: int, color: Optional[Color] = None) -> PlaceResult:
        """Attempt a placement for the side to move and switch turn when legal."""
        result = self.check_place(cell, color)
        if result is PlaceResult.LEGAL:
            self.grid[cell] = self.current_turn
            self.last_move = cell
            self.ply_count += 1
            self.current_turn = self.current_turn.opponent()
        return result

    def check_place(self, cell: int, color: Optional[Color] = None) -> PlaceResult:
        """Classify a placement without changing the board."""
        if not is_valid_cell(cell):
            return PlaceResult.ILLEGAL_POSITION
        if color is not None and color is not self.current_turn:
            return PlaceResult.ILLEGAL_TURN
        if self.grid[cell] is not None:
            return PlaceResult.ILLEGAL_PIECE

        mover = self.current_turn
        opponent = mover.opponent()
        self.grid[cell] = mover
        try:
            for neighbor in NEIGHBORS[cell]:
                if self.grid[neighbor] is opponent and not self._has_liberty(neighbor):
                    return PlaceResult.ILLEGAL_TAKE
            if not self._has_liberty(cell):
                return PlaceResult.ILLEGAL_SUICIDE
            return PlaceResult.LEGAL
        finally:
            self.grid[cell] = None

    def is_legal(self, cell: int) -> bool:
        return self.check_place(cell) is PlaceResult.LEGAL

    def _has_liberty(self, start: int) -> bool:
        """Return whether the group containing start touches an empty cell."""
        color = self.grid[start]
        seen = {start}
        stack = [start]
        while stack:
            current = stack.pop()
            for neighbor in NEIGHBORS[current]:
                stone = self.grid[neighbor]
                if stone is None:
                    return True
                if stone is color and neighbor not in seen:
                    seen.add(neighbor)
                    stack.append(neighbor)
        return False

    def get_legal_moves(self) -> List[int]:
        """Return every legal cell for the side to move, in index order."""
        return [cell for cell in range(BOARD_CELLS) if self.is_legal(cell)]

    def legal_move_count(self) -> int:
        return sum(1 for cell in range(BOARD_CELLS) if self.is_legal(cell))

    def apply_move(self, move: Move) -> None:
        """Apply a legal move; raise on anything else."""
        result = move.apply(self)
        if result is not PlaceResult.LEGAL:
            raise ValueError(f"Illegal move: {move} ({result.value})")

    def game_over(self) -> Tuple[bool, Optional[Color]]:
        """Return (is_terminal, winner). The side to move loses when it has no legal placement."""
        for cell in range(BOARD_CELLS):
            if self.is_legal(cell):
                return False, None
        return True, self.current_turn.opponent()

    def encode_state(self) -> np.ndarray:
        """Encode the position as side-to-move, black and white planes."""
        encoded = np.zeros((3, self.rows, self.cols), dtype=np.float32)
        encoded[0, :, :] = 1.0 if self.current_turn is Color.BLACK else 0.0
        stones = np.array([stone is Color.BLACK for stone in self.grid], dtype=np.float32)
        encoded[1] = stones.reshape(self.rows, self.cols)
        stones = np.array([stone is Color.WHITE for stone in self.grid], dtype=np.float32)
        encoded[2] = stones.reshape(self.rows, self.cols)
        return encoded

    def legal_action_mask(self) -> np.ndarray:
        """Return boolean mask over the 81 cells for legal placements."""
        mask = np.zeros(BOARD_CELLS, dtype=np.bool_)
        for cell in self.get_legal_moves():
            mask[cell] = True
        return mask

    def render_ascii(self) -> str:
        """Return a simple human-readable board representation."""
        lines: List[str] = []
        lines.append("   " + " ".join(str(c) for c in range(self.cols)))
        for row in range(self.rows):
            row_cells: List[str] = []
            for col in range(self.cols):
                stone = self.grid[row * self.cols + col]
                row_cells.append(EMPTY_SYMBOL if stone is None else STONE_SYMBOL[stone])
            lines.append(f"{row:>2d} " + " ".join(row_cells))
        return "\n".join(lines)
