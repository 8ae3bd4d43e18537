"""Grid geometry helpers for 9x9 NoGo."""

from __future__ import annotations

from typing import Iterable, List, Tuple

BOARD_ROWS = 9
BOARD_COLS = 9
BOARD_CELLS = BOARD_ROWS * BOARD_COLS

Position = Tuple[int, int]


def in_bounds(pos: Position) -> bool:
    """Return whether a position is inside the board."""
    row, col = pos
    return 0 <= row < BOARD_ROWS and 0 <= col < BOARD_COLS


def is_valid_cell(cell: int) -> bool:
    """Return whether a flattened cell index addresses the board."""
    return 0 <= cell < BOARD_CELLS


def pos_to_index(pos: Position) -> int:
    """Convert a board position to flattened index."""
    return pos[0] * BOARD_COLS + pos[1]


def index_to_pos(index: int) -> Position:
    """Convert flattened index to board position."""
    return (index // BOARD_COLS, index % BOARD_COLS)


def orthogonal_neighbors(pos: Position) -> Iterable[Position]:
    """Yield orthogonally adjacent positions in bounds."""
    row, col = pos
    candidates = ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1))
    for candidate in candidates:
        if in_bounds(candidate):
            yield candidate


def _build_neighbor_table() -> List[Tuple[int, ...]]:
    table: List[Tuple[int, ...]] = []
    for index in range(BOARD_CELLS):
        table.append(tuple(pos_to_index(pos) for pos in orthogonal_neighbors(index_to_pos(index))))
    return table


# Flattened-index adjacency, shared by every board.
NEIGHBORS: List[Tuple[int, ...]] = _build_neighbor_table()
