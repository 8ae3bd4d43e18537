"""
Tests for the NoGo board collaborator.

Tests cover:
- Placement outcomes and turn bookkeeping
- Capture and suicide prohibition
- Game end detection
- State encoding
"""

import numpy as np
import pytest

from engine.board import NULL_MOVE, Board, Move
from engine.rules import BOARD_CELLS, NEIGHBORS, index_to_pos, pos_to_index
from engine.stones import Color, PlaceResult

EMPTY_ROW = "........."


def board_with(top_rows, turn=Color.BLACK):
    rows = list(top_rows) + [EMPTY_ROW] * (9 - len(top_rows))
    return Board.from_rows(rows, turn=turn)


class TestGeometry:
    """Index and adjacency helpers."""

    def test_index_roundtrip(self):
        assert pos_to_index((4, 4)) == 40
        assert index_to_pos(40) == (4, 4)
        assert index_to_pos(80) == (8, 8)

    def test_corner_and_center_neighbors(self):
        assert sorted(NEIGHBORS[0]) == [1, 9]
        assert sorted(NEIGHBORS[40]) == [31, 39, 41, 49]
        assert len(NEIGHBORS[8]) == 2


class TestPlacement:
    """Placement legality and board mutation."""

    def test_empty_board_has_all_cells_legal(self, empty_board):
        assert empty_board.current_turn is Color.BLACK
        assert empty_board.legal_move_count() == BOARD_CELLS
        assert empty_board.get_legal_moves() == list(range(BOARD_CELLS))

    def test_legal_place_switches_turn(self, empty_board):
        result = empty_board.place(40)

        assert result is PlaceResult.LEGAL
        assert empty_board.get_cell(40) is Color.BLACK
        assert empty_board.current_turn is Color.WHITE
        assert empty_board.last_move == 40
        assert empty_board.ply_count == 1

    def test_occupied_cell(self, empty_board):
        empty_board.place(40)
        assert empty_board.place(40) is PlaceResult.ILLEGAL_PIECE

    @pytest.mark.parametrize("cell", [-1, BOARD_CELLS, 200])
    def test_out_of_range(self, empty_board, cell):
        assert empty_board.place(cell) is PlaceResult.ILLEGAL_POSITION

    def test_wrong_colour(self, empty_board):
        assert empty_board.place(0, Color.WHITE) is PlaceResult.ILLEGAL_TURN
        assert empty_board.place(0, Color.BLACK) is PlaceResult.LEGAL

    def test_suicide_is_illegal(self):
        board = board_with([".O.......", "O........"])
        assert board.place(0) is PlaceResult.ILLEGAL_SUICIDE

    def test_capture_is_illegal(self):
        board = board_with(["OX......."])
        assert board.place(9) is PlaceResult.ILLEGAL_TAKE

    def test_extending_own_group_is_legal(self):
        board = board_with(["OX......."], turn=Color.WHITE)
        assert board.place(9) is PlaceResult.LEGAL

    def test_illegal_place_leaves_board_untouched(self):
        board = board_with(["OX......."])
        before = list(board.grid)

        board.place(9)

        assert board.grid == before
        assert board.current_turn is Color.BLACK
        assert board.last_move is None
        assert board.ply_count == 0

    def test_check_place_does_not_mutate(self, empty_board):
        assert empty_board.check_place(10) is PlaceResult.LEGAL
        assert empty_board.get_cell(10) is None
        assert empty_board.current_turn is Color.BLACK

    def test_clone_is_independent(self, empty_board):
        copy = empty_board.clone()
        copy.place(3)

        assert empty_board.get_cell(3) is None
        assert empty_board.current_turn is Color.BLACK
        assert copy.get_cell(3) is Color.BLACK

    def test_from_rows_rejects_bad_input(self):
        with pytest.raises(ValueError):
            Board.from_rows([EMPTY_ROW] * 8)
        with pytest.raises(ValueError):
            Board.from_rows(["Z........"] + [EMPTY_ROW] * 8)


class TestMoves:
    """Move values."""

    def test_place_move_applies(self, empty_board):
        move = Move.place(12, Color.BLACK)
        assert move.apply(empty_board) is PlaceResult.LEGAL
        assert empty_board.get_cell(12) is Color.BLACK

    def test_null_move(self, empty_board):
        assert NULL_MOVE.is_null
        assert NULL_MOVE.apply(empty_board) is PlaceResult.ILLEGAL_POSITION
        assert empty_board.ply_count == 0
        assert str(NULL_MOVE) == "null"

    def test_apply_move_rejects_illegal(self, empty_board):
        with pytest.raises(ValueError):
            empty_board.apply_move(NULL_MOVE)
        with pytest.raises(ValueError):
            empty_board.apply_move(Move.place(0, Color.WHITE))

    def test_move_str(self):
        assert str(Move.place(10, Color.WHITE)) == "white@(1,1)"


class TestGameOver:
    """Terminal detection."""

    def test_empty_board_not_terminal(self, empty_board):
        assert empty_board.game_over() == (False, None)

    def test_stuck_side_loses(self, terminal_board):
        terminal, winner = terminal_board.game_over()

        assert terminal is True
        assert terminal_board.legal_move_count() == 0
        assert winner is terminal_board.current_turn.opponent()


class TestEncoding:
    """Numpy views of the position."""

    def test_encode_state(self, empty_board):
        empty_board.place(0)
        empty_board.place(80)
        encoded = empty_board.encode_state()

        assert encoded.shape == (3, 9, 9)
        assert encoded.dtype == np.float32
        assert encoded[0].sum() == 81.0
        assert encoded[1, 0, 0] == 1.0
        assert encoded[2, 8, 8] == 1.0
        assert encoded[1].sum() == 1.0
        assert encoded[2].sum() == 1.0

    def test_legal_action_mask(self):
        board = board_with(["OX......."])
        mask = board.legal_action_mask()

        assert mask.shape == (BOARD_CELLS,)
        assert not mask[0]
        assert not mask[9]
        assert mask.sum() == board.legal_move_count()

    def test_render_ascii(self):
        board = board_with(["OX......."])
        lines = board.render_ascii().splitlines()

        assert len(lines) == 10
        assert lines[1].startswith(" 0 O X")
