"""
Tests for the Connect-Four engine.

Tests:
- Gravity and full columns
- Runs through the last disc in all four directions
- Draw on a full board
"""

from dataclasses import replace

import pytest

from ..engine_core import Command, OutcomeKind, apply_command
from ..games.connect_four import (
    BoardStatus, ConnectFourState, Player, empty_board, evaluate, winning_cells,
)

ROWS, COLS = 6, 7


def board_with(cells, player=Player.ONE):
    """Empty board with `player` discs at the given (row, col) cells."""
    rows = [list(row) for row in empty_board(ROWS, COLS)]
    for r, c in cells:
        rows[r][c] = player
    return tuple(tuple(row) for row in rows)


def drop_all(engine, state, columns):
    for column in columns:
        state = apply_command(engine, state, Command.drop(column))
    return state


class TestDrop:
    """Tests for the drop command."""

    def test_discs_stack_from_bottom(self, connect_four):
        state = drop_all(connect_four, connect_four.initialize(), [3, 3])

        assert state.board[5][3] == Player.ONE
        assert state.board[4][3] == Player.TWO
        assert state.current_player == Player.ONE
        assert state.last_move == (4, 3)

    def test_full_column_rejected(self, connect_four):
        """Dropping into a full column leaves the board unchanged."""
        state = drop_all(connect_four, connect_four.initialize(), [0] * 6)
        assert all(row[0] is not None for row in state.board)

        result = connect_four.apply_command(state, Command.drop(0))

        assert not result.accepted
        assert result.state is state
        assert "full" in result.reason

    @pytest.mark.parametrize("column", [-1, 7, None])
    def test_bad_column_rejected(self, connect_four, column):
        state = connect_four.initialize()
        assert not connect_four.apply_command(state, Command.drop(column)).accepted


class TestWinDetection:
    """Tests for run detection."""

    def test_vertical_four_wins(self, connect_four):
        state = drop_all(connect_four, connect_four.initialize(), [0, 1, 0, 1, 0, 1])
        assert state.status == BoardStatus.IN_PROGRESS

        state = drop_all(connect_four, state, [0])

        assert state.status == BoardStatus.WON
        assert state.winner == Player.ONE
        assert state.winning_cells == ((2, 0), (3, 0), (4, 0), (5, 0))
        assert connect_four.outcome(state).player == "1"

    def test_horizontal_four_wins(self, connect_four):
        state = drop_all(connect_four, connect_four.initialize(), [0, 0, 1, 1, 2, 2, 3])
        assert state.status == BoardStatus.WON
        assert state.winner == Player.ONE

    def test_rising_diagonal(self):
        board = board_with([(5, 0), (4, 1), (3, 2), (2, 3)])
        assert evaluate(board, 2, 3, Player.ONE)

    def test_falling_diagonal(self):
        board = board_with([(2, 1), (3, 2), (4, 3), (5, 4)])
        assert evaluate(board, 5, 4, Player.ONE)

    def test_last_disc_in_middle_of_run(self):
        """The new disc does not have to be at the end of the run."""
        board = board_with([(5, 0), (4, 1), (3, 2), (2, 3)])
        assert winning_cells(board, 3, 2, Player.ONE) == ((2, 3), (3, 2), (4, 1), (5, 0))

    def test_run_of_three_is_not_a_win(self):
        board = board_with([(5, 0), (5, 1), (5, 2)])
        assert not evaluate(board, 5, 2, Player.ONE)

    def test_other_players_discs_do_not_count(self):
        board = board_with([(5, 0), (5, 1), (5, 2), (5, 3)], player=Player.TWO)
        assert not evaluate(board, 5, 3, Player.ONE)


class TestDraw:
    """Tests for the full-board draw."""

    def test_last_cell_without_run_is_draw(self, connect_four):
        # Alternating pairs leave no run longer than two anywhere
        cells = [
            [Player.ONE if (c // 2 + r) % 2 == 0 else Player.TWO for c in range(COLS)]
            for r in range(ROWS)
        ]
        cells[0][6] = None
        state = ConnectFourState(
            board=tuple(tuple(row) for row in cells),
            current_player=Player.TWO,
        )

        state = drop_all(connect_four, state, [6])

        assert state.status == BoardStatus.DRAW
        assert state.winner is None
        assert connect_four.is_terminal(state)
        assert connect_four.outcome(state).kind == OutcomeKind.DRAW

    def test_no_drops_after_game_over(self, connect_four):
        state = drop_all(connect_four, connect_four.initialize(), [0, 1, 0, 1, 0, 1, 0])
        result = connect_four.apply_command(state, Command.drop(5))
        assert not result.accepted
        assert result.state.board[5][5] is None

    def test_new_game_empties_board(self, connect_four):
        state = replace(connect_four.initialize(), status=BoardStatus.DRAW)
        result = connect_four.apply_command(state, Command.new_game())
        assert result.state.board == empty_board(ROWS, COLS)
        assert result.state.current_player == Player.ONE
