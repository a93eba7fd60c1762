"""
Tests for the Tic-Tac-Toe engine.

Tests:
- Line evaluation
- Move validation
- Win and draw transitions
"""

import pytest

from ..engine_core import Command, OutcomeKind, apply_command
from ..games.tictactoe import LINES, BoardStatus, Mark, evaluate, winning_line


def play(engine, state, cells):
    for cell in cells:
        state = apply_command(engine, state, Command.move(cell))
    return state


class TestEvaluate:
    """Tests for the line checker."""

    @pytest.mark.parametrize("line", LINES)
    @pytest.mark.parametrize("mark", [Mark.X, Mark.O])
    def test_every_line_wins(self, line, mark):
        """Three equal marks on any of the 8 lines is a win."""
        board = tuple(mark if i in line else None for i in range(9))
        assert evaluate(board) == mark
        assert winning_line(board) == line

    def test_empty_board_has_no_winner(self):
        assert evaluate((None,) * 9) is None

    def test_mixed_line_is_not_a_win(self):
        board = (Mark.X, Mark.O, Mark.X) + (None,) * 6
        assert evaluate(board) is None


class TestMove:
    """Tests for the move command."""

    def test_x_opens(self, tictactoe):
        state = tictactoe.initialize()
        assert state.to_play == Mark.X
        assert state.status == BoardStatus.IN_PROGRESS

    def test_move_places_mark_and_flips_turn(self, tictactoe):
        state = tictactoe.initialize()
        result = tictactoe.apply_command(state, Command.move(4))

        assert result.accepted
        assert result.state.board[4] == Mark.X
        assert result.state.to_play == Mark.O
        # Exactly one cell changed
        changed = [i for i in range(9) if result.state.board[i] != state.board[i]]
        assert changed == [4]

    def test_occupied_cell_rejected(self, tictactoe):
        """Moving onto a taken cell leaves the state untouched."""
        state = play(tictactoe, tictactoe.initialize(), [4])
        result = tictactoe.apply_command(state, Command.move(4))

        assert not result.accepted
        assert result.state is state
        assert "taken" in result.reason

    @pytest.mark.parametrize("cell", [-1, 9, "4", None])
    def test_invalid_cell_rejected(self, tictactoe, cell):
        state = tictactoe.initialize()
        result = tictactoe.apply_command(state, Command.move(cell))
        assert not result.accepted
        assert result.state is state


class TestGameEnd:
    """Tests for win/draw detection."""

    def test_top_row_win(self, tictactoe):
        """X takes 0,1,2 while O takes 3,4."""
        state = play(tictactoe, tictactoe.initialize(), [0, 3, 1, 4, 2])

        assert state.status == BoardStatus.WON
        assert state.winner == Mark.X
        assert state.winning_line == (0, 1, 2)
        assert tictactoe.is_terminal(state)
        outcome = tictactoe.outcome(state)
        assert outcome.kind == OutcomeKind.WIN
        assert outcome.player == "X"

    def test_no_moves_after_win(self, tictactoe):
        state = play(tictactoe, tictactoe.initialize(), [0, 3, 1, 4, 2])
        result = tictactoe.apply_command(state, Command.move(8))

        assert not result.accepted
        assert result.state.board[8] is None
        assert "over" in result.reason.lower()

    def test_full_board_draw(self, tictactoe):
        state = play(tictactoe, tictactoe.initialize(), [0, 1, 2, 4, 3, 5, 7, 6, 8])

        assert state.status == BoardStatus.DRAW
        assert state.winner is None
        assert tictactoe.outcome(state).kind == OutcomeKind.DRAW

    def test_new_game_clears_board(self, tictactoe):
        state = play(tictactoe, tictactoe.initialize(), [0, 3, 1, 4, 2])
        result = tictactoe.apply_command(state, Command.new_game())

        assert result.accepted
        assert result.state.board == (None,) * 9
        assert result.state.status == BoardStatus.IN_PROGRESS
        assert tictactoe.outcome(result.state).kind == OutcomeKind.NONE
