"""
Tic-Tac-Toe - Two local players on a 3x3 grid.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

from ..config import TicTacToeSettings, get_settings
from ..engine_core import Command, CommandResult, CommandType, GameEngine, Outcome

# Rows, columns, diagonals
LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class Mark(Enum):
    X = "X"
    O = "O"

    @property
    def other(self) -> Mark:
        return Mark.O if self is Mark.X else Mark.X


class BoardStatus(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


Board = tuple["Mark | None", ...]


@dataclass(frozen=True)
class TicTacToeState:
    board: Board
    to_play: Mark
    status: BoardStatus = BoardStatus.IN_PROGRESS
    winner: Mark | None = None
    winning_line: tuple[int, int, int] | None = None


def winning_line(board: Board) -> tuple[int, int, int] | None:
    """The first line holding three equal marks, if any."""
    for a, b, c in LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return (a, b, c)
    return None


def evaluate(board: Board) -> Mark | None:
    """Winning mark, or None."""
    line = winning_line(board)
    return board[line[0]] if line else None


def is_full(board: Board) -> bool:
    return all(cell is not None for cell in board)


class TicTacToeEngine(GameEngine[TicTacToeState]):
    name = "tictactoe"

    def _default_settings(self) -> TicTacToeSettings:
        return get_settings().tictactoe

    def _new_state(self) -> TicTacToeState:
        return TicTacToeState(board=(None,) * 9, to_play=Mark(self.settings.first_mark))

    def _handlers(self):
        return {CommandType.MOVE: self._handle_move}

    def _handle_move(self, state: TicTacToeState, command: Command) -> CommandResult:
        cell = command.params.get("cell")
        if not isinstance(cell, int) or not 0 <= cell < 9:
            return CommandResult.rejected(state, f"No such cell: {cell!r}")
        if state.board[cell] is not None:
            return CommandResult.rejected(state, f"Cell {cell} is taken")

        board = state.board[:cell] + (state.to_play,) + state.board[cell + 1:]
        line = winning_line(board)
        if line:
            status = BoardStatus.WON
        elif is_full(board):
            status = BoardStatus.DRAW
        else:
            status = BoardStatus.IN_PROGRESS

        return CommandResult.accept(replace(
            state,
            board=board,
            to_play=state.to_play.other,
            status=status,
            winner=board[line[0]] if line else None,
            winning_line=line,
        ))

    def is_terminal(self, state: TicTacToeState) -> bool:
        return state.status != BoardStatus.IN_PROGRESS

    def outcome(self, state: TicTacToeState) -> Outcome:
        if state.status == BoardStatus.WON:
            return Outcome.win(state.winner.value)
        if state.status == BoardStatus.DRAW:
            return Outcome.draw()
        return Outcome.none()
