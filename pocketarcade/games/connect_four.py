"""
Connect-Four - Two local players dropping discs into a 7x6 grid.

Row 0 is the top of the board; discs fall toward the highest row index.
Win detection only looks at lines through the disc just placed, which is
enough because any new run of four must contain it.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

from ..config import ConnectFourSettings, get_settings
from ..engine_core import Command, CommandResult, CommandType, GameEngine, Outcome


class Player(Enum):
    ONE = 1
    TWO = 2

    @property
    def other(self) -> Player:
        return Player.TWO if self is Player.ONE else Player.ONE


class BoardStatus(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


Grid = tuple[tuple["Player | None", ...], ...]

# Horizontal, vertical, diagonal down-right, diagonal up-right
AXES: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (-1, 1))


@dataclass(frozen=True)
class ConnectFourState:
    board: Grid
    current_player: Player = Player.ONE
    status: BoardStatus = BoardStatus.IN_PROGRESS
    winner: Player | None = None
    winning_cells: tuple[tuple[int, int], ...] = ()
    last_move: tuple[int, int] | None = None


def empty_board(rows: int, columns: int) -> Grid:
    return tuple((None,) * columns for _ in range(rows))


def landing_row(board: Grid, column: int) -> int | None:
    """Lowest empty row in the column, or None when the column is full."""
    for row in range(len(board) - 1, -1, -1):
        if board[row][column] is None:
            return row
    return None


def _run_through(board: Grid, row: int, col: int, player: Player, dr: int, dc: int) -> list[tuple[int, int]]:
    rows, cols = len(board), len(board[0])
    cells = [(row, col)]
    for sign in (1, -1):
        r, c = row + sign * dr, col + sign * dc
        while 0 <= r < rows and 0 <= c < cols and board[r][c] == player:
            cells.append((r, c))
            r, c = r + sign * dr, c + sign * dc
    return sorted(cells)


def winning_cells(
    board: Grid, row: int, col: int, player: Player, run_length: int = 4
) -> tuple[tuple[int, int], ...]:
    """The first run of at least `run_length` through (row, col), or ()."""
    for dr, dc in AXES:
        cells = _run_through(board, row, col, player, dr, dc)
        if len(cells) >= run_length:
            return tuple(cells)
    return ()


def evaluate(board: Grid, row: int, col: int, player: Player, run_length: int = 4) -> bool:
    """True when the disc at (row, col) completes a run for `player`."""
    return bool(winning_cells(board, row, col, player, run_length))


def is_full(board: Grid) -> bool:
    return all(cell is not None for cell in board[0])


class ConnectFourEngine(GameEngine[ConnectFourState]):
    name = "connect_four"

    def _default_settings(self) -> ConnectFourSettings:
        return get_settings().connect_four

    def _new_state(self) -> ConnectFourState:
        return ConnectFourState(board=empty_board(self.settings.rows, self.settings.columns))

    def _handlers(self):
        return {CommandType.DROP: self._handle_drop}

    def _handle_drop(self, state: ConnectFourState, command: Command) -> CommandResult:
        column = command.params.get("column")
        if not isinstance(column, int) or not 0 <= column < self.settings.columns:
            return CommandResult.rejected(state, f"No such column: {column!r}")

        row = landing_row(state.board, column)
        if row is None:
            return CommandResult.rejected(state, f"Column {column} is full")

        player = state.current_player
        new_row = state.board[row][:column] + (player,) + state.board[row][column + 1:]
        board = state.board[:row] + (new_row,) + state.board[row + 1:]

        cells = winning_cells(board, row, column, player, self.settings.run_length)
        if cells:
            return CommandResult.accept(replace(
                state,
                board=board,
                status=BoardStatus.WON,
                winner=player,
                winning_cells=cells,
                last_move=(row, column),
            ))
        if is_full(board):
            return CommandResult.accept(replace(
                state, board=board, status=BoardStatus.DRAW, last_move=(row, column)
            ))
        return CommandResult.accept(replace(
            state, board=board, current_player=player.other, last_move=(row, column)
        ))

    def is_terminal(self, state: ConnectFourState) -> bool:
        return state.status != BoardStatus.IN_PROGRESS

    def outcome(self, state: ConnectFourState) -> Outcome:
        if state.status == BoardStatus.WON:
            return Outcome.win(str(state.winner.value))
        if state.status == BoardStatus.DRAW:
            return Outcome.draw()
        return Outcome.none()
