"""
Command System - Commands and results.

Commands represent:
1. Player input (move, drop, flip, guess, turn, paddle)
2. Game control (start, stop, pause, new game)
3. Host-issued timer events (resolve a pending Memory-Match pair)

All state changes outside ticks flow through commands.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CommandType(Enum):
    """Types of commands across all engines."""
    # Board games
    MOVE = "move"  # Tic-Tac-Toe cell
    DROP = "drop"  # Connect-Four column

    # Snake
    TURN = "turn"
    TOGGLE_PAUSE = "toggle_pause"

    # Pong
    START = "start"
    STOP = "stop"
    MOVE_PADDLE = "move_paddle"

    # Memory-Match
    FLIP = "flip"
    RESOLVE = "resolve"  # Issued by the host when the comparison delay elapses

    # Word-Guess
    GUESS = "guess"

    # Every engine
    NEW_GAME = "new_game"


class Direction(Enum):
    """Compass headings; y grows downward like screen coordinates."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> tuple[int, int]:
        return _VECTORS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_VECTORS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Side(Enum):
    """Pong paddle side."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Command:
    """
    A single user intent (or host timer event) for one engine.

    `params` carries the command argument; engines validate it.
    """
    command_type: CommandType
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def move(cls, cell: int) -> Command:
        return cls(CommandType.MOVE, {"cell": cell})

    @classmethod
    def drop(cls, column: int) -> Command:
        return cls(CommandType.DROP, {"column": column})

    @classmethod
    def turn(cls, direction: Direction) -> Command:
        return cls(CommandType.TURN, {"direction": direction})

    @classmethod
    def toggle_pause(cls) -> Command:
        return cls(CommandType.TOGGLE_PAUSE)

    @classmethod
    def start(cls) -> Command:
        return cls(CommandType.START)

    @classmethod
    def stop(cls) -> Command:
        return cls(CommandType.STOP)

    @classmethod
    def move_paddle(cls, side: Side, direction: Direction) -> Command:
        return cls(CommandType.MOVE_PADDLE, {"side": side, "direction": direction})

    @classmethod
    def flip(cls, card: int) -> Command:
        return cls(CommandType.FLIP, {"card": card})

    @classmethod
    def resolve(cls) -> Command:
        return cls(CommandType.RESOLVE)

    @classmethod
    def guess(cls, letter: str) -> Command:
        return cls(CommandType.GUESS, {"letter": letter})

    @classmethod
    def new_game(cls, seed: int | None = None) -> Command:
        return cls(CommandType.NEW_GAME, {"seed": seed})


@dataclass(frozen=True)
class CommandResult:
    """
    Result of applying a command.

    `state` is always usable: the new state when accepted,
    the untouched input state when rejected.
    """
    accepted: bool
    state: Any
    reason: str | None = None

    @classmethod
    def rejected(cls, state: Any, reason: str) -> CommandResult:
        """Create a rejection that leaves the state as it was."""
        return cls(accepted=False, state=state, reason=reason)

    @classmethod
    def accept(cls, state: Any) -> CommandResult:
        return cls(accepted=True, state=state)
