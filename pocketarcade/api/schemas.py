"""
Pydantic Schemas - Request/response models between a host page and the engines.

A presentation layer sends plain JSON-like payloads; these models
validate them and turn them into engine commands, and describe the
snapshots sent back for rendering.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has been ended
- UNKNOWN_GAME: Game name is not registered
- INVALID_COMMAND: Payload is malformed or missing its argument
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field, model_validator

from ..engine_core import Command, CommandType, Direction, Side


# =============================================================================
# Enums
# =============================================================================

class GameName(str, Enum):
    """Registered games."""
    TICTACTOE = "tictactoe"
    CONNECT_FOUR = "connect_four"
    SNAKE = "snake"
    PONG = "pong"
    MEMORY_MATCH = "memory_match"
    WORD_GUESS = "word_guess"


class CommandName(str, Enum):
    """Commands a host may send."""
    MOVE = "move"
    DROP = "drop"
    TURN = "turn"
    TOGGLE_PAUSE = "toggle_pause"
    START = "start"
    STOP = "stop"
    MOVE_PADDLE = "move_paddle"
    FLIP = "flip"
    GUESS = "guess"
    NEW_GAME = "new_game"


class DirectionName(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class SideName(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNKNOWN_GAME = "UNKNOWN_GAME"
    INVALID_COMMAND = "INVALID_COMMAND"


# Which request field each command needs
_REQUIRED_ARGUMENT = {
    CommandName.MOVE: "cell",
    CommandName.DROP: "column",
    CommandName.TURN: "direction",
    CommandName.MOVE_PADDLE: "direction",
    CommandName.FLIP: "card",
    CommandName.GUESS: "letter",
}


# =============================================================================
# Requests
# =============================================================================

class CreateGameRequest(BaseModel):
    """Mount a game."""
    game: GameName
    seed: Optional[int] = Field(None, description="Seed for a reproducible game")


class CommandRequest(BaseModel):
    """
    One player command.

    Only the field matching the command is read, e.g.
    {"command": "move", "cell": 4} or {"command": "guess", "letter": "a"}.
    """
    command: CommandName
    cell: Optional[int] = Field(None, ge=0)
    column: Optional[int] = Field(None, ge=0)
    card: Optional[int] = Field(None, ge=0)
    letter: Optional[str] = Field(None, min_length=1, max_length=1)
    direction: Optional[DirectionName] = None
    side: Optional[SideName] = None
    seed: Optional[int] = None

    @model_validator(mode="after")
    def _has_argument(self) -> "CommandRequest":
        required = _REQUIRED_ARGUMENT.get(self.command)
        if required and getattr(self, required) is None:
            raise ValueError(f"'{self.command.value}' needs '{required}'")
        if self.command == CommandName.MOVE_PADDLE and self.side is None:
            raise ValueError("'move_paddle' needs 'side'")
        return self

    def to_command(self) -> Command:
        """Translate into an engine Command."""
        if self.command == CommandName.MOVE:
            return Command.move(self.cell)
        if self.command == CommandName.DROP:
            return Command.drop(self.column)
        if self.command == CommandName.TURN:
            return Command.turn(Direction(self.direction.value))
        if self.command == CommandName.MOVE_PADDLE:
            return Command.move_paddle(Side(self.side.value), Direction(self.direction.value))
        if self.command == CommandName.FLIP:
            return Command.flip(self.card)
        if self.command == CommandName.GUESS:
            return Command.guess(self.letter)
        if self.command == CommandName.NEW_GAME:
            return Command.new_game(self.seed)
        return Command(CommandType(self.command.value))


class AdvanceRequest(BaseModel):
    """Let time pass for a session."""
    elapsed_ms: float = Field(ge=0)


# =============================================================================
# Responses
# =============================================================================

class OutcomeInfo(BaseModel):
    kind: str = "none"
    player: Optional[str] = None


class GameSnapshot(BaseModel):
    """Everything a host needs to render one game."""
    session_id: str
    game: GameName
    status: str
    is_terminal: bool = False
    outcome: OutcomeInfo = Field(default_factory=OutcomeInfo)
    state: dict[str, Any] = Field(default_factory=dict)
    tick_interval_ms: Optional[float] = None
    pending_delay_ms: Optional[int] = None
    clock_ms: float = 0.0


class CommandResponse(BaseModel):
    accepted: bool
    reason: Optional[str] = None
    snapshot: GameSnapshot


class AdvanceResponse(BaseModel):
    timers_fired: int
    snapshot: GameSnapshot


class GameInfo(BaseModel):
    name: GameName
    timed: bool = Field(description="Runs on a tick clock")
    commands: list[CommandName] = Field(default_factory=list)


class SessionListResponse(BaseModel):
    sessions: list[str] = Field(default_factory=list)
    total: int = 0


class EndGameResponse(BaseModel):
    success: bool
    session_id: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
