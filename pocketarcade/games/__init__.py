"""
Game implementations.

Each game is a GameEngine subclass; the registry maps the public game
names used by hosts and the CLI to those classes.
"""

from __future__ import annotations
import random

from ..config import ArcadeSettings, get_settings
from ..engine_core import GameEngine
from .tictactoe import TicTacToeEngine
from .connect_four import ConnectFourEngine
from .snake import SnakeEngine
from .pong import PongEngine
from .memory_match import MemoryMatchEngine
from .word_guess import WordGuessEngine

ENGINE_TYPES: dict[str, type[GameEngine]] = {
    "tictactoe": TicTacToeEngine,
    "connect_four": ConnectFourEngine,
    "snake": SnakeEngine,
    "pong": PongEngine,
    "memory_match": MemoryMatchEngine,
    "word_guess": WordGuessEngine,
}

# Settings section per game
_SETTINGS_SECTION = {
    "tictactoe": "tictactoe",
    "connect_four": "connect_four",
    "snake": "snake",
    "pong": "pong",
    "memory_match": "memory",
    "word_guess": "word_guess",
}


class UnknownGameError(KeyError):
    """Raised when a game name is not in the registry."""


def create_engine(
    game: str,
    settings: ArcadeSettings | None = None,
    rng: random.Random | None = None,
) -> GameEngine:
    """Build the engine registered under `game`."""
    try:
        engine_type = ENGINE_TYPES[game]
    except KeyError:
        raise UnknownGameError(game) from None
    settings = settings or get_settings()
    return engine_type(settings=getattr(settings, _SETTINGS_SECTION[game]), rng=rng)


__all__ = [
    "ENGINE_TYPES",
    "UnknownGameError",
    "create_engine",
    "TicTacToeEngine",
    "ConnectFourEngine",
    "SnakeEngine",
    "PongEngine",
    "MemoryMatchEngine",
    "WordGuessEngine",
]
