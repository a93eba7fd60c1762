"""
Pytest fixtures for Pocket Arcade tests.
"""

import pytest

from ..config import ArcadeSettings
from ..engine_core import new_rng
from ..games import (
    TicTacToeEngine,
    ConnectFourEngine,
    SnakeEngine,
    PongEngine,
    MemoryMatchEngine,
    WordGuessEngine,
)
from ..session import SessionManager


@pytest.fixture
def settings() -> ArcadeSettings:
    """Default settings, independent of the environment."""
    return ArcadeSettings()


@pytest.fixture
def tictactoe(settings) -> TicTacToeEngine:
    return TicTacToeEngine(settings=settings.tictactoe)


@pytest.fixture
def connect_four(settings) -> ConnectFourEngine:
    return ConnectFourEngine(settings=settings.connect_four)


@pytest.fixture
def snake(settings) -> SnakeEngine:
    return SnakeEngine(settings=settings.snake, rng=new_rng(42))


@pytest.fixture
def pong(settings) -> PongEngine:
    return PongEngine(settings=settings.pong, rng=new_rng(42))


@pytest.fixture
def memory(settings) -> MemoryMatchEngine:
    return MemoryMatchEngine(settings=settings.memory, rng=new_rng(42))


@pytest.fixture
def word_guess(settings) -> WordGuessEngine:
    return WordGuessEngine(settings=settings.word_guess, rng=new_rng(42))


@pytest.fixture
def manager(settings) -> SessionManager:
    """A session manager; every session is ended after the test."""
    manager = SessionManager(settings=settings)
    yield manager
    manager.end_all()
