"""
Settings - Tunable constants for every engine, plus logging setup.

Defaults reproduce the classic arcade feel. Any value can be overridden
from the environment:

    ARCADE_LOG_LEVEL              DEBUG / INFO / WARNING ...
    ARCADE_SNAKE_GRID_SIZE        cells per side
    ARCADE_SNAKE_MIN_INTERVAL_MS  fastest snake tick
    ARCADE_PONG_MAX_BALL_SPEED    cap on ball speed per axis
    ARCADE_MEMORY_MATCH_DELAY_MS
    ARCADE_MEMORY_MISMATCH_DELAY_MS
    ARCADE_WORD_MAX_TRIES
"""

from __future__ import annotations
import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class TicTacToeSettings(BaseModel):
    """Tic-Tac-Toe has nothing to tune beyond who opens."""
    first_mark: str = Field("X", pattern="^[XO]$")


class ConnectFourSettings(BaseModel):
    rows: int = Field(6, ge=4)
    columns: int = Field(7, ge=4)
    run_length: int = Field(4, ge=2)

    @model_validator(mode="after")
    def _run_fits_board(self) -> ConnectFourSettings:
        if self.run_length > max(self.rows, self.columns):
            raise ValueError("run_length does not fit on the board")
        return self


class SnakeSettings(BaseModel):
    grid_size: int = Field(20, ge=5)
    start_x: int = Field(10, ge=0)
    start_y: int = Field(10, ge=0)
    points_per_food: int = Field(10, gt=0)
    initial_interval_ms: int = Field(150, gt=0)
    min_interval_ms: int = Field(50, gt=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> SnakeSettings:
        if self.start_x >= self.grid_size or self.start_y >= self.grid_size:
            raise ValueError("snake start cell lies outside the grid")
        if self.min_interval_ms > self.initial_interval_ms:
            raise ValueError("min_interval_ms exceeds initial_interval_ms")
        return self


class PongSettings(BaseModel):
    width: int = Field(600, gt=0)
    height: int = Field(400, gt=0)
    paddle_width: int = Field(10, gt=0)
    paddle_height: int = Field(100, gt=0)
    paddle_step: int = Field(20, gt=0)
    ball_size: int = Field(10, gt=0)
    serve_speed: float = Field(5.0, gt=0)
    hit_multiplier: float = Field(1.1, ge=1.0)
    max_ball_speed: float = Field(20.0, gt=0)
    frame_interval_ms: int = Field(16, gt=0)

    @model_validator(mode="after")
    def _check_geometry(self) -> PongSettings:
        if self.paddle_height > self.height:
            raise ValueError("paddle is taller than the field")
        if self.max_ball_speed < self.serve_speed:
            raise ValueError("max_ball_speed is below serve_speed")
        return self


class MemorySettings(BaseModel):
    # Six symbols, each appearing twice.
    card_values: list[str] = Field(
        default_factory=lambda: [
            "🎮", "🎲", "🎯", "🎪", "🎨", "🎭",
            "🎪", "🎯", "🎲", "🎮", "🎨", "🎭",
        ]
    )
    match_delay_ms: int = Field(500, gt=0)
    mismatch_delay_ms: int = Field(1000, gt=0)

    @field_validator("card_values")
    @classmethod
    def _values_come_in_pairs(cls, values: list[str]) -> list[str]:
        if not values:
            raise ValueError("card_values must not be empty")
        for value in set(values):
            if values.count(value) != 2:
                raise ValueError(f"card value {value!r} must appear exactly twice")
        return values


class WordGuessSettings(BaseModel):
    words: list[str] = Field(
        default_factory=lambda: [
            "SRIVALLI", "NAVYA", "CHARAN", "JHANSI",
            "GOWTHAMI", "RISHITHA", "RAKESH", "VARSHIK",
            "LOKESH", "TEJ",
        ]
    )
    max_tries: int = Field(6, gt=0)

    @field_validator("words")
    @classmethod
    def _words_are_letters(cls, words: list[str]) -> list[str]:
        if not words:
            raise ValueError("word list must not be empty")
        normalized = [w.upper() for w in words]
        for word in normalized:
            if not word.isascii() or not word.isalpha():
                raise ValueError(f"word {word!r} must contain only letters A-Z")
        return normalized


class ArcadeSettings(BaseModel):
    """All engine settings in one place."""
    log_level: str = "WARNING"
    tictactoe: TicTacToeSettings = Field(default_factory=TicTacToeSettings)
    connect_four: ConnectFourSettings = Field(default_factory=ConnectFourSettings)
    snake: SnakeSettings = Field(default_factory=SnakeSettings)
    pong: PongSettings = Field(default_factory=PongSettings)
    memory: MemorySettings = Field(default_factory=MemorySettings)
    word_guess: WordGuessSettings = Field(default_factory=WordGuessSettings)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, level: str) -> str:
        level = level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {level}")
        return level


# Environment variable -> (section, field)
_ENV_OVERRIDES = {
    "ARCADE_SNAKE_GRID_SIZE": ("snake", "grid_size"),
    "ARCADE_SNAKE_MIN_INTERVAL_MS": ("snake", "min_interval_ms"),
    "ARCADE_PONG_MAX_BALL_SPEED": ("pong", "max_ball_speed"),
    "ARCADE_MEMORY_MATCH_DELAY_MS": ("memory", "match_delay_ms"),
    "ARCADE_MEMORY_MISMATCH_DELAY_MS": ("memory", "mismatch_delay_ms"),
    "ARCADE_WORD_MAX_TRIES": ("word_guess", "max_tries"),
}


def load_settings(environ: Optional[dict[str, str]] = None) -> ArcadeSettings:
    """
    Build settings from defaults plus ARCADE_* environment variables.

    Raises pydantic.ValidationError when a value is out of range.
    """
    environ = os.environ if environ is None else environ
    data: dict[str, dict] = {}
    for var, (section, name) in _ENV_OVERRIDES.items():
        value = environ.get(var)
        if value is not None:
            data.setdefault(section, {})[name] = value

    log_level = environ.get("ARCADE_LOG_LEVEL")
    if log_level:
        data["log_level"] = log_level

    return ArcadeSettings.model_validate(data)


_settings: Optional[ArcadeSettings] = None


def get_settings() -> ArcadeSettings:
    """Process-wide settings, loaded on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a single console handler to the package logger."""
    logger = logging.getLogger("pocketarcade")
    logger.setLevel(level or get_settings().log_level)

    # Prevent duplicate handlers
    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    ))
    logger.addHandler(handler)
    return logger
