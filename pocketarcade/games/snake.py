"""
Snake - Grid simulation driven by a tick clock.

States:
    PLAYING  -> ticks move the snake
    PAUSED   -> ticks do nothing; turns are still recorded
    GAME_OVER

The tick interval shrinks by 1 ms per point of score down to a floor,
and is re-read by the host after every tick.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

from ..config import SnakeSettings, get_settings
from ..engine_core import (
    Command, CommandResult, CommandType, Direction, GameEngine, Outcome, Position,
)
from ..engine_core.randomness import random_cell


class SnakeStatus(Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class SnakeState:
    segments: tuple[Position, ...]  # head first
    food: Position
    heading: Direction = Direction.RIGHT
    # Heading used by the most recent tick; reversal is judged against it
    moved_heading: Direction = Direction.RIGHT
    score: int = 0
    status: SnakeStatus = SnakeStatus.PLAYING
    ticks: int = 0

    @property
    def head(self) -> Position:
        return self.segments[0]

    @property
    def length(self) -> int:
        return len(self.segments)


def in_bounds(cell: Position, grid_size: int) -> bool:
    return 0 <= cell.x < grid_size and 0 <= cell.y < grid_size


def collides(state: SnakeState, new_head: Position, grid_size: int, eating: bool) -> bool:
    """
    Wall or body collision for the next head position.

    The tail cell vacates this tick unless the snake is growing,
    so it only counts when eating.
    """
    if not in_bounds(new_head, grid_size):
        return True
    body = state.segments if eating else state.segments[:-1]
    return new_head in body


def tick_interval_ms(score: int, settings: SnakeSettings) -> int:
    return max(settings.min_interval_ms, settings.initial_interval_ms - score)


class SnakeEngine(GameEngine[SnakeState]):
    name = "snake"

    def _default_settings(self) -> SnakeSettings:
        return get_settings().snake

    def _new_state(self) -> SnakeState:
        start = Position(self.settings.start_x, self.settings.start_y)
        return SnakeState(segments=(start,), food=self._place_food())

    def _place_food(self) -> Position:
        # Uniform over the whole grid, body included
        x, y = random_cell(self.rng, self.settings.grid_size, self.settings.grid_size)
        return Position(x, y)

    def _handlers(self):
        return {
            CommandType.TURN: self._handle_turn,
            CommandType.TOGGLE_PAUSE: self._handle_toggle_pause,
        }

    def _handle_turn(self, state: SnakeState, command: Command) -> CommandResult:
        direction = command.params.get("direction")
        if not isinstance(direction, Direction):
            return CommandResult.rejected(state, f"Not a direction: {direction!r}")
        if direction == state.moved_heading.opposite:
            return CommandResult.rejected(state, "Cannot reverse into the body")
        return CommandResult.accept(replace(state, heading=direction))

    def _handle_toggle_pause(self, state: SnakeState, command: Command) -> CommandResult:
        status = SnakeStatus.PAUSED if state.status == SnakeStatus.PLAYING else SnakeStatus.PLAYING
        return CommandResult.accept(replace(state, status=status))

    def tick(self, state: SnakeState, elapsed_ms: float = 0.0) -> SnakeState:
        """One grid step. Elapsed time is ignored; the host paces ticks."""
        if state.status != SnakeStatus.PLAYING:
            return state

        dx, dy = state.heading.vector
        new_head = state.head.moved(dx, dy)
        eating = new_head == state.food

        if collides(state, new_head, self.settings.grid_size, eating):
            return replace(state, status=SnakeStatus.GAME_OVER, moved_heading=state.heading)

        if eating:
            return replace(
                state,
                segments=(new_head,) + state.segments,
                food=self._place_food(),
                score=state.score + self.settings.points_per_food,
                moved_heading=state.heading,
                ticks=state.ticks + 1,
            )
        return replace(
            state,
            segments=(new_head,) + state.segments[:-1],
            moved_heading=state.heading,
            ticks=state.ticks + 1,
        )

    def tick_interval_ms(self, state: SnakeState) -> int | None:
        if state.status != SnakeStatus.PLAYING:
            return None
        return tick_interval_ms(state.score, self.settings)

    def is_terminal(self, state: SnakeState) -> bool:
        return state.status == SnakeStatus.GAME_OVER

    def outcome(self, state: SnakeState) -> Outcome:
        return Outcome.loss() if self.is_terminal(state) else Outcome.none()
