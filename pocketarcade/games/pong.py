"""
Pong - Two local players, continuous ball physics, one step per frame.

Coordinates are pixels with the origin at the top-left; the ball position
is its top-left corner and paddle positions are their top edges. Velocity
is in pixels per frame. There is no terminal state: the rally continues
until the host stops the game, and scores only accumulate.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

from ..config import PongSettings, get_settings
from ..engine_core import (
    Command, CommandResult, CommandType, Direction, GameEngine, Outcome, Position, Side,
)
from ..engine_core.randomness import random_sign


class PongStatus(Enum):
    IDLE = "idle"
    PLAYING = "playing"


@dataclass(frozen=True)
class Velocity:
    dx: float
    dy: float


@dataclass(frozen=True)
class PongState:
    ball: Position
    velocity: Velocity
    left_paddle: float
    right_paddle: float
    left_score: int = 0
    right_score: int = 0
    status: PongStatus = PongStatus.IDLE
    rally_hits: int = 0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def capped(velocity: Velocity, max_speed: float) -> Velocity:
    """Scale both components down so neither exceeds max_speed."""
    fastest = max(abs(velocity.dx), abs(velocity.dy))
    if fastest <= max_speed:
        return velocity
    factor = max_speed / fastest
    return Velocity(velocity.dx * factor, velocity.dy * factor)


def paddle_covers(paddle_top: float, y: float, paddle_height: float) -> bool:
    return paddle_top <= y <= paddle_top + paddle_height


class PongEngine(GameEngine[PongState]):
    name = "pong"

    def _default_settings(self) -> PongSettings:
        return get_settings().pong

    def _new_state(self) -> PongState:
        s = self.settings
        middle = s.height / 2
        return PongState(
            ball=self._center(),
            velocity=Velocity(s.serve_speed, s.serve_speed),
            left_paddle=clamp(middle, 0, s.height - s.paddle_height),
            right_paddle=clamp(middle, 0, s.height - s.paddle_height),
        )

    def _center(self) -> Position:
        return Position(self.settings.width / 2, self.settings.height / 2)

    def _serve(self) -> Velocity:
        speed = self.settings.serve_speed
        return Velocity(
            dx=random_sign(self.rng) * speed,
            dy=(self.rng.random() * 2 - 1) * speed,
        )

    def _handlers(self):
        return {
            CommandType.START: self._handle_start,
            CommandType.STOP: self._handle_stop,
            CommandType.MOVE_PADDLE: self._handle_move_paddle,
        }

    def _handle_start(self, state: PongState, command: Command) -> CommandResult:
        return CommandResult.accept(replace(
            state,
            ball=self._center(),
            velocity=self._serve(),
            left_score=0,
            right_score=0,
            status=PongStatus.PLAYING,
            rally_hits=0,
        ))

    def _handle_stop(self, state: PongState, command: Command) -> CommandResult:
        if state.status != PongStatus.PLAYING:
            return CommandResult.rejected(state, "Game is not running")
        return CommandResult.accept(replace(state, status=PongStatus.IDLE))

    def _handle_move_paddle(self, state: PongState, command: Command) -> CommandResult:
        if state.status != PongStatus.PLAYING:
            return CommandResult.rejected(state, "Paddles only move during play")

        side = command.params.get("side")
        direction = command.params.get("direction")
        if not isinstance(side, Side):
            return CommandResult.rejected(state, f"Not a paddle side: {side!r}")
        if direction not in (Direction.UP, Direction.DOWN):
            return CommandResult.rejected(state, f"Paddles move up or down, not {direction!r}")

        step = -self.settings.paddle_step if direction == Direction.UP else self.settings.paddle_step
        highest = self.settings.height - self.settings.paddle_height
        if side == Side.LEFT:
            return CommandResult.accept(replace(
                state, left_paddle=clamp(state.left_paddle + step, 0, highest)
            ))
        return CommandResult.accept(replace(
            state, right_paddle=clamp(state.right_paddle + step, 0, highest)
        ))

    def tick(self, state: PongState, elapsed_ms: float = 0.0) -> PongState:
        """
        Advance the ball by one frame.

        Order: move, bounce off top/bottom, paddle contact, then scoring.
        A paddle only returns a ball travelling toward it.
        """
        if state.status != PongStatus.PLAYING:
            return state

        s = self.settings
        x = state.ball.x + state.velocity.dx
        y = state.ball.y + state.velocity.dy
        dx, dy = state.velocity.dx, state.velocity.dy

        bottom = s.height - s.ball_size
        if y <= 0 or y >= bottom:
            dy = -dy
            y = clamp(y, 0, bottom)

        right_face = s.width - s.paddle_width - s.ball_size
        hit = False
        if dx < 0 and x <= s.paddle_width and paddle_covers(state.left_paddle, y, s.paddle_height):
            x = s.paddle_width
            hit = True
        elif dx > 0 and x >= right_face and paddle_covers(state.right_paddle, y, s.paddle_height):
            x = right_face
            hit = True

        if hit:
            velocity = capped(Velocity(-dx * s.hit_multiplier, dy * s.hit_multiplier), s.max_ball_speed)
            return replace(
                state,
                ball=Position(x, y),
                velocity=velocity,
                rally_hits=state.rally_hits + 1,
            )

        if x <= 0:
            return replace(
                state,
                ball=self._center(),
                velocity=self._serve(),
                right_score=state.right_score + 1,
                rally_hits=0,
            )
        if x >= s.width - s.ball_size:
            return replace(
                state,
                ball=self._center(),
                velocity=self._serve(),
                left_score=state.left_score + 1,
                rally_hits=0,
            )

        return replace(state, ball=Position(x, y), velocity=Velocity(dx, dy))

    def tick_interval_ms(self, state: PongState) -> int | None:
        if state.status != PongStatus.PLAYING:
            return None
        return self.settings.frame_interval_ms

    def is_terminal(self, state: PongState) -> bool:
        return False

    def outcome(self, state: PongState) -> Outcome:
        return Outcome.none()
