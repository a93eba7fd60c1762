"""
Tests for the Pong engine.

Tests:
- Start / stop
- Paddle clamping
- Wall bounces, paddle hits, speed cap
- Scoring and re-serve
"""

from dataclasses import replace

import pytest

from ..engine_core import Command, Direction, OutcomeKind, Position, Side, apply_command
from ..games.pong import PongStatus, Velocity


@pytest.fixture
def playing(pong):
    """A started rally."""
    return apply_command(pong, pong.initialize(), Command.start())


def ball_at(state, x, y, dx, dy):
    return replace(state, ball=Position(x, y), velocity=Velocity(dx, dy))


class TestStartStop:
    """Tests for the idle/playing machine."""

    def test_starts_idle(self, pong):
        state = pong.initialize()
        assert state.status == PongStatus.IDLE
        assert pong.tick(state) is state
        assert pong.tick_interval_ms(state) is None

    def test_start_serves_from_center(self, pong, playing):
        assert playing.status == PongStatus.PLAYING
        assert playing.ball == Position(300, 200)
        assert abs(playing.velocity.dx) == 5
        assert -5 <= playing.velocity.dy <= 5
        assert (playing.left_score, playing.right_score) == (0, 0)
        assert pong.tick_interval_ms(playing) == 16

    def test_start_resets_scores(self, pong, playing):
        state = replace(playing, left_score=3, right_score=4)
        state = apply_command(pong, state, Command.start())
        assert (state.left_score, state.right_score) == (0, 0)

    def test_stop_returns_to_idle(self, pong, playing):
        state = apply_command(pong, playing, Command.stop())
        assert state.status == PongStatus.IDLE

    def test_never_terminal(self, pong, playing):
        state = replace(playing, left_score=99)
        assert not pong.is_terminal(state)
        assert pong.outcome(state).kind == OutcomeKind.NONE


class TestPaddles:
    """Tests for paddle movement."""

    def test_paddles_frozen_while_idle(self, pong):
        state = pong.initialize()
        result = pong.apply_command(state, Command.move_paddle(Side.LEFT, Direction.UP))
        assert not result.accepted
        assert result.state is state

    def test_paddle_step(self, pong, playing):
        state = apply_command(pong, playing, Command.move_paddle(Side.RIGHT, Direction.DOWN))
        assert state.right_paddle == playing.right_paddle + 20
        assert state.left_paddle == playing.left_paddle

    def test_paddle_clamped_to_field(self, pong, playing):
        """Paddle top stays within [0, height - paddle_height]."""
        state = playing
        for _ in range(30):
            state = apply_command(pong, state, Command.move_paddle(Side.LEFT, Direction.UP))
        assert state.left_paddle == 0

        for _ in range(30):
            state = apply_command(pong, state, Command.move_paddle(Side.LEFT, Direction.DOWN))
        assert state.left_paddle == 300

    def test_sideways_paddle_move_rejected(self, pong, playing):
        result = pong.apply_command(playing, Command.move_paddle(Side.LEFT, Direction.LEFT))
        assert not result.accepted


class TestBall:
    """Tests for ball physics."""

    def test_ball_moves_by_velocity(self, pong, playing):
        state = pong.tick(ball_at(playing, 100, 100, 3, -2))
        assert state.ball == Position(103, 98)

    def test_bounces_off_top(self, pong, playing):
        state = pong.tick(ball_at(playing, 100, 2, 3, -5))
        assert state.velocity.dy == 5
        assert state.ball.y == 0

    def test_bounces_off_bottom(self, pong, playing):
        state = pong.tick(ball_at(playing, 100, 388, 3, 5))
        assert state.velocity.dy == -5
        assert state.ball.y == 390

    def test_paddle_hit_reverses_and_speeds_up(self, pong, playing):
        # Left paddle covers y 200..300
        state = pong.tick(ball_at(playing, 14, 250, -5, 1))

        assert state.velocity.dx == pytest.approx(5.5)
        assert state.velocity.dy == pytest.approx(1.1)
        assert state.ball.x == 10
        assert state.rally_hits == 1
        assert (state.left_score, state.right_score) == (0, 0)

    def test_right_paddle_hit(self, pong, playing):
        state = pong.tick(ball_at(playing, 576, 250, 5, 0))
        assert state.velocity.dx == pytest.approx(-5.5)
        assert state.ball.x == 580

    def test_speed_is_capped(self, pong, playing):
        state = pong.tick(ball_at(playing, 25, 250, -19, 0))
        assert state.velocity.dx == pytest.approx(20)


class TestScoring:
    """Tests for points and re-serve."""

    def test_left_exit_scores_right(self, pong, playing):
        # Ball passes above the left paddle
        state = pong.tick(ball_at(playing, 3, 50, -5, 0))

        assert state.right_score == 1
        assert state.left_score == 0
        assert state.ball == Position(300, 200)
        assert abs(state.velocity.dx) == 5

    def test_right_exit_scores_left(self, pong, playing):
        state = pong.tick(ball_at(playing, 588, 50, 5, 0))

        assert state.left_score == 1
        assert state.right_score == 0
        assert state.ball == Position(300, 200)

    def test_rally_speed_resets_after_point(self, pong, playing):
        state = pong.tick(ball_at(playing, 3, 50, -18, 0))
        assert abs(state.velocity.dx) == 5
        assert state.rally_hits == 0
