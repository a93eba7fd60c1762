"""
Session Manager - Hosts engine instances for a presentation layer.

A session is one mounted game:
- Created when the host mounts a game
- Holds the current state and the game's timers
- Forwards player commands to the engine
- Runs ticks (Snake, Pong) and delayed resolves (Memory-Match)
- Destroyed when the host unmounts it

TIMER SAFETY:
Every timer captures the session generation it was scheduled under.
new_game() and end() cancel all timers and bump the generation before
the old state is dropped, so a late callback can never touch a state
that is no longer current.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import time
import uuid

from ..config import ArcadeSettings
from ..engine_core import Command, CommandResult, CommandType, GameEngine, Scheduler, TimerHandle
from ..games import create_engine

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a hosted game."""
    ACTIVE = "active"
    ENDED = "ended"


@dataclass
class Session:
    """
    One mounted game and its clock.

    The scheduler is virtual: the host (or GameLoop) calls advance()
    with elapsed milliseconds.
    """
    session_id: str
    game: str
    engine: GameEngine
    created_at: float

    state: SessionState = SessionState.ACTIVE
    game_state: Any = None
    scheduler: Scheduler = field(default_factory=Scheduler)
    generation: int = 0

    _tick_handle: TimerHandle | None = None
    _resolve_handle: TimerHandle | None = None

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def start(self, seed: int | None = None) -> Any:
        """Create the first state and arm any timers it needs."""
        self.game_state = self.engine.initialize(seed)
        self._sync_timers()
        return self.game_state

    def submit(self, command: Command) -> CommandResult:
        """Apply one player command."""
        if not self.is_active():
            return CommandResult.rejected(self.game_state, "Session has ended")

        if command.command_type == CommandType.NEW_GAME:
            return CommandResult.accept(self.new_game(command.params.get("seed")))

        if command.command_type == CommandType.RESOLVE:
            return CommandResult.rejected(self.game_state, "Pairs resolve on their own timer")

        result = self.engine.apply_command(self.game_state, command)
        if result.accepted:
            self.game_state = result.state
            self._sync_timers()
        return result

    def new_game(self, seed: int | None = None) -> Any:
        """Discard the current game, including its pending timers."""
        self._invalidate_timers()
        self.game_state = self.engine.reset(seed)
        self._sync_timers()
        logger.info("session %s: new %s game", self.session_id, self.game)
        return self.game_state

    def advance(self, elapsed_ms: float) -> int:
        """Let time pass; returns how many timers fired."""
        if not self.is_active():
            return 0
        return self.scheduler.advance(elapsed_ms)

    def end(self) -> None:
        """Stop every timer and drop the state."""
        self._invalidate_timers()
        self.state = SessionState.ENDED
        self.game_state = None

    def is_terminal(self) -> bool:
        return self.game_state is not None and self.engine.is_terminal(self.game_state)

    def view(self) -> dict[str, Any]:
        return self.engine.view(self.game_state) if self.game_state is not None else {}

    def _invalidate_timers(self) -> None:
        self.scheduler.cancel_all()
        self._tick_handle = None
        self._resolve_handle = None
        self.generation += 1

    def _sync_timers(self) -> None:
        """Arm or disarm timers to match what the current state asks for."""
        generation = self.generation

        delay = self.engine.pending_delay_ms(self.game_state)
        if delay is None:
            self.scheduler.cancel(self._resolve_handle)
            self._resolve_handle = None
        elif not self._armed(self._resolve_handle):
            self._resolve_handle = self.scheduler.schedule(
                delay, lambda: self._on_resolve(generation), label=f"{self.game}:resolve"
            )

        interval = self.engine.tick_interval_ms(self.game_state)
        if interval is None:
            self.scheduler.cancel(self._tick_handle)
            self._tick_handle = None
        elif not self._armed(self._tick_handle):
            self._tick_handle = self.scheduler.schedule(
                interval, lambda: self._on_tick(generation, interval), label=f"{self.game}:tick"
            )

    @staticmethod
    def _armed(handle: TimerHandle | None) -> bool:
        return handle is not None and handle.active

    def _on_tick(self, generation: int, elapsed_ms: float) -> None:
        if generation != self.generation or not self.is_active():
            logger.debug("session %s: dropped stale tick", self.session_id)
            return
        self._tick_handle = None
        self.game_state = self.engine.tick(self.game_state, elapsed_ms)
        self._sync_timers()

    def _on_resolve(self, generation: int) -> None:
        if generation != self.generation or not self.is_active():
            logger.debug("session %s: dropped stale resolve", self.session_id)
            return
        self._resolve_handle = None
        result = self.engine.apply_command(self.game_state, Command.resolve())
        if result.accepted:
            self.game_state = result.state
        self._sync_timers()


class SessionManager:
    """
    Tracks mounted games.

    No persistence - sessions are in-memory only.
    """

    def __init__(self, settings: ArcadeSettings | None = None):
        self.settings = settings
        self._sessions: dict[str, Session] = {}

    def create_session(self, game: str, seed: int | None = None) -> Session:
        """
        Mount a new game.

        Raises UnknownGameError for names not in the registry.
        """
        engine = create_engine(game, settings=self.settings)
        session = Session(
            session_id=str(uuid.uuid4()),
            game=game,
            engine=engine,
            created_at=time.time(),
        )
        session.start(seed)
        self._sessions[session.session_id] = session
        logger.info("session %s: created %s", session.session_id, game)
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Unmount a game. Returns False if it was not found."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.end()
        logger.info("session %s: ended", session_id)
        return True

    def end_all(self) -> None:
        for session_id in list(self._sessions):
            self.end_session(session_id)

    def list_active_sessions(self) -> list[str]:
        return [sid for sid, s in self._sessions.items() if s.is_active()]

    def active_sessions(self) -> list[Session]:
        return [s for s in self._sessions.values() if s.is_active()]
