"""
Arcade Service - The in-process contract between a host page and the engines.

The service:
1. Mounts and unmounts games (sessions)
2. Validates incoming command payloads
3. Lets time pass for timed games
4. Formats snapshots for rendering

This layer is framework-agnostic: a web page bridge, a terminal front end,
or a test can call it directly. Errors come back as ErrorResponse models
rather than exceptions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from .schemas import (
    # Requests
    CreateGameRequest,
    CommandRequest,
    AdvanceRequest,
    # Responses
    GameSnapshot,
    CommandResponse,
    AdvanceResponse,
    GameInfo,
    SessionListResponse,
    EndGameResponse,
    ErrorResponse,
    OutcomeInfo,
    # Enums
    GameName,
    CommandName,
    ErrorCode,
)
from ..games import ENGINE_TYPES, UnknownGameError, create_engine
from ..session import Session, SessionManager


@dataclass
class ArcadeService:
    """
    Main service for a presentation layer.

    Usage:
        service = ArcadeService()
        snapshot = service.create_game(CreateGameRequest(game="snake", seed=7))
        service.send_command(snapshot.session_id, {"command": "turn", "direction": "up"})
        service.advance(snapshot.session_id, AdvanceRequest(elapsed_ms=150))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def list_games(self) -> list[GameInfo]:
        """Describe every registered game and the commands it accepts."""
        games = []
        for name in ENGINE_TYPES:
            engine = create_engine(name, settings=self.session_manager.settings)
            accepted = {t.value for t in engine.accepted_commands()}
            games.append(GameInfo(
                name=GameName(name),
                timed=name in ("snake", "pong"),
                commands=[c for c in CommandName if c.value in accepted],
            ))
        return games

    def create_game(self, request: CreateGameRequest | dict[str, Any]) -> GameSnapshot | ErrorResponse:
        """Mount a game and return its first snapshot."""
        try:
            request = CreateGameRequest.model_validate(request)
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            bad_game = any(error["loc"][:1] == ("game",) for error in errors)
            return ErrorResponse(
                error="Unknown game" if bad_game else "Invalid game request",
                error_code=ErrorCode.UNKNOWN_GAME if bad_game else ErrorCode.INVALID_COMMAND,
                details={"errors": errors},
            )

        try:
            session = self.session_manager.create_session(request.game.value, seed=request.seed)
        except UnknownGameError:
            return ErrorResponse(
                error=f"Unknown game: {request.game.value}",
                error_code=ErrorCode.UNKNOWN_GAME,
            )
        return self._snapshot(session)

    def get_snapshot(self, session_id: str) -> GameSnapshot | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._snapshot(session)

    def send_command(
        self, session_id: str, request: CommandRequest | dict[str, Any]
    ) -> CommandResponse | ErrorResponse:
        """
        Forward one player command.

        Rejected moves are not errors: the response has accepted=False
        and the unchanged snapshot.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        try:
            request = CommandRequest.model_validate(request)
        except ValidationError as e:
            return ErrorResponse(
                error="Invalid command",
                error_code=ErrorCode.INVALID_COMMAND,
                details={"errors": e.errors(include_url=False, include_context=False)},
            )

        result = session.submit(request.to_command())
        return CommandResponse(
            accepted=result.accepted,
            reason=result.reason,
            snapshot=self._snapshot(session),
        )

    def advance(
        self, session_id: str, request: AdvanceRequest | dict[str, Any]
    ) -> AdvanceResponse | ErrorResponse:
        """Let `elapsed_ms` pass on the session clock."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        try:
            request = AdvanceRequest.model_validate(request)
        except ValidationError as e:
            return ErrorResponse(
                error="Invalid advance request",
                error_code=ErrorCode.INVALID_COMMAND,
                details={"errors": e.errors(include_url=False, include_context=False)},
            )

        fired = session.advance(request.elapsed_ms)
        return AdvanceResponse(timers_fired=fired, snapshot=self._snapshot(session))

    def new_game(self, session_id: str, seed: int | None = None) -> GameSnapshot | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.new_game(seed)
        return self._snapshot(session)

    def end_game(self, session_id: str) -> EndGameResponse:
        success = self.session_manager.end_session(session_id)
        return EndGameResponse(success=success, session_id=session_id)

    def list_sessions(self) -> SessionListResponse:
        sessions = self.session_manager.list_active_sessions()
        return SessionListResponse(sessions=sessions, total=len(sessions))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _snapshot(self, session: Session) -> GameSnapshot:
        engine = session.engine
        state = session.game_state
        outcome = engine.outcome(state)
        view = session.view()
        return GameSnapshot(
            session_id=session.session_id,
            game=GameName(session.game),
            status=view.get("status", ""),
            is_terminal=engine.is_terminal(state),
            outcome=OutcomeInfo(kind=outcome.kind.value, player=outcome.player),
            state=view,
            tick_interval_ms=engine.tick_interval_ms(state),
            pending_delay_ms=engine.pending_delay_ms(state),
            clock_ms=session.scheduler.now_ms,
        )

    @staticmethod
    def _not_found(session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error="Session not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": session_id},
        )
