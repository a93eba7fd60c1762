"""
API Module - Host interface.

A presentation layer (web page bridge, terminal, test):
1. Mounts a game
2. Forwards player input as commands
3. Lets time pass for timed games
4. Renders the snapshots it gets back

Everything is in-process; there is no network transport.
"""

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
    # Enums
    GameName,
    CommandName,
    ErrorCode,
)
from .service import ArcadeService

__all__ = [
    "CreateGameRequest",
    "CommandRequest",
    "AdvanceRequest",
    "GameSnapshot",
    "CommandResponse",
    "AdvanceResponse",
    "GameInfo",
    "SessionListResponse",
    "EndGameResponse",
    "ErrorResponse",
    "GameName",
    "CommandName",
    "ErrorCode",
    "ArcadeService",
]
