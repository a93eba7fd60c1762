"""
Session Module - Hosts mounted games.

A session represents one mounted game:
- Created when the host mounts a game
- Owns the game's timers
- Forwards commands, runs ticks and delayed resolves
- Cancels everything when reset or unmounted

Sessions are EPHEMERAL: no persistence of any kind.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
]
