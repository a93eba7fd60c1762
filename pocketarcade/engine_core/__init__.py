"""
Engine Core - Shared machinery for the game engines.

Every engine:
1. Creates a seeded state
2. Applies commands through a handler table
3. Rejects invalid input without raising
4. Optionally advances on ticks or after a delay

Timers for those delays live in the Scheduler, owned by the host session.
"""

from .state import Outcome, OutcomeKind, Position, state_to_dict
from .action import Command, CommandType, CommandResult, Direction, Side
from .engine import GameEngine, apply_command
from .scheduler import Scheduler, TimerHandle
from .randomness import new_rng, shuffled, pick, random_cell

__all__ = [
    "Outcome",
    "OutcomeKind",
    "Position",
    "state_to_dict",
    "Command",
    "CommandType",
    "CommandResult",
    "Direction",
    "Side",
    "GameEngine",
    "apply_command",
    "Scheduler",
    "TimerHandle",
    "new_rng",
    "shuffled",
    "pick",
    "random_cell",
]
