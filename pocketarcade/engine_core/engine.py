"""
Engine - Applies commands to game state.

Every game implements GameEngine. The engine holds configuration and a
random source only; all game data lives in the state it is handed.

Design principles:
- (state, command) -> CommandResult, never mutating the input state
- Validates before applying; invalid input is rejected, not raised
- One handler per command type, looked up from a table
- Terminal states accept nothing but NEW_GAME
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import logging
import random
from typing import Any, Callable, Generic, TypeVar

from .action import Command, CommandResult, CommandType
from .randomness import new_rng
from .state import Outcome, state_to_dict

logger = logging.getLogger(__name__)

S = TypeVar("S")

Handler = Callable[[Any, Command], CommandResult]


class GameEngine(ABC, Generic[S]):
    """
    Base class for the six engines.

    Subclasses implement:
    - _new_state(): a fresh playable state using self.rng
    - _handlers(): command type -> handler
    - is_terminal() / outcome()

    Time-driven engines also override tick() and tick_interval_ms();
    Memory-Match overrides pending_delay_ms().
    """

    name: str = ""

    def __init__(self, settings: Any = None, rng: random.Random | None = None):
        self.settings = settings if settings is not None else self._default_settings()
        self.rng = rng if rng is not None else new_rng()

    @abstractmethod
    def _default_settings(self) -> Any:
        """Settings section used when none is given."""

    @abstractmethod
    def _new_state(self) -> S:
        """Build a fresh state from settings and self.rng."""

    @abstractmethod
    def _handlers(self) -> dict[CommandType, Handler]:
        """Handlers for the command types this engine accepts."""

    @abstractmethod
    def is_terminal(self, state: S) -> bool:
        """True once no further moves are accepted."""

    @abstractmethod
    def outcome(self, state: S) -> Outcome:
        """Win/draw/loss, or Outcome.none() while undecided."""

    def initialize(self, seed: int | None = None) -> S:
        """Produce a fresh state, reseeding the random source if a seed is given."""
        if seed is not None:
            self.rng = new_rng(seed)
        return self._new_state()

    def reset(self, seed: int | None = None) -> S:
        """Discard everything and start over."""
        return self.initialize(seed)

    def apply_command(self, state: S, command: Command) -> CommandResult:
        """
        Apply a command to the state.

        Returns CommandResult with the new state, or the unchanged
        state and a reason when the command is rejected.
        """
        if command.command_type == CommandType.NEW_GAME:
            return CommandResult.accept(self.reset(command.params.get("seed")))

        handler = self._handlers().get(command.command_type)
        if handler is None:
            return self._reject(
                state, f"{self.name} does not accept {command.command_type.value}"
            )

        if self.is_terminal(state):
            return self._reject(state, "Game is over - start a new game")

        result = handler(state, command)
        if not result.accepted:
            logger.debug("%s rejected %s: %s", self.name, command.command_type.value, result.reason)
        return result

    def accepted_commands(self) -> list[CommandType]:
        """Command types this engine handles, NEW_GAME included."""
        return list(self._handlers()) + [CommandType.NEW_GAME]

    def tick(self, state: S, elapsed_ms: float = 0.0) -> S:
        """Advance the simulation one step. Turn-based engines do nothing."""
        return state

    def tick_interval_ms(self, state: S) -> float | None:
        """Delay before the next tick, or None when the clock should stop."""
        return None

    def pending_delay_ms(self, state: S) -> int | None:
        """Delay before Command.resolve() is due, if any."""
        return None

    def view(self, state: S) -> dict[str, Any]:
        """Plain-dict view of the state for a presentation layer."""
        return state_to_dict(state)

    def _reject(self, state: S, reason: str) -> CommandResult:
        logger.debug("%s rejected command: %s", self.name, reason)
        return CommandResult.rejected(state, reason)


def apply_command(engine: GameEngine, state: Any, command: Command) -> Any:
    """
    Convenience function for applying a command.

    Returns the resulting state; rejected commands return `state` itself.
    """
    return engine.apply_command(state, command).state
