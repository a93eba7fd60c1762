"""
Game State - Shared building blocks for every engine's state.

Design principles:
- Immutable: engine states are frozen dataclasses, replaced wholesale
- Serializable: any state converts to plain dicts for a host to render
- Game-agnostic: each engine defines its own status enum and fields
"""

from __future__ import annotations
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any


class OutcomeKind(Enum):
    """How a game ended, from the host's point of view."""
    NONE = "none"
    WIN = "win"
    DRAW = "draw"
    LOSS = "loss"


@dataclass(frozen=True)
class Outcome:
    """
    Result of a game.

    `player` names the winner for two-player games ("X", "1", ...),
    and is None for draws, losses and single-player wins.
    """
    kind: OutcomeKind = OutcomeKind.NONE
    player: str | None = None

    @classmethod
    def none(cls) -> Outcome:
        return cls()

    @classmethod
    def win(cls, player: str | None = None) -> Outcome:
        return cls(kind=OutcomeKind.WIN, player=player)

    @classmethod
    def draw(cls) -> Outcome:
        return cls(kind=OutcomeKind.DRAW)

    @classmethod
    def loss(cls) -> Outcome:
        return cls(kind=OutcomeKind.LOSS)

    @property
    def is_decided(self) -> bool:
        return self.kind != OutcomeKind.NONE


@dataclass(frozen=True)
class Position:
    """A grid cell or a point on a continuous field."""
    x: float
    y: float

    def moved(self, dx: float, dy: float) -> Position:
        return Position(self.x + dx, self.y + dy)


def state_to_dict(value: Any) -> Any:
    """
    Convert a state (or any part of one) into JSON-friendly values.

    Dataclasses become dicts, enums their values, tuples/sets lists.
    Fields starting with an underscore are skipped.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: state_to_dict(getattr(value, f.name))
            for f in fields(value)
            if not f.name.startswith("_")
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (frozenset, set)):
        return sorted(state_to_dict(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [state_to_dict(v) for v in value]
    if isinstance(value, dict):
        return {str(k): state_to_dict(v) for k, v in value.items()}
    return value
