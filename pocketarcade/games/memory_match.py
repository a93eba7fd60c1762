"""
Memory-Match - Find the pairs among twelve face-down cards.

States:
    SELECTING   -> up to two cards may be flipped
    EVALUATING  -> a pair is face up; flips are refused until resolved
    WON         -> every card matched

Revealing the second card records a pending comparison. The engine does
not keep time itself: pending_delay_ms() tells the host how long to wait
(short for a match, longer for a mismatch) before issuing
Command.resolve().
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ..config import MemorySettings, get_settings
from ..engine_core import Command, CommandResult, CommandType, GameEngine, Outcome, state_to_dict
from ..engine_core.randomness import shuffled


class MemoryStatus(Enum):
    SELECTING = "selecting"
    EVALUATING = "evaluating"
    WON = "won"


@dataclass(frozen=True)
class Card:
    card_id: int
    value: str
    face_up: bool = False
    matched: bool = False


@dataclass(frozen=True)
class PendingPair:
    first: int
    second: int
    is_match: bool
    delay_ms: int


@dataclass(frozen=True)
class MemoryState:
    cards: tuple[Card, ...]
    face_up: tuple[int, ...] = ()
    moves: int = 0
    status: MemoryStatus = MemoryStatus.SELECTING
    pending: PendingPair | None = None

    @property
    def matched_count(self) -> int:
        return sum(1 for card in self.cards if card.matched)


def deal(values: list[str]) -> tuple[Card, ...]:
    return tuple(Card(card_id=i, value=v) for i, v in enumerate(values))


def all_matched(cards: tuple[Card, ...]) -> bool:
    return all(card.matched for card in cards)


def _with_cards(cards: tuple[Card, ...], indices: tuple[int, ...], **changes) -> tuple[Card, ...]:
    return tuple(replace(c, **changes) if i in indices else c for i, c in enumerate(cards))


class MemoryMatchEngine(GameEngine[MemoryState]):
    name = "memory_match"

    def _default_settings(self) -> MemorySettings:
        return get_settings().memory

    def _new_state(self) -> MemoryState:
        return MemoryState(cards=deal(shuffled(self.rng, self.settings.card_values)))

    def _handlers(self):
        return {
            CommandType.FLIP: self._handle_flip,
            CommandType.RESOLVE: self._handle_resolve,
        }

    def _handle_flip(self, state: MemoryState, command: Command) -> CommandResult:
        index = command.params.get("card")
        if state.status == MemoryStatus.EVALUATING or len(state.face_up) >= 2:
            return CommandResult.rejected(state, "Waiting for the current pair to resolve")
        if not isinstance(index, int) or not 0 <= index < len(state.cards):
            return CommandResult.rejected(state, f"No such card: {index!r}")

        card = state.cards[index]
        if card.matched:
            return CommandResult.rejected(state, f"Card {index} is already matched")
        if card.face_up:
            return CommandResult.rejected(state, f"Card {index} is already face up")

        cards = _with_cards(state.cards, (index,), face_up=True)
        face_up = state.face_up + (index,)
        if len(face_up) < 2:
            return CommandResult.accept(replace(state, cards=cards, face_up=face_up))

        first, second = face_up
        is_match = cards[first].value == cards[second].value
        delay = self.settings.match_delay_ms if is_match else self.settings.mismatch_delay_ms
        return CommandResult.accept(replace(
            state,
            cards=cards,
            face_up=face_up,
            moves=state.moves + 1,
            status=MemoryStatus.EVALUATING,
            pending=PendingPair(first, second, is_match, delay),
        ))

    def _handle_resolve(self, state: MemoryState, command: Command) -> CommandResult:
        pending = state.pending
        if pending is None:
            return CommandResult.rejected(state, "No pair to resolve")

        pair = (pending.first, pending.second)
        if pending.is_match:
            cards = _with_cards(state.cards, pair, matched=True)
            status = MemoryStatus.WON if all_matched(cards) else MemoryStatus.SELECTING
        else:
            cards = _with_cards(state.cards, pair, face_up=False)
            status = MemoryStatus.SELECTING

        return CommandResult.accept(replace(
            state, cards=cards, face_up=(), status=status, pending=None
        ))

    def pending_delay_ms(self, state: MemoryState) -> int | None:
        return state.pending.delay_ms if state.pending else None

    def is_terminal(self, state: MemoryState) -> bool:
        return state.status == MemoryStatus.WON

    def outcome(self, state: MemoryState) -> Outcome:
        return Outcome.win() if self.is_terminal(state) else Outcome.none()

    def view(self, state: MemoryState) -> dict[str, Any]:
        """Face-down cards hide their value."""
        data = state_to_dict(state)
        for card, shown in zip(state.cards, data["cards"]):
            if not (card.face_up or card.matched):
                shown["value"] = None
        return data
