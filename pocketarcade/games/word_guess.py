"""
Word-Guess - Hangman over a fixed word list.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ..config import WordGuessSettings, get_settings
from ..engine_core import Command, CommandResult, CommandType, GameEngine, Outcome, state_to_dict
from ..engine_core.randomness import pick


class WordStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class WordGuessState:
    word: str
    guessed: frozenset[str] = frozenset()
    tries_remaining: int = 6
    status: WordStatus = WordStatus.PLAYING


def is_solved(word: str, guessed: frozenset[str]) -> bool:
    return set(word) <= guessed


def masked_word(state: WordGuessState, mask: str = "_") -> str:
    """The word with unguessed letters replaced by `mask`."""
    return "".join(ch if ch in state.guessed else mask for ch in state.word)


def wrong_guesses(state: WordGuessState) -> list[str]:
    return sorted(letter for letter in state.guessed if letter not in state.word)


def normalize_letter(letter: Any) -> str | None:
    """Upper-cased single A-Z letter, or None."""
    if not isinstance(letter, str) or len(letter) != 1:
        return None
    letter = letter.upper()
    if not ("A" <= letter <= "Z"):
        return None
    return letter


class WordGuessEngine(GameEngine[WordGuessState]):
    name = "word_guess"

    def _default_settings(self) -> WordGuessSettings:
        return get_settings().word_guess

    def _new_state(self) -> WordGuessState:
        return WordGuessState(
            word=pick(self.rng, self.settings.words),
            tries_remaining=self.settings.max_tries,
        )

    def _handlers(self):
        return {CommandType.GUESS: self._handle_guess}

    def _handle_guess(self, state: WordGuessState, command: Command) -> CommandResult:
        letter = normalize_letter(command.params.get("letter"))
        if letter is None:
            return CommandResult.rejected(state, f"Not a letter: {command.params.get('letter')!r}")
        if letter in state.guessed:
            return CommandResult.rejected(state, f"{letter} was already guessed")

        guessed = state.guessed | {letter}
        if letter not in state.word:
            tries = state.tries_remaining - 1
            status = WordStatus.LOST if tries <= 0 else WordStatus.PLAYING
            return CommandResult.accept(replace(
                state, guessed=guessed, tries_remaining=tries, status=status
            ))

        status = WordStatus.WON if is_solved(state.word, guessed) else WordStatus.PLAYING
        return CommandResult.accept(replace(state, guessed=guessed, status=status))

    def is_terminal(self, state: WordGuessState) -> bool:
        return state.status != WordStatus.PLAYING

    def outcome(self, state: WordGuessState) -> Outcome:
        if state.status == WordStatus.WON:
            return Outcome.win()
        if state.status == WordStatus.LOST:
            return Outcome.loss()
        return Outcome.none()

    def view(self, state: WordGuessState) -> dict[str, Any]:
        """The secret word is only revealed once the game ends."""
        data = state_to_dict(state)
        data["masked_word"] = masked_word(state)
        data["wrong_guesses"] = wrong_guesses(state)
        if not self.is_terminal(state):
            data["word"] = None
        return data
