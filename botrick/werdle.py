"""A five-letter word guessing game."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Sequence

WORD_LENGTH = 5
MAX_TRIES = 6
_ALPHABET = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")


def _ascii_upper(text: str) -> str:
    return "".join(c.upper() if "a" <= c <= "z" else c for c in text)


class WerdleError(ValueError):
    """Raised when a guess has the wrong length."""

    def __init__(self, message: str = "Guess is the wrong length") -> None:
        super().__init__(message)


class GuessCharState(Enum):
    """How one guessed letter compares with the hidden word."""

    WRONG_CHAR = "wrong_char"
    WRONG_PLACE = "wrong_place"
    RIGHT_CHAR = "right_char"


@dataclass
class GuessResult:
    """The per-letter outcome of one guess."""

    result: list[tuple[str, GuessCharState]] = field(default_factory=list)

    def add(self, char: str, state: GuessCharState) -> GuessResult:
        self.result.append((char, state))
        return self

    def copy(self) -> GuessResult:
        return GuessResult(list(self.result))


def load_words(path: str | Path) -> list[str]:
    """Read a word list, one word per line."""
    return Path(path).read_text(encoding="utf-8").splitlines()


class Game:
    """State of one game: the hidden word and the guesses made so far."""

    def __init__(self, werd: str) -> None:
        self.werd = _ascii_upper(werd)
        self._letters: set[str] = set()
        self._guesses: list[str] = []
        self._last_result: GuessResult | None = None

    @classmethod
    def random(cls, words: Sequence[str], rng: _random.Random | None = None) -> Game:
        """Start a game with a word picked at random from ``words``."""
        rng = rng or _random.Random()
        return cls(rng.choice(words) if words else "")

    @property
    def guesses(self) -> list[str]:
        return list(self._guesses)

    def is_finished(self) -> bool:
        return self.is_correct() or self.no_more_tries()

    def is_correct(self) -> bool:
        return bool(self._guesses) and self._guesses[-1] == self.werd

    def no_more_tries(self) -> bool:
        return len(self._guesses) >= MAX_TRIES

    def guess(self, guess: str) -> GuessResult:
        """Score a guess against the hidden word and record it."""
        if len(guess.encode("utf-8")) != WORD_LENGTH:
            raise WerdleError()
        upper = _ascii_upper(guess)
        result = GuessResult()
        for i, c in enumerate(upper):
            if i < len(self.werd) and self.werd[i] == c:
                state = GuessCharState.RIGHT_CHAR
            elif c in self.werd:
                state = GuessCharState.WRONG_PLACE
            else:
                state = GuessCharState.WRONG_CHAR
            self._letters.add(c)
            result.add(c, state)
        self._guesses.append(upper)
        self._last_result = result.copy()
        return result

    def guessed_letters(self) -> str:
        return " ".join(sorted(self._letters))

    def unguessed_letters(self) -> str:
        return " ".join(sorted(_ALPHABET - self._letters))

    def last_guess(self) -> GuessResult | None:
        return None if self._last_result is None else self._last_result.copy()

    def guesses_left(self) -> int:
        return MAX_TRIES - len(self._guesses)