from __future__ import annotations

import random
from enum import StrEnum
from typing import ClassVar

from gamerz.engine.base import EngineModel


class NumberGuessDifficulty(StrEnum):
    easy = "easy"
    normal = "normal"
    hard = "hard"
    insane = "insane"


class Hint(StrEnum):
    higher = "higher"
    lower = "lower"
    correct = "correct"
    out_of_range = "out-of-range"


MAX_BY_DIFFICULTY: dict[NumberGuessDifficulty, int] = {
    NumberGuessDifficulty.easy: 50,
    NumberGuessDifficulty.normal: 100,
    NumberGuessDifficulty.hard: 500,
    NumberGuessDifficulty.insane: 1000,
}


def normalize_difficulty(difficulty: str | None) -> NumberGuessDifficulty:
    try:
        return NumberGuessDifficulty((difficulty or "").casefold())
    except ValueError:
        return NumberGuessDifficulty.normal


class NumberGuess(EngineModel):
    hidden_fields: ClassVar[frozenset[str]] = frozenset({"secret"})

    secret: int
    max: int
    difficulty: NumberGuessDifficulty = NumberGuessDifficulty.normal
    tries: int = 0
    last: int | None = None
    hint: Hint | None = None
    won: bool = False

    @classmethod
    def new(cls, difficulty: str | None = None, *, rng: random.Random) -> NumberGuess:
        diff = normalize_difficulty(difficulty)
        upper = MAX_BY_DIFFICULTY[diff]
        return cls(secret=rng.randint(1, upper), max=upper, difficulty=diff)

    def guess(self, n: int) -> bool:
        if self.won:
            return False
        if n < 1 or n > self.max:
            # Out-of-range guesses are not counted.
            self.hint = Hint.out_of_range
            return False

        self.tries += 1
        self.last = n
        if n == self.secret:
            self.hint = Hint.correct
            self.won = True
        elif n < self.secret:
            self.hint = Hint.higher
        else:
            self.hint = Hint.lower
        return True

    def reset(self, *, rng: random.Random) -> None:
        self.secret = rng.randint(1, self.max)
        self.tries = 0
        self.last = None
        self.hint = None
        self.won = False
