from __future__ import annotations

import random
from collections.abc import Sequence
from enum import StrEnum
from typing import ClassVar

from pydantic import Field

from gamerz.engine.base import EngineModel

MASK_CHAR = "_"

WORD_POOL: tuple[str, ...] = (
    "go", "code", "game", "react", "pixel", "binary", "dragon", "async", "memory", "network",
    "galaxy", "hangman", "puzzle", "random", "frontend", "backend", "context", "pointer", "compiler", "optimize",
)


class HangmanDifficulty(StrEnum):
    easy = "easy"
    normal = "normal"
    hard = "hard"


MAX_WRONG: dict[HangmanDifficulty, int] = {
    HangmanDifficulty.easy: 8,
    HangmanDifficulty.normal: 6,
    HangmanDifficulty.hard: 5,
}


def normalize_difficulty(difficulty: str | None) -> HangmanDifficulty:
    try:
        return HangmanDifficulty((difficulty or "").casefold())
    except ValueError:
        return HangmanDifficulty.normal


def _in_band(word: str, difficulty: HangmanDifficulty) -> bool:
    n = len(word)
    if difficulty == HangmanDifficulty.easy:
        return n <= 5
    if difficulty == HangmanDifficulty.hard:
        return n >= 6
    return 4 <= n <= 8


def candidate_words(difficulty: HangmanDifficulty, pool: Sequence[str] = WORD_POOL) -> list[str]:
    """Words in the difficulty's length band; the whole pool if the band is empty."""

    candidates = [w for w in pool if _in_band(w, difficulty)]
    return candidates or list(pool)


def mask_word(word: str, guessed: Sequence[str]) -> str:
    return "".join(ch if ch in guessed else MASK_CHAR for ch in word)


class Hangman(EngineModel):
    hidden_fields: ClassVar[frozenset[str]] = frozenset({"secret_word"})

    secret_word: str
    masked_word: str = ""
    guessed_letters: list[str] = Field(default_factory=list)
    wrong_count: int = 0
    max_wrong: int = MAX_WRONG[HangmanDifficulty.normal]
    difficulty: HangmanDifficulty = HangmanDifficulty.normal
    finished: bool = False
    won: bool = False

    def model_post_init(self, __context: object) -> None:
        self.masked_word = mask_word(self.secret_word, self.guessed_letters)

    @classmethod
    def new(
        cls,
        difficulty: str | None = None,
        *,
        rng: random.Random,
        pool: Sequence[str] = WORD_POOL,
    ) -> Hangman:
        diff = normalize_difficulty(difficulty)
        word = rng.choice(candidate_words(diff, pool))
        return cls(secret_word=word, difficulty=diff, max_wrong=MAX_WRONG[diff])

    def guess(self, letter: str) -> bool:
        if self.finished or not letter:
            return False
        ch = letter[:1].lower()
        if ch in self.guessed_letters:
            return False

        self.guessed_letters.append(ch)
        if ch not in self.secret_word:
            self.wrong_count += 1
        self.masked_word = mask_word(self.secret_word, self.guessed_letters)

        if self.masked_word == self.secret_word:
            self.finished = True
            self.won = True
        if self.wrong_count >= self.max_wrong:
            self.finished = True
        return True

    def reset(self, *, rng: random.Random, pool: Sequence[str] = WORD_POOL) -> None:
        """Start over with a different word from the same band (the same word only if it is the band's sole entry)."""

        candidates = candidate_words(self.difficulty, pool)
        fresh = [w for w in candidates if w != self.secret_word] or candidates
        self.secret_word = rng.choice(fresh)
        self.guessed_letters = []
        self.wrong_count = 0
        self.finished = False
        self.won = False
        self.masked_word = mask_word(self.secret_word, self.guessed_letters)
