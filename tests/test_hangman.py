from __future__ import annotations

import random

import pytest

from gamerz.engine.hangman import WORD_POOL, Hangman, HangmanDifficulty, candidate_words


def _game(word: str = "pixel", max_wrong: int = 6) -> Hangman:
    return Hangman(secret_word=word, max_wrong=max_wrong)


def test_new_game_masks_every_letter() -> None:
    g = Hangman.new("normal", rng=random.Random(7))
    assert g.masked_word == "_" * len(g.secret_word)
    assert 4 <= len(g.secret_word) <= 8
    assert g.max_wrong == 6
    assert "secret_word" not in g.snapshot()


@pytest.mark.parametrize(
    ("difficulty", "max_wrong"),
    [("easy", 8), ("normal", 6), ("hard", 5), ("bogus", 6), (None, 6)],
)
def test_max_wrong_by_difficulty(difficulty: str | None, max_wrong: int) -> None:
    assert Hangman.new(difficulty, rng=random.Random(1)).max_wrong == max_wrong


def test_length_bands() -> None:
    assert all(len(w) <= 5 for w in candidate_words(HangmanDifficulty.easy))
    assert all(len(w) >= 6 for w in candidate_words(HangmanDifficulty.hard))
    assert all(4 <= len(w) <= 8 for w in candidate_words(HangmanDifficulty.normal))


def test_empty_band_falls_back_to_whole_pool() -> None:
    pool = ("go", "code")
    assert candidate_words(HangmanDifficulty.hard, pool) == ["go", "code"]
    g = Hangman.new("hard", rng=random.Random(3), pool=pool)
    assert g.secret_word in pool


def test_guessing_all_letters_case_insensitively_wins() -> None:
    g = _game("pixel")
    for letter in "PIXEL":
        assert g.guess(letter)
    assert g.won is True
    assert g.finished is True
    assert g.wrong_count == 0
    assert g.masked_word == "pixel"


def test_max_wrong_distinct_misses_loses() -> None:
    g = _game("pixel", max_wrong=6)
    for letter in "abcdfg":
        assert g.guess(letter)
    assert g.wrong_count == 6
    assert g.finished is True
    assert g.won is False
    assert not g.guess("p")


def test_duplicate_and_empty_guesses_are_noops() -> None:
    g = _game("pixel")
    assert g.guess("z")
    assert not g.guess("Z")
    assert not g.guess("")
    assert g.guessed_letters == ["z"]
    assert g.wrong_count == 1


def test_only_first_character_counts() -> None:
    g = _game("pixel")
    assert g.guess("Px")
    assert g.guessed_letters == ["p"]
    assert g.masked_word == "p____"


def test_repeated_letters_are_revealed_together() -> None:
    g = _game("binary")
    g.guess("b")
    g.guess("a")
    assert g.masked_word == "b__a__"


def test_reset_draws_a_different_word() -> None:
    rng = random.Random(11)
    g = Hangman.new("hard", rng=rng)
    old = g.secret_word
    g.guess("e")
    g.reset(rng=rng)
    assert g.secret_word != old
    assert g.secret_word in WORD_POOL
    assert g.guessed_letters == []
    assert g.wrong_count == 0
    assert g.finished is False
    assert g.masked_word == "_" * len(g.secret_word)
    assert g.difficulty == HangmanDifficulty.hard


def test_mask_is_rebuilt_after_load() -> None:
    g = _game("game")
    g.guess("g")
    restored = Hangman.model_validate_json(g.model_dump_json())
    assert restored.masked_word == "g___"
