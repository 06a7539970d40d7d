from __future__ import annotations

import random
from enum import StrEnum

from gamerz.engine.base import EngineModel

DEFAULT_TARGET = 3


class Throw(StrEnum):
    rock = "rock"
    paper = "paper"
    scissors = "scissors"


class RoundResult(StrEnum):
    win = "win"
    lose = "lose"
    draw = "draw"


class Side(StrEnum):
    player = "player"
    ai = "ai"


THROWS: tuple[Throw, ...] = (Throw.rock, Throw.paper, Throw.scissors)

BEATS: dict[Throw, Throw] = {
    Throw.rock: Throw.scissors,
    Throw.paper: Throw.rock,
    Throw.scissors: Throw.paper,
}


def outcome(player: Throw, ai: Throw) -> RoundResult:
    if player == ai:
        return RoundResult.draw
    return RoundResult.win if BEATS[player] == ai else RoundResult.lose


def parse_throw(move: str) -> Throw | None:
    try:
        return Throw(move.casefold())
    except ValueError:
        return None


class RockPaperScissors(EngineModel):
    """A match against a uniformly random AI; first side to `target` round wins takes it."""

    player_score: int = 0
    ai_score: int = 0
    draws: int = 0
    rounds_played: int = 0
    target: int = DEFAULT_TARGET
    last_player_move: Throw | None = None
    last_ai_move: Throw | None = None
    last_result: RoundResult | None = None
    finished: bool = False
    winner: Side | None = None

    @classmethod
    def new(cls, target: int | None = None) -> RockPaperScissors:
        if target is None or target <= 0:
            target = DEFAULT_TARGET
        return cls(target=target)

    def play(self, move: str, *, rng: random.Random) -> bool:
        if self.finished:
            return False
        throw = parse_throw(move)
        if throw is None:
            return False

        ai = rng.choice(THROWS)
        self.last_player_move = throw
        self.last_ai_move = ai
        self.rounds_played += 1

        result = outcome(throw, ai)
        if result == RoundResult.win:
            self.player_score += 1
        elif result == RoundResult.lose:
            self.ai_score += 1
        else:
            self.draws += 1
        self.last_result = result

        if self.player_score >= self.target or self.ai_score >= self.target:
            self.finished = True
            self.winner = Side.player if self.player_score > self.ai_score else Side.ai
        return True

    def reset(self) -> None:
        self.player_score = 0
        self.ai_score = 0
        self.draws = 0
        self.rounds_played = 0
        self.last_player_move = None
        self.last_ai_move = None
        self.last_result = None
        self.finished = False
        self.winner = None
