from __future__ import annotations

from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class GameKind(StrEnum):
    tictactoe = "tictactoe"
    hangman = "hangman"
    numberguess = "numberguess"
    rps = "rps"


GAME_DISPLAY_NAMES: dict[GameKind, str] = {
    GameKind.tictactoe: "Tic Tac Toe",
    GameKind.hangman: "Hangman",
    GameKind.numberguess: "Number Guess",
    GameKind.rps: "Rock Paper Scissors",
}


class NewGameRequest(BaseModel):
    # Each kind reads only the options it understands; unknown difficulty strings fall back to defaults.
    vs_ai: bool = False
    difficulty: str | None = Field(default=None, max_length=32)
    target: int | None = None


class SessionResponse(BaseModel):
    session_id: UUID
    kind: GameKind
    applied: bool = True

    # Public snapshot only: secrets (hangman word, number guess secret) are never included.
    state: dict[str, Any]


class GameListEntry(BaseModel):
    id: GameKind
    name: str
    actions: list[str] = Field(default_factory=list)


class GameListResponse(BaseModel):
    games: list[GameListEntry]
