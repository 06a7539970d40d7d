from __future__ import annotations

import logging
import os
import random
from uuid import UUID, uuid4

import redis

from gamerz.api.models import GameKind, NewGameRequest
from gamerz.engine.base import EngineModel
from gamerz.engine.hangman import Hangman
from gamerz.engine.number_guess import NumberGuess
from gamerz.engine.rps import RockPaperScissors
from gamerz.engine.tictactoe import TicTacToe

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "gamerz:session:"  # + {kind}:{uuid}

GAME_MODELS: dict[GameKind, type[EngineModel]] = {
    GameKind.tictactoe: TicTacToe,
    GameKind.hangman: Hangman,
    GameKind.numberguess: NumberGuess,
    GameKind.rps: RockPaperScissors,
}


class SessionNotFoundError(ValueError):
    pass


def get_session_ttl_seconds() -> int:
    return int(os.environ.get("GAMERZ_SESSION_TTL_SECONDS", "3600"))


def _session_key(kind: GameKind, session_id: UUID) -> str:
    return f"{SESSION_KEY_PREFIX}{kind.value}:{session_id}"


def new_game(*, kind: GameKind, options: NewGameRequest, rng: random.Random) -> EngineModel:
    if kind == GameKind.tictactoe:
        return TicTacToe.new(vs_ai=options.vs_ai, difficulty=options.difficulty)
    if kind == GameKind.hangman:
        return Hangman.new(options.difficulty, rng=rng)
    if kind == GameKind.numberguess:
        return NumberGuess.new(options.difficulty, rng=rng)
    if kind == GameKind.rps:
        return RockPaperScissors.new(options.target)
    raise ValueError(f"Unknown game kind: {kind}")


def save_session(*, r: redis.Redis, kind: GameKind, session_id: UUID, game: EngineModel) -> None:
    # Every save refreshes the TTL; an idle session simply expires.
    r.set(_session_key(kind, session_id), game.model_dump_json(), ex=get_session_ttl_seconds())


def get_session(*, r: redis.Redis, kind: GameKind, session_id: UUID) -> EngineModel | None:
    raw = r.get(_session_key(kind, session_id))
    if not raw:
        return None
    return GAME_MODELS[kind].model_validate_json(raw)


def require_session(*, r: redis.Redis, kind: GameKind, session_id: UUID) -> EngineModel:
    game = get_session(r=r, kind=kind, session_id=session_id)
    if game is None:
        raise SessionNotFoundError("Session not found")
    return game


def delete_session(*, r: redis.Redis, kind: GameKind, session_id: UUID) -> bool:
    removed = bool(r.delete(_session_key(kind, session_id)))
    logger.debug("delete %s session %s (removed=%s)", kind.value, session_id, removed)
    return removed


def create_session(
    *,
    r: redis.Redis,
    kind: GameKind,
    options: NewGameRequest,
    rng: random.Random,
) -> tuple[UUID, EngineModel]:
    session_id = uuid4()
    game = new_game(kind=kind, options=options, rng=rng)
    save_session(r=r, kind=kind, session_id=session_id, game=game)
    logger.debug("created %s session %s", kind.value, session_id)
    return session_id, game
