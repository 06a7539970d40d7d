from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

import redis

from gamerz.api.models import GameKind
from gamerz.engine.base import EngineModel
from gamerz.engine.hangman import Hangman
from gamerz.engine.number_guess import NumberGuess
from gamerz.engine.rps import RockPaperScissors
from gamerz.engine.tictactoe import TicTacToe
from gamerz.lock import session_lock
from gamerz.session_store import require_session, save_session
from gamerz.validators import ValidationContext, pipeline_for_action

logger = logging.getLogger(__name__)


class ActionRejectedError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class ActionResult:
    game: EngineModel
    applied: bool


Handler = Callable[[Any, Mapping[str, Any], random.Random], bool]


def _ttt_move(game: TicTacToe, payload: Mapping[str, Any], rng: random.Random) -> bool:
    return game.make_move(int(payload["pos"]))


def _ttt_undo(game: TicTacToe, payload: Mapping[str, Any], rng: random.Random) -> bool:
    return game.undo()


def _ttt_reset(game: TicTacToe, payload: Mapping[str, Any], rng: random.Random) -> bool:
    game.reset()
    return True


def _hangman_guess(game: Hangman, payload: Mapping[str, Any], rng: random.Random) -> bool:
    return game.guess(str(payload["letter"]))


def _hangman_reset(game: Hangman, payload: Mapping[str, Any], rng: random.Random) -> bool:
    game.reset(rng=rng)
    return True


def _number_guess(game: NumberGuess, payload: Mapping[str, Any], rng: random.Random) -> bool:
    return game.guess(int(payload["n"]))


def _number_reset(game: NumberGuess, payload: Mapping[str, Any], rng: random.Random) -> bool:
    game.reset(rng=rng)
    return True


def _rps_play(game: RockPaperScissors, payload: Mapping[str, Any], rng: random.Random) -> bool:
    return game.play(str(payload["move"]), rng=rng)


def _rps_reset(game: RockPaperScissors, payload: Mapping[str, Any], rng: random.Random) -> bool:
    game.reset()
    return True


HANDLERS: dict[tuple[GameKind, str], Handler] = {
    (GameKind.tictactoe, "move"): _ttt_move,
    (GameKind.tictactoe, "undo"): _ttt_undo,
    (GameKind.tictactoe, "reset"): _ttt_reset,
    (GameKind.hangman, "guess"): _hangman_guess,
    (GameKind.hangman, "reset"): _hangman_reset,
    (GameKind.numberguess, "guess"): _number_guess,
    (GameKind.numberguess, "reset"): _number_reset,
    (GameKind.rps, "play"): _rps_play,
    (GameKind.rps, "reset"): _rps_reset,
}

# Rejections that callers see as errors; every other no-op comes back as applied=False.
REJECTION_DETAILS: dict[tuple[GameKind, str], str] = {
    (GameKind.tictactoe, "move"): "Invalid move",
    (GameKind.tictactoe, "undo"): "Cannot undo",
}


def dispatch_action(
    *,
    r: redis.Redis,
    kind: GameKind,
    session_id: UUID,
    action: str,
    payload: Mapping[str, Any],
    rng: random.Random,
) -> ActionResult:
    """Entry point for every in-session action.

    Applies an action by:
    - validating the payload for (kind, action)
    - acquiring the per-session lock
    - loading the instance, invoking the engine, persisting the result

    The state is saved even when the engine reports a no-op: a Number Guess
    out-of-range guess still records its hint.
    """

    ctx = ValidationContext(session_id=str(session_id), kind=kind, action=action)
    pipeline_for_action(kind, action).validate(ctx=ctx, payload=payload)
    handler = HANDLERS[(kind, action)]

    with session_lock(r=r, kind=kind.value, session_id=str(session_id)):
        game = require_session(r=r, kind=kind, session_id=session_id)
        applied = handler(game, payload, rng)
        save_session(r=r, kind=kind, session_id=session_id, game=game)

    logger.debug("%s %s on %s -> applied=%s", kind.value, action, session_id, applied)

    if not applied and (kind, action) in REJECTION_DETAILS:
        raise ActionRejectedError(REJECTION_DETAILS[(kind, action)])
    return ActionResult(game=game, applied=applied)
