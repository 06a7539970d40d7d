from __future__ import annotations

import random
import threading
from uuid import uuid4

import pytest

from gamerz.api.models import GameKind, NewGameRequest
from gamerz.engine.hangman import Hangman
from gamerz.engine.tictactoe import TicTacToe
from gamerz.lock import SessionBusyError, lock_key, session_lock
from gamerz.session_store import (
    SessionNotFoundError,
    create_session,
    delete_session,
    get_session,
    require_session,
    save_session,
)


def test_create_and_load_round_trip(redis_client) -> None:
    sid, game = create_session(
        r=redis_client,
        kind=GameKind.tictactoe,
        options=NewGameRequest(vs_ai=True, difficulty="optimal"),
        rng=random.Random(0),
    )
    loaded = get_session(r=redis_client, kind=GameKind.tictactoe, session_id=sid)
    assert isinstance(loaded, TicTacToe)
    assert loaded == game
    assert loaded.ai_difficulty == "optimal"


def test_hidden_fields_are_persisted_but_not_in_snapshot(redis_client) -> None:
    sid, game = create_session(r=redis_client, kind=GameKind.hangman, options=NewGameRequest(), rng=random.Random(4))
    loaded = require_session(r=redis_client, kind=GameKind.hangman, session_id=sid)
    assert isinstance(loaded, Hangman)
    assert loaded.secret_word == game.secret_word
    assert "secret_word" not in loaded.snapshot()


def test_sessions_are_scoped_by_kind(redis_client) -> None:
    sid, _ = create_session(r=redis_client, kind=GameKind.rps, options=NewGameRequest(target=2), rng=random.Random(0))
    assert get_session(r=redis_client, kind=GameKind.numberguess, session_id=sid) is None


def test_require_missing_session_raises(redis_client) -> None:
    with pytest.raises(SessionNotFoundError):
        require_session(r=redis_client, kind=GameKind.tictactoe, session_id=uuid4())


def test_save_sets_ttl(redis_client, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GAMERZ_SESSION_TTL_SECONDS", "120")
    sid = uuid4()
    save_session(r=redis_client, kind=GameKind.tictactoe, session_id=sid, game=TicTacToe.new())
    ttl = redis_client.ttl(f"gamerz:session:tictactoe:{sid}")
    assert 0 < ttl <= 120


def test_delete_session(redis_client) -> None:
    sid, _ = create_session(r=redis_client, kind=GameKind.rps, options=NewGameRequest(), rng=random.Random(0))
    assert delete_session(r=redis_client, kind=GameKind.rps, session_id=sid)
    assert not delete_session(r=redis_client, kind=GameKind.rps, session_id=sid)
    assert get_session(r=redis_client, kind=GameKind.rps, session_id=sid) is None


def test_lock_is_exclusive_and_released(redis_client) -> None:
    with session_lock(r=redis_client, kind="tictactoe", session_id="s1"):
        with pytest.raises(SessionBusyError):
            with session_lock(r=redis_client, kind="tictactoe", session_id="s1", wait_seconds=0.05):
                pass
        # Other sessions are independent.
        with session_lock(r=redis_client, kind="tictactoe", session_id="s2", wait_seconds=0.05):
            pass
    assert redis_client.get(lock_key(kind="tictactoe", session_id="s1")) is None


def test_lock_release_keeps_foreign_token(redis_client) -> None:
    key = lock_key(kind="hangman", session_id="s1")
    with session_lock(r=redis_client, kind="hangman", session_id="s1"):
        # Simulate our lock expiring and another holder taking over.
        redis_client.set(key, "someone-else")
    assert redis_client.get(key) == "someone-else"


def test_lock_waits_for_holder(redis_client) -> None:
    entered = threading.Event()
    release = threading.Event()

    def _holder() -> None:
        with session_lock(r=redis_client, kind="rps", session_id="s1"):
            entered.set()
            release.wait(timeout=2)

    t = threading.Thread(target=_holder)
    t.start()
    assert entered.wait(timeout=2)
    threading.Timer(0.05, release.set).start()
    with session_lock(r=redis_client, kind="rps", session_id="s1", wait_seconds=2):
        pass
    t.join(timeout=2)
    assert not t.is_alive()


def test_lock_release_spares_holder_that_took_over_after_get(redis_client, monkeypatch: pytest.MonkeyPatch) -> None:
    key = lock_key(kind="tictactoe", session_id="s1")
    real_pipeline = redis_client.pipeline

    def _pipeline(*args, **kwargs):
        pipe = real_pipeline(*args, **kwargs)
        real_get = pipe.get

        def _get(name):
            value = real_get(name)
            # Our TTL lapses right after the token check and someone else grabs the lock.
            redis_client.set(key, "other-holder")
            return value

        pipe.get = _get
        return pipe

    with session_lock(r=redis_client, kind="tictactoe", session_id="s1"):
        monkeypatch.setattr(redis_client, "pipeline", _pipeline)

    assert redis_client.get(key) == "other-holder"
