from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from uuid import uuid4

import redis

logger = logging.getLogger(__name__)


class SessionBusyError(ValueError):
    pass


def _lock_ttl_ms() -> int:
    return int(os.environ.get("GAMERZ_LOCK_TTL_MS", "5000"))


def _lock_wait_seconds() -> float:
    return float(os.environ.get("GAMERZ_LOCK_WAIT_SECONDS", "2"))


def lock_key(*, kind: str, session_id: str) -> str:
    return f"lock:session:{kind}:{session_id}"


@contextmanager
def session_lock(
    *,
    r: redis.Redis,
    kind: str,
    session_id: str,
    ttl_ms: int | None = None,
    wait_seconds: float | None = None,
    poll_seconds: float = 0.01,
):
    """Exclusive per-session lock.

    Waits up to `wait_seconds` for the holder to release, then raises SessionBusyError.
    The key expires after `ttl_ms` so a crashed holder cannot wedge a session.
    Release is a WATCH/MULTI compare-and-delete: the key is removed only if it still
    carries our token, even if our TTL lapsed and another holder took over meanwhile.
    """

    key = lock_key(kind=kind, session_id=session_id)
    token = uuid4().hex
    ttl = _lock_ttl_ms() if ttl_ms is None else ttl_ms
    deadline = time.monotonic() + (_lock_wait_seconds() if wait_seconds is None else wait_seconds)

    while not r.set(key, token, nx=True, px=ttl):
        if time.monotonic() >= deadline:
            logger.warning("Timed out waiting for %s", key)
            raise SessionBusyError("Session is busy")
        time.sleep(poll_seconds)

    try:
        yield
    finally:
        _release(r=r, key=key, token=token)


def _release(*, r: redis.Redis, key: str, token: str) -> None:
    with r.pipeline() as pipe:
        try:
            pipe.watch(key)
            if pipe.get(key) != token:
                pipe.unwatch()
                return
            pipe.multi()
            pipe.delete(key)
            pipe.execute()
        except redis.WatchError:
            # The key changed hands between GET and EXEC; it belongs to the new holder.
            logger.warning("Lock %s was taken over before release", key)
