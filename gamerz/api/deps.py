from __future__ import annotations

import random
from collections.abc import Generator

import redis

from gamerz.infra.redis_client import create_redis


def get_redis() -> Generator[redis.Redis, None, None]:
    client = create_redis()
    try:
        yield client
    finally:
        try:
            client.close()
        except Exception:
            # Some redis client versions don't require explicit close.
            pass


def get_rng() -> random.Random:
    # One RNG per request; tests override this dependency with a seeded instance.
    return random.Random(random.SystemRandom().randint(1, 2**31 - 1))
