from __future__ import annotations

import os

import redis

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


def get_redis_url() -> str:
    # GAMERZ_REDIS_URL wins so the arcade can share a host with other REDIS_URL consumers.
    return os.environ.get("GAMERZ_REDIS_URL") or os.environ.get("REDIS_URL", DEFAULT_REDIS_URL)


def get_socket_timeout() -> float:
    return float(os.environ.get("GAMERZ_REDIS_SOCKET_TIMEOUT", "2"))


def create_redis() -> redis.Redis:
    # decode_responses=True => strings in/out instead of bytes; the store and lock compare str values.
    return redis.Redis.from_url(
        get_redis_url(),
        decode_responses=True,
        socket_timeout=get_socket_timeout(),
        socket_connect_timeout=get_socket_timeout(),
    )
