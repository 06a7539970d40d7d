from __future__ import annotations

import os
import random
from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs (PyCharm/CLI).

    This makes REDIS_URL / GAMERZ_* settings available to tests without needing
    to manually export them in your shell.

    In CI, we *don't* auto-load `.env` by default.
    Opt-in with: GAMERZ_LOAD_DOTENV_FOR_TESTS=1
    """

    if os.environ.get("CI") and os.environ.get("GAMERZ_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture()
def redis_client():
    import fakeredis

    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def client_and_redis(redis_client):
    """FastAPI TestClient wired to fakeredis and a seeded RNG."""

    from fastapi.testclient import TestClient

    from gamerz.api.deps import get_redis, get_rng
    from gamerz.main import app

    def _override_redis() -> Generator:
        yield redis_client

    app.dependency_overrides[get_redis] = _override_redis
    app.dependency_overrides[get_rng] = lambda: random.Random(1234)
    with TestClient(app) as c:
        yield c, redis_client
    app.dependency_overrides.clear()
