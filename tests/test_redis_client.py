from __future__ import annotations

import pytest

from gamerz.infra.redis_client import DEFAULT_REDIS_URL, get_redis_url


def test_default_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GAMERZ_REDIS_URL", raising=False)
    monkeypatch.delenv("REDIS_URL", raising=False)
    assert get_redis_url() == DEFAULT_REDIS_URL


def test_gamerz_url_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REDIS_URL", "redis://other:6379/0")
    monkeypatch.setenv("GAMERZ_REDIS_URL", "redis://arcade:6379/2")
    assert get_redis_url() == "redis://arcade:6379/2"
