"""Shared fixtures: an in-memory Redis stand-in and temp-dir SQLite stores."""
from __future__ import annotations

import pytest
import redis


class FakeRedis:
    """Minimal dict-backed client covering the calls ShortTermStore makes."""

    def __init__(self) -> None:
        self.data: dict = {}
        self.expiry: dict = {}
        self.fail = False
        self.set_calls = 0

    def _check(self) -> None:
        if self.fail:
            raise redis.ConnectionError("redis unavailable")

    def set(self, key, value, ex=None):
        self._check()
        self.set_calls += 1
        self.data[key] = value
        self.expiry[key] = ex
        return True

    def get(self, key):
        self._check()
        return self.data.get(key)

    def delete(self, *keys):
        self._check()
        removed = 0
        for key in keys:
            if key in self.data:
                del self.data[key]
                self.expiry.pop(key, None)
                removed += 1
        return removed

    def exists(self, *keys):
        self._check()
        return sum(1 for key in keys if key in self.data)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def short_store(fake_redis):
    from interview_agent.memory import SessionLocks, ShortTermStore
    return ShortTermStore(
        client=fake_redis,
        ttl_seconds=3600,
        key_prefix="",
        default_session_id="voice-agent-session",
        locks=SessionLocks(),
    )


@pytest.fixture
def long_store(tmp_path):
    from interview_agent.memory import LongTermStore, SessionLocks
    return LongTermStore(db_path=tmp_path / "ltm.db", locks=SessionLocks())


@pytest.fixture
def wired_stores(monkeypatch, short_store, long_store):
    """Point the orchestrator's shared stores at the test stores."""
    import interview_agent.workflow.orchestrator as orch
    monkeypatch.setattr(orch, "_short_term", short_store)
    monkeypatch.setattr(orch, "_long_term", long_store)
    return short_store, long_store
