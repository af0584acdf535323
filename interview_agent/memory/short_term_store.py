"""
Redis-backed short-term memory: one conversation transcript per session.

The whole transcript is stored as a JSON string under the session key and
rewritten on every append, with the expiry refreshed each time.

Usage
-----
    store = ShortTermStore()                       # connects to REDIS_URL lazily
    store.append("Who are you?", "My name is Meghleena.", session_id=sid)
    history = store.load(sid)   # [{"role": "user", "parts": [{"text": ...}]}, ...]
"""
from __future__ import annotations

import json
from typing import Any, Optional

import redis
from pydantic import ValidationError

from interview_agent.utils.config import get_config
from interview_agent.utils.logging import get_logger
from .models import MemoryBackendError, StoreResult, Transcript, Turn, make_turn
from .session_locks import SessionLocks, session_locks

logger = get_logger(__name__)

_LOCK_NAMESPACE = "short-term"


def _redis_from_config() -> redis.Redis:
    cfg = get_config()["redis"]
    return redis.Redis.from_url(
        cfg["url"],
        socket_timeout=float(cfg["socket_timeout"]),
        socket_connect_timeout=float(cfg["socket_connect_timeout"]),
        decode_responses=True,
    )


class ShortTermStore:
    """Session transcript cache with a fixed time-to-live."""

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        ttl_seconds: Optional[int] = None,
        key_prefix: Optional[str] = None,
        default_session_id: Optional[str] = None,
        locks: Optional[SessionLocks] = None,
    ) -> None:
        mem_cfg = get_config()["memory"]
        self._client = client
        self.ttl_seconds = int(ttl_seconds if ttl_seconds is not None else mem_cfg["ttl_seconds"])
        self.key_prefix = key_prefix if key_prefix is not None else mem_cfg["key_prefix"]
        self.default_session_id = default_session_id or mem_cfg["default_session_id"]
        self._locks = locks or session_locks

    # ── internal ──────────────────────────────────────────────────────────────

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = _redis_from_config()
        return self._client

    def _key(self, session_id: Optional[str]) -> str:
        return f"{self.key_prefix}{session_id or self.default_session_id}"

    @staticmethod
    def _decode(raw: Any) -> Transcript:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        if isinstance(raw, str):
            raw = json.loads(raw)
        if not isinstance(raw, list):
            return []

        turns: Transcript = []
        for entry in raw:
            try:
                turns.append(Turn.model_validate(entry).model_dump())
            except ValidationError:
                logger.warning("Dropping malformed transcript entry: %r", entry)
        return turns

    # ── public API ────────────────────────────────────────────────────────────

    def save(self, transcript: Transcript, session_id: Optional[str] = None) -> bool:
        """Overwrite the stored transcript. Returns False on backend failure."""
        key = self._key(session_id)
        try:
            self.client.set(key, json.dumps(transcript), ex=self.ttl_seconds)
            return True
        except Exception as exc:
            logger.error("Short-term save failed for %s: %s", key, exc)
            return False

    def fetch(self, session_id: Optional[str] = None) -> StoreResult:
        """Load the transcript, reporting backend or decode failure via ``ok``."""
        key = self._key(session_id)
        try:
            raw = self.client.get(key)
            if not raw:
                return StoreResult(ok=True, value=[])
            return StoreResult(ok=True, value=self._decode(raw))
        except Exception as exc:
            logger.error("Short-term load failed for %s: %s", key, exc)
            return StoreResult(ok=False, value=[], error=str(exc))

    def load(self, session_id: Optional[str] = None) -> Transcript:
        """Return the transcript, or ``[]`` when absent, expired or unreadable."""
        return self.fetch(session_id).value

    def append(
        self,
        user_text: str,
        bot_text: str,
        session_id: Optional[str] = None,
    ) -> Optional[Transcript]:
        """
        Append one user turn and one model turn, then save.

        Returns the updated transcript, or ``None`` if the current transcript
        could not be read or the result could not be written.  A failed read
        does not fall through to a save, so an outage never truncates history.
        """
        sid = session_id or self.default_session_id
        with self._locks.hold(_LOCK_NAMESPACE, self._key(sid)):
            current = self.fetch(sid)
            if not current.ok:
                return None
            updated = current.value + [
                make_turn("user", user_text),
                make_turn("model", bot_text),
            ]
            if not self.save(updated, sid):
                return None
        return updated

    def clear(self, session_id: Optional[str] = None) -> bool:
        """
        Delete the session transcript.

        Raises
        ------
        MemoryBackendError
            If the cache could not be reached.
        """
        key = self._key(session_id)
        try:
            removed = self.client.delete(key)
        except Exception as exc:
            logger.error("Short-term clear failed for %s: %s", key, exc)
            raise MemoryBackendError(f"Could not clear {key}") from exc
        logger.info("Short-term memory cleared for %s (existed=%s)", key, bool(removed))
        return True

    def has_history(self, session_id: Optional[str] = None) -> bool:
        """Whether a transcript is currently stored for the session."""
        key = self._key(session_id)
        try:
            return bool(self.client.exists(key))
        except Exception as exc:
            logger.error("Short-term exists check failed for %s: %s", key, exc)
            return False
