"""
SQLite-backed long-term memory: a merged fact mapping per session.

Schema
------
long_term_memory : session_id TEXT PK, facts TEXT (JSON object), updated_at TEXT
                   upserted on every non-empty merge, never expires

Usage
-----
    store = LongTermStore()
    store.save(sid, {"user_name": "Priya"}).facts   # merged mapping
    facts = store.load(sid)                          # {} if unknown or unreadable
"""
from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from interview_agent.utils.config import get_config, resolve_path
from interview_agent.utils.logging import get_logger
from .models import FactMapping, MergeResult, StoreResult
from .session_locks import SessionLocks, session_locks

logger = get_logger(__name__)

_LOCK_NAMESPACE = "long-term"
_BUSY_TIMEOUT_SECONDS = 10.0


class LongTermStore:
    """Per-session fact mapping with merge-on-write semantics."""

    def __init__(
        self,
        db_path: Optional[Path] = None,
        locks: Optional[SessionLocks] = None,
    ) -> None:
        self.db_path = Path(db_path or resolve_path(get_config()["memory"]["db_path"]))
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._locks = locks or session_locks
        self._init_schema()

    # ── schema ────────────────────────────────────────────────────────────────

    def _connect(self) -> sqlite3.Connection:
        # Autocommit mode: transactions are opened explicitly where needed.
        conn = sqlite3.connect(
            str(self.db_path),
            timeout=_BUSY_TIMEOUT_SECONDS,
            isolation_level=None,
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_schema(self) -> None:
        conn = self._connect()
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS long_term_memory (
                    session_id  TEXT PRIMARY KEY,
                    facts       TEXT NOT NULL DEFAULT '{}',
                    updated_at  TEXT NOT NULL
                );
            """)
        finally:
            conn.close()

    @staticmethod
    def _read_facts(conn: sqlite3.Connection, session_id: str) -> FactMapping:
        row = conn.execute(
            "SELECT facts FROM long_term_memory WHERE session_id = ?",
            (session_id,),
        ).fetchone()
        if row is None:
            return {}
        facts = json.loads(row["facts"] or "{}")
        if not isinstance(facts, dict):
            raise ValueError(f"Stored facts for {session_id!r} are not a JSON object")
        return facts

    # ── public API ────────────────────────────────────────────────────────────

    def fetch(self, session_id: str) -> StoreResult:
        """Load facts; an unknown session is ``ok`` with an empty mapping."""
        try:
            conn = self._connect()
            try:
                facts = self._read_facts(conn, session_id)
            finally:
                conn.close()
        except (sqlite3.Error, ValueError) as exc:
            logger.error("Long-term load failed for %s: %s", session_id, exc)
            return StoreResult(ok=False, value={}, error=str(exc))
        return StoreResult(ok=True, value=facts)

    def load(self, session_id: str) -> FactMapping:
        """Return the session's facts, or ``{}`` when absent or unreadable."""
        return self.fetch(session_id).value

    def save(self, session_id: str, new_facts: Optional[Mapping[str, Any]]) -> MergeResult:
        """
        Merge *new_facts* over the stored mapping and upsert the result.

        An empty *new_facts* issues no write and returns the stored mapping.
        The read, merge and upsert run in one ``BEGIN IMMEDIATE`` transaction,
        so concurrent writers for the same session cannot drop each other's
        keys.

        Returns
        -------
        MergeResult
            ``facts`` is the merged mapping even when the write failed;
            ``persisted`` tells whether it reached the database.
        """
        if not new_facts:
            current = self.fetch(session_id)
            return MergeResult(
                facts=current.value,
                written=False,
                persisted=current.ok,
                error=current.error,
            )

        incoming: Dict[str, Any] = {str(k): v for k, v in new_facts.items()}
        merged: Dict[str, Any] = dict(incoming)
        now = datetime.now(timezone.utc).isoformat()

        with self._locks.hold(_LOCK_NAMESPACE, session_id):
            try:
                conn = self._connect()
                try:
                    conn.execute("BEGIN IMMEDIATE")
                    try:
                        merged = {**self._read_facts(conn, session_id), **incoming}
                        conn.execute(
                            """
                            INSERT INTO long_term_memory (session_id, facts, updated_at)
                            VALUES (?, ?, ?)
                            ON CONFLICT(session_id) DO UPDATE SET
                                facts = excluded.facts,
                                updated_at = excluded.updated_at
                            """,
                            (session_id, json.dumps(merged, ensure_ascii=False), now),
                        )
                        conn.execute("COMMIT")
                    except BaseException:
                        conn.execute("ROLLBACK")
                        raise
                finally:
                    conn.close()
            except (sqlite3.Error, ValueError) as exc:
                logger.error("Long-term save failed for %s: %s", session_id, exc)
                return MergeResult(facts=merged, written=True, persisted=False, error=str(exc))

        logger.info(
            "Long-term memory for %s: merged %d new fact(s), %d total",
            session_id, len(incoming), len(merged),
        )
        return MergeResult(facts=merged, written=True, persisted=True)

    def clear(self, session_id: str) -> int:
        """Delete the session's facts. Returns number of rows removed."""
        with self._locks.hold(_LOCK_NAMESPACE, session_id):
            conn = self._connect()
            try:
                cur = conn.execute(
                    "DELETE FROM long_term_memory WHERE session_id = ?", (session_id,)
                )
            finally:
                conn.close()
        return cur.rowcount
