"""
Per-session serialization for read-modify-write cycles.

    with session_locks.hold("short-term", session_id):
        history = load(...)
        save(history + new_turns)

A lock exists only while someone holds or waits on it; the last holder to
leave removes it, so the registry stays bounded by the number of in-flight
requests rather than the number of sessions ever seen.  Locks only serialize
writers inside one worker; the long-term store additionally uses a database
transaction for cross-process safety.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Tuple

_Key = Tuple[str, str]


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.users = 0


class SessionLocks:
    """Reference-counted re-entrant locks keyed by (namespace, session_id)."""

    def __init__(self) -> None:
        self._locks: Dict[_Key, _Entry] = {}
        self._guard = threading.Lock()

    def _acquire_entry(self, key: _Key) -> _Entry:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _Entry()
            entry.users += 1
            return entry

    def _release_entry(self, key: _Key, entry: _Entry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, namespace: str, session_id: str) -> Iterator[None]:
        key = (namespace, session_id)
        entry = self._acquire_entry(key)
        try:
            with entry.lock:
                yield
        finally:
            self._release_entry(key, entry)

    def active_keys(self) -> List[_Key]:
        with self._guard:
            return list(self._locks)

    def __len__(self) -> int:
        return len(self._locks)


# Shared registry for the running process
session_locks = SessionLocks()
