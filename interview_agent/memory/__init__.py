"""Two-tier conversation memory: Redis transcript + SQLite fact store."""
from .models import MemoryBackendError, MergeResult, StoreResult, Turn
from .session_locks import SessionLocks, session_locks
from .short_term_store import ShortTermStore
from .long_term_store import LongTermStore

__all__ = [
    "ShortTermStore",
    "LongTermStore",
    "SessionLocks",
    "session_locks",
    "StoreResult",
    "MergeResult",
    "Turn",
    "MemoryBackendError",
]
