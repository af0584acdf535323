"""
Conversation orchestrator: one interview request/response cycle.

    result = process_message("Who are you?", session_id="abc")
    # {"userQuestion": ..., "botAnswer": ..., "sessionId": "abc"}

Store failures and a failed fact-extraction call degrade to empty memory and
never block the reply.  Errors from the reply call or anything unexpected
propagate to the web layer, which turns them into a 500.
"""
from __future__ import annotations

import threading
from typing import Any, Callable, Optional

from openai import OpenAIError

from interview_agent.agents.interview_agent import ask_interview_agent
from interview_agent.agents.fact_extractor_agent import extract_facts
from interview_agent.memory import LongTermStore, ShortTermStore
from interview_agent.utils.config import get_config
from interview_agent.utils.logging import get_logger
from interview_agent.utils.tracing import log_run, traceable

logger = get_logger(__name__)

Defer = Callable[..., Any]

# ── Shared stores (one per worker process) ────────────────────────────────────

_short_term: Optional[ShortTermStore] = None
_long_term: Optional[LongTermStore] = None
_stores_lock = threading.Lock()


def get_short_term_store() -> ShortTermStore:
    global _short_term
    if _short_term is None:
        with _stores_lock:
            if _short_term is None:
                _short_term = ShortTermStore()
    return _short_term


def get_long_term_store() -> LongTermStore:
    global _long_term
    if _long_term is None:
        with _stores_lock:
            if _long_term is None:
                _long_term = LongTermStore()
    return _long_term


def resolve_session_id(session_id: Optional[str]) -> str:
    """Return *session_id* stripped, or the configured default session."""
    if session_id and session_id.strip():
        return session_id.strip()
    return get_config()["memory"]["default_session_id"]


def _append_history(store: ShortTermStore, question: str, answer: str, session_id: str) -> None:
    """Deferred short-term write; failures are logged only."""
    try:
        updated = store.append(question, answer, session_id=session_id)
    except Exception as exc:  # noqa: BLE001
        logger.error("Short-term append crashed for %s: %s", session_id, exc, exc_info=True)
        return
    if updated is None:
        logger.warning("Short-term append for %s was not persisted", session_id)
    else:
        logger.info("Short-term memory for %s now holds %d turn(s)", session_id, len(updated))


@traceable(name="process_message", run_type="chain", tags=["orchestrator"])
def process_message(
    question: str,
    session_id: Optional[str] = None,
    defer: Optional[Defer] = None,
) -> dict:
    """
    Answer *question* with both memory tiers and update them afterwards.

    Parameters
    ----------
    question : str
        The interviewer's message.  Blank input raises ``ValueError``.
    session_id : str, optional
        Conversation key; falls back to the configured default session.
    defer : callable, optional
        ``defer(func, *args)`` schedules the short-term append to run after
        the response (e.g. ``BackgroundTasks.add_task``).  When omitted the
        append runs inline.

    Returns
    -------
    dict
        ``{"userQuestion": str, "botAnswer": str, "sessionId": str}``
    """
    if not question or not question.strip():
        raise ValueError("No question provided.")

    question = question.strip()
    sid = resolve_session_id(session_id)
    short_term = get_short_term_store()
    long_term = get_long_term_store()

    logger.info("User question  session=%s  question=%s", sid, question[:80])

    history = short_term.fetch(sid)
    facts = long_term.fetch(sid)
    if not history.ok or not facts.ok:
        logger.warning(
            "Memory degraded for %s (short_term_ok=%s, long_term_ok=%s)",
            sid, history.ok, facts.ok,
        )

    answer = ask_interview_agent(question, history=history.value, facts=facts.value)
    logger.info("Bot answer  session=%s  answer=%s", sid, answer[:80])

    if defer is None:
        _append_history(short_term, question, answer, sid)
    else:
        defer(_append_history, short_term, question, answer, sid)

    try:
        new_facts = extract_facts(question, answer)
    except (OpenAIError, TimeoutError) as exc:
        logger.error("Fact extraction failed for %s, skipping long-term update: %s", sid, exc)
        new_facts = {}
    merge = long_term.save(sid, new_facts)
    if merge.written and not merge.persisted:
        logger.warning("Extracted facts for %s were not persisted: %s", sid, merge.error)

    log_run(
        name="interview_turn",
        inputs={"question": question, "session_id": sid},
        outputs={"answer": answer[:200], "facts": len(merge.facts)},
        tags=["orchestrator"],
    )
    return {"userQuestion": question, "botAnswer": answer, "sessionId": sid}
