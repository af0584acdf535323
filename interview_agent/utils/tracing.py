"""
LangSmith Tracing Helper

Provides the ``@traceable`` decorator and a ``log_run`` helper so the agents
and the orchestrator can log traces to LangSmith with a single import line.

Set these variables in .env to enable tracing:
    LANGCHAIN_TRACING_V2=true
    LANGCHAIN_API_KEY=ls__...
    LANGCHAIN_PROJECT=interview-agent   (optional, default project name)

When the variables are missing ``traceable`` returns the function unchanged
and ``log_run`` does nothing.
"""

from __future__ import annotations

import os
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from interview_agent.utils.logging import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_DEFAULT_PROJECT = "interview-agent"


def _tracing_enabled() -> bool:
    return (
        os.getenv("LANGCHAIN_TRACING_V2", "").lower() in ("true", "1", "yes")
        and bool(os.getenv("LANGCHAIN_API_KEY", "").strip())
    )


# ── Lazy client factory ─────────────────────────────────────────────────────────

_client = None


def get_langsmith_client():
    """
    Return a cached LangSmith Client, or None if tracing is not configured.
    """
    global _client
    if _client is not None:
        return _client
    if not _tracing_enabled():
        return None

    from langsmith import Client

    try:
        _client = Client(api_key=os.getenv("LANGCHAIN_API_KEY"))
    except Exception as exc:
        logger.warning("LangSmith client init failed: %s", exc)
        return None
    logger.info(
        "LangSmith tracing enabled. Project: %s",
        os.getenv("LANGCHAIN_PROJECT", _DEFAULT_PROJECT),
    )
    return _client


# ── @traceable decorator ─────────────────────────────────────────────────────────

def traceable(
    name: str | None = None,
    run_type: str = "chain",
    tags: list[str] | None = None,
) -> Callable[[F], F]:
    """
    Decorator that wraps a function with LangSmith tracing.

    If LangSmith is not configured (no API key), this decorator is a
    transparent no-op and the original function runs unchanged.

    Parameters
    ----------
    name : str | None
        Display name in the LangSmith UI (defaults to the function name).
    run_type : str
        One of "chain", "llm", "tool", "retriever" (default "chain").
    tags : list[str] | None
        Optional list of tags visible in the LangSmith UI.
    """
    def decorator(func: F) -> F:
        if not _tracing_enabled():
            return func

        from langsmith.run_helpers import traceable as ls_traceable

        return ls_traceable(  # type: ignore[return-value]
            run_type=run_type,
            name=name or func.__name__,
            tags=tags or [],
        )(func)

    return decorator


# ── Manual span logging ──────────────────────────────────────────────────────────

def log_run(
    name: str,
    inputs: dict,
    outputs: dict,
    run_type: str = "chain",
    tags: list[str] | None = None,
    error: str | None = None,
) -> None:
    """
    Manually log a single run to LangSmith without using the decorator.

    Tracing problems are logged at debug level and never reach the caller.
    """
    client = get_langsmith_client()
    if client is None:
        return
    try:
        run_id = uuid.uuid4()
        project = os.getenv("LANGCHAIN_PROJECT", _DEFAULT_PROJECT)
        client.create_run(
            id=run_id,
            name=name,
            run_type=run_type,
            inputs=inputs,
            start_time=datetime.now(timezone.utc),
            project_name=project,
            tags=tags or [],
        )
        client.update_run(
            run_id=run_id,
            outputs=outputs,
            end_time=datetime.now(timezone.utc),
            error=error,
        )
        logger.debug("LangSmith: logged run '%s'", name)
    except Exception as exc:
        logger.debug("LangSmith log_run failed: %s", exc)
