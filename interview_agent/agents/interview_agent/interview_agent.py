"""
Interview Agent

Answers the interviewer's message in persona, using the short-term
transcript as chat history and the long-term fact mapping as extra context.

Usage
-----
    from interview_agent.agents.interview_agent import ask_interview_agent

    answer = ask_interview_agent("Who are you?", history=[], facts={})
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from interview_agent.memory.models import Transcript, turn_text
from interview_agent.utils.logging import get_logger
from interview_agent.utils.tracing import traceable
from ..client import get_client, MODEL, TEMPERATURE, MAX_TOKENS
from .prompts import SYSTEM_PROMPT, LONG_TERM_CONTEXT_HEADER

logger = get_logger(__name__)

# Transcript roles -> chat-completions roles
_ROLE_MAP = {"user": "user", "model": "assistant"}


def _format_facts(facts: Optional[Mapping[str, Any]]) -> str:
    if not facts:
        return ""
    return LONG_TERM_CONTEXT_HEADER + json.dumps(dict(facts), ensure_ascii=False)


def build_messages(
    question: str,
    history: Optional[Transcript] = None,
    facts: Optional[Mapping[str, Any]] = None,
) -> List[Dict[str, str]]:
    """
    Compose the chat context: persona, prior turns, then the current message
    with the long-term facts appended when there are any.

    Turns with an unknown role or no text are skipped.
    """
    messages = [{"role": "system", "content": SYSTEM_PROMPT}]
    for turn in history or []:
        if not isinstance(turn, dict):
            continue
        role = _ROLE_MAP.get(turn.get("role", ""))
        content = turn_text(turn)
        if role and content:
            messages.append({"role": role, "content": content})
    messages.append({"role": "user", "content": question.strip() + _format_facts(facts)})
    return messages


@traceable(name="interview_agent", run_type="llm", tags=["interview", "chat"])
def ask_interview_agent(
    question: str,
    history: Optional[Transcript] = None,
    facts: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Return the persona's reply to *question*.

    Parameters
    ----------
    question : str
        The interviewer's message.
    history : list, optional
        Short-term transcript (``role`` / ``parts`` turns), oldest first.
    facts : dict, optional
        Long-term facts about the user.

    Returns
    -------
    str
        The reply text, stripped.
    """
    if not question or not question.strip():
        raise ValueError("Question must be a non-empty string.")

    messages = build_messages(question, history, facts)
    logger.info(
        "Interview agent: %d prior turn(s), %d fact(s)",
        len(messages) - 2, len(facts or {}),
    )

    client = get_client()
    response = client.chat.completions.create(
        model=MODEL,
        messages=messages,
        temperature=TEMPERATURE,
        max_tokens=MAX_TOKENS,
    )
    return (response.choices[0].message.content or "").strip()
