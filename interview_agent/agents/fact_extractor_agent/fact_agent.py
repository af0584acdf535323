"""
Fact Extractor Agent

Asks the LLM, in JSON-object mode, for stable facts about the user revealed
by one question/answer exchange.  Anything that does not parse to a JSON
object counts as "no facts"; the request carries on either way.
"""
from __future__ import annotations

import json
from typing import Any, Dict

from interview_agent.memory.models import FactMapping
from interview_agent.utils.llm_json import require_object
from interview_agent.utils.logging import get_logger
from interview_agent.utils.tracing import traceable
from ..client import get_client, MODEL
from .prompts import SYSTEM_PROMPT, USER_TEMPLATE, PERSONA_NAME

logger = get_logger(__name__)


def normalise_facts(raw: Dict[str, Any]) -> FactMapping:
    """
    Coerce an extracted object into a ``str -> str`` mapping.

    Null and empty values are dropped; nested values are kept as compact JSON.
    """
    facts: FactMapping = {}
    for key, value in raw.items():
        key = str(key).strip()
        if not key or value is None:
            continue
        if isinstance(value, str):
            text = value.strip()
        elif isinstance(value, (dict, list)):
            text = json.dumps(value, ensure_ascii=False)
        else:
            text = str(value)
        if text:
            facts[key] = text
    return facts


@traceable(name="fact_extractor_agent", run_type="llm", tags=["memory", "extraction"])
def extract_facts(question: str, answer: str) -> FactMapping:
    """
    Extract long-term facts about the user from one exchange.

    Returns ``{}`` when the model output is not a JSON object.  Errors from
    the API call itself propagate to the caller.
    """
    client = get_client()
    response = client.chat.completions.create(
        model=MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": USER_TEMPLATE.format(
                    question=question, persona=PERSONA_NAME, answer=answer
                ),
            },
        ],
        temperature=0,
        response_format={"type": "json_object"},
    )
    raw = response.choices[0].message.content or ""

    try:
        facts = normalise_facts(require_object(raw))
    except ValueError as exc:
        logger.error("Could not parse extracted facts, defaulting to none: %s", exc)
        return {}

    logger.info("Fact extractor: %d fact(s) extracted", len(facts))
    return facts
