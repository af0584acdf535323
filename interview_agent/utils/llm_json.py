"""Utilities for robustly extracting JSON from LLM responses."""

from __future__ import annotations
import json
import re
from typing import Any, Dict

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def _strip_code_fences(text: str) -> str:
    """Remove surrounding ```...``` fences (with or without 'json') if present."""
    t = text.strip()
    if t.startswith("```") and t.endswith("```"):
        t = re.sub(r"^```[A-Za-z0-9_-]*\s*", "", t, flags=re.DOTALL)
        t = re.sub(r"\s*```$", "", t, flags=re.DOTALL)
    return t.strip()


def extract_json(text: str) -> Any:
    """
    Parse a JSON value from an LLM response.

    Handles code fences and leading/trailing prose around a single object.
    Raises ``ValueError`` when nothing parseable is found.
    """
    if not text or not text.strip():
        raise ValueError("Empty LLM response.")
    t = _strip_code_fences(text)

    try:
        return json.loads(t)
    except json.JSONDecodeError:
        pass

    m = _JSON_OBJECT.search(t)
    if not m:
        raise ValueError("No JSON object found in LLM response.")
    return json.loads(m.group(0))


def require_object(text: str, err: str = "Expected a JSON object.") -> Dict[str, Any]:
    """Strict: must return an object, else raise ``ValueError``."""
    data = extract_json(text)
    if not isinstance(data, dict):
        raise ValueError(err)
    return data
