"""
Data structures shared by the memory stores.

A transcript is stored and returned as a plain list of turn dicts,
``{"role": "user" | "model", "parts": [{"text": str}]}``; ``Turn`` is the
pydantic view of one entry used for validation and API schemas.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

TranscriptTurn = Dict[str, Any]
Transcript = List[TranscriptTurn]
FactMapping = Dict[str, str]


class MemoryBackendError(RuntimeError):
    """Raised when a store operation must report backend failure to its caller."""


class TextPart(BaseModel):
    text: str


class Turn(BaseModel):
    """One conversation turn in the short-term transcript."""
    role: Literal["user", "model"]
    parts: List[TextPart]

    model_config = {
        "json_schema_extra": {
            "example": {"role": "user", "parts": [{"text": "Tell me about yourself."}]}
        }
    }


def make_turn(role: str, text: str) -> TranscriptTurn:
    return Turn(role=role, parts=[TextPart(text=text)]).model_dump()


def turn_text(turn: TranscriptTurn) -> str:
    """Join the text segments of a stored turn."""
    parts = turn.get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))


class StoreResult(BaseModel):
    """
    Outcome of a store read.

    ``value`` is always usable (empty on failure); ``ok`` tells the caller
    whether it came from the backend or from a swallowed error.
    """
    ok: bool
    value: Any = None
    error: Optional[str] = None


class MergeResult(BaseModel):
    """Outcome of a long-term fact merge."""
    facts: Dict[str, Any] = Field(default_factory=dict)
    written: bool = False
    persisted: bool = False
    error: Optional[str] = None
