"""LLM-backed agents: the interview persona and the fact extractor."""
from .interview_agent import ask_interview_agent
from .fact_extractor_agent import extract_facts

__all__ = ["ask_interview_agent", "extract_facts"]
