from .fact_agent import extract_facts, normalise_facts

__all__ = ["extract_facts", "normalise_facts"]
