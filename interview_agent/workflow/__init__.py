from .orchestrator import process_message, get_short_term_store, get_long_term_store

__all__ = ["process_message", "get_short_term_store", "get_long_term_store"]
