"""OpenAI client shared by the interview and fact-extractor agents."""

import os

from openai import OpenAI

from interview_agent.utils.config import get_config

_llm_cfg = get_config()["llm"]

MODEL: str = _llm_cfg["model"]
TEMPERATURE: float = float(_llm_cfg["temperature"])
MAX_TOKENS: int = int(_llm_cfg["max_tokens"])
TIMEOUT: float = float(_llm_cfg["timeout"])


def get_client() -> OpenAI:
    """Return an initialised OpenAI client with the configured request timeout."""
    api_key = os.environ.get("OPENAI_API_KEY")
    if not api_key:
        raise EnvironmentError(
            "OPENAI_API_KEY is not set. "
            "Add it to your environment or to a .env file in the project root."
        )
    return OpenAI(api_key=api_key, timeout=TIMEOUT, max_retries=0)
