"""
Project configuration.

Values come from ``config.yaml`` at the project root, with environment
variables (optionally loaded from ``.env``) taking precedence where noted.

    from interview_agent.utils.config import get_config
    ttl = get_config()["memory"]["ttl_seconds"]
"""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

load_dotenv()

_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config.yaml"

_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "llm": {
        "model": "gpt-4.1-mini",
        "temperature": 0.4,
        "max_tokens": 600,
        "timeout": 30,
    },
    "memory": {
        "ttl_seconds": 3600,
        "key_prefix": "",
        "default_session_id": "voice-agent-session",
        "db_path": "data/long_term_memory.db",
    },
    "redis": {
        "url": "redis://localhost:6379/0",
        "socket_timeout": 5,
        "socket_connect_timeout": 5,
    },
    "server": {
        "host": "0.0.0.0",
        "port": 8000,
    },
}

# env var -> (section, key)
_ENV_OVERRIDES = {
    "OPENAI_MODEL": ("llm", "model"),
    "REDIS_URL": ("redis", "url"),
    "LTM_DB_PATH": ("memory", "db_path"),
    "DEFAULT_SESSION_ID": ("memory", "default_session_id"),
}


def _load_yaml(path: Path) -> dict:
    """Load *path* and return it as a dict (empty dict if missing)."""
    if path.exists():
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}
    return {}


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Dict[str, Any]]:
    """Return the merged configuration (defaults < config.yaml < env vars)."""
    loaded = _load_yaml(_CONFIG_PATH)
    config = {section: dict(values) for section, values in _DEFAULTS.items()}
    for section, values in loaded.items():
        if isinstance(values, dict):
            config.setdefault(section, {}).update(values)

    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config[section][key] = value
    return config


def resolve_path(value: str) -> Path:
    """Resolve a configured path relative to the project root."""
    path = Path(value)
    if not path.is_absolute():
        path = _CONFIG_PATH.parent / path
    return path
