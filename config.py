"""
Configuration loader for the skill tree mentor.

All settings come from environment variables (optionally via a .env file).
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _float_env(name: str, default: str) -> float:
    return float(os.getenv(name, default))


def _int_env(name: str, default: str) -> int:
    return int(os.getenv(name, default))


class Config:
    """Centralized configuration. Values are read once at import time."""

    # ===== Remote inference (OpenAI-compatible chat completions) =====
    LLM_BASE_URL: str = os.getenv("SKILLTREE_LLM_BASE_URL", "http://localhost:1234/v1")
    LLM_MODEL: str = os.getenv("SKILLTREE_LLM_MODEL", "qwen/qwen3-8b")
    LLM_API_KEY: str = os.getenv("SKILLTREE_LLM_API_KEY", "")
    LLM_TEMPERATURE: float = _float_env("SKILLTREE_LLM_TEMPERATURE", "0.3")
    LLM_MAX_TOKENS: int = _int_env("SKILLTREE_LLM_MAX_TOKENS", "800")
    # Missing-skill discovery asks for a list, so it gets a larger budget
    LLM_SUGGESTION_MAX_TOKENS: int = _int_env("SKILLTREE_LLM_SUGGESTION_MAX_TOKENS", "1000")
    LLM_TIMEOUT_SECONDS: float = _float_env("SKILLTREE_LLM_TIMEOUT_SECONDS", "30")

    # ===== Resolution cache =====
    CACHE_MAX_ENTRIES: int = _int_env("SKILLTREE_CACHE_MAX_ENTRIES", "512")
    # 0 disables expiry
    CACHE_TTL_SECONDS: float = _float_env("SKILLTREE_CACHE_TTL_SECONDS", "0")

    # ===== Logging =====
    LOG_LEVEL: str = os.getenv("SKILLTREE_LOG_LEVEL", "INFO")
