from __future__ import annotations

import os
from typing import Optional

# --------------- OpenRouter ---------------
API_KEY_ENV = "OPENROUTER_API_KEY"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "anthropic/claude-3.5-sonnet"
CLIENT_TITLE = "Medical Claim Issue Classifier"

# Request parameters
LLM_TEMPERATURE = 0.2
LLM_MAX_TOKENS = 512


def get_int_env(key: str, default: Optional[int] = None) -> Optional[int]:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_float_env(key: str, default: Optional[float] = None) -> Optional[float]:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# Retry policy: delay before attempt k+1 is RETRY_BACKOFF_SECONDS * 2**(k-1)
REQUEST_TIMEOUT_SECONDS = get_float_env("OPENROUTER_TIMEOUT", 30.0) or 30.0
MAX_ATTEMPTS = max(1, get_int_env("LLM_MAX_ATTEMPTS", 3) or 3)
RETRY_BACKOFF_SECONDS = 0.5

# Pause between two successive claims (upstream rate limit)
CLAIM_DELAY_SECONDS = max(0.0, get_float_env("CLAIM_DELAY_SECONDS", 0.5))

# --------------- Denial Classification ---------------
EXTRACTED_FIELD_KEYS = ["payer", "cpt_codes", "suggested_action"]
JSON_SUFFIX = ".json"

SYSTEM_PROMPT = (
    "You are a medical billing expert. Your task is to classify claim denial "
    "notes into structured JSON. Always respond with valid JSON only, no "
    "explanations or extra text."
)


__all__ = [
    "API_KEY_ENV",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "CLIENT_TITLE",
    "LLM_TEMPERATURE",
    "LLM_MAX_TOKENS",
    "REQUEST_TIMEOUT_SECONDS",
    "MAX_ATTEMPTS",
    "RETRY_BACKOFF_SECONDS",
    "CLAIM_DELAY_SECONDS",
    "get_int_env",
    "get_float_env",
    # Classification
    "EXTRACTED_FIELD_KEYS",
    "JSON_SUFFIX",
    "SYSTEM_PROMPT",
]
