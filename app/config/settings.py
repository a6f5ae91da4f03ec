from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from config.constants import API_KEY_ENV, DEFAULT_BASE_URL, DEFAULT_MODEL
from config.exceptions import ConfigurationError


@dataclass(frozen=True)
class LLMConfig:
    """Connection settings for the chat-completion endpoint. Built once per run."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL

    @property
    def endpoint(self) -> str:
        return self.base_url.rstrip("/") + "/chat/completions"

    @classmethod
    def from_env(
        cls,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
    ) -> "LLMConfig":
        """Build config from explicit values, falling back to the environment.

        Raises:
            ConfigurationError if no API key is available.
        """
        key = api_key or os.getenv(API_KEY_ENV)
        if not key:
            raise ConfigurationError(f"No API key provided (set {API_KEY_ENV})")
        return cls(
            api_key=key,
            base_url=base_url or os.getenv("OPENROUTER_BASE_URL") or DEFAULT_BASE_URL,
            model=model or os.getenv("OPENROUTER_MODEL") or DEFAULT_MODEL,
        )


__all__ = ["LLMConfig"]
