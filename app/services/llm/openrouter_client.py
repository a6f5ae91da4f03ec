from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional

import requests

from config.constants import (
    CLIENT_TITLE,
    LLM_MAX_TOKENS,
    LLM_TEMPERATURE,
    MAX_ATTEMPTS,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_BACKOFF_SECONDS,
)
from config.exceptions import TransportError
from config.settings import LLMConfig
from utils.logging import get_logger

logger = get_logger(__name__)


def _extract_content(data: Any) -> Optional[str]:
    """Return choices[0].message.content if the body has that shape."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


class OpenRouterClient:
    """OpenRouter chat-completion client with retry and exponential backoff."""

    def __init__(
        self,
        config: LLMConfig,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        max_attempts: int = MAX_ATTEMPTS,
        backoff: float = RETRY_BACKOFF_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff = backoff
        self.sleep = sleep

    @classmethod
    def from_env(cls, api_key: Optional[str] = None, **kwargs: Any) -> "OpenRouterClient":
        """Create a client from OPENROUTER_* env vars. Raises ConfigurationError without a key."""
        return cls(LLMConfig.from_env(api_key=api_key), **kwargs)

    @property
    def model(self) -> str:
        return self.config.model

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
            "X-Title": CLIENT_TITLE,
        }

    def _post_once(self, payload: Dict[str, Any]) -> str:
        """Issue one request. Every failure is raised as TransportError."""
        try:
            response = self.session.post(
                self.config.endpoint,
                headers=self._headers(),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"LLM request failed: {e}") from e

        logger.debug("Response status: %d", response.status_code)

        if not 200 <= response.status_code < 300:
            error_msg = (response.text or "")[:500]
            raise TransportError(f"LLM error [{response.status_code}]: {error_msg}")

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Failed to parse LLM response: {e}") from e

        content = _extract_content(data)
        if content is None:
            raise TransportError("Malformed response from OpenRouter API")

        usage = data.get("usage")
        if isinstance(usage, dict) and usage:
            logger.info(
                "Tokens used: %s (prompt=%s, completion=%s)",
                usage.get("total_tokens", 0),
                usage.get("prompt_tokens", 0),
                usage.get("completion_tokens", 0),
            )
        return content

    def send(self, messages: List[Dict[str, str]]) -> str:
        """Send chat messages and return the raw text of the first choice.

        Args:
            messages: System message first, then the user message.

        Returns:
            The model reply exactly as received.

        Raises:
            TransportError once every attempt has failed.
        """
        payload = {
            "model": self.config.model,
            "messages": messages,
            "temperature": LLM_TEMPERATURE,
            "max_tokens": LLM_MAX_TOKENS,
        }

        logger.info("Sending request to LLM...")
        logger.debug(
            "Endpoint: %s, model: %s, messages: %d",
            self.config.endpoint,
            self.config.model,
            len(messages),
        )

        last_error: Optional[TransportError] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return self._post_once(payload)
            except TransportError as e:
                last_error = e
                if attempt < self.max_attempts:
                    sleep_for = self.backoff * (2 ** (attempt - 1))
                    logger.warning(
                        "LLM attempt %d/%d failed (%s); retrying in %.2fs",
                        attempt, self.max_attempts, e, sleep_for,
                    )
                    self.sleep(sleep_for)
                else:
                    logger.error("LLM attempt %d/%d failed (%s)", attempt, self.max_attempts, e)

        raise TransportError(
            f"OpenRouter API call failed after {self.max_attempts} attempts: {last_error}"
        ) from last_error


__all__ = ["OpenRouterClient"]
