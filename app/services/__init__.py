"""Denial classification services.

Exports:
    OpenRouterClient: Chat-completion client with retry and backoff.
    PromptBuilder: Builds classification prompts for a denial note.
    Parser: Denial classification response validator.
    DenialClassifier: Single-claim classification service.
    run_classification: Sequential batch runner.
"""

from .llm.openrouter_client import OpenRouterClient
from .llm.prompt_builder import PromptBuilder
from .llm.classification_orchestrator import (
    DenialClassifier,
    Parser,
    run_classification,
)

__all__ = [
    "OpenRouterClient",
    "PromptBuilder",
    "DenialClassifier",
    "Parser",
    "run_classification",
]
