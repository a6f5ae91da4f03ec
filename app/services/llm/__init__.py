"""LLM classification services.

Exports:
	OpenRouterClient: Chat-completion client with retry and backoff.
	PromptBuilder: Builds the system and user messages for a denial note.
	Parser: Validates the model's JSON reply against the classification schema.
	DenialClassifier: Classifies a single claim.
	run_classification: Sequential batch runner with per-claim error isolation.
"""

from .openrouter_client import OpenRouterClient
from .prompt_builder import PromptBuilder
from .classification_orchestrator import DenialClassifier, Parser, run_classification

__all__ = [
	"OpenRouterClient",
	"PromptBuilder",
	"DenialClassifier",
	"Parser",
	"run_classification",
]
