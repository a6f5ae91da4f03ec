from __future__ import annotations

from collections import Counter
import json
import math
import time
from typing import Any, Callable, List, Sequence

from .openrouter_client import OpenRouterClient
from .prompt_builder import PromptBuilder
from config.constants import CLAIM_DELAY_SECONDS, EXTRACTED_FIELD_KEYS
from config.exceptions import ClassificationError, ResponseValidationError
from models.claims import Category, ClaimInput, ClaimOutput, ClassificationResult
from utils.logging import get_logger
from utils.console import console

logger = get_logger(__name__)


def _reject_constant(name: str) -> Any:
    raise ResponseValidationError(f"LLM response is not valid JSON: non-standard constant {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ResponseValidationError(f"LLM response is not valid JSON: number out of range {text}")
    return value


class Parser:
    """Strict validation of the model's JSON reply."""

    def __init__(self) -> None:
        self.allowed_categories = set(Category.values())

    def parse_classification_response(self, response_text: str) -> ClassificationResult:
        """Parse the reply and check it against the classification schema.

        Returns:
            {"categories": [...], "extracted_fields": {...}} exactly as the model
            sent them.

        Raises:
            ResponseValidationError naming the first rule that failed.
        """
        try:
            data = json.loads(
                response_text,
                parse_constant=_reject_constant,
                parse_float=_finite_float,
            )
        except (TypeError, ValueError) as e:
            raise ResponseValidationError(f"LLM response is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ResponseValidationError(
                f"LLM response is not a JSON object (type={type(data).__name__})"
            )

        categories = data.get("categories")
        if not isinstance(categories, list) or any(not isinstance(c, str) for c in categories):
            raise ResponseValidationError("Incorrect categories format in LLM Response")

        unknown = [c for c in categories if c not in self.allowed_categories]
        if unknown:
            raise ResponseValidationError(f"Invalid category values in LLM Response: {unknown}")

        fields = data.get("extracted_fields")
        if not isinstance(fields, dict) or any(k not in fields for k in EXTRACTED_FIELD_KEYS):
            raise ResponseValidationError("Incorrect extracted_fields format in LLM Response")

        cpt_codes = fields["cpt_codes"]
        if not isinstance(cpt_codes, list) or any(not isinstance(c, str) for c in cpt_codes):
            raise ResponseValidationError("Incorrect cpt_codes in LLM Response")

        return ClassificationResult(categories=categories, extracted_fields=fields)


class DenialClassifier:
    def __init__(self, client: OpenRouterClient, parser: Parser, builder: PromptBuilder):
        self.client = client
        self.parser = parser
        self.builder = builder

    def classify(self, claim: ClaimInput) -> ClaimOutput:
        """Classify one claim; any failure is raised as ClassificationError."""
        try:
            messages = self.builder.build_messages(claim.denial_note)
            response_text = self.client.send(messages)
            logger.debug("Claim %s: response length=%d chars", claim.id, len(response_text))
            parsed = self.parser.parse_classification_response(response_text)
        except Exception as e:
            raise ClassificationError(claim.id, e) from e

        return ClaimOutput.success(claim, parsed["categories"], parsed["extracted_fields"])


def run_classification(
    classifier: DenialClassifier,
    claims: Sequence[ClaimInput],
    delay: float = CLAIM_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> List[ClaimOutput]:
    """Classify claims one at a time, keeping input order.

    A failed claim yields an output record with ``error`` set; the run carries
    on with the next claim.
    """
    total = len(claims)
    duplicates = [cid for cid, n in Counter(c.id for c in claims).items() if n > 1]
    if duplicates:
        logger.warning("Duplicate claim ids in input: %s", duplicates)
        console.warning("Duplicate claim ids", ", ".join(duplicates))

    logger.info("Starting denial classification: %d claims, delay=%.2fs", total, delay)
    console.classification_start(total)

    results: List[ClaimOutput] = []
    failed = 0
    for processed, claim in enumerate(claims, start=1):
        try:
            output = classifier.classify(claim)
            logger.info("Claim %s: categories=%s", claim.id, output.categories)
        except ClassificationError as e:
            logger.warning("Claim %s failed: %s", e.claim_id, e)
            output = ClaimOutput.failure(claim, str(e))
            failed += 1
        results.append(output)

        console.progress(processed, total)

        if processed < total:
            sleep(delay)

    console.progress_done()
    logger.info("Classification loop complete: %d claims, %d failed", total, failed)
    return results


__all__ = ["Parser", "DenialClassifier", "run_classification"]
