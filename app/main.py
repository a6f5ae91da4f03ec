"""
Medical Claim Denial Classifier - LLM classification of claim denial notes.

Usage:
    python app/main.py <input.json> <output.json>

Environment (.env is loaded if present):
    OPENROUTER_API_KEY   required
    OPENROUTER_BASE_URL  optional, defaults to https://openrouter.ai/api/v1
    OPENROUTER_MODEL     optional, defaults to anthropic/claude-3.5-sonnet

Behavior:
- Every claim in the input file is validated before any API call
- Claims are classified one at a time with a short pause between calls
- A claim that fails is written with an "error" field; the run continues
- The output file is only written once every claim has been processed
"""
from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from dotenv import load_dotenv

from config.constants import API_KEY_ENV, CLAIM_DELAY_SECONDS
from config.exceptions import PipelineError
from helpers.data_operations import (
    read_claims,
    summarize_results,
    validate_file_path,
    write_claims,
)
from models.claims import ClaimOutput
from services import (
    DenialClassifier,
    OpenRouterClient,
    Parser,
    PromptBuilder,
    run_classification,
)
from utils.logging import get_logger, init_logging
from utils.console import console

logger = get_logger(__name__)


def parse_arguments(argv: Optional[Sequence[str]] = None) -> Tuple[Path, Path]:
    """Parse CLI arguments and return absolute (input, output) paths."""
    parser = argparse.ArgumentParser(
        prog="denial-classifier",
        description="Classify medical claim denial notes with an LLM.",
        epilog=f"Requires the {API_KEY_ENV} environment variable.",
    )
    parser.add_argument("input_path", help="JSON array of {id, denial_note} claims")
    parser.add_argument("output_path", help="Where to write the classified claims (.json)")
    args = parser.parse_args(argv)

    input_path = validate_file_path(args.input_path, "input")
    output_path = validate_file_path(args.output_path, "output")
    return input_path, output_path


def run_pipeline(
    input_path: Path,
    output_path: Path,
    client: OpenRouterClient,
    delay: float = CLAIM_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> List[ClaimOutput]:
    """Read claims, classify them in order and write the results."""
    claims = read_claims(input_path)
    console.info("Claims Loaded", f"{len(claims)} claim(s) from {input_path}")

    classifier = DenialClassifier(client=client, parser=Parser(), builder=PromptBuilder())
    outputs = run_classification(classifier, claims, delay=delay, sleep=sleep)

    write_claims(output_path, outputs)
    return outputs


def main(argv: Optional[Sequence[str]] = None, client: Optional[OpenRouterClient] = None) -> int:
    """
    Run the denial classification pipeline.

    Returns exit code.
    """
    pipeline_start = time.time()

    try:
        load_dotenv()
        init_logging("main")
        console.start("Medical Claim Denial Classifier (OpenRouter LLM)")

        input_path, output_path = parse_arguments(argv)
        logger.info("Input: %s, output: %s", input_path, output_path)

        if client is None:
            client = OpenRouterClient.from_env()
        logger.info("LLM client initialized: model=%s", client.model)

        outputs = run_pipeline(input_path, output_path, client)

        elapsed = time.time() - pipeline_start
        stats = summarize_results(outputs)
        console.classification_summary(stats, str(output_path), elapsed=elapsed)
        console.pipeline_finished(success=True)
        logger.info("Pipeline complete in %.1fs", elapsed)
        return 0

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        console.interrupted()
        return 130
    except PipelineError as e:
        logger.error("Pipeline error: %s", e)
        console.error("Pipeline Error", str(e))
        console.pipeline_finished(success=False)
        return 1
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        console.error("Unexpected Error", str(e))
        console.pipeline_finished(success=False)
        return 1


if __name__ == "__main__":
    exit(main())
