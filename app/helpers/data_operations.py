from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pandas as pd

from config.constants import JSON_SUFFIX
from config.exceptions import ConfigurationError, InputError, OutputError
from models.claims import ClaimInput, ClaimOutput
from utils.logging import get_logger

logger = get_logger(__name__)

CLAIM_FIELDS = ("id", "denial_note")


class JsonManager:
    """Simple JSON I/O with atomic writes."""

    def __init__(self, encoding: str = "utf-8", indent: int = 2):
        self.encoding = encoding
        self.indent = indent

    def write(self, path: Path | str, data: Any) -> None:
        """Write data to JSON file atomically, creating parent directories."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        tmp = p.with_suffix(p.suffix + ".tmp")
        try:
            tmp.write_text(
                json.dumps(data, indent=self.indent, ensure_ascii=False),
                encoding=self.encoding,
            )
            tmp.replace(p)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def load(self, path: Path | str) -> Any:
        """Load a JSON file. OSError and ValueError propagate to the caller."""
        return json.loads(Path(path).read_text(encoding=self.encoding))


def validate_file_path(file_path: str, file_type: str = "file") -> Path:
    """Check a CLI path argument and return it as an absolute path.

    Raises:
        ConfigurationError if the path is empty or does not end in .json
    """
    if not file_path:
        raise ConfigurationError(f"No {file_type} file path provided")
    if not file_path.endswith(JSON_SUFFIX):
        raise ConfigurationError(f"{file_type.capitalize()} file does not end with {JSON_SUFFIX}: {file_path}")
    return Path(os.path.abspath(file_path))


def _validate_claim(obj: Any, index: int) -> ClaimInput:
    if not isinstance(obj, dict):
        raise InputError(f"Claim at index {index} is not an object")
    for field in CLAIM_FIELDS:
        value = obj.get(field)
        if not isinstance(value, str) or not value.strip():
            raise InputError(
                f"Claim at index {index} is not formatted correctly "
                f"(missing or blank '{field}'): {json.dumps(obj, ensure_ascii=False)}"
            )
    return ClaimInput(id=obj["id"], denial_note=obj["denial_note"])


def read_claims(path: Path | str, jm: JsonManager | None = None) -> List[ClaimInput]:
    """Read and validate every claim in the input file before any API call."""
    jm = jm or JsonManager()
    try:
        data = jm.load(path)
    except OSError as e:
        raise InputError(f"Cannot read input file '{path}': {e}") from e
    except ValueError as e:
        raise InputError(f"Input file '{path}' is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise InputError("Invalid content format: expected a JSON array of claims")

    claims = [_validate_claim(obj, idx) for idx, obj in enumerate(data)]
    logger.info("Loaded %d claims from %s", len(claims), path)
    return claims


def write_claims(path: Path | str, outputs: Sequence[ClaimOutput], jm: JsonManager | None = None) -> None:
    jm = jm or JsonManager()
    try:
        jm.write(path, [o.to_dict() for o in outputs])
    except (OSError, TypeError, ValueError) as e:
        raise OutputError(f"Cannot write output file '{path}': {e}") from e
    logger.info("Output saved to %s (%d claims)", path, len(outputs))


def summarize_results(outputs: Sequence[ClaimOutput]) -> Dict[str, Any]:
    """Aggregate classification results for the console summary.

    Returns:
        Dict with total, successful, failed, category_counts, payer_counts
        (both sorted by count, descending) and failed_claims [{id, error}].
    """
    df = pd.DataFrame(
        [
            {
                "id": o.id,
                "categories": list(o.categories),
                "payer": o.extracted_fields.get("payer"),
                "error": o.error,
            }
            for o in outputs
        ],
        columns=["id", "categories", "payer", "error"],
    )

    failed_mask = df["error"].notna()
    ok = df[~failed_mask]

    category_counts = ok["categories"].explode().dropna().value_counts()
    payers = ok["payer"][ok["payer"].map(lambda p: isinstance(p, str) and p != "").astype(bool)]
    payer_counts = payers.value_counts()

    stats: Dict[str, Any] = {
        "total": len(df),
        "successful": int((~failed_mask).sum()),
        "failed": int(failed_mask.sum()),
        "category_counts": {str(k): int(v) for k, v in category_counts.items()},
        "payer_counts": {str(k): int(v) for k, v in payer_counts.items()},
        "failed_claims": [
            {"id": row["id"], "error": row["error"]}
            for _, row in df[failed_mask].iterrows()
        ],
    }

    logger.info(
        "Summary: %d/%d classified, %d failed, %d distinct categories",
        stats["successful"],
        stats["total"],
        stats["failed"],
        len(stats["category_counts"]),
    )
    logger.debug("Category counts: %s", stats["category_counts"])
    logger.debug("Payer counts: %s", stats["payer_counts"])
    return stats


__all__ = [
    "JsonManager",
    "validate_file_path",
    "read_claims",
    "write_claims",
    "summarize_results",
]
