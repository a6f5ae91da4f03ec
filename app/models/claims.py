"""Claim records and the denial category vocabulary."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, TypedDict


class Category(str, Enum):
    """Denial categories the model may assign."""

    ELIGIBILITY = "Eligibility"
    CODING_ERROR = "Coding Error"
    PRIOR_AUTHORIZATION = "Prior Authorization"
    INCORRECT_PATIENT_INFO = "Incorrect Patient Info"
    PAYER_SPECIFIC_RULE = "Payer Specific Rule"
    OTHER = "Other"

    @classmethod
    def values(cls) -> List[str]:
        return [c.value for c in cls]


class ExtractedFields(TypedDict):
    payer: Optional[str]
    cpt_codes: List[str]
    suggested_action: Optional[str]


class ClassificationResult(TypedDict):
    """Validated model reply."""

    categories: List[str]
    extracted_fields: ExtractedFields


@dataclass(frozen=True)
class ClaimInput:
    id: str
    denial_note: str


@dataclass(frozen=True)
class ClaimOutput:
    """A claim enriched with its classification.

    ``error`` is only set when classification failed; the record then carries
    no categories and an empty ``extracted_fields``.
    """

    id: str
    denial_note: str
    categories: List[str] = field(default_factory=list)
    # ExtractedFields on success, {} on failure
    extracted_fields: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def success(cls, claim: ClaimInput, categories: List[str], extracted_fields: ExtractedFields) -> "ClaimOutput":
        return cls(
            id=claim.id,
            denial_note=claim.denial_note,
            categories=list(categories),
            extracted_fields=dict(extracted_fields),
        )

    @classmethod
    def failure(cls, claim: ClaimInput, error: str) -> "ClaimOutput":
        return cls(id=claim.id, denial_note=claim.denial_note, error=error)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "denial_note": self.denial_note,
            "categories": list(self.categories),
            "extracted_fields": dict(self.extracted_fields),
        }
        if self.error is not None:
            data["error"] = self.error
        return data


__all__ = ["Category", "ExtractedFields", "ClassificationResult", "ClaimInput", "ClaimOutput"]
