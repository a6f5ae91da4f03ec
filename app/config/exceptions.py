"""Custom exceptions for the classifier pipeline."""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for pipeline errors. Raise this instead of sys.exit(1)."""
    pass


class ConfigurationError(PipelineError):
    """Missing credential or bad command line arguments."""
    pass


class InputError(PipelineError):
    """Input file is unreadable, not JSON, or holds malformed claims."""
    pass


class TransportError(PipelineError):
    """Chat-completion request failed after all retry attempts."""
    pass


class ResponseValidationError(PipelineError):
    """Model reply is not JSON or does not match the classification schema."""
    pass


class ClassificationError(PipelineError):
    """A single claim could not be classified."""

    def __init__(self, claim_id: str, cause: BaseException | str):
        self.claim_id = claim_id
        self.cause = cause
        super().__init__(f"Failed to classify claim denial (id: {claim_id}): {cause}")


class OutputError(PipelineError):
    """Results could not be written to the output file."""
    pass
