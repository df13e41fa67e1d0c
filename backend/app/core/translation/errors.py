"""Translation error taxonomy.

ProviderCallFailure and InvalidInputError surface to callers as batch-level
failures. ArbitrationFailure is raised by the arbiter and absorbed by the
merge resolver; it never leaves the merge step.
"""

from typing import Optional


class TranslationError(Exception):
    """Base class for merge engine errors."""


class InvalidInputError(TranslationError):
    """Malformed segment or unsupported language, rejected before any LLM call."""

    def __init__(self, message: str, segment_id: Optional[int] = None):
        super().__init__(message)
        self.segment_id = segment_id


class ProviderCallFailure(TranslationError):
    """A translation provider call failed or returned nothing usable."""

    def __init__(self, segment_id: int, provider: str, cause: str):
        super().__init__(
            f"Provider '{provider}' failed for segment {segment_id}: {cause}"
        )
        self.segment_id = segment_id
        self.provider = provider
        self.cause = cause

    def to_dict(self) -> dict:
        return {
            "segment_id": self.segment_id,
            "provider": self.provider,
            "cause": self.cause,
        }


class ArbitrationFailure(TranslationError):
    """The verification call errored or answered neither "A" nor "B"."""
