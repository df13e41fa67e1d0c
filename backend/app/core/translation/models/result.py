"""Translation result models.

This module defines the output data structures of the merge engine: one
result per provider call, the merged per-segment translation, and the
batch aggregate handed to QA review.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field


class MergeStrategy(str, Enum):
    """Merge regime selected by the agreement score."""

    HIGH_AGREEMENT = "high_agreement"
    VERIFIED_SELECTION = "verified_selection"
    LOW_AGREEMENT_FLAGGED = "low_agreement_flagged"


class QAStatus(str, Enum):
    """QA routing derived from a segment's confidence."""

    APPROVED = "approved"
    NEEDS_REVIEW = "needs-review"
    FLAGGED = "flagged"

    @classmethod
    def from_confidence(cls, confidence: float) -> "QAStatus":
        """Map a confidence value to its review tier.

        approved >= 0.90, needs-review >= 0.80, flagged otherwise.
        """
        if confidence >= 0.90:
            return cls.APPROVED
        if confidence >= 0.80:
            return cls.NEEDS_REVIEW
        return cls.FLAGGED


class TranslationMetadata(BaseModel):
    """Informational metadata about one provider's output."""

    model_config = ConfigDict(frozen=True)

    word_count: int = Field(default=0, description="Words in the translation")
    estimated_duration_seconds: float = Field(
        default=0.0, description="Estimated spoken duration of the translation"
    )
    warnings: List[str] = Field(
        default_factory=list, description="Informational warnings, never gating"
    )


class ProviderTranslationResult(BaseModel):
    """Output of one provider call."""

    model_config = ConfigDict(frozen=True)

    translated_text: str = Field(..., description="The translated text")
    confidence: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Fixed prior confidence of the provider",
    )
    model: str = Field(..., description="Provider label")
    metadata: TranslationMetadata = Field(default_factory=TranslationMetadata)


class ProviderResults(BaseModel):
    """Both provider outputs a merge decision was made from."""

    model_config = ConfigDict(frozen=True)

    a: ProviderTranslationResult
    b: ProviderTranslationResult


class MergedTranslation(BaseModel):
    """Final translation for one segment.

    Created exactly once per segment by the merge resolver. Confidence and
    merge strategy are fixed by the agreement score's regime.
    """

    model_config = ConfigDict(frozen=True)

    segment_id: int = Field(..., description="Id of the source segment")
    text: str = Field(..., description="Chosen translation")
    confidence: float = Field(..., ge=0.0, le=1.0)
    primary_model: str = Field(..., description="Label of the chosen provider")
    agreement_score: float = Field(..., ge=0.0, le=1.0)
    merge_strategy: MergeStrategy
    provider_results: ProviderResults
    arbitration_fallback: bool = Field(
        default=False,
        description="True when the arbiter failed and candidate A was kept",
    )

    @computed_field  # type: ignore[misc]
    @property
    def qa_status(self) -> QAStatus:
        """Review tier for this segment."""
        return QAStatus.from_confidence(self.confidence)


class BatchTranslationResult(BaseModel):
    """Ordered per-segment results for one batch call."""

    target_language: str = Field(..., description="Target language code")
    segments: List[MergedTranslation] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def overall_confidence(self) -> float:
        """Mean of per-segment confidence (0.0 for an empty result)."""
        if not self.segments:
            return 0.0
        return sum(s.confidence for s in self.segments) / len(self.segments)

    @property
    def low_confidence_count(self) -> int:
        """Segments below the needs-review tier."""
        return sum(1 for s in self.segments if s.confidence < 0.80)

    @property
    def flagged_segment_ids(self) -> List[int]:
        """Ids of segments routed to flagged status."""
        return [s.segment_id for s in self.segments if s.qa_status == QAStatus.FLAGGED]
