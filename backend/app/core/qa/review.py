"""QA review of merged translations.

Merged translations are routed by confidence into approved, needs-review or
flagged. Reviewers approve or reject individual segments, and only approved
text moves on to speech synthesis, paired with the original segment's time
bounds.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from app.core.translation.errors import InvalidInputError
from app.core.translation.models import (
    BatchTranslationResult,
    QAStatus,
    TranslationSegment,
)

logger = logging.getLogger(__name__)


class ReviewStatus(str, Enum):
    """Outcome of a human review."""

    APPROVED = "approved"
    REJECTED = "rejected"


class ReviewDecision(BaseModel):
    """A reviewer's decision on one translated segment."""

    video_id: str
    segment_id: int
    status: ReviewStatus
    approved_text: Optional[str] = None
    reviewer_notes: Optional[str] = None
    reason: Optional[str] = None
    suggested_text: Optional[str] = None
    reviewed_by: Optional[str] = None
    decided_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SynthesisCue(BaseModel):
    """Approved text with the time window it must be spoken in."""

    segment_id: int
    text: str
    start_time: float
    end_time: float


class QAReviewService:
    """Records reviewer decisions.

    Decisions are returned to the caller; storing them belongs to the
    persistence layer.
    """

    def approve(
        self,
        video_id: str,
        segment_id: int,
        approved_text: str,
        reviewer_notes: Optional[str] = None,
        reviewed_by: Optional[str] = None,
    ) -> ReviewDecision:
        if not approved_text or not approved_text.strip():
            raise InvalidInputError("approved_text must not be empty", segment_id=segment_id)

        logger.info(f"Translation approved for segment {segment_id} of video {video_id}")
        return ReviewDecision(
            video_id=video_id,
            segment_id=segment_id,
            status=ReviewStatus.APPROVED,
            approved_text=approved_text.strip(),
            reviewer_notes=reviewer_notes,
            reviewed_by=reviewed_by,
        )

    def reject(
        self,
        video_id: str,
        segment_id: int,
        reason: str,
        suggested_text: Optional[str] = None,
        reviewed_by: Optional[str] = None,
    ) -> ReviewDecision:
        if not reason or not reason.strip():
            raise InvalidInputError("A rejection reason is required", segment_id=segment_id)

        logger.info(
            f"Translation rejected for segment {segment_id} of video {video_id}: {reason}"
        )
        return ReviewDecision(
            video_id=video_id,
            segment_id=segment_id,
            status=ReviewStatus.REJECTED,
            reason=reason.strip(),
            suggested_text=suggested_text,
            reviewed_by=reviewed_by,
        )


def summarize(batch: BatchTranslationResult) -> Dict[str, int]:
    """Count segments per QA status."""
    counts = {status.value: 0 for status in QAStatus}
    for merged in batch.segments:
        counts[merged.qa_status.value] += 1
    return counts


def build_synthesis_cues(
    segments: Iterable[TranslationSegment],
    batch: BatchTranslationResult,
) -> List[SynthesisCue]:
    """Pair approved translations with their source segment time bounds.

    Segments that are not approved are left out; they wait for review.

    Raises:
        InvalidInputError: If a translation has no matching source segment
    """
    by_id = {segment.id: segment for segment in segments}
    cues: List[SynthesisCue] = []

    for merged in batch.segments:
        if merged.qa_status != QAStatus.APPROVED:
            continue
        segment = by_id.get(merged.segment_id)
        if segment is None:
            raise InvalidInputError(
                f"No source segment for translation {merged.segment_id}",
                segment_id=merged.segment_id,
            )
        cues.append(
            SynthesisCue(
                segment_id=merged.segment_id,
                text=merged.text,
                start_time=segment.start_time,
                end_time=segment.end_time,
            )
        )

    return cues
