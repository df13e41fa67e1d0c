"""Merge resolver: the dual-model decision engine.

Two providers translate the same segment from the same prompt. Their
agreement score selects one of three regimes, and each regime fixes both
the text-selection rule and the confidence:

    score >= 0.90        high_agreement         A's text,        0.95
    0.70 < score < 0.90  verified_selection     arbiter's pick,  0.85
    score <= 0.70        low_agreement_flagged  A's text,        0.70

Confidence communicates the regime, not a measured accuracy; downstream QA
tiers (0.90 / 0.80) are calibrated against these discrete levels. When the
arbiter fails inside the verified band, candidate A is kept at 0.75.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from app.utils.text import safe_truncate

from ..errors import ArbitrationFailure
from ..languages import SupportedLanguage
from ..models.context import TranslationSegment
from ..models.result import (
    MergedTranslation,
    MergeStrategy,
    ProviderResults,
    ProviderTranslationResult,
)
from .arbiter import VerificationArbiter
from .similarity import SimilarityScorer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeRegime:
    """One merge decision path and its fixed payload."""

    strategy: MergeStrategy
    confidence: float
    requires_arbitration: bool


HIGH_AGREEMENT = MergeRegime(MergeStrategy.HIGH_AGREEMENT, 0.95, False)
VERIFIED_SELECTION = MergeRegime(MergeStrategy.VERIFIED_SELECTION, 0.85, True)
LOW_AGREEMENT_FLAGGED = MergeRegime(MergeStrategy.LOW_AGREEMENT_FLAGGED, 0.70, False)

REGIMES = {
    regime.strategy: regime
    for regime in (HIGH_AGREEMENT, VERIFIED_SELECTION, LOW_AGREEMENT_FLAGGED)
}

ARBITRATION_FALLBACK_CONFIDENCE = 0.75

DEFAULT_HIGH_AGREEMENT_THRESHOLD = 0.90
DEFAULT_LOW_AGREEMENT_THRESHOLD = 0.70


def select_regime(
    score: float,
    high_threshold: float = DEFAULT_HIGH_AGREEMENT_THRESHOLD,
    low_threshold: float = DEFAULT_LOW_AGREEMENT_THRESHOLD,
) -> MergeRegime:
    """Select exactly one regime for an agreement score.

    The high threshold belongs to high_agreement and the low threshold
    belongs to low_agreement_flagged.
    """
    if score >= high_threshold:
        return HIGH_AGREEMENT
    if score > low_threshold:
        return VERIFIED_SELECTION
    return LOW_AGREEMENT_FLAGGED


class MergeResolver:
    """Resolves two provider results into one MergedTranslation."""

    def __init__(
        self,
        arbiter: VerificationArbiter,
        scorer: Optional[SimilarityScorer] = None,
        high_threshold: float = DEFAULT_HIGH_AGREEMENT_THRESHOLD,
        low_threshold: float = DEFAULT_LOW_AGREEMENT_THRESHOLD,
    ):
        if not 0.0 <= low_threshold < high_threshold <= 1.0:
            raise ValueError(
                f"thresholds must satisfy 0 <= low < high <= 1, "
                f"got low={low_threshold}, high={high_threshold}"
            )
        self.arbiter = arbiter
        self.scorer = scorer or SimilarityScorer()
        self.high_threshold = high_threshold
        self.low_threshold = low_threshold

    async def merge(
        self,
        segment: TranslationSegment,
        result_a: ProviderTranslationResult,
        result_b: ProviderTranslationResult,
        language: SupportedLanguage,
        agreement_score: Optional[float] = None,
    ) -> MergedTranslation:
        """Merge two provider results for one segment.

        Never raises on arbiter problems; those fall back to candidate A.

        Args:
            segment: Source segment
            result_a: Provider A's result (the more trusted provider)
            result_b: Provider B's result
            language: Target language
            agreement_score: Precomputed score, computed here when omitted

        Returns:
            MergedTranslation
        """
        start_time = time.time()

        if agreement_score is None:
            agreement_score = self.scorer.score(
                result_a.translated_text, result_b.translated_text
            )
        regime = select_regime(agreement_score, self.high_threshold, self.low_threshold)

        logger.debug(
            f"Comparing translations for segment {segment.id}: "
            f"similarity={agreement_score:.3f}, regime={regime.strategy.value}, "
            f"words a={result_a.metadata.word_count} b={result_b.metadata.word_count}"
        )

        text = result_a.translated_text
        primary_model = result_a.model
        confidence = regime.confidence
        fallback = False

        if regime.requires_arbitration:
            try:
                decision = await self.arbiter.choose(
                    segment.text,
                    result_a.translated_text,
                    result_b.translated_text,
                    language.name,
                    model_a=result_a.model,
                    model_b=result_b.model,
                )
                text = decision.chosen_text
                primary_model = decision.chosen_model
            except ArbitrationFailure as e:
                logger.error(
                    f"Translation verification failed for segment {segment.id}, "
                    f"keeping {result_a.model}: {e}"
                )
                confidence = ARBITRATION_FALLBACK_CONFIDENCE
                fallback = True

        elif regime is LOW_AGREEMENT_FLAGGED:
            logger.warning(
                f"Low agreement between models, flagged for review: "
                f"segment={segment.id}, similarity={agreement_score:.3f}, "
                f"original='{safe_truncate(segment.text, 100)}', "
                f"a='{safe_truncate(result_a.translated_text, 100)}', "
                f"b='{safe_truncate(result_b.translated_text, 100)}'"
            )

        merged = MergedTranslation(
            segment_id=segment.id,
            text=text,
            confidence=confidence,
            primary_model=primary_model,
            agreement_score=agreement_score,
            merge_strategy=regime.strategy,
            provider_results=ProviderResults(a=result_a, b=result_b),
            arbitration_fallback=fallback,
        )

        logger.debug(
            f"Translation merge completed for segment {segment.id}: "
            f"primary={primary_model}, confidence={confidence:.2f}, "
            f"duration={int((time.time() - start_time) * 1000)}ms"
        )
        return merged
