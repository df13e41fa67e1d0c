"""Translation pipeline components.

This module provides the core pipeline components for dual-model translation:
- ContextPromptBuilder: Builds the shared system prompt and segment instructions
- TranslationProvider: Uniform adapter around one configured model
- DurationEstimator: Spoken duration metadata for translated text
- SimilarityScorer: Token-set Jaccard agreement between two candidates
- VerificationArbiter: Third model call for the ambiguous band
- MergeResolver: Regime selection and final translation choice
"""

from .arbiter import ArbitrationDecision, VerificationArbiter
from .context_builder import ContextPromptBuilder
from .duration import DurationEstimator
from .merge import (
    ARBITRATION_FALLBACK_CONFIDENCE,
    HIGH_AGREEMENT,
    LOW_AGREEMENT_FLAGGED,
    REGIMES,
    VERIFIED_SELECTION,
    MergeRegime,
    MergeResolver,
    select_regime,
)
from .output_processor import OutputProcessor
from .provider import TranslationProvider
from .similarity import SimilarityScorer

__all__ = [
    "ContextPromptBuilder",
    "TranslationProvider",
    "DurationEstimator",
    "OutputProcessor",
    "SimilarityScorer",
    "VerificationArbiter",
    "ArbitrationDecision",
    "MergeResolver",
    "MergeRegime",
    "REGIMES",
    "HIGH_AGREEMENT",
    "VERIFIED_SELECTION",
    "LOW_AGREEMENT_FLAGGED",
    "ARBITRATION_FALLBACK_CONFIDENCE",
    "select_regime",
]
