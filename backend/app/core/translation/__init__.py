"""Translation package.

This package provides the dual-model translation merge engine.

Architecture:
- models/: Data models (TranslationSegment, MergedTranslation, etc.)
- pipeline/: Pipeline components (prompt builder, providers, scorer,
  arbiter, merge resolver)
- languages.py: Fixed table of supported target languages
- errors.py: Error taxonomy
- orchestrator.py: Batch orchestration over transcript segments (imported
  directly, so the models load without settings or litellm)
"""

from .errors import (
    ArbitrationFailure,
    InvalidInputError,
    ProviderCallFailure,
    TranslationError,
)
from .languages import SUPPORTED_LANGUAGES, SupportedLanguage, get_supported_languages
from .models import (
    BatchTranslationResult,
    MergedTranslation,
    MergeStrategy,
    ProviderTranslationResult,
    QAStatus,
    TranslationContext,
    TranslationSegment,
)

__all__ = [
    # Models
    "TranslationSegment",
    "TranslationContext",
    "ProviderTranslationResult",
    "MergedTranslation",
    "MergeStrategy",
    "QAStatus",
    "BatchTranslationResult",
    # Languages
    "SUPPORTED_LANGUAGES",
    "SupportedLanguage",
    "get_supported_languages",
    # Errors
    "TranslationError",
    "InvalidInputError",
    "ProviderCallFailure",
    "ArbitrationFailure",
]
