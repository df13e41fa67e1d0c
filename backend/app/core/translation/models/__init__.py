"""Translation pipeline data models.

This module provides structured data models for the translation pipeline,
ensuring type safety and clear contracts between components.
"""

from .context import TranslationContext, TranslationSegment
from .prompt import Message, PromptBundle
from .result import (
    BatchTranslationResult,
    MergedTranslation,
    MergeStrategy,
    ProviderResults,
    ProviderTranslationResult,
    QAStatus,
    TranslationMetadata,
)

__all__ = [
    # Input models
    "TranslationSegment",
    "TranslationContext",
    # Prompt models
    "Message",
    "PromptBundle",
    # Result models
    "MergeStrategy",
    "QAStatus",
    "TranslationMetadata",
    "ProviderTranslationResult",
    "ProviderResults",
    "MergedTranslation",
    "BatchTranslationResult",
]
