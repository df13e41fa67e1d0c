"""API dependencies.

The orchestrator is built once from settings and shared across requests;
tests replace these with ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from app.core.qa.review import QAReviewService
from app.core.translation.orchestrator import TranslationOrchestrator


@lru_cache(maxsize=1)
def get_orchestrator() -> TranslationOrchestrator:
    """Get the shared translation orchestrator."""
    return TranslationOrchestrator.from_settings(settings)


def get_review_service() -> QAReviewService:
    """Get the QA review service."""
    return QAReviewService()


# Type aliases for cleaner dependency injection
Orchestrator = Annotated[TranslationOrchestrator, Depends(get_orchestrator)]
ReviewService = Annotated[QAReviewService, Depends(get_review_service)]
