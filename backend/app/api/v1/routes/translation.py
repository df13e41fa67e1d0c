"""Translation API routes."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from app.api.dependencies import Orchestrator, ReviewService
from app.core.qa.review import summarize
from app.core.translation.errors import (
    InvalidInputError,
    ProviderCallFailure,
    TranslationError,
)
from app.core.translation.languages import get_supported_languages
from app.core.translation.models import MergedTranslation, TranslationContext

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_RETRANSLATE_SECONDS = 5.0


class TranslateRequest(BaseModel):
    """Request to translate a video's transcript segments."""
    video_id: Optional[str] = None
    target_language: str
    context: Optional[TranslationContext] = None
    # Raw dicts so malformed segments are reported with their id
    segments: List[Dict[str, Any]]


class RetranslateRequest(BaseModel):
    """Request to translate one segment again."""
    segment_id: int
    target_language: str
    original_text: str
    start_time: float = 0.0
    # Defaults to DEFAULT_RETRANSLATE_SECONDS after start_time
    end_time: Optional[float] = None
    context: Optional[TranslationContext] = None


class ApproveRequest(BaseModel):
    """Reviewer approval of a translated segment."""
    approved_text: str
    reviewer_notes: Optional[str] = None
    reviewed_by: Optional[str] = None


class RejectRequest(BaseModel):
    """Reviewer rejection of a translated segment."""
    reason: str
    suggested_text: Optional[str] = None
    reviewed_by: Optional[str] = None


def _raise_http(error: TranslationError) -> None:
    """Map engine errors to HTTP errors with enough detail to retry."""
    if isinstance(error, InvalidInputError):
        raise HTTPException(
            status_code=400,
            detail={"error": str(error), "segment_id": error.segment_id},
        ) from error
    if isinstance(error, ProviderCallFailure):
        raise HTTPException(
            status_code=502,
            detail={"error": "Translation provider failed", **error.to_dict()},
        ) from error
    raise HTTPException(status_code=500, detail=str(error)) from error


def _format_translation(merged: MergedTranslation, original_text: str) -> Dict[str, Any]:
    results = merged.provider_results
    return {
        "id": merged.segment_id,
        "original_text": original_text,
        "translated_text": merged.text,
        "confidence": merged.confidence,
        "primary_model": merged.primary_model,
        "agreement_score": merged.agreement_score,
        "qa_status": merged.qa_status.value,
        "merge_strategy": merged.merge_strategy.value,
        "arbitration_fallback": merged.arbitration_fallback,
        "models": {
            "a": {"model": results.a.model, "text": results.a.translated_text},
            "b": {"model": results.b.model, "text": results.b.translated_text},
        },
        "estimated_duration": results.a.metadata.estimated_duration_seconds,
        "warnings": list(results.a.metadata.warnings),
    }


@router.get("/translation/languages")
async def list_languages():
    """List the supported target languages."""
    return {"success": True, "data": get_supported_languages()}


@router.post("/translation/translate")
async def translate_video(request: TranslateRequest, orchestrator: Orchestrator):
    """Translate all segments with both models and merge the results.

    The whole request fails if any segment fails; no partial translation
    is returned.
    """
    logger.info(
        f"Starting translation for video {request.video_id} to {request.target_language}"
    )

    try:
        batch = await orchestrator.translate_in_batches(
            request.segments,
            request.target_language,
            request.context,
        )
    except TranslationError as e:
        logger.error(f"Translation error for video {request.video_id}: {e}")
        _raise_http(e)

    # Output order matches input order
    translations = [
        _format_translation(merged, source.get("text", ""))
        for source, merged in zip(request.segments, batch.segments)
    ]

    return {
        "success": True,
        "data": {
            "video_id": request.video_id,
            "target_language": batch.target_language,
            "segment_count": len(translations),
            "translations": translations,
            "overall_confidence": batch.overall_confidence,
            "qa_summary": summarize(batch),
        },
    }


@router.post("/translation/retranslate")
async def retranslate_segment(request: RetranslateRequest, orchestrator: Orchestrator):
    """Translate a single segment again."""
    logger.info(f"Retranslating segment {request.segment_id}")

    segment = {
        "id": request.segment_id,
        "text": request.original_text,
        "start_time": request.start_time,
        "end_time": (
            request.end_time
            if request.end_time is not None
            else request.start_time + DEFAULT_RETRANSLATE_SECONDS
        ),
    }
    try:
        merged = await orchestrator.retranslate_segment(
            segment, request.target_language, request.context
        )
    except TranslationError as e:
        logger.error(f"Retranslation error for segment {request.segment_id}: {e}")
        _raise_http(e)

    return {"success": True, "data": _format_translation(merged, request.original_text)}


@router.post("/translation/{video_id}/segments/{segment_id}/approve")
async def approve_translation(
    video_id: str,
    segment_id: int,
    request: ApproveRequest,
    review_service: ReviewService,
):
    """Approve a translated segment for speech synthesis."""
    try:
        decision = review_service.approve(
            video_id,
            segment_id,
            request.approved_text,
            reviewer_notes=request.reviewer_notes,
            reviewed_by=request.reviewed_by,
        )
    except TranslationError as e:
        _raise_http(e)

    return {"success": True, "data": decision.model_dump(mode="json")}


@router.post("/translation/{video_id}/segments/{segment_id}/reject")
async def reject_translation(
    video_id: str,
    segment_id: int,
    request: RejectRequest,
    review_service: ReviewService,
):
    """Reject a translated segment."""
    try:
        decision = review_service.reject(
            video_id,
            segment_id,
            request.reason,
            suggested_text=request.suggested_text,
            reviewed_by=request.reviewed_by,
        )
    except TranslationError as e:
        _raise_http(e)

    return {"success": True, "data": decision.model_dump(mode="json")}
