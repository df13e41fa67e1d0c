"""Translation Orchestrator - runs dual-model translation over a transcript.

For each segment, in input order:
1. Build the segment instruction (the system prompt is built once per batch)
2. Send the same prompt bundle to both providers concurrently
3. Merge the two results once both have resolved
4. Append the merged translation

Segments are processed one after another, so output order always matches
input order. A failure on any segment aborts the whole batch; no partial
result is returned.
"""

import asyncio
import logging
import time
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from app.config import Settings
from app.core.llm.gateway import UnifiedLLMGateway
from app.core.llm.runtime_config import LLMConfigResolver
from app.utils.text import safe_truncate

from .errors import InvalidInputError, ProviderCallFailure
from .languages import SupportedLanguage, resolve_language
from .models import (
    BatchTranslationResult,
    MergedTranslation,
    PromptBundle,
    ProviderTranslationResult,
    TranslationContext,
    TranslationSegment,
)
from .pipeline import (
    ContextPromptBuilder,
    MergeResolver,
    TranslationProvider,
    VerificationArbiter,
)

logger = logging.getLogger(__name__)

SegmentInput = Union[TranslationSegment, Mapping[str, Any]]


class TranslationOrchestrator:
    """Orchestrates dual-model translation for a batch of segments.

    Uses:
    - ContextPromptBuilder: Shared system prompt and per-segment instruction
    - TranslationProvider (x2): Independent translations of the same prompt
    - MergeResolver: Regime selection, arbitration, confidence
    """

    def __init__(
        self,
        provider_a: TranslationProvider,
        provider_b: TranslationProvider,
        resolver: MergeResolver,
        prompt_builder: Optional[ContextPromptBuilder] = None,
        segment_batch_size: int = 5,
    ):
        """Initialize the orchestrator.

        Args:
            provider_a: The more trusted provider, kept on agreement
            provider_b: The second provider
            resolver: Merge resolver (owns the arbiter)
            prompt_builder: Prompt builder, default instance when omitted
            segment_batch_size: Group size for translate_in_batches
        """
        if segment_batch_size < 1:
            raise ValueError("segment_batch_size must be at least 1")

        self.provider_a = provider_a
        self.provider_b = provider_b
        self.resolver = resolver
        self.prompt_builder = prompt_builder or ContextPromptBuilder()
        self.segment_batch_size = segment_batch_size

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        gateway: Optional[UnifiedLLMGateway] = None,
    ) -> "TranslationOrchestrator":
        """Build an orchestrator wired to the configured models."""
        gateway = gateway or UnifiedLLMGateway(max_attempts=settings.llm_max_attempts)

        provider_a = TranslationProvider(
            label=settings.provider_a_label,
            config=LLMConfigResolver.resolve(settings, "provider_a"),
            prior_confidence=settings.provider_a_confidence,
            gateway=gateway,
        )
        provider_b = TranslationProvider(
            label=settings.provider_b_label,
            config=LLMConfigResolver.resolve(settings, "provider_b"),
            prior_confidence=settings.provider_b_confidence,
            gateway=gateway,
        )
        arbiter = VerificationArbiter(
            config=LLMConfigResolver.resolve(settings, "arbiter"),
            gateway=gateway,
        )
        resolver = MergeResolver(
            arbiter=arbiter,
            high_threshold=settings.high_agreement_threshold,
            low_threshold=settings.low_agreement_threshold,
        )

        logger.info(
            f"[Orchestrator] Initialized: a={provider_a.label}/{provider_a.config.model}, "
            f"b={provider_b.label}/{provider_b.config.model}, "
            f"arbiter={arbiter.config.model}"
        )
        return cls(
            provider_a,
            provider_b,
            resolver,
            segment_batch_size=settings.segment_batch_size,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def translate_batch(
        self,
        segments: Sequence[SegmentInput],
        target_language_code: str,
        context: Optional[TranslationContext] = None,
    ) -> BatchTranslationResult:
        """Translate a batch of segments.

        Args:
            segments: Ordered transcript segments
            target_language_code: One of the supported language codes
            context: Optional speaker/tone/domain context

        Returns:
            BatchTranslationResult in input order

        Raises:
            InvalidInputError: Before any LLM call, on bad language or segments
            ProviderCallFailure: If any provider call fails; nothing is returned
        """
        language = resolve_language(target_language_code)
        validated = self.validate_segments(segments)

        start_time = time.time()
        logger.info(
            f"Starting dual-model translation: target={language.code} ({language.name}), "
            f"segments={len(validated)}, "
            f"total_duration={sum(s.duration for s in validated):.2f}s"
        )

        system_prompt = self.prompt_builder.build_system_prompt(context, language.name)
        merged = await self._translate_segments(validated, language, system_prompt)
        result = BatchTranslationResult(target_language=language.code, segments=merged)

        self._log_performance("translate_batch", start_time, result)
        return result

    async def translate_in_batches(
        self,
        segments: Sequence[SegmentInput],
        target_language_code: str,
        context: Optional[TranslationContext] = None,
        batch_size: Optional[int] = None,
    ) -> BatchTranslationResult:
        """Translate a long transcript in sequential groups of segments.

        All segments are validated before the first group starts. Groups run
        one after another and are combined into one result; a failure in any
        group aborts the whole call.
        """
        if batch_size is None:
            batch_size = self.segment_batch_size
        if batch_size < 1:
            raise InvalidInputError("batch_size must be at least 1")

        language = resolve_language(target_language_code)
        validated = self.validate_segments(segments)
        total_batches = (len(validated) + batch_size - 1) // batch_size

        start_time = time.time()
        logger.info(
            f"Starting batch translation: segments={len(validated)}, "
            f"batch_size={batch_size}, batches={total_batches}, target={language.code}"
        )

        system_prompt = self.prompt_builder.build_system_prompt(context, language.name)
        merged: List[MergedTranslation] = []

        for batch_number, offset in enumerate(range(0, len(validated), batch_size), start=1):
            group = validated[offset:offset + batch_size]
            logger.debug(
                f"Processing batch {batch_number}/{total_batches}: "
                f"segments {group[0].id}..{group[-1].id}"
            )
            group_results = await self._translate_segments(group, language, system_prompt)
            merged.extend(group_results)
            logger.debug(
                f"Batch {batch_number}/{total_batches} completed: "
                f"average_confidence={_mean_confidence(group_results):.3f}"
            )

        result = BatchTranslationResult(target_language=language.code, segments=merged)
        self._log_performance("translate_in_batches", start_time, result)
        return result

    async def retranslate_segment(
        self,
        segment: SegmentInput,
        target_language_code: str,
        context: Optional[TranslationContext] = None,
    ) -> MergedTranslation:
        """Translate a single segment again, e.g. after a QA rejection."""
        result = await self.translate_batch([segment], target_language_code, context)
        return result.segments[0]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_segments(self, segments: Sequence[SegmentInput]) -> List[TranslationSegment]:
        """Validate and normalize input segments.

        Raises:
            InvalidInputError: On an empty batch, malformed segment, or
                duplicate segment id
        """
        if not segments:
            raise InvalidInputError("No segments to translate")

        validated: List[TranslationSegment] = []
        seen_ids = set()

        for raw in segments:
            segment = self._coerce_segment(raw)
            if segment.id in seen_ids:
                raise InvalidInputError(
                    f"Duplicate segment id {segment.id}", segment_id=segment.id
                )
            seen_ids.add(segment.id)
            validated.append(segment)

        return validated

    @staticmethod
    def _coerce_segment(raw: SegmentInput) -> TranslationSegment:
        if isinstance(raw, TranslationSegment):
            # Re-check invariants in case the instance bypassed validation
            data = raw.model_dump()
            segment_id = raw.id
        elif isinstance(raw, Mapping):
            data = dict(raw)
            segment_id = data.get("id")
        else:
            raise InvalidInputError(f"Unsupported segment type: {type(raw).__name__}")

        try:
            return TranslationSegment.model_validate(data)
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise InvalidInputError(
                f"Invalid segment {segment_id}: {messages}", segment_id=segment_id
            ) from e

    # ------------------------------------------------------------------
    # Segment processing
    # ------------------------------------------------------------------

    async def _translate_segments(
        self,
        segments: Sequence[TranslationSegment],
        language: SupportedLanguage,
        system_prompt: str,
    ) -> List[MergedTranslation]:
        results: List[MergedTranslation] = []
        for segment in segments:
            results.append(await self._translate_segment(segment, language, system_prompt))
        return results

    async def _translate_segment(
        self,
        segment: TranslationSegment,
        language: SupportedLanguage,
        system_prompt: str,
    ) -> MergedTranslation:
        """Fan out to both providers, then merge."""
        start_time = time.time()
        logger.debug(
            f"Translating segment {segment.id}: "
            f"'{safe_truncate(segment.text, 100)}' ({segment.duration:.2f}s)"
        )

        prompt = self.prompt_builder.build(system_prompt, segment, language.name)

        try:
            result_a, result_b = await self._fan_out(segment, language, prompt)
        except ProviderCallFailure as e:
            logger.error(
                f"Translation failed for segment {segment.id}: provider={e.provider}, "
                f"cause={e.cause}, duration={int((time.time() - start_time) * 1000)}ms"
            )
            raise

        merged = await self.resolver.merge(segment, result_a, result_b, language)

        logger.debug(
            f"Segment {segment.id} completed: strategy={merged.merge_strategy.value}, "
            f"confidence={merged.confidence:.2f}, primary={merged.primary_model}, "
            f"duration={int((time.time() - start_time) * 1000)}ms"
        )
        return merged

    async def _fan_out(
        self,
        segment: TranslationSegment,
        language: SupportedLanguage,
        prompt: PromptBundle,
    ) -> Tuple[ProviderTranslationResult, ProviderTranslationResult]:
        """Issue both provider calls before awaiting either.

        If one call fails, the other is cancelled.
        """
        tasks = [
            asyncio.create_task(self.provider_a.translate(segment, language, prompt)),
            asyncio.create_task(self.provider_b.translate(segment, language, prompt)),
        ]
        try:
            result_a, result_b = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                if not task.done():
                    task.cancel()
            raise
        return result_a, result_b

    def _log_performance(
        self,
        operation: str,
        start_time: float,
        result: BatchTranslationResult,
    ) -> None:
        logger.info(
            f"Performance: {operation} duration={int((time.time() - start_time) * 1000)}ms, "
            f"target={result.target_language}, segments={len(result.segments)}, "
            f"average_confidence={result.overall_confidence:.3f}, "
            f"low_confidence={result.low_confidence_count}"
        )


def _mean_confidence(results: Sequence[MergedTranslation]) -> float:
    if not results:
        return 0.0
    return sum(r.confidence for r in results) / len(results)
