"""Translation provider adapter.

Each TranslationProvider wraps one configured model behind a uniform
``translate`` call. Two providers receive the same prompt bundle for every
segment; each carries a fixed prior confidence that reflects how much it is
trusted in general, not how good a particular output is.
"""

import asyncio
import logging
import time
from typing import Optional

from app.core.llm.gateway import UnifiedLLMGateway
from app.core.llm.runtime_config import LLMRuntimeConfig
from app.utils.text import safe_truncate

from ..errors import ProviderCallFailure
from ..languages import SupportedLanguage
from ..models.context import TranslationSegment
from ..models.prompt import PromptBundle
from ..models.result import ProviderTranslationResult, TranslationMetadata
from .duration import DurationEstimator
from .output_processor import OutputProcessor

logger = logging.getLogger(__name__)


class TranslationProvider:
    """A named language model used as one side of the dual translation."""

    def __init__(
        self,
        label: str,
        config: LLMRuntimeConfig,
        prior_confidence: float,
        gateway: UnifiedLLMGateway,
        duration_estimator: Optional[DurationEstimator] = None,
        output_processor: Optional[OutputProcessor] = None,
    ):
        """Initialize the provider.

        Args:
            label: Model label reported in results (e.g. "gpt-4")
            config: Runtime configuration for this provider's calls
            prior_confidence: Fixed base confidence in [0, 1]
            gateway: LLM gateway used for the call
            duration_estimator: Estimator for duration metadata
            output_processor: Cleaner for raw model output
        """
        if not 0.0 <= prior_confidence <= 1.0:
            raise ValueError(f"prior_confidence must be in [0, 1], got {prior_confidence}")

        self.label = label
        self.config = config
        self.prior_confidence = prior_confidence
        self.gateway = gateway
        self.duration_estimator = duration_estimator or DurationEstimator()
        self.output_processor = output_processor or OutputProcessor()

    def __repr__(self) -> str:
        return f"TranslationProvider(label={self.label!r}, model={self.config.model!r})"

    async def translate(
        self,
        segment: TranslationSegment,
        language: SupportedLanguage,
        prompt: PromptBundle,
    ) -> ProviderTranslationResult:
        """Translate one segment.

        Args:
            segment: Source segment
            language: Target language
            prompt: Shared system prompt plus this segment's instruction

        Returns:
            ProviderTranslationResult with the provider's prior confidence

        Raises:
            ProviderCallFailure: On call error, timeout, or empty output
        """
        start_time = time.time()
        logger.debug(
            f"Sending segment {segment.id} to {self.label}: "
            f"target={language.code}, words={len(segment.text.split())}"
        )

        try:
            response = await self.gateway.execute(
                system_prompt=prompt.system_prompt or "",
                user_prompt=prompt.user_prompt or "",
                config=self.config,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{self.label} timed out on segment {segment.id}")
            raise ProviderCallFailure(
                segment.id,
                self.label,
                f"timed out after {self.config.timeout_seconds}s",
            ) from e
        except Exception as e:
            logger.error(f"{self.label} translation failed on segment {segment.id}: {e}")
            raise ProviderCallFailure(
                segment.id, self.label, str(e) or type(e).__name__
            ) from e

        translated_text = self.output_processor.extract_translation(response.content)
        if not translated_text:
            logger.error(
                f"{self.label} returned an empty translation for segment {segment.id}"
            )
            raise ProviderCallFailure(segment.id, self.label, "empty translation")

        estimated = self.duration_estimator.estimate(translated_text, language.code)
        metadata = TranslationMetadata(
            word_count=self.duration_estimator.word_count(translated_text),
            estimated_duration_seconds=estimated,
            warnings=self.duration_estimator.warnings(estimated, segment.duration),
        )

        logger.debug(
            f"{self.label} translated segment {segment.id}: "
            f"'{safe_truncate(translated_text, 50)}' "
            f"words={metadata.word_count}, est={estimated:.2f}s, "
            f"tokens={response.total_tokens}, "
            f"latency={int((time.time() - start_time) * 1000)}ms"
        )

        return ProviderTranslationResult(
            translated_text=translated_text,
            confidence=self.prior_confidence,
            model=self.label,
            metadata=metadata,
        )
