"""
tests/support.py
================
Shared offline test doubles for the merge engine.

FakeGateway stands in for UnifiedLLMGateway: it answers by model name from
a table of handlers and records every call, so tests can assert on prompts
and call ordering without any network access.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Union

from app.core.llm.gateway import LLMResponse
from app.core.llm.runtime_config import LLMRuntimeConfig
from app.core.translation.languages import resolve_language
from app.core.translation.models import (
    MergedTranslation,
    MergeStrategy,
    ProviderResults,
    ProviderTranslationResult,
    TranslationMetadata,
    TranslationSegment,
)
from app.core.translation.orchestrator import TranslationOrchestrator
from app.core.translation.pipeline import (
    MergeResolver,
    TranslationProvider,
    VerificationArbiter,
)

MODEL_A = "model-a"
MODEL_B = "model-b"
MODEL_ARBITER = "model-arbiter"

LABEL_A = "gpt-4"
LABEL_B = "gpt-4-turbo"

SPANISH = resolve_language("es")

Handler = Union[str, BaseException, Callable[[str], Any]]


@dataclass
class RecordedCall:
    model: str
    system_prompt: str
    user_prompt: str


class FakeGateway:
    """Scripted replacement for UnifiedLLMGateway."""

    def __init__(self, handlers: Dict[str, Handler]):
        self.handlers = handlers
        self.calls: List[RecordedCall] = []

    def calls_for(self, model: str) -> List[RecordedCall]:
        return [c for c in self.calls if c.model == model]

    async def execute(self, system_prompt: str, user_prompt: str, config: LLMRuntimeConfig):
        self.calls.append(RecordedCall(config.model, system_prompt, user_prompt))
        handler = self.handlers[config.model]

        if isinstance(handler, (str, BaseException)):
            result = handler
        else:
            result = handler(user_prompt)
            if inspect.isawaitable(result):
                result = await result

        if isinstance(result, BaseException):
            raise result
        return LLMResponse(content=result, model=config.model, provider=config.provider)


def make_config(model: str, temperature: float = 0.3, max_tokens: int = 500) -> LLMRuntimeConfig:
    return LLMRuntimeConfig(
        provider="openai",
        model=model,
        api_key="test-key",
        temperature=temperature,
        max_tokens=max_tokens,
        timeout_seconds=5.0,
    )


def build_arbiter(gateway: FakeGateway) -> VerificationArbiter:
    return VerificationArbiter(make_config(MODEL_ARBITER, 0.0, 1), gateway)


def build_resolver(gateway: FakeGateway) -> MergeResolver:
    return MergeResolver(arbiter=build_arbiter(gateway))


def build_orchestrator(gateway: FakeGateway, batch_size: int = 5) -> TranslationOrchestrator:
    provider_a = TranslationProvider(LABEL_A, make_config(MODEL_A, 0.3), 0.90, gateway)
    provider_b = TranslationProvider(LABEL_B, make_config(MODEL_B, 0.5), 0.85, gateway)
    return TranslationOrchestrator(
        provider_a,
        provider_b,
        build_resolver(gateway),
        segment_batch_size=batch_size,
    )


def make_segment(
    segment_id: int = 1,
    text: str = "Hello, citizens.",
    start_time: float = 0.0,
    end_time: float = 2.0,
) -> TranslationSegment:
    return TranslationSegment(id=segment_id, text=text, start_time=start_time, end_time=end_time)


def provider_result(
    text: str,
    model: str = LABEL_A,
    confidence: float = 0.90,
) -> ProviderTranslationResult:
    return ProviderTranslationResult(
        translated_text=text,
        confidence=confidence,
        model=model,
        metadata=TranslationMetadata(word_count=len(text.split())),
    )


def source_text_of(user_prompt: str) -> str:
    """Pull the quoted source text back out of a segment instruction."""
    marker = 'Original text: "'
    start = user_prompt.index(marker) + len(marker)
    end = user_prompt.index('"\n', start)
    return user_prompt[start:end]


def merged_translation(
    segment_id: int,
    confidence: float,
    strategy: MergeStrategy = MergeStrategy.HIGH_AGREEMENT,
    text: str = "Hola",
) -> MergedTranslation:
    return MergedTranslation(
        segment_id=segment_id,
        text=text,
        confidence=confidence,
        primary_model=LABEL_A,
        agreement_score=1.0,
        merge_strategy=strategy,
        provider_results=ProviderResults(
            a=provider_result(text, LABEL_A), b=provider_result(text, LABEL_B, 0.85)
        ),
    )
