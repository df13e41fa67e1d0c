"""LLM integration package.

This package provides:
- Runtime configuration per model role (LLMRuntimeConfig, LLMConfigResolver)
- A single gateway for all LLM calls (UnifiedLLMGateway)

For actual translation, use the translation pipeline:
- app.core.translation.pipeline.TranslationProvider
- app.core.translation.orchestrator.TranslationOrchestrator
"""

from .gateway import LLMResponse, UnifiedLLMGateway
from .runtime_config import LLMConfigResolver, LLMRuntimeConfig

__all__ = [
    "LLMRuntimeConfig",
    "LLMConfigResolver",
    "LLMResponse",
    "UnifiedLLMGateway",
]
