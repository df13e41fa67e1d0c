"""LLM Runtime Configuration.

This module provides a single source of truth for LLM configuration that
flows from application settings to the actual LLM call.

Key components:
- LLMRuntimeConfig: Complete configuration for a single LLM request
- LLMConfigResolver: Builds the per-role configurations from settings
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Literal, Optional

from app.config import Settings

logger = logging.getLogger(__name__)

# The three model roles used by the merge engine
RoleType = Literal["provider_a", "provider_b", "arbiter"]


@dataclass(frozen=True)
class LLMRuntimeConfig:
    """Complete LLM configuration resolved for a single request.

    Temperature, max_tokens and timeout come from here and nowhere else,
    so each provider role keeps its own sampling behaviour.
    """

    # Connection parameters
    provider: str
    model: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None

    # Generation parameters
    temperature: float = 0.3
    max_tokens: int = 500

    # Transport
    timeout_seconds: float = 60.0

    def get_litellm_model(self) -> str:
        """Get model string in LiteLLM format (provider/model)."""
        if self.provider == "openai":
            return self.model
        if self.model.startswith(f"{self.provider}/"):
            return self.model
        return f"{self.provider}/{self.model}"

    def to_litellm_kwargs(self) -> Dict[str, Any]:
        """Convert to kwargs for litellm.acompletion()."""
        kwargs: Dict[str, Any] = {
            "model": self.get_litellm_model(),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout_seconds,
        }

        if self.api_key:
            kwargs["api_key"] = self.api_key

        if self.base_url:
            kwargs["api_base"] = self.base_url

        return kwargs


class LLMConfigResolver:
    """Resolves LLM configuration for each model role from settings."""

    # Arbiter must answer with a single token, deterministically
    ARBITER_TEMPERATURE = 0.0
    ARBITER_MAX_TOKENS = 1

    @classmethod
    def resolve(cls, settings: Settings, role: RoleType) -> LLMRuntimeConfig:
        """Build the runtime config for one role.

        Args:
            settings: Application settings
            role: "provider_a", "provider_b" or "arbiter"

        Returns:
            LLMRuntimeConfig for the role

        Raises:
            ValueError: If the role is unknown
        """
        if role == "provider_a":
            provider = settings.provider_a_provider
            config = LLMRuntimeConfig(
                provider=provider,
                model=settings.provider_a_model,
                temperature=settings.provider_a_temperature,
                max_tokens=settings.translation_max_tokens,
            )
        elif role == "provider_b":
            provider = settings.provider_b_provider
            config = LLMRuntimeConfig(
                provider=provider,
                model=settings.provider_b_model,
                temperature=settings.provider_b_temperature,
                max_tokens=settings.translation_max_tokens,
            )
        elif role == "arbiter":
            provider = settings.arbiter_provider
            config = LLMRuntimeConfig(
                provider=provider,
                model=settings.arbiter_model,
                temperature=cls.ARBITER_TEMPERATURE,
                max_tokens=cls.ARBITER_MAX_TOKENS,
            )
        else:
            raise ValueError(f"Unknown LLM role: {role}")

        api_key = settings.api_key_for(provider)
        if not api_key:
            logger.warning(f"No API key configured for provider '{provider}' (role={role})")

        return replace(
            config,
            api_key=api_key,
            timeout_seconds=settings.llm_timeout_seconds,
        )
