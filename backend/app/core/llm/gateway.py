"""Unified LLM Gateway for all provider access.

This module provides a single gateway for every LLM call made by the merge
engine: both translation providers and the verification arbiter. It takes
LLMRuntimeConfig directly, so configured parameters (temperature,
max_tokens, timeout) actually reach the LLM call.

Transient transport failures (rate limits, dropped connections, 5xx) are
retried here with exponential back-off. Timeouts and every other error are
raised to the caller unchanged.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from litellm import acompletion
from litellm.exceptions import (
    APIConnectionError,
    InternalServerError,
    RateLimitError,
    ServiceUnavailableError,
)
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from .runtime_config import LLMRuntimeConfig

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (
    RateLimitError,
    APIConnectionError,
    ServiceUnavailableError,
    InternalServerError,
)


@dataclass
class LLMResponse:
    """Standardized LLM response."""

    content: str
    model: str
    provider: str
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    latency_ms: int = 0

    # Raw response for debugging
    raw_response: Optional[Dict[str, Any]] = field(default=None, repr=False)


class UnifiedLLMGateway:
    """Unified gateway for all LLM interactions.

    Usage:
        gateway = UnifiedLLMGateway(max_attempts=3)
        response = await gateway.execute(
            system_prompt="You are translating...",
            user_prompt="Translate the following segment...",
            config=config,
        )
    """

    def __init__(self, max_attempts: int = 3, wait: Optional[wait_base] = None):
        """Initialize the gateway.

        Args:
            max_attempts: Total attempts per call for transient errors
            wait: Back-off strategy between attempts
        """
        self.max_attempts = max(1, max_attempts)
        self.wait = wait or wait_exponential(multiplier=1, min=1, max=30)

    async def execute(
        self,
        system_prompt: str,
        user_prompt: str,
        config: LLMRuntimeConfig,
    ) -> LLMResponse:
        """Execute LLM call with given prompts and config.

        Args:
            system_prompt: System message content
            user_prompt: User message content
            config: Complete LLM configuration

        Returns:
            Standardized LLMResponse

        Raises:
            asyncio.TimeoutError: If the call exceeds config.timeout_seconds
            Exception: If the LLM call fails for a non-transient reason, or
                transient retries are exhausted
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        return await self.execute_with_messages(messages, config)

    async def execute_with_messages(
        self,
        messages: List[Dict[str, str]],
        config: LLMRuntimeConfig,
    ) -> LLMResponse:
        """Execute LLM call with a pre-built messages array."""
        kwargs = config.to_litellm_kwargs()
        kwargs["messages"] = messages

        logger.debug(
            f"LLM call: model={config.model}, provider={config.provider}, "
            f"temperature={config.temperature}, max_tokens={config.max_tokens}"
        )

        start_time = time.time()
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self.wait,
                retry=retry_if_exception_type(TRANSIENT_ERRORS),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    response = await asyncio.wait_for(
                        acompletion(**kwargs),
                        timeout=config.timeout_seconds,
                    )
        except asyncio.TimeoutError:
            logger.error(
                f"LLM call timed out: model={config.model}, "
                f"timeout={config.timeout_seconds}s"
            )
            raise
        except Exception as e:
            logger.error(f"LLM call failed: model={config.model}, error={e}")
            raise

        latency_ms = int((time.time() - start_time) * 1000)
        usage = getattr(response, "usage", None)

        result = LLMResponse(
            content=response.choices[0].message.content or "",
            model=config.model,
            provider=config.provider,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            total_tokens=usage.total_tokens if usage else 0,
            latency_ms=latency_ms,
            raw_response=response.model_dump() if hasattr(response, "model_dump") else None,
        )

        logger.debug(f"LLM response: tokens={result.total_tokens}, latency={latency_ms}ms")
        return result
