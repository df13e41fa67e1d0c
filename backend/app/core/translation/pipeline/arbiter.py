"""Verification arbiter for the ambiguous agreement band.

When the two provider translations partly agree, a third call shows both
candidates, labelled "A" and "B", to a model and asks it to pick one. The
answer is limited to a single token. Anything other than "A" or "B", as
well as any call error or timeout, raises ArbitrationFailure.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Literal

from app.core.llm.gateway import UnifiedLLMGateway
from app.core.llm.runtime_config import LLMRuntimeConfig

from ..errors import ArbitrationFailure

logger = logging.getLogger(__name__)

Choice = Literal["A", "B"]


@dataclass(frozen=True)
class ArbitrationDecision:
    """The arbiter's pick between two candidates."""

    choice: Choice
    chosen_text: str
    chosen_model: str


class VerificationArbiter:
    """Asks a model to choose the better of two candidate translations."""

    SYSTEM_PROMPT = (
        "You are a professional translation quality assessor for NYC "
        "government content. Compare two translations and select the better one."
    )

    def __init__(self, config: LLMRuntimeConfig, gateway: UnifiedLLMGateway):
        self.config = config
        self.gateway = gateway

    def build_user_prompt(
        self,
        source_text: str,
        candidate_a: str,
        candidate_b: str,
        target_language_name: str,
    ) -> str:
        return f"""Original English: "{source_text}"

Translation A: "{candidate_a}"
Translation B: "{candidate_b}"

Target language: {target_language_name}

Which translation better preserves meaning, tone, and timing for video dubbing? Consider:
1. Accuracy of meaning
2. Natural flow in {target_language_name}
3. Appropriate formality for government communication
4. Similar length to original for dubbing

Respond with only "A" or "B"."""

    @staticmethod
    def parse_choice(content: str) -> Choice:
        """Parse the single-token answer.

        Raises:
            ArbitrationFailure: If the answer is not exactly "A" or "B"
        """
        choice = (content or "").strip().upper()
        if choice == "A":
            return "A"
        if choice == "B":
            return "B"
        raise ArbitrationFailure(f"unparseable arbiter response: {content!r}")

    async def choose(
        self,
        source_text: str,
        candidate_a: str,
        candidate_b: str,
        target_language_name: str,
        model_a: str = "A",
        model_b: str = "B",
    ) -> ArbitrationDecision:
        """Pick the better candidate.

        Args:
            source_text: Original source segment text
            candidate_a: Translation from provider A
            candidate_b: Translation from provider B
            target_language_name: Display name of the target language
            model_a: Label reported when A is chosen
            model_b: Label reported when B is chosen

        Returns:
            ArbitrationDecision

        Raises:
            ArbitrationFailure: On call error, timeout, or unparseable answer
        """
        start_time = time.time()
        user_prompt = self.build_user_prompt(
            source_text, candidate_a, candidate_b, target_language_name
        )

        try:
            response = await self.gateway.execute(
                system_prompt=self.SYSTEM_PROMPT,
                user_prompt=user_prompt,
                config=self.config,
            )
        except asyncio.TimeoutError as e:
            raise ArbitrationFailure(
                f"arbiter timed out after {self.config.timeout_seconds}s"
            ) from e
        except Exception as e:
            raise ArbitrationFailure(f"arbiter call failed: {e}") from e

        choice = self.parse_choice(response.content)

        logger.debug(
            f"Verification completed: choice={choice}, "
            f"duration={int((time.time() - start_time) * 1000)}ms"
        )

        if choice == "A":
            return ArbitrationDecision("A", candidate_a, model_a)
        return ArbitrationDecision("B", candidate_b, model_b)
