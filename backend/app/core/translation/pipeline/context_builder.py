"""Context prompt builder for the translation pipeline.

This module provides the ContextPromptBuilder class that turns a
TranslationContext and a target language into the system prompt shared by
both translation providers, plus the per-segment instruction.

Both outputs are pure functions of their inputs. The system prompt is
batch-invariant; only the segment instruction (duration and source text)
changes from segment to segment.
"""

from typing import Optional

from ..models.context import TranslationContext, TranslationSegment
from ..models.prompt import PromptBundle


class ContextPromptBuilder:
    """Builds deterministic translation prompts.

    Missing context fields fall back to NYC government communication
    defaults, so two requests with the same context and language always
    produce byte-identical prompts.
    """

    DEFAULT_SPEAKER = "NYC Government Official"
    DEFAULT_TONE = "Formal, professional, authoritative"
    DEFAULT_DOMAIN = "Government/Public Service"
    DEFAULT_DESCRIPTION = "Official NYC government video content"

    REQUIREMENTS = (
        "Maintain formal government communication tone",
        "Preserve all technical terms, numbers, dates, and proper nouns accurately",
        "Ensure cultural appropriateness for NYC's diverse {language}-speaking population",
        "Keep translation length similar to original (±10%) for dubbing synchronization",
        "Use standard {language} dialect commonly understood in NYC",
        "Maintain the speaker's authority and professionalism",
        "Do not add explanations or clarifications not present in the original",
    )

    SPECIAL_CONSIDERATIONS = (
        "NYC-specific terms (borough names, department names) should be kept "
        "in English or use official translations",
        "Legal and technical terminology must be precisely translated",
        "Emergency or safety information must be clear and unambiguous",
    )

    def build_system_prompt(
        self,
        context: Optional[TranslationContext],
        target_language_name: str,
    ) -> str:
        """Build the system prompt shared by both providers.

        Args:
            context: Speaker/tone/domain context, or None for all defaults
            target_language_name: Display name of the target language

        Returns:
            System prompt text
        """
        context = context or TranslationContext()

        requirements = "\n".join(
            f"{i}. {req.format(language=target_language_name)}"
            for i, req in enumerate(self.REQUIREMENTS, start=1)
        )
        considerations = "\n".join(f"- {item}" for item in self.SPECIAL_CONSIDERATIONS)

        return f"""You are translating official NYC government communications.

Context:
- Speaker: {context.speaker or self.DEFAULT_SPEAKER}
- Tone: {context.tone or self.DEFAULT_TONE}
- Domain: {context.domain or self.DEFAULT_DOMAIN}
- Description: {context.description or self.DEFAULT_DESCRIPTION}

Requirements for {target_language_name} translation:
{requirements}

Special considerations:
{considerations}"""

    def build_segment_prompt(
        self,
        segment: TranslationSegment,
        target_language_name: str,
    ) -> str:
        """Build the per-segment user instruction.

        Names the segment duration for pacing and quotes the exact source
        text.
        """
        return f"""Translate the following segment to {target_language_name}. The segment duration is {segment.duration:.1f} seconds.

Original text: "{segment.text}"

Provide only the translation, no explanations."""

    def build(
        self,
        system_prompt: str,
        segment: TranslationSegment,
        target_language_name: str,
    ) -> PromptBundle:
        """Pair the shared system prompt with a segment instruction.

        Args:
            system_prompt: Output of build_system_prompt for this batch
            segment: Segment to translate
            target_language_name: Display name of the target language

        Returns:
            PromptBundle sent unchanged to both providers
        """
        return PromptBundle.from_prompts(
            system_prompt,
            self.build_segment_prompt(segment, target_language_name),
        )
