"""Prompt bundle models.

This module defines the prompt data structure handed to the translation
providers. One bundle is built per segment and sent unchanged to both
providers, so any difference in their output comes from the models.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """Single message in LLM conversation."""

    role: str = Field(
        ..., description="Message role: 'system', 'user', or 'assistant'"
    )
    content: str = Field(..., description="Message content")


class PromptBundle(BaseModel):
    """Complete prompt package ready for LLM."""

    model_config = ConfigDict(frozen=True)

    messages: List[Message] = Field(..., description="Conversation messages")

    @classmethod
    def from_prompts(cls, system_prompt: str, user_prompt: str) -> "PromptBundle":
        """Build a bundle from a system and a user prompt."""
        return cls(
            messages=[
                Message(role="system", content=system_prompt),
                Message(role="user", content=user_prompt),
            ]
        )

    @property
    def system_prompt(self) -> Optional[str]:
        """Extract system prompt from messages."""
        for msg in self.messages:
            if msg.role == "system":
                return msg.content
        return None

    @property
    def user_prompt(self) -> Optional[str]:
        """Extract user prompt from messages."""
        for msg in self.messages:
            if msg.role == "user":
                return msg.content
        return None
