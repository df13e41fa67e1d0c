"""Translation input models.

This module defines the input data structures for the translation pipeline:
the time-bounded transcript segment handed over by the transcription stage,
and the per-request context describing who is speaking and how.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TranslationSegment(BaseModel):
    """A time-bounded span of source-language transcript text.

    Immutable once created; owned by the transcription stage and passed by
    value into the translation stage.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(..., description="Segment identifier within the video")
    text: str = Field(..., description="Source language text")
    start_time: float = Field(
        ..., ge=0.0, alias="startTime", description="Start offset in seconds"
    )
    end_time: float = Field(..., alias="endTime", description="End offset in seconds")

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("segment text must not be empty")
        return value

    @model_validator(mode="after")
    def _time_bounds_increase(self) -> "TranslationSegment":
        if self.end_time <= self.start_time:
            raise ValueError(
                f"end_time ({self.end_time}) must be greater than "
                f"start_time ({self.start_time})"
            )
        return self

    @property
    def duration(self) -> float:
        """Segment duration in seconds."""
        return self.end_time - self.start_time


class TranslationContext(BaseModel):
    """Speaker and register information for one translation request.

    Pure configuration with no identity; constructed fresh per request.
    Missing fields fall back to government-communication defaults when the
    prompt is built.
    """

    speaker: Optional[str] = Field(default=None, description="Who is speaking")
    tone: Optional[str] = Field(default=None, description="Desired tone")
    domain: Optional[str] = Field(default=None, description="Subject domain")
    description: Optional[str] = Field(
        default=None, description="Free-form description of the video"
    )
    previous_segments: List[str] = Field(
        default_factory=list,
        alias="previousSegments",
        description="Earlier source segments, informational only",
    )

    model_config = ConfigDict(populate_by_name=True)
