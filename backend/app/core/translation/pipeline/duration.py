"""Spoken duration estimates for translated text.

Estimates are informational metadata for dubbing. They never gate whether a
translation is accepted.
"""

from typing import List, Optional

from ..languages import DEFAULT_WORDS_PER_MINUTE, SUPPORTED_LANGUAGES


class DurationEstimator:
    """Estimates spoken duration from word count and speaking rate."""

    # Relative deviation from the segment duration that earns a warning
    MISMATCH_TOLERANCE = 0.10

    @staticmethod
    def word_count(text: str) -> int:
        return len(text.split())

    def words_per_minute(self, language_code: str) -> int:
        language = SUPPORTED_LANGUAGES.get(language_code)
        return language.words_per_minute if language else DEFAULT_WORDS_PER_MINUTE

    def estimate(self, text: str, language_code: str) -> float:
        """Estimated seconds needed to speak ``text`` in the given language."""
        return self.word_count(text) / self.words_per_minute(language_code) * 60

    def warnings(
        self,
        estimated_seconds: float,
        segment_seconds: Optional[float],
    ) -> List[str]:
        """Informational warnings comparing estimate and segment duration."""
        if not segment_seconds or segment_seconds <= 0:
            return []

        ratio = estimated_seconds / segment_seconds
        if ratio > 1 + self.MISMATCH_TOLERANCE:
            return [
                f"estimated duration {estimated_seconds:.1f}s exceeds "
                f"segment duration {segment_seconds:.1f}s"
            ]
        if ratio < 1 - self.MISMATCH_TOLERANCE:
            return [
                f"estimated duration {estimated_seconds:.1f}s is short of "
                f"segment duration {segment_seconds:.1f}s"
            ]
        return []
