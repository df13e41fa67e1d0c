"""Output processor for provider responses.

Models asked for "only the translation" still sometimes wrap it in code
fences, tags or the quotes used in the instruction. This module strips that
packaging so the similarity scorer compares translations, not wrappers.
"""

import re


class OutputProcessor:
    """Extracts clean translation text from raw LLM content."""

    # Patterns for extracting translation from various formats
    EXTRACTION_PATTERNS = [
        (r"<translation>(.*?)</translation>", re.DOTALL),
        (r"<result>(.*?)</result>", re.DOTALL),
    ]

    # Opening -> closing quote pairs that may wrap the whole answer
    QUOTE_PAIRS = {
        '"': '"',
        "'": "'",
        "“": "”",
        "«": "»",
        "「": "」",
    }

    def extract_translation(self, content: str) -> str:
        """Extract translation text from response content.

        Handles:
        - Plain text
        - Markdown code blocks
        - XML-like tags
        - A single pair of quotes around the whole answer

        Args:
            content: Raw response content

        Returns:
            Extracted translation text (may be empty)
        """
        content = (content or "").strip()

        if content.startswith("```"):
            lines = content.split("\n")
            if len(lines) >= 3:
                content = "\n".join(lines[1:-1]).strip()

        for pattern, flags in self.EXTRACTION_PATTERNS:
            match = re.search(pattern, content, flags)
            if match:
                content = match.group(1).strip()
                break

        return self._strip_wrapping_quotes(content)

    def _strip_wrapping_quotes(self, text: str) -> str:
        if len(text) < 2:
            return text
        closing = self.QUOTE_PAIRS.get(text[0])
        if closing and text.endswith(closing):
            inner = text[1:-1]
            # Leave it alone if the quotes are not a single outer pair
            if text[0] not in inner and closing not in inner:
                return inner.strip()
        return text
