"""Text utilities for log-safe string handling."""

import re

_WHITESPACE = re.compile(r"\s+")

# Characters that make a clean place to cut a snippet
_BREAK_CHARS = frozenset(" ,.!?;:-。，、،।")


def safe_truncate(text: str, max_chars: int, suffix: str = "...") -> str:
    """Shorten text to a single-line snippet for logs.

    Collapses whitespace so multi-line transcript text stays on one log
    line, and tries to cut at a word boundary within the last 20
    characters.

    Args:
        text: Text to truncate
        max_chars: Maximum characters (excluding suffix)
        suffix: Suffix to append if truncated (default "...")

    Returns:
        Truncated text with suffix if needed
    """
    if not text:
        return ""

    text = _WHITESPACE.sub(" ", text).strip()
    if len(text) <= max_chars:
        return text

    truncated = text[:max_chars]
    for i in range(1, min(20, max_chars)):
        if truncated[-i] in _BREAK_CHARS:
            truncated = truncated[:-i].rstrip()
            break

    return truncated + suffix
