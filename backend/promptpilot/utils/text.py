"""Text utilities for display previews."""

import re

# Break points considered when shortening text for previews
_BREAK_CHARS = {" ", "\n", "\t", ",", ".", "!", "?", ";", ":", "-", "।"}

_WHITESPACE_RE = re.compile(r"\s+")


def safe_truncate(text: str, max_chars: int = 60, suffix: str = "...") -> str:
    """Truncate text for display, preferring a word boundary.

    Looks back up to 20 characters for a break point so previews do not
    end mid-word. Devanagari danda counts as a break point.

    Args:
        text: Text to truncate
        max_chars: Maximum characters (excluding suffix)
        suffix: Suffix to append if truncated (default "...")

    Returns:
        Truncated text with suffix if needed
    """
    if not text or len(text) <= max_chars:
        return text

    truncated = text[:max_chars]
    for i in range(1, min(20, max_chars - 1) + 1):
        if truncated[-i] in _BREAK_CHARS:
            truncated = truncated[:-i].rstrip()
            break

    return truncated + suffix


def preview(text: str, max_chars: int = 60) -> str:
    """Single-line preview of multi-line text."""
    return safe_truncate(_WHITESPACE_RE.sub(" ", text or "").strip(), max_chars)
