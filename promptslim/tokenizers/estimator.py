"""Character-based token estimation.

JSON and log text are denser than English prose, so the ratio is set
below the usual ~4 characters per token.
"""

from __future__ import annotations

import math

CHARS_PER_TOKEN = 3.5


class CharacterCounter:
    """Fixed-ratio character counter.

    Example:
        counter = CharacterCounter()
        tokens = counter.count_text("Hello, world!")  # 4
    """

    def __init__(self, chars_per_token: float = CHARS_PER_TOKEN):
        """Initialize character counter.

        Args:
            chars_per_token: Characters per token ratio.
        """
        if chars_per_token <= 0:
            raise ValueError("chars_per_token must be positive")
        self.chars_per_token = chars_per_token

    def count_text(self, text: str) -> int:
        """Estimate tokens as ceil(len(text) / chars_per_token)."""
        if not text:
            return 0
        return math.ceil(len(text) / self.chars_per_token)

    def __repr__(self) -> str:
        return f"CharacterCounter(chars_per_token={self.chars_per_token})"


_DEFAULT_COUNTER = CharacterCounter()


def estimate_tokens(text: str) -> int:
    """Estimate the token count of text with the default ratio."""
    return _DEFAULT_COUNTER.count_text(text)
