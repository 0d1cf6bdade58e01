"""Size estimation for prompt text.

Exact tokenizer compatibility is not a goal: every engine sizes its input
and output with the same character heuristic so reductions are comparable.

Usage:
    from promptslim.tokenizers import estimate_tokens

    tokens = estimate_tokens('{"id": 1}')
"""

from .estimator import CHARS_PER_TOKEN, CharacterCounter, estimate_tokens

__all__ = [
    "CHARS_PER_TOKEN",
    "CharacterCounter",
    "estimate_tokens",
]
