"""Phrase normalization for pronunciation grading."""

from __future__ import annotations

import re

# Spanish inverted marks included; accents and interior spacing are kept.
PUNCTUATION = "¿?¡!.,;:"

_STRIP_TABLE = str.maketrans("", "", PUNCTUATION)


def normalize_phrase(text: str) -> str:
    """Lowercase, drop sentence punctuation, strip surrounding whitespace."""
    return text.lower().translate(_STRIP_TABLE).strip()


def contains_phrase(utterance: str, phrase: str) -> bool:
    """Return True if the normalized phrase occurs as whole words in the normalized utterance."""
    needle = normalize_phrase(phrase)
    if not needle:
        return False
    pattern = rf"(?<!\w){re.escape(needle)}(?!\w)"
    return re.search(pattern, normalize_phrase(utterance)) is not None
