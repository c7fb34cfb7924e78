"""
Text Normalizer - Comparable forms of option and cell text.

Rendered option text differs from the value it stands for in case,
whitespace, diacritics and Unicode composition ("Tuberculoză" vs
"Tuberculoza"). Everything compared by the match strategy goes through
normalize() first.
"""

import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")

DEFAULT_PREFIX_LENGTH = 30


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(text: str) -> str:
    """
    Normalize text for comparison.
    
    Trims, applies compatibility decomposition, strips diacritics,
    case-folds and collapses whitespace runs to a single space.
    Total and idempotent; ``normalize("") == ""``.
    
    Example:
        >>> normalize("  Persoană  cu experiență de TB ")
        'persoana cu experienta de tb'
    """
    if not text:
        return ""
    # casefold can produce decomposable characters, so fold again after it
    folded = _fold(_fold(text).casefold())
    return _WHITESPACE.sub(" ", folded).strip()


def prefix(text: str, length: int = DEFAULT_PREFIX_LENGTH) -> str:
    """First ``length`` characters of the normalized text."""
    return normalize(text)[:length]
