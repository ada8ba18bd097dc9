"""
Cyberguard Preprocessing Module

Text normalization and the external n-gram dictionary resource.
"""

from .normalizer import (
    TextNormalizer,
    NormalizedText,
    normalize_text,
    SLANG,
    STOPWORDS,
)

from .ngram_dictionary import (
    NGramDictionary,
    EMPTY_DICTIONARY,
)

__all__ = [
    "TextNormalizer",
    "NormalizedText",
    "normalize_text",
    "SLANG",
    "STOPWORDS",
    "NGramDictionary",
    "EMPTY_DICTIONARY",
]
