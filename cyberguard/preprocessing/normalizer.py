"""
Cyberguard Text Preprocessing for Cyberbullying Detection

This module turns raw chat/social text into the normalized token stream the
detectors work on.

Pipeline (order matters):
- Aggressive caps detection (before case folding)
- Lowercasing
- Leetspeak / symbol de-obfuscation
- URL removal
- Punctuation stripping and whitespace collapse
- Per-token repeated-character collapse, slang expansion, stopword removal
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


# Chat slang and abbreviations; one token may expand to several words
SLANG: Dict[str, str] = {
    "u": "you",
    "ur": "you are",
    "r": "are",
    "ya": "you",
    "yu": "you",
    "kys": "kill yourself",
    "stfu": "shut up",
    "gtfo": "get out",
    "lmao": "laughing",
    "lol": "laughing",
    "smh": "shaking my head",
    "ffs": "for sake",
    "wtf": "what",
    "omg": "oh my",
    # Gaming slang
    "noob": "beginner",
    "scrub": "bad player",
    "rekt": "wrecked",
    "dum": "dumb",
    "ez": "easy",
}

STOPWORDS = frozenset([
    "a", "an", "the", "is", "are", "was", "were",
    "to", "in", "on", "at", "it", "that", "this",
    "of", "for", "with", "and", "or", "as",
])

# Whole-word obfuscations; must run before the single-character substitutions
SPECIFIC_OBFUSCATIONS: List[Tuple[str, str]] = [
    (r"f[*@#]ck", "fuck"),
    (r"b[!1i*]tch", "bitch"),
    (r"sh[!i*]t", "shit"),
    (r"a[s$5]s", "ass"),
]

# Separators used to break words apart ("d-u-m-b", "stu**id")
SEPARATOR_PATTERNS: List[str] = [r"\*+", r"-+", r"_+"]

NUMERIC_WORDS: List[Tuple[str, str]] = [
    ("y0u", "you"),
    ("ar3", "are"),
    ("st00pid", "stupid"),
    ("b1tch", "bitch"),
    ("1d10t", "idiot"),
]

CHAR_SUBSTITUTIONS: Dict[str, str] = {
    "0": "o",
    "1": "i",
    "3": "e",
    "4": "a",
    "5": "s",
    "7": "t",
    "8": "b",
    "9": "g",
    "$": "s",
    "@": "a",
    "!": "i",
    "+": "t",
}


@dataclass
class NormalizedText:
    """Output of :meth:`TextNormalizer.normalize`."""

    original: str
    # Lowercased + de-obfuscated text, punctuation still intact
    cleaned: str
    normalized: str
    tokens: List[str] = field(default_factory=list)
    caps_emphasis: bool = False


class TextNormalizer:
    """
    Text normalizer for cyberbullying detection.

    Stateless: all tables are module-level constants and compiled patterns
    are created once per instance, so ``normalize`` is a pure function of its
    input.
    """

    def __init__(
        self,
        slang: Optional[Dict[str, str]] = None,
        stopwords: Optional[frozenset] = None,
    ):
        """
        Initialize normalizer.

        Args:
            slang: Slang expansion table (defaults to SLANG)
            stopwords: Words dropped from the token stream (defaults to STOPWORDS)
        """
        self.slang = SLANG if slang is None else slang
        self.stopwords = STOPWORDS if stopwords is None else stopwords

        # Compile regex patterns
        self._caps_pattern = re.compile(r"[A-Z]{4,}")
        self._specific_patterns = [
            (re.compile(pattern, re.IGNORECASE), replacement)
            for pattern, replacement in SPECIFIC_OBFUSCATIONS
        ]
        self._separator_patterns = [re.compile(p) for p in SEPARATOR_PATTERNS]
        self._char_table = str.maketrans(CHAR_SUBSTITUTIONS)
        self._url_pattern = re.compile(
            r"https?://\S+|www\.\S+|\b[\w-]{1,63}\.(?:com|org|net|io|gg|tv)\b\S*",
            re.IGNORECASE,
        )
        self._non_alnum_pattern = re.compile(r"[^a-z0-9\s]")
        self._whitespace_pattern = re.compile(r"\s+")
        self._repeat_pattern = re.compile(r"(.)\1{2,}")

    def normalize(self, text: str) -> NormalizedText:
        """
        Normalize text for cyberbullying detection.

        Args:
            text: Raw input text (non-string input is treated as empty)

        Returns:
            NormalizedText with the cleaned text, token list and caps signal
        """
        if not isinstance(text, str):
            text = ""

        caps_emphasis = self.has_caps_emphasis(text)

        cleaned = self.normalize_leetspeak(text.lower())

        stripped = self._url_pattern.sub(" ", cleaned)
        stripped = self._non_alnum_pattern.sub(" ", stripped)
        stripped = self._whitespace_pattern.sub(" ", stripped).strip()

        tokens = self.process_tokens(stripped.split()) if stripped else []

        return NormalizedText(
            original=text,
            cleaned=cleaned,
            normalized=" ".join(tokens),
            tokens=tokens,
            caps_emphasis=caps_emphasis,
        )

    def has_caps_emphasis(self, text: str) -> bool:
        """True if the text contains a run of 4+ uppercase letters."""
        return bool(self._caps_pattern.search(text))

    def normalize_leetspeak(self, text: str) -> str:
        """Undo leetspeak and symbol obfuscation on lowercased text."""
        for pattern, replacement in self._specific_patterns:
            text = pattern.sub(replacement, text)

        for pattern in self._separator_patterns:
            text = pattern.sub("", text)
        text = self._whitespace_pattern.sub(" ", text)

        for obfuscated, word in NUMERIC_WORDS:
            text = text.replace(obfuscated, word)

        return text.translate(self._char_table)

    def process_tokens(self, raw_tokens: List[str]) -> List[str]:
        """Collapse repeats, expand slang and drop stopwords."""
        tokens: List[str] = []
        for raw in raw_tokens:
            token = self._repeat_pattern.sub(r"\1\1", raw)
            expansion = self.slang.get(token, token)
            for part in expansion.split():
                if part and part not in self.stopwords:
                    tokens.append(part)
        return tokens

    def __call__(self, text: str) -> NormalizedText:
        """Allow using normalizer as callable."""
        return self.normalize(text)


def normalize_text(text: str) -> str:
    """
    Convenience wrapper returning only the normalized string.

    Args:
        text: Raw text

    Returns:
        Normalized, space-joined token string
    """
    return TextNormalizer().normalize(text).normalized


if __name__ == "__main__":
    normalizer = TextNormalizer()

    test_cases = [
        "You're such a n00b lmao",
        "stfu and gtfo you f*ck1ng 1d10t",
        "Check out https://youtube.com/watch?v=xyz this is SO STUPID",
        "ur existence is a burden",
        "STOPPPPP BEING SO STUUUUPID",
        "kys",
    ]

    print("Cyberguard Text Normalizer")
    print("=" * 60)

    for text in test_cases:
        result = normalizer(text)
        print(f"Original:   {text}")
        print(f"Cleaned:    {result.cleaned}")
        print(f"Normalized: {result.normalized}")
        print(f"Caps:       {result.caps_emphasis}")
        print("-" * 60)
