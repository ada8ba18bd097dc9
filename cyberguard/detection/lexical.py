"""
Lexical scoring: high-severity phrases, toxic phrases, keywords and the
n-gram dictionary.
"""

from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from ..preprocessing.ngram_dictionary import EMPTY_DICTIONARY
from ..preprocessing.normalizer import TextNormalizer
from .lexicon import (
    HIGH_SEVERITY_PHRASES,
    NON_PERSONAL_CONTEXT_PATTERN,
    NORMALIZED_PRONOUN_PATTERN,
    TOXIC_KEYWORDS,
    TOXIC_PHRASES,
)
from .types import LexicalScore


HIGH_SEVERITY_WEIGHT = 0.8
PHRASE_WEIGHT = 0.5
KEYWORD_WEIGHT = 0.12
NON_PERSONAL_KEYWORD_WEIGHT = 0.05
NGRAM_WEIGHT = 0.5
MAX_NGRAM = 3


def iter_ngrams(tokens: Sequence[str], max_n: int = MAX_NGRAM) -> Iterable[str]:
    """Yield all 1..max_n grams, shortest first, in token order."""
    for n in range(1, max_n + 1):
        for i in range(len(tokens) - n + 1):
            yield " ".join(tokens[i:i + n])


class LexicalScorer:
    """
    Weighted keyword/phrase scorer.

    Phrase tables are run through ``normalizer`` once at construction so that
    they compare against input normalized the same way. Phrases collapsing to
    the same normalized form count once.
    """

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        high_severity_phrases: Sequence[str] = HIGH_SEVERITY_PHRASES,
        toxic_phrases: Sequence[str] = TOXIC_PHRASES,
        keywords: Sequence[str] = TOXIC_KEYWORDS,
    ):
        self.normalizer = normalizer or TextNormalizer()
        self.high_severity_phrases = self._prepare_phrases(high_severity_phrases)
        self.toxic_phrases = self._prepare_phrases(toxic_phrases)
        self.keywords = tuple(dict.fromkeys(k.lower() for k in keywords))

    def _prepare_phrases(self, phrases: Sequence[str]) -> Tuple[Tuple[str, str], ...]:
        """Return unique (normalized, compact) pairs in table order."""
        prepared = {}
        for phrase in phrases:
            normalized = self.normalizer.normalize(phrase).normalized
            if normalized and normalized not in prepared:
                prepared[normalized] = normalized.replace(" ", "")
        return tuple(prepared.items())

    def score(
        self,
        normalized_text: str,
        tokens: Sequence[str],
        ngram_dictionary: Mapping[str, float] = EMPTY_DICTIONARY,
    ) -> LexicalScore:
        """
        Score normalized text.

        Args:
            normalized_text: Space-joined normalized tokens
            tokens: The normalized token list
            ngram_dictionary: N-gram -> toxicity score snapshot

        Returns:
            LexicalScore with the unclamped raw score
        """
        result = LexicalScore()
        if not tokens:
            return result

        padded = f" {normalized_text} "
        token_set = set(tokens)

        for phrase, compact in self.high_severity_phrases:
            if f" {phrase} " in padded or compact in token_set:
                result.raw_score += HIGH_SEVERITY_WEIGHT
                result.high_severity = True
                result.matched_signals.append(f"HIGH:{phrase}")

        for phrase, compact in self.toxic_phrases:
            if f" {phrase} " in padded or compact in token_set:
                result.raw_score += PHRASE_WEIGHT
                result.matched_signals.append(f"PHRASE:{phrase}")

        weight = self.keyword_weight(normalized_text)
        for keyword in self.keywords:
            if keyword in token_set:
                result.raw_score += weight
                result.matched_signals.append(f"WORD:{keyword}")

        ngram_score, ngram_signals = self.ngram_matches(tokens, ngram_dictionary)
        result.raw_score += ngram_score * NGRAM_WEIGHT
        result.matched_signals.extend(ngram_signals)

        return result

    @staticmethod
    def keyword_weight(normalized_text: str) -> float:
        """Keyword weight, reduced for technical text with no one addressed."""
        if (NON_PERSONAL_CONTEXT_PATTERN.search(normalized_text)
                and not NORMALIZED_PRONOUN_PATTERN.search(normalized_text)):
            return NON_PERSONAL_KEYWORD_WEIGHT
        return KEYWORD_WEIGHT

    @staticmethod
    def ngram_matches(
        tokens: Sequence[str],
        ngram_dictionary: Mapping[str, float],
    ) -> Tuple[float, List[str]]:
        """Sum dictionary scores over all 1-3 grams, capped at 1."""
        if not ngram_dictionary:
            return 0.0, []
        total = 0.0
        signals = []
        for gram in iter_ngrams(tokens):
            score = ngram_dictionary.get(gram)
            if score is not None:
                total += score
                signals.append(f"NGRAM:{gram}({score:.2f})")
        return min(total, 1.0), signals
