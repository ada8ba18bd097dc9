"""
Cyberbullying classifier: combines semantic patterns, lexical scoring and
word-level analysis into one ClassificationResult.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence

from ..preprocessing.ngram_dictionary import EMPTY_DICTIONARY, NGramDictionary
from ..preprocessing.normalizer import TextNormalizer
from .lexical import LexicalScorer
from .semantic import DEFAULT_CACHE_SIZE, SemanticPatternMatcher
from .types import (
    ClassificationResult,
    Label,
    LexicalScore,
    SemanticMatch,
    Severity,
    WordAnalysis,
)
from .word_analysis import ContextGate, WordLevelAnalyzer

logger = logging.getLogger(__name__)

SEVERITY_WEIGHTS = {
    Severity.CRITICAL: 0.9,
    Severity.HIGH: 0.6,
    Severity.MEDIUM: 0.3,
    Severity.LOW: 0.15,
}

SEMANTIC_HIGH_SEVERITY = 0.7
BOOST_FACTOR = 0.5

# Decision thresholds; the lowest applicable one wins
BASE_THRESHOLD = 0.5
SEMANTIC_THRESHOLD = 0.35
HIGH_SEVERITY_THRESHOLD = 0.3
LOW_WORDS_THRESHOLD = 0.25
AUTO_FLAG_THRESHOLD = 0.2

CRITICAL_ESCALATION_SCORE = 0.92
HIGH_ESCALATION_SCORE = 0.75


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass
class FusionOutcome:
    score: float
    label: Label
    high_severity: bool
    threshold: float
    auto_flag: bool = False
    dangerous: bool = False
    boost: float = 0.0
    signals: List[str] = field(default_factory=list)


class ScoreFusion:
    """
    Fuse signal producers into a final score and label.

    Word severity counts drive an ordered auto-flag/boost policy (first
    matching rule wins). The final score is the larger of the raw signal
    score and the average word severity, plus half the boost, clamped to
    [0, 1], then raised by the escalation overrides.
    """

    def fuse(
        self,
        semantic_matches: Sequence[SemanticMatch],
        lexical: LexicalScore,
        word_analysis: Sequence[WordAnalysis],
        token_count: int,
        has_personal_context: bool,
    ) -> FusionOutcome:
        signals: List[str] = []
        raw_score = 0.0
        high_severity = lexical.high_severity

        for match in semantic_matches:
            raw_score += match.severity
            signals.append(f"SEMANTIC:{match.meaning}")
            if match.severity >= SEMANTIC_HIGH_SEVERITY:
                high_severity = True

        raw_score += lexical.raw_score
        signals.extend(lexical.matched_signals)

        counts = Counter(word.severity for word in word_analysis)
        critical = counts[Severity.CRITICAL]
        high = counts[Severity.HIGH]
        medium = counts[Severity.MEDIUM]
        low = counts[Severity.LOW]

        weighted = sum(SEVERITY_WEIGHTS.get(word.severity, 0.0) for word in word_analysis)
        avg_severity = weighted / token_count if token_count else 0.0

        auto_flag = False
        boost = 0.0
        if critical >= 1:
            auto_flag = True
            boost = min(0.70 + 0.15 * critical, 0.95)
            signals.append(f"CRITICAL_WORDS:{critical}")
        elif high >= 1:
            auto_flag = True
            boost = min(0.45 + 0.12 * high, 0.75)
            signals.append(f"HIGH_SEVERITY_WORDS:{high}")
        elif medium >= 2:
            auto_flag = True
            boost = min(0.25 + 0.08 * medium, 0.55)
            signals.append(f"MEDIUM_SEVERITY_WORDS:{medium}")
        elif medium == 1 and token_count <= 5:
            auto_flag = has_personal_context
            boost = 0.25 if has_personal_context else 0.20
            signals.append(f"MEDIUM_SEVERITY_WORDS:{medium}")
        elif low >= 2 and token_count <= 6:
            if has_personal_context:
                auto_flag = True
                boost = 0.20
                signals.append(f"LOW_SEVERITY_PERSONAL:{low}")
            else:
                boost = 0.10
                signals.append(f"LOW_SEVERITY_WORDS:{low}")
        elif low == 1:
            boost = 0.08
            signals.append(f"LOW_SEVERITY_WORDS:{low}")

        final_score = clamp01(max(raw_score, avg_severity) + boost * BOOST_FACTOR)

        dangerous = False
        if critical >= 2 or (critical >= 1 and high >= 1):
            dangerous = True
            final_score = max(final_score, CRITICAL_ESCALATION_SCORE)
            signals.append(f"DANGEROUS_CYBERBULLYING:{critical} critical, {high} high")
        elif high >= 2:
            dangerous = True
            final_score = max(final_score, HIGH_ESCALATION_SCORE)
            signals.append(f"DANGEROUS_CYBERBULLYING:{high} high severity words")

        threshold = self.threshold(
            has_semantic=bool(semantic_matches),
            high_severity=high_severity,
            low_count=low,
            auto_flag=auto_flag,
        )
        label = Label.CYBERBULLY if final_score >= threshold or auto_flag else Label.NOT_CYBERBULLY

        return FusionOutcome(
            score=final_score,
            label=label,
            high_severity=high_severity or dangerous,
            threshold=threshold,
            auto_flag=auto_flag,
            dangerous=dangerous,
            boost=boost,
            signals=signals,
        )

    @staticmethod
    def threshold(has_semantic: bool, high_severity: bool, low_count: int, auto_flag: bool) -> float:
        candidates = [BASE_THRESHOLD]
        if has_semantic:
            candidates.append(SEMANTIC_THRESHOLD)
        if high_severity:
            candidates.append(HIGH_SEVERITY_THRESHOLD)
        if low_count >= 2:
            candidates.append(LOW_WORDS_THRESHOLD)
        if auto_flag:
            candidates.append(AUTO_FLAG_THRESHOLD)
        return min(candidates)


class CyberbullyClassifier:
    """
    Heuristic cyberbullying detection engine.

    Owns its normalizer, pattern matcher (and its cache), scorers and the
    current n-gram dictionary snapshot. Independent instances share only the
    read-only rule tables.

    Example:
        >>> classifier = CyberbullyClassifier()
        >>> classifier.classify("I will kill you").label
        <Label.CYBERBULLY: 'CYBERBULLY'>
    """

    def __init__(
        self,
        ngram_dictionary: Optional[Mapping[str, float]] = None,
        normalizer: Optional[TextNormalizer] = None,
        pattern_cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        self.normalizer = normalizer or TextNormalizer()
        self.semantic_matcher = SemanticPatternMatcher(cache_size=pattern_cache_size)
        self.lexical_scorer = LexicalScorer(self.normalizer)
        self.word_analyzer = WordLevelAnalyzer()
        self.fusion = ScoreFusion()
        self._ngram_dictionary: NGramDictionary = EMPTY_DICTIONARY
        if ngram_dictionary is not None:
            self.set_ngram_dictionary(ngram_dictionary)

    @property
    def ngram_dictionary(self) -> NGramDictionary:
        return self._ngram_dictionary

    def has_ngram_dictionary(self) -> bool:
        return len(self._ngram_dictionary) > 0

    def set_ngram_dictionary(self, scores: Mapping[str, float]) -> None:
        """Replace the n-gram dictionary snapshot."""
        if not isinstance(scores, NGramDictionary):
            scores = NGramDictionary(scores)
        self._ngram_dictionary = scores
        logger.info("N-gram dictionary set (%d entries)", len(scores))

    def load_ngram_dictionary(self, path: str) -> None:
        """Load the n-gram dictionary CSV from ``path``."""
        self.set_ngram_dictionary(NGramDictionary.from_file(path))

    def classify(self, text: str) -> ClassificationResult:
        """
        Classify a single text.

        Args:
            text: Raw input text; non-string input is treated as empty

        Returns:
            ClassificationResult
        """
        if not isinstance(text, str):
            text = ""

        dictionary = self._ngram_dictionary
        normalized = self.normalizer.normalize(text)
        gate = ContextGate.from_text(text)

        semantic_matches = self.semantic_matcher.match(normalized.cleaned, normalized.caps_emphasis)
        lexical = self.lexical_scorer.score(normalized.normalized, normalized.tokens, dictionary)
        word_analysis = self.word_analyzer.analyze(normalized.tokens, text, dictionary, gate=gate)

        outcome = self.fusion.fuse(
            semantic_matches,
            lexical,
            word_analysis,
            token_count=len(normalized.tokens),
            has_personal_context=gate.has_personal_pronoun,
        )

        logger.debug(
            "Classified %r -> %s (score=%.3f, threshold=%.2f)",
            text, outcome.label.value, outcome.score, outcome.threshold,
        )

        return ClassificationResult(
            original_text=text,
            normalized_text=normalized.normalized,
            tokens=list(normalized.tokens),
            label=outcome.label,
            score=outcome.score,
            high_severity=outcome.high_severity,
            matched_signals=outcome.signals,
            semantic_matches=semantic_matches,
            word_analysis=word_analysis,
        )

    def classify_batch(self, texts: Sequence[str]) -> List[ClassificationResult]:
        return [self.classify(text) for text in texts]

    def __call__(self, text: str) -> ClassificationResult:
        return self.classify(text)
