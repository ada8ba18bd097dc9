"""
Per-token toxicity tagging with context gating.

Each token is run through a ranked rule table; the first rule whose word set
contains the token decides the outcome, even if that rule is then gated off by
context. A rule is gated when:

- it is suppressible and the text reads as technical/object talk with no
  one addressed ("kill the process", "this movie is trash")
- it requires a personal target and no second-person pronoun is present
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Mapping, Optional, Sequence, Tuple

from ..preprocessing.ngram_dictionary import EMPTY_DICTIONARY
from .lexicon import (
    CRITICAL_THREAT_WORDS,
    EXISTENCE_WORDS,
    INSULT_WORDS,
    MILD_CONTEXTUAL_WORDS,
    MOCKERY_WORDS,
    OBJECT_CONTEXT_PATTERN,
    PERSONAL_PRONOUN_PATTERN,
    SHAMING_WORDS,
    TECHNICAL_CONTEXT_PATTERN,
    VIOLENCE_WORDS,
    WORTH_ATTACK_WORDS,
)
from .types import Severity, WordAnalysis


NGRAM_TOXIC_THRESHOLD = 0.3


@dataclass(frozen=True)
class WordRule:
    name: str
    words: FrozenSet[str]
    severity: Severity
    categories: Tuple[str, ...]
    reason: str
    suppressible: bool = True
    requires_personal: bool = False


WORD_RULES: Tuple[WordRule, ...] = (
    WordRule("critical", CRITICAL_THREAT_WORDS, Severity.CRITICAL,
             ("threat", "violence"), "Critical threat word"),
    WordRule("violence", VIOLENCE_WORDS, Severity.HIGH,
             ("violence", "threat"), "Violence-related"),
    WordRule("worth", WORTH_ATTACK_WORDS, Severity.HIGH,
             ("insult", "toxicity"), "Personal worth attack"),
    WordRule("shaming", SHAMING_WORDS, Severity.MEDIUM,
             ("insult", "toxicity"), "Shaming language"),
    WordRule("insult", INSULT_WORDS, Severity.MEDIUM,
             ("insult",), "Insulting term"),
    WordRule("existence", EXISTENCE_WORDS, Severity.HIGH,
             ("toxicity", "insult"), "Existence attack"),
    WordRule("mockery", MOCKERY_WORDS, Severity.MEDIUM,
             ("toxicity",), "Mockery/ridicule",
             suppressible=False, requires_personal=True),
    WordRule("mild", MILD_CONTEXTUAL_WORDS, Severity.LOW,
             ("mild_insult",), "Mild negative term in personal context",
             suppressible=False, requires_personal=True),
)


@dataclass(frozen=True)
class ContextGate:
    """Context signals computed once per text."""

    has_personal_pronoun: bool
    has_technical_context: bool
    has_object_context: bool

    @classmethod
    def from_text(cls, text: str) -> "ContextGate":
        lowered = text.lower() if isinstance(text, str) else ""
        return cls(
            has_personal_pronoun=bool(PERSONAL_PRONOUN_PATTERN.search(lowered)),
            has_technical_context=bool(TECHNICAL_CONTEXT_PATTERN.search(lowered)),
            has_object_context=bool(OBJECT_CONTEXT_PATTERN.search(lowered)),
        )

    @property
    def suppresses(self) -> bool:
        """Technical or object talk with nobody addressed."""
        return (self.has_technical_context or self.has_object_context) and not self.has_personal_pronoun

    def allows(self, rule: WordRule) -> bool:
        if rule.requires_personal and not self.has_personal_pronoun:
            return False
        if rule.suppressible and self.suppresses:
            return False
        return True


def severity_for_score(score: float) -> Severity:
    """Map an n-gram toxicity score to a severity bucket."""
    if score >= 0.8:
        return Severity.CRITICAL
    if score >= 0.6:
        return Severity.HIGH
    if score >= 0.4:
        return Severity.MEDIUM
    return Severity.LOW


class WordLevelAnalyzer:
    """Tag each token with a severity, categories and reasons."""

    def __init__(self, rules: Sequence[WordRule] = WORD_RULES):
        self.rules = tuple(rules)

    def find_rule(self, word: str) -> Optional[WordRule]:
        for rule in self.rules:
            if word in rule.words:
                return rule
        return None

    def analyze(
        self,
        tokens: Sequence[str],
        original_text: str,
        ngram_dictionary: Mapping[str, float] = EMPTY_DICTIONARY,
        gate: Optional[ContextGate] = None,
    ) -> List[WordAnalysis]:
        """
        Analyze tokens in order; output is 1:1 with ``tokens``.

        Args:
            tokens: Normalized tokens
            original_text: Raw input, used for context detection
            ngram_dictionary: Optional n-gram scores for severity upgrades
            gate: Precomputed context gate (computed from original_text if None)
        """
        gate = gate or ContextGate.from_text(original_text)
        return [self.analyze_token(token, gate, ngram_dictionary) for token in tokens]

    def analyze_token(
        self,
        token: str,
        gate: ContextGate,
        ngram_dictionary: Mapping[str, float] = EMPTY_DICTIONARY,
    ) -> WordAnalysis:
        analysis = WordAnalysis(word=token)
        word = token.lower()

        rule = self.find_rule(word)
        if rule is not None and gate.allows(rule):
            analysis.is_toxic = True
            analysis.severity = rule.severity
            for category in rule.categories:
                analysis.add_category(category)
            analysis.reasons.append(f'{rule.reason}: "{token}"')

        score = ngram_dictionary.get(word)
        if score is not None and score > NGRAM_TOXIC_THRESHOLD and not gate.suppresses:
            upgraded = severity_for_score(score)
            if upgraded.rank > analysis.severity.rank:
                analysis.severity = upgraded
            analysis.is_toxic = True
            analysis.add_category("toxicity")
            analysis.reasons.append(f"N-gram toxicity score: {score * 100:.1f}%")

        return analysis
