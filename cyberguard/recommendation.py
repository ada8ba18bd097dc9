"""
Safety recommendations.

Tags whitespace-split words against category word sets (no context gating),
derives an overall severity and returns one of three canned action plans.
Results are cached per input for a limited time.
"""

import logging
import re
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from cachetools import TTLCache

from .detection.types import Severity, WordAnalysis
from .detection.word_analysis import WordRule

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0
DEFAULT_CACHE_SIZE = 512

RECOMMENDATION_RULES: Tuple[WordRule, ...] = (
    WordRule("critical", frozenset([
        "kill", "die", "suicide", "murder", "dead", "death", "stab", "shoot", "slash",
        "bleach", "poison", "traffic",
    ]), Severity.CRITICAL, ("threat", "violence"), "Critical threat word"),
    WordRule("violence", frozenset([
        "beat", "hurt", "harm", "attack", "punch", "kick", "destroy", "violence", "threat",
    ]), Severity.HIGH, ("violence", "threat"), "Violence-related"),
    WordRule("worth", frozenset([
        "waste", "burden", "useless", "worthless", "mistake", "disappear", "trash", "unwanted",
        "happier", "genius",
    ]), Severity.HIGH, ("insult", "toxicity"), "Personal worth attack"),
    WordRule("shaming", frozenset([
        "embarrassment", "embarrassing", "disgrace", "disgusting", "shameful", "disappointment",
        "revolting", "repulsive", "annoying", "irritating", "pest", "nuisance", "ruining",
    ]), Severity.MEDIUM, ("insult", "toxicity"), "Shaming language"),
    WordRule("insult", frozenset([
        "stupid", "dumb", "idiot", "loser", "pathetic", "failure", "incompetent", "nobody",
    ]), Severity.MEDIUM, ("insult",), "Insulting term"),
    WordRule("existence", frozenset([
        "existence", "problem", "regret", "shouldnt", "empty", "meaningless", "pointless",
        "broken", "invisible", "belong", "talking", "replied",
    ]), Severity.HIGH, ("toxicity", "insult"), "Existence attack"),
    WordRule("mockery", frozenset([
        "laughs", "mock", "joke", "ridicule", "humiliate", "laughing", "hint",
    ]), Severity.MEDIUM, ("toxicity",), "Mockery/ridicule"),
    WordRule("sexual", frozenset([
        "slut", "whore", "prostitute", "hoe", "thot", "rape", "raped", "violated", "nudes", "pics",
    ]), Severity.CRITICAL, ("sexual_harassment", "threat"), "Sexual harassment term"),
    WordRule("dehumanization", frozenset([
        "trash", "garbage", "filth", "scum", "dirt", "nothing", "nobody", "insignificant", "object",
    ]), Severity.HIGH, ("insult", "toxicity"), "Dehumanizing term"),
    WordRule("doxing", frozenset([
        "address", "location", "school", "dox", "expose", "leak", "reveal", "phone", "info",
    ]), Severity.CRITICAL, ("threat", "privacy_violation"), "Doxing-related"),
    WordRule("comparative", frozenset([
        "worst", "dumbest", "ugliest", "stupidest", "better", "smarter", "faster",
    ]), Severity.MEDIUM, ("insult",), "Comparative insult"),
)

URGENT_PLAN = """WHAT TO DO NEXT:

1. DO NOT RESPOND - replying usually makes things worse
2. TAKE SCREENSHOTS now so you have evidence with dates and times
3. BLOCK the sender everywhere they can reach you
4. REPORT the message to the platform's moderators
5. TELL A TRUSTED ADULT such as a parent, teacher or school counselor
6. If you feel unsafe, contact local authorities or a crisis hotline
7. KEEP A RECORD of every incident with dates and details

This is NOT your fault. You deserve to feel safe online."""

CAUTION_PLAN = """WHAT TO DO NEXT:

1. DON'T RESPOND - the sender is looking for a reaction
2. SCREENSHOT the message in case it gets worse
3. BLOCK the sender to stop further messages
4. REPORT to the platform's moderators if it continues
5. TALK TO SOMEONE you trust about how it made you feel
6. Hurtful words say more about the sender than about you

One mean message does not define you."""

AWARENESS_PLAN = """WHAT TO DO NEXT:

1. Keep an eye on this behavior
2. Consider blocking the sender if it continues
3. Talk to someone if it bothers you
4. You decide who you interact with online"""

PLANS = {
    Severity.CRITICAL: URGENT_PLAN,
    Severity.HIGH: URGENT_PLAN,
    Severity.MEDIUM: CAUTION_PLAN,
    Severity.LOW: AWARENESS_PLAN,
}

_NON_WORD = re.compile(r"[^\w]")


@dataclass
class Recommendation:
    recommendation: str
    severity: Severity
    word_analysis: List[WordAnalysis] = field(default_factory=list)
    detected_categories: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "recommendation": self.recommendation,
            "severity": self.severity.value,
            "word_analysis": [
                {
                    "word": w.word,
                    "is_toxic": w.is_toxic,
                    "severity": w.severity.value,
                    "categories": list(w.categories),
                    "reasons": list(w.reasons),
                }
                for w in self.word_analysis
            ],
            "detected_categories": list(self.detected_categories),
        }


def default_recommendation() -> Recommendation:
    return Recommendation(recommendation=AWARENESS_PLAN, severity=Severity.LOW)


def overall_severity(word_analysis: Sequence[WordAnalysis]) -> Severity:
    """critical > high > (2+ medium) > medium > low."""
    critical = sum(1 for w in word_analysis if w.severity is Severity.CRITICAL)
    high = sum(1 for w in word_analysis if w.severity is Severity.HIGH)
    medium = sum(1 for w in word_analysis if w.severity is Severity.MEDIUM)
    if critical:
        return Severity.CRITICAL
    if high or medium >= 2:
        return Severity.HIGH
    if medium == 1:
        return Severity.MEDIUM
    return Severity.LOW


class RecommendationCache:
    """Thread-safe wrapper around a size-bounded ``TTLCache``."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_size: int = DEFAULT_CACHE_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._entries = TTLCache(maxsize=max_size, ttl=ttl_seconds, timer=clock)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Recommendation]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, result: Recommendation) -> None:
        with self._lock:
            self._entries[key] = result

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)


class RecommendationEngine:
    """
    Word-by-word safety recommendation generator.

    Args:
        ttl_seconds: How long a cached recommendation is served
        cache_size: Maximum number of cached inputs
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        cache_size: int = DEFAULT_CACHE_SIZE,
        clock: Callable[[], float] = time.monotonic,
        rules: Sequence[WordRule] = RECOMMENDATION_RULES,
    ):
        self.rules = tuple(rules)
        self.cache = RecommendationCache(ttl_seconds, cache_size, clock)

    def recommend(self, text: str) -> Recommendation:
        if not isinstance(text, str):
            text = ""
        key = text.lower().strip()

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            result = self._build(key)
        except Exception:
            logger.exception("Recommendation generation failed")
            return default_recommendation()

        self.cache.put(key, result)
        return result

    def analyze_words(self, text: str) -> List[WordAnalysis]:
        analyses = []
        for raw in text.lower().split():
            word = _NON_WORD.sub("", raw)
            if not word:
                continue
            analysis = WordAnalysis(word=word)
            rule = self._find_rule(word)
            if rule is not None:
                analysis.is_toxic = True
                analysis.severity = rule.severity
                for category in rule.categories:
                    analysis.add_category(category)
                analysis.reasons.append(f'{rule.reason}: "{word}"')
            analyses.append(analysis)
        return analyses

    def _find_rule(self, word: str) -> Optional[WordRule]:
        for rule in self.rules:
            if word in rule.words:
                return rule
        return None

    def _build(self, text: str) -> Recommendation:
        word_analysis = self.analyze_words(text)
        severity = overall_severity(word_analysis)
        categories: Dict[str, None] = {}
        for analysis in word_analysis:
            for category in analysis.categories:
                categories.setdefault(category, None)
        return Recommendation(
            recommendation=PLANS[severity],
            severity=severity,
            word_analysis=word_analysis,
            detected_categories=list(categories),
        )
