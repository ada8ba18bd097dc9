"""
Category risk analysis.

Scores four harm categories (toxicity, threat, insult, identity_hate) from
weighted phrase tables, then folds in the classifier verdict to produce a
0-100 risk level, a confidence and display helpers.
"""

import math
import re
from dataclasses import asdict, dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from .types import ClassificationResult, SemanticMatch

CATEGORY_NAMES = ("toxicity", "threat", "insult", "identity_hate")

CATEGORY_DISPLAY_NAMES = {
    "toxicity": "Toxic Language",
    "threat": "Threatening",
    "insult": "Insulting",
    "identity_hate": "Hate Speech",
}

CRITICAL_THREATS = [
    "i will kill you", "i'll kill you", "gonna kill you", "going to kill you",
    "i will beat you", "i'll beat you", "gonna beat you",
    "i will hurt you", "i'll hurt you", "gonna hurt you",
    "i will stab you", "i'll stab you", "gonna stab you",
    "i will shoot you", "i'll shoot you", "gonna shoot you",
    "i will attack you", "i'll attack you", "gonna attack you",
    "watch your back", "you're dead", "you are dead", "youre dead",
    "i'll find you", "gonna get you", "i'm gonna get you",
]

SELF_HARM_THREATS = [
    "kill yourself", "go kill yourself", "kys", "k y s",
    "go suicide", "commit suicide", "do suicide",
    "you should die", "go die", "just die",
    "end your life", "end it all", "kill urself",
    "better off dead", "nobody would miss you", "no one would care if you died",
]

# (phrases, {category: weight})
WEIGHTED_TABLES: List[Tuple[List[str], Dict[str, float]]] = [
    ([
        "everyone hates you", "nobody likes you",
        "waste of space", "worthless piece", "good for nothing",
        "worst mistake", "world would be better without you",
        "your existence is burden", "you are a burden", "you are burden",
        "your brain is empty", "empty as your brain",
        "everyone voted that", "shouldn't be part",
        "no good", "not good", "better off without",
        "don't deserve", "do not deserve", "deserve to die",
    ], {"toxicity": 0.35}),
    ([
        "hate you", "stupid", "idiot", "dumb", "shut up", "loser",
        "pathetic", "worthless", "disgusting", "trash", "garbage",
        "you are embarrassing", "you are pathetic", "you are disgusting",
        "embarrassment", "disgrace", "disappointment", "failure",
        "moron", "screw you", "awful", "horrible", "fool",
        "incompetent", "useless", "laughs at you", "mock you",
    ], {"toxicity": 0.25}),
    ([
        "suck", "terrible", "annoying", "gross", "creep", "weirdo",
        "psycho", "crazy", "insane", "lame", "boring",
    ], {"toxicity": 0.15}),
    ([
        "murder you", "bomb you", "hunt you down",
        "hurt you bad", "make you pay", "you will die",
        "gonna die", "going to die", "you are going to die",
        "end you", "destroy you", "kill you",
    ], {"threat": 0.40}),
    ([
        "kill", "hurt", "attack", "destroy", "beat you up", "fight",
        "violence", "harm", "threat", "stab", "punch", "slap", "kick",
        "shoot", "slash", "threatening", "regret", "suffer",
    ], {"threat": 0.30}),
    ([
        "beat", "hit", "smash", "crush", "break", "pain",
    ], {"threat": 0.20}),
    ([
        "nobody", "nothing", "failure", "worthless", "useless",
        "waste of life", "mistake", "embarrassment", "disgrace",
        "you don't belong", "nobody wants you", "everyone voted you out",
        "your presence makes everything worse",
    ], {"insult": 0.25}),
    ([
        "ugly", "fat", "stupid", "loser", "weak", "pathetic",
        "freak", "disgusting", "repulsive", "gross person",
    ], {"insult": 0.18}),
    ([
        "lame", "nerd", "geek", "dork", "weirdo", "awkward",
        "embarrassing", "shameful", "ridiculous", "joke", "silly",
        "absurd", "nonsense", "laughable", "pitiful", "sad",
    ], {"insult": 0.12}),
    ([
        "racist", "sexist", "homophobic", "xenophobic", "bigot",
        "discrimination", "slur", "prejudice", "hate crime",
        "intolerant", "nazi", "fascist", "supremacist",
    ], {"identity_hate": 0.45}),
    (CRITICAL_THREATS, {"threat": 0.50, "toxicity": 0.40}),
    (SELF_HARM_THREATS, {"threat": 0.50, "toxicity": 0.45}),
]

BULLYING_PATTERNS = [re.compile(p, re.IGNORECASE) for p in (
    r"no one likes you",
    r"everyone hates you",
    r"kill yourself",
    r"you should die",
    r"go die",
    r"nobody cares",
    r"you('re| are) nothing",
    r"waste of space",
    r"attention seeking",
    r"pathetic loser",
    r"you('re| are) disgusting",
    r"nobody wants you",
    r"you('re| are) worthless",
    r"your existence is",
    r"empty as your brain",
    r"everyone voted",
    r"laughs at you",
)]

NEGATIVE_EMOTICONS = (":@", ">:(", "D:<", ">:[", ">:()", "ò_ó")

_AGGRESSIVE_PUNCTUATION = re.compile(r"!{2,}")
_UPPERCASE = re.compile(r"[A-Z]")
_REPEATED_CHARS = re.compile(r"(.)\1{3,}")

# Semantic match families that steer the classifier boost
_THREAT_MARKERS = ("threat", "violence", "death", "harm", "weapon")
_EXCLUSION_MARKERS = ("exclusion", "dismissive", "worth", "existential")
_SHAMING_MARKERS = ("shaming", "embarrass")


def _compile_phrase(phrase: str) -> re.Pattern:
    return re.compile(r"(?<![a-z0-9])" + re.escape(phrase) + r"(?![a-z0-9])")


_COMPILED_TABLES = [
    ([_compile_phrase(p) for p in phrases], weights)
    for phrases, weights in WEIGHTED_TABLES
]


@dataclass
class CategoryScores:
    toxicity: float = 0.0
    threat: float = 0.0
    insult: float = 0.0
    identity_hate: float = 0.0

    def values(self) -> List[float]:
        return [getattr(self, name) for name in CATEGORY_NAMES]

    def max(self) -> float:
        return max(self.values())

    def mean(self) -> float:
        return sum(self.values()) / len(CATEGORY_NAMES)

    def active(self, floor: float) -> int:
        return sum(1 for value in self.values() if value > floor)

    def add(self, name: str, amount: float) -> None:
        setattr(self, name, min(1.0, getattr(self, name) + amount))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class CategoryAnalysis:
    is_cyberbullying: bool = False
    risk_level: int = 0
    confidence: float = 0.0
    categories: CategoryScores = field(default_factory=CategoryScores)


class RiskStatus(NamedTuple):
    text: str
    severity: str


def risk_status(risk_level: int) -> RiskStatus:
    """Display bucket for a 0-100 risk level."""
    if risk_level <= 33:
        return RiskStatus("Low Risk", "low")
    if risk_level <= 66:
        return RiskStatus("Caution", "medium")
    return RiskStatus("Danger", "high")


def dominant_category(categories: CategoryScores) -> str:
    """Display name of the highest scoring category, or "None" if all are zero."""
    best_name, best_value = CATEGORY_NAMES[0], categories.toxicity
    for name in CATEGORY_NAMES[1:]:
        value = getattr(categories, name)
        if value > best_value:
            best_name, best_value = name, value
    if best_value == 0:
        return "None"
    return CATEGORY_DISPLAY_NAMES[best_name]


def _has_marker(matches: Sequence[SemanticMatch], markers: Tuple[str, ...], critical: bool = False) -> bool:
    for match in matches:
        category = match.category.lower()
        if any(marker in category for marker in markers):
            return True
        if critical and match.meaning.startswith("CRITICAL"):
            return True
    return False


class CategoryScorer:
    """Heuristic per-category scoring plus classifier-driven risk."""

    def score_categories(self, text: str) -> CategoryScores:
        """Score the four categories for raw ``text``."""
        lowered = text.lower()
        raw = dict.fromkeys(CATEGORY_NAMES, 0.0)

        for patterns, weights in _COMPILED_TABLES:
            for pattern in patterns:
                if pattern.search(lowered):
                    for name, weight in weights.items():
                        raw[name] += weight

        for pattern in BULLYING_PATTERNS:
            if pattern.search(text):
                raw["toxicity"] += 0.30
                raw["insult"] += 0.25

        scores = CategoryScores(**{name: min(1.0, value) for name, value in raw.items()})

        if _AGGRESSIVE_PUNCTUATION.search(text):
            scores.add("toxicity", 0.10)
            scores.add("threat", 0.10)

        if len(text) > 10:
            caps_ratio = len(_UPPERCASE.findall(text)) / len(text)
            if caps_ratio > 0.6:
                scores.add("toxicity", 0.15)
                scores.add("threat", 0.12)

        if _REPEATED_CHARS.search(text):
            scores.add("toxicity", 0.08)

        if any(emoticon in text for emoticon in NEGATIVE_EMOTICONS):
            scores.add("toxicity", 0.06)

        if scores.active(0.2) >= 2:
            for name in CATEGORY_NAMES:
                setattr(scores, name, min(1.0, getattr(scores, name) * 1.15))

        return scores

    def analyze(self, text: str, classification: Optional[ClassificationResult] = None) -> CategoryAnalysis:
        """
        Combine category scores with a classifier verdict.

        Args:
            text: Raw input text
            classification: Heuristic classification of the same text

        Returns:
            CategoryAnalysis (the neutral default for empty input)
        """
        if not isinstance(text, str) or not text.strip():
            return CategoryAnalysis()

        boost = 0.0
        if classification is not None and classification.is_cyberbullying:
            boost = classification.score

        scores = self.score_categories(text)

        if boost > 0:
            matches = classification.semantic_matches
            if _has_marker(matches, _THREAT_MARKERS, critical=True):
                scores.add("threat", boost * 0.9)
                scores.add("toxicity", boost * 0.7)
            if _has_marker(matches, _EXCLUSION_MARKERS):
                scores.add("insult", boost * 0.6)
                scores.add("toxicity", boost * 0.5)
            if _has_marker(matches, _SHAMING_MARKERS):
                scores.add("insult", boost * 0.65)
                scores.add("toxicity", boost * 0.4)
            scores.add("toxicity", boost * 0.4)

        highest = scores.max()
        if boost > 0.7:
            multiplier = 0.2
        elif boost > 0.4:
            multiplier = 0.15
        else:
            multiplier = 0.1
        weighted = highest * 0.7 + scores.mean() * 0.3 + boost * multiplier
        risk_level = min(100, int(math.floor(weighted * 100 + 0.5)))
        is_cyberbullying = risk_level > 50 or boost > 0.5

        if is_cyberbullying:
            confidence = min(0.98, highest * 0.85 + scores.active(0.1) * 0.05)
        elif highest < 0.05:
            confidence = 0.95
        else:
            confidence = 0.85 - highest * 0.5

        return CategoryAnalysis(
            is_cyberbullying=is_cyberbullying,
            risk_level=risk_level,
            confidence=confidence,
            categories=scores,
        )
