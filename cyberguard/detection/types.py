"""Result and rule types shared by the heuristic detectors."""

import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List


class Severity(str, Enum):
    SAFE = "safe"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return SEVERITY_RANK[self]


SEVERITY_RANK: Dict[Severity, int] = {
    Severity.SAFE: 0,
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}


class Label(str, Enum):
    CYBERBULLY = "CYBERBULLY"
    NOT_CYBERBULLY = "NOT_CYBERBULLY"


@dataclass(frozen=True)
class SemanticPattern:
    """A catalog rule: compiled regex plus what a match means."""

    pattern: re.Pattern
    meaning: str
    severity: float
    category: str


@dataclass(frozen=True)
class SemanticMatch:
    pattern: str
    meaning: str
    severity: float
    category: str


@dataclass
class WordAnalysis:
    """Per-token toxicity annotation. Categories are kept unique, in order added."""

    word: str
    is_toxic: bool = False
    severity: Severity = Severity.SAFE
    categories: List[str] = field(default_factory=list)
    reasons: List[str] = field(default_factory=list)

    def add_category(self, category: str) -> None:
        if category not in self.categories:
            self.categories.append(category)


@dataclass
class LexicalScore:
    raw_score: float = 0.0
    high_severity: bool = False
    matched_signals: List[str] = field(default_factory=list)


@dataclass
class ClassificationResult:
    """Heuristic classification of one text."""

    original_text: str
    normalized_text: str
    tokens: List[str]
    label: Label
    score: float
    high_severity: bool
    matched_signals: List[str] = field(default_factory=list)
    semantic_matches: List[SemanticMatch] = field(default_factory=list)
    word_analysis: List[WordAnalysis] = field(default_factory=list)

    @property
    def is_cyberbullying(self) -> bool:
        return self.label is Label.CYBERBULLY

    def to_dict(self) -> Dict:
        """JSON-ready representation."""
        data = asdict(self)
        data["label"] = self.label.value
        for word in data["word_analysis"]:
            word["severity"] = word["severity"].value
        return data
