"""
Cyberguard Detection Module

Heuristic cyberbullying detection: semantic patterns, lexical scoring,
word-level analysis, score fusion and category risk analysis.
"""

from .types import (
    Severity,
    Label,
    SemanticPattern,
    SemanticMatch,
    WordAnalysis,
    LexicalScore,
    ClassificationResult,
)

from .patterns import SEMANTIC_PATTERNS
from .semantic import PatternCache, SemanticPatternMatcher
from .lexical import LexicalScorer
from .word_analysis import ContextGate, WordLevelAnalyzer, WordRule, WORD_RULES
from .classifier import CyberbullyClassifier, ScoreFusion, FusionOutcome

from .categories import (
    CategoryScorer,
    CategoryScores,
    CategoryAnalysis,
    risk_status,
    dominant_category,
)

__all__ = [
    "Severity",
    "Label",
    "SemanticPattern",
    "SemanticMatch",
    "WordAnalysis",
    "LexicalScore",
    "ClassificationResult",
    "SEMANTIC_PATTERNS",
    "PatternCache",
    "SemanticPatternMatcher",
    "LexicalScorer",
    "ContextGate",
    "WordLevelAnalyzer",
    "WordRule",
    "WORD_RULES",
    "CyberbullyClassifier",
    "ScoreFusion",
    "FusionOutcome",
    "CategoryScorer",
    "CategoryScores",
    "CategoryAnalysis",
    "risk_status",
    "dominant_category",
]
