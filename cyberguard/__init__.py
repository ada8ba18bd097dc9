"""
Cyberguard

Cyberbullying detection engine: text normalization, semantic patterns,
lexical and word-level scoring, an optional WordPiece neural backend and
safety recommendations.
"""

__version__ = "1.0.0"
__author__ = "Cyberguard Team"

from .config import DetectorConfig, load_config
from .errors import CyberguardError, ResourceUnavailableError, InferenceError

from .preprocessing import (
    TextNormalizer,
    NormalizedText,
    normalize_text,
    NGramDictionary,
)

from .detection import (
    CyberbullyClassifier,
    ClassificationResult,
    Label,
    Severity,
)

from .recommendation import RecommendationEngine, Recommendation

from .models import (
    WordPieceTokenizer,
    NeuralPipeline,
    NeuralResult,
    PipelineState,
    OnnxBackend,
    TransformersBackend,
)

from .orchestrator import ModelOrchestrator, AnalysisResult, Backend, create_detector

__all__ = [
    "DetectorConfig",
    "load_config",
    "CyberguardError",
    "ResourceUnavailableError",
    "InferenceError",
    "TextNormalizer",
    "NormalizedText",
    "normalize_text",
    "NGramDictionary",
    "CyberbullyClassifier",
    "ClassificationResult",
    "Label",
    "Severity",
    "RecommendationEngine",
    "Recommendation",
    "WordPieceTokenizer",
    "NeuralPipeline",
    "NeuralResult",
    "PipelineState",
    "OnnxBackend",
    "TransformersBackend",
    "ModelOrchestrator",
    "AnalysisResult",
    "Backend",
    "create_detector",
]
