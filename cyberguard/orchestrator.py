"""
Backend selection and unified analysis.

``ModelOrchestrator`` runs either the heuristic detector or the neural
pipeline, falls back to the heuristic path whenever the neural backend is
unavailable or fails, and always attaches a safety recommendation.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

from .config import DetectorConfig
from .detection.categories import (
    CategoryAnalysis,
    CategoryScorer,
    CategoryScores,
    dominant_category,
    risk_status,
)
from .detection.classifier import CyberbullyClassifier
from .detection.types import ClassificationResult
from .errors import CyberguardError
from .models.pipeline import NeuralPipeline, NeuralResult
from .models.runner import NeuralBackend, OnnxBackend
from .preprocessing.ngram_dictionary import NGramDictionary
from .recommendation import Recommendation, RecommendationEngine

logger = logging.getLogger(__name__)


class Backend(str, Enum):
    HEURISTIC = "heuristic"
    NEURAL = "neural"


@dataclass
class AnalysisResult:
    """Unified result returned to the host application."""

    is_cyberbullying: bool = False
    risk_level: int = 0
    confidence: float = 0.0
    categories: CategoryScores = field(default_factory=CategoryScores)
    risk_status: str = "Low Risk"
    risk_severity: str = "low"
    dominant_category: str = "None"
    backend_used: Backend = Backend.HEURISTIC
    fell_back: bool = False
    classification: Optional[ClassificationResult] = None
    neural: Optional[NeuralResult] = None
    recommendation: Optional[Recommendation] = None

    def to_dict(self) -> Dict:
        return {
            "is_cyberbullying": self.is_cyberbullying,
            "risk_level": self.risk_level,
            "confidence": round(self.confidence, 4),
            "categories": {k: round(v, 4) for k, v in self.categories.to_dict().items()},
            "risk_status": self.risk_status,
            "risk_severity": self.risk_severity,
            "dominant_category": self.dominant_category,
            "backend_used": self.backend_used.value,
            "fell_back": self.fell_back,
            "classification": self.classification.to_dict() if self.classification else None,
            "neural": self.neural.to_dict() if self.neural else None,
            "recommendation": self.recommendation.to_dict() if self.recommendation else None,
        }


class ModelOrchestrator:
    """
    Chooses the analysis backend per call.

    Args:
        classifier: Heuristic detector (always available)
        pipeline: Optional neural pipeline
        recommendation_engine: Recommendation generator
        preferred_backend: Default backend when ``analyze`` is not told one
    """

    def __init__(
        self,
        classifier: Optional[CyberbullyClassifier] = None,
        pipeline: Optional[NeuralPipeline] = None,
        recommendation_engine: Optional[RecommendationEngine] = None,
        preferred_backend: Union[Backend, str] = Backend.HEURISTIC,
    ):
        self.classifier = classifier or CyberbullyClassifier()
        self.pipeline = pipeline
        self.recommendation_engine = recommendation_engine or RecommendationEngine()
        self.category_scorer = CategoryScorer()
        self.preferred_backend = Backend(preferred_backend)

    @property
    def neural_available(self) -> bool:
        """Capability flag: False once the neural backend is known to be unusable."""
        if self.pipeline is None or self.pipeline.is_failed:
            return False
        return self.pipeline.backend.probe()

    def initialize_neural(self) -> bool:
        if self.pipeline is None:
            return False
        return self.pipeline.initialize()

    def analyze(
        self,
        text: str,
        preferred_backend: Optional[Union[Backend, str]] = None,
    ) -> AnalysisResult:
        """
        Analyze text with the preferred backend, falling back to heuristics.

        Args:
            text: Raw input; non-string input is treated as empty
            preferred_backend: Backend to try first (defaults to the instance's)

        Returns:
            AnalysisResult (never raises)
        """
        if not isinstance(text, str):
            text = ""
        backend = Backend(preferred_backend) if preferred_backend is not None else self.preferred_backend

        result = None
        fell_back = False
        if backend is Backend.NEURAL:
            result = self._analyze_neural(text)
            if result is None:
                fell_back = True
                logger.info("Neural backend unavailable; using heuristic detector")

        if result is None:
            result = self._analyze_heuristic(text)
            result.fell_back = fell_back

        result.recommendation = self.recommendation_engine.recommend(text)
        return result

    def _analyze_heuristic(self, text: str) -> AnalysisResult:
        classification = self.classifier.classify(text)
        analysis = self.category_scorer.analyze(text, classification)
        return self._build_result(analysis, Backend.HEURISTIC, classification=classification)

    def _analyze_neural(self, text: str) -> Optional[AnalysisResult]:
        if self.pipeline is None or not self.pipeline.initialize():
            return None
        try:
            neural = self.pipeline.analyze(text)
        except CyberguardError as e:
            logger.warning("Neural analysis failed (%s); falling back", e)
            return None

        scores = self.category_scorer.score_categories(text) if text.strip() else CategoryScores()
        analysis = CategoryAnalysis(
            is_cyberbullying=neural.is_cyberbullying,
            risk_level=neural.risk_level,
            confidence=neural.confidence,
            categories=scores,
        )
        return self._build_result(analysis, Backend.NEURAL, neural=neural)

    @staticmethod
    def _build_result(
        analysis: CategoryAnalysis,
        backend: Backend,
        classification: Optional[ClassificationResult] = None,
        neural: Optional[NeuralResult] = None,
    ) -> AnalysisResult:
        status = risk_status(analysis.risk_level)
        return AnalysisResult(
            is_cyberbullying=analysis.is_cyberbullying,
            risk_level=analysis.risk_level,
            confidence=analysis.confidence,
            categories=analysis.categories,
            risk_status=status.text,
            risk_severity=status.severity,
            dominant_category=dominant_category(analysis.categories),
            backend_used=backend,
            classification=classification,
            neural=neural,
        )


def create_detector(
    config: Optional[DetectorConfig] = None,
    backend: Optional[NeuralBackend] = None,
) -> ModelOrchestrator:
    """
    Build a fully wired orchestrator from configuration.

    A configured n-gram dictionary that does not exist only logs a warning.
    The neural pipeline is created (unloaded) when vocab and model paths are
    set; it loads on first neural request.
    """
    config = config or DetectorConfig()

    classifier = CyberbullyClassifier(pattern_cache_size=config.pattern_cache_size)
    if config.ngram_path:
        if Path(config.ngram_path).exists():
            classifier.set_ngram_dictionary(NGramDictionary.from_file(config.ngram_path))
        else:
            logger.warning("N-gram dictionary not found at %s; continuing without it", config.ngram_path)

    pipeline = None
    if config.vocab_path and config.model_path:
        pipeline = NeuralPipeline(
            backend or OnnxBackend(),
            vocab_path=config.vocab_path,
            model_path=config.model_path,
            max_length=config.max_length,
        )

    recommendation_engine = RecommendationEngine(
        ttl_seconds=config.recommendation_ttl_seconds,
        cache_size=config.recommendation_cache_size,
    )

    return ModelOrchestrator(
        classifier=classifier,
        pipeline=pipeline,
        recommendation_engine=recommendation_engine,
        preferred_backend=config.preferred_backend,
    )
