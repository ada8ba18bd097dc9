"""
Lazy-loaded neural classification pipeline.

Lifecycle::

    UNLOADED --initialize()--> LOADING --> READY
                                      \\--> FAILED  (terminal)

Concurrent ``initialize()`` calls share one in-flight load.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..errors import InferenceError, ResourceUnavailableError
from .runner import ModelRunner, NeuralBackend, softmax
from .tokenizer import DEFAULT_MAX_LENGTH, WordPieceTokenizer

logger = logging.getLogger(__name__)

BULLYING_THRESHOLD = 0.5


class PipelineState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass
class NeuralResult:
    is_cyberbullying: bool = False
    confidence: float = 0.0
    severity: float = 0.0
    risk_level: int = 0
    probabilities: List[float] = field(default_factory=lambda: [1.0, 0.0])
    processing_time_ms: float = 0.0

    def to_dict(self) -> Dict:
        return {
            "is_cyberbullying": self.is_cyberbullying,
            "confidence": round(self.confidence, 4),
            "severity": round(self.severity, 4),
            "risk_level": self.risk_level,
            "probabilities": [round(p, 4) for p in self.probabilities],
            "processing_time_ms": round(self.processing_time_ms, 2),
        }


def result_from_logits(logits, processing_time_ms: float = 0.0) -> NeuralResult:
    """Turn 2-class logits into a NeuralResult."""
    probabilities = [float(p) for p in softmax(logits)]
    bullying = probabilities[1]
    is_cyberbullying = bullying > BULLYING_THRESHOLD
    severity = max(0.0, min(1.0, bullying))
    return NeuralResult(
        is_cyberbullying=is_cyberbullying,
        confidence=bullying if is_cyberbullying else probabilities[0],
        severity=severity,
        risk_level=int(severity * 100 + 0.5),
        probabilities=probabilities,
        processing_time_ms=processing_time_ms,
    )


class NeuralPipeline:
    """
    Tokenizer + model runner with explicit lifecycle state.

    Args:
        backend: Runtime used to load the model
        vocab_path: WordPiece vocabulary file
        model_path: Model file or directory passed to the backend
        max_length: Encoded sequence length
    """

    def __init__(
        self,
        backend: NeuralBackend,
        vocab_path: Optional[str],
        model_path: Optional[str],
        max_length: int = DEFAULT_MAX_LENGTH,
    ):
        self.backend = backend
        self.vocab_path = vocab_path
        self.model_path = model_path
        self.max_length = max_length

        self.tokenizer: Optional[WordPieceTokenizer] = None
        self.runner: Optional[ModelRunner] = None
        self.failure_reason: Optional[str] = None

        self._state = PipelineState.UNLOADED
        self._lock = threading.Lock()
        self._loaded = threading.Event()
        self.load_attempts = 0

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is PipelineState.READY

    @property
    def is_failed(self) -> bool:
        return self._state is PipelineState.FAILED

    def initialize(self) -> bool:
        """
        Load vocabulary and model once.

        Safe to call from several threads; only the first caller loads, the
        others wait for its outcome. Never raises.

        Returns:
            True if the pipeline is READY
        """
        with self._lock:
            if self._state is PipelineState.READY:
                return True
            if self._state is PipelineState.FAILED:
                return False
            leader = self._state is PipelineState.UNLOADED
            if leader:
                self._state = PipelineState.LOADING
                self.load_attempts += 1

        if not leader:
            self._loaded.wait()
            return self._state is PipelineState.READY

        try:
            tokenizer, runner = self._load()
        except Exception as e:
            logger.exception("Neural pipeline failed to load")
            with self._lock:
                self.failure_reason = str(e) or e.__class__.__name__
                self._state = PipelineState.FAILED
        else:
            with self._lock:
                self.tokenizer = tokenizer
                self.runner = runner
                self._state = PipelineState.READY
            logger.info("Neural pipeline ready (%s backend)", self.backend.name)
        finally:
            self._loaded.set()

        return self._state is PipelineState.READY

    def _load(self):
        if not self.backend.probe():
            raise ResourceUnavailableError(f"{self.backend.name} runtime is not available")
        if not self.vocab_path:
            raise ResourceUnavailableError("No vocabulary path configured")
        if not self.model_path:
            raise ResourceUnavailableError("No model path configured")

        try:
            tokenizer = WordPieceTokenizer.from_file(self.vocab_path, max_length=self.max_length)
        except (FileNotFoundError, OSError, UnicodeDecodeError) as e:
            raise ResourceUnavailableError(f"Could not load vocabulary: {e}") from e

        runner = self.backend.load(self.model_path)
        return tokenizer, runner

    def mark_failed(self, reason: str) -> None:
        with self._lock:
            self.failure_reason = reason
            self._state = PipelineState.FAILED
            self.runner = None
        self._loaded.set()

    def analyze(self, text: str) -> NeuralResult:
        """
        Classify text with the loaded model.

        Returns the neutral default when the pipeline is not READY or the text
        is empty. A model failure moves the pipeline to FAILED and raises
        InferenceError.
        """
        if not isinstance(text, str) or not text.strip():
            return NeuralResult()
        runner, tokenizer = self.runner, self.tokenizer
        if self._state is not PipelineState.READY or runner is None or tokenizer is None:
            return NeuralResult()

        start = time.perf_counter()
        encoding = tokenizer.encode(text)
        try:
            logits = runner.run(encoding.input_ids, encoding.attention_mask)
            result = result_from_logits(logits)
        except Exception as e:
            logger.exception("Neural inference failed; disabling neural backend")
            self.mark_failed(f"Inference failed: {e}")
            if isinstance(e, InferenceError):
                raise
            raise InferenceError(str(e)) from e

        result.processing_time_ms = (time.perf_counter() - start) * 1000
        return result
