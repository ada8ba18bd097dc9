"""
Cyberguard Models Module

Neural backend: WordPiece tokenizer, model runners and the lazy-loaded
pipeline.
"""

from .tokenizer import WordPieceTokenizer, Encoding, parse_vocab

from .runner import (
    ModelRunner,
    NeuralBackend,
    OnnxBackend,
    TransformersBackend,
    softmax,
    ONNXRUNTIME_AVAILABLE,
    TRANSFORMERS_AVAILABLE,
)

from .pipeline import (
    NeuralPipeline,
    NeuralResult,
    PipelineState,
    result_from_logits,
)

__all__ = [
    "WordPieceTokenizer",
    "Encoding",
    "parse_vocab",
    "ModelRunner",
    "NeuralBackend",
    "OnnxBackend",
    "TransformersBackend",
    "softmax",
    "ONNXRUNTIME_AVAILABLE",
    "TRANSFORMERS_AVAILABLE",
    "NeuralPipeline",
    "NeuralResult",
    "PipelineState",
    "result_from_logits",
]
