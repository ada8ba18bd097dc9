"""
Neural model runners.

A ``NeuralBackend`` knows how to check that its runtime is installed
(``probe``) and how to load a model into a ``ModelRunner``. Runners map one
encoded sequence to two-class logits.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

import numpy as np

from ..errors import InferenceError, ResourceUnavailableError

logger = logging.getLogger(__name__)

try:
    import onnxruntime as ort
    ONNXRUNTIME_AVAILABLE = True
except ImportError:
    ONNXRUNTIME_AVAILABLE = False

try:
    import torch
    from transformers import AutoModelForSequenceClassification
    TRANSFORMERS_AVAILABLE = True
except ImportError:
    TRANSFORMERS_AVAILABLE = False

NUM_CLASSES = 2


def softmax(logits) -> np.ndarray:
    """Numerically stable softmax over the last axis."""
    values = np.asarray(logits, dtype=np.float64)
    shifted = np.exp(values - np.max(values, axis=-1, keepdims=True))
    return shifted / np.sum(shifted, axis=-1, keepdims=True)


class ModelRunner(ABC):
    """A loaded model."""

    @abstractmethod
    def run(self, input_ids: np.ndarray, attention_mask: np.ndarray) -> np.ndarray:
        """Return the 2-class logits for one sequence."""

    def close(self) -> None:
        pass


class NeuralBackend(ABC):
    """Pluggable inference runtime."""

    name = "neural"

    @abstractmethod
    def probe(self) -> bool:
        """True if the runtime can be used in this process."""

    @abstractmethod
    def load(self, model_path: str) -> ModelRunner:
        """Load a model; raises ResourceUnavailableError if it cannot."""


def _check_logits(logits) -> np.ndarray:
    values = np.asarray(logits, dtype=np.float64).reshape(-1)
    if values.shape[0] != NUM_CLASSES:
        raise InferenceError(f"Expected {NUM_CLASSES} logits, got {values.shape[0]}")
    return values


# ---------------------------------------------------------------------------
# ONNX Runtime
# ---------------------------------------------------------------------------

class OnnxModelRunner(ModelRunner):
    """Runs an exported ONNX sequence classifier on CPU."""

    def __init__(self, session):
        self.session = session
        self.inputs = {inp.name: inp for inp in session.get_inputs()}
        self.output_name = session.get_outputs()[0].name

    @staticmethod
    def _dtype_for(onnx_type: str):
        return np.int32 if onnx_type == "tensor(int32)" else np.int64

    def run(self, input_ids: np.ndarray, attention_mask: np.ndarray) -> np.ndarray:
        feeds = {}
        for name, array in (("input_ids", input_ids), ("attention_mask", attention_mask)):
            if name not in self.inputs:
                continue
            dtype = self._dtype_for(self.inputs[name].type)
            feeds[name] = np.asarray(array, dtype=dtype).reshape(1, -1)
        if "input_ids" not in feeds:
            raise InferenceError("Model graph has no 'input_ids' input")

        try:
            outputs = self.session.run([self.output_name], feeds)
        except Exception as e:
            raise InferenceError(f"ONNX inference failed: {e}") from e
        return _check_logits(outputs[0])


class OnnxBackend(NeuralBackend):
    """onnxruntime backend for models written by scripts/export/export_onnx.py."""

    name = "onnx"

    def __init__(self, num_threads: int = 1):
        self.num_threads = num_threads

    def probe(self) -> bool:
        return ONNXRUNTIME_AVAILABLE

    def load(self, model_path: str) -> ModelRunner:
        if not self.probe():
            raise ResourceUnavailableError("onnxruntime is not installed")
        path = Path(model_path)
        if not path.exists():
            raise ResourceUnavailableError(f"ONNX model not found: {path}")

        options = ort.SessionOptions()
        options.intra_op_num_threads = self.num_threads
        try:
            session = ort.InferenceSession(
                str(path),
                sess_options=options,
                providers=["CPUExecutionProvider"],
            )
        except Exception as e:
            raise ResourceUnavailableError(f"Could not load ONNX model {path}: {e}") from e

        logger.info("Loaded ONNX model from %s", path)
        return OnnxModelRunner(session)


# ---------------------------------------------------------------------------
# HuggingFace transformers
# ---------------------------------------------------------------------------

class TransformersModelRunner(ModelRunner):
    """Runs a HuggingFace sequence classifier with torch."""

    def __init__(self, model, device: str = "cpu"):
        self.model = model
        self.device = device

    def run(self, input_ids: np.ndarray, attention_mask: np.ndarray) -> np.ndarray:
        ids = torch.as_tensor(np.asarray(input_ids, dtype=np.int64)).reshape(1, -1).to(self.device)
        mask = torch.as_tensor(np.asarray(attention_mask, dtype=np.int64)).reshape(1, -1).to(self.device)
        try:
            with torch.no_grad():
                outputs = self.model(input_ids=ids, attention_mask=mask)
        except Exception as e:
            raise InferenceError(f"Transformers inference failed: {e}") from e
        return _check_logits(outputs.logits.cpu().numpy())


class TransformersBackend(NeuralBackend):
    """Backend for a model directory saved with ``save_pretrained()``."""

    name = "transformers"

    def __init__(self, device: str = "auto"):
        self.device = device

    def probe(self) -> bool:
        return TRANSFORMERS_AVAILABLE

    def load(self, model_path: str) -> ModelRunner:
        if not self.probe():
            raise ResourceUnavailableError("torch/transformers are not installed")
        path = Path(model_path)
        if not path.exists():
            raise ResourceUnavailableError(f"Model directory not found: {path}")

        # Check for best_model subdirectory
        if (path / "best_model").exists():
            path = path / "best_model"

        if self.device == "auto":
            device = "cuda" if torch.cuda.is_available() else "cpu"
        else:
            device = self.device

        try:
            model = AutoModelForSequenceClassification.from_pretrained(str(path))
        except (OSError, ValueError) as e:
            raise ResourceUnavailableError(f"Could not load model from {path}: {e}") from e
        model.to(device)
        model.eval()

        logger.info("Loaded transformers model from %s on %s", path, device)
        return TransformersModelRunner(model, device)
