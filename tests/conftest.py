import sys
import threading
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cyberguard.detection.classifier import CyberbullyClassifier
from cyberguard.errors import InferenceError, ResourceUnavailableError
from cyberguard.models.runner import ModelRunner, NeuralBackend

VOCAB_TOKENS = [
    "[PAD]", "[UNK]", "[CLS]", "[SEP]",
    "you", "are", "a", "loser", "kill", "yourself", "have", "great", "day",
    "un", "##want", "##ed", "!", ",", ".", "'", "re",
]


class FakeRunner(ModelRunner):
    """Returns fixed logits depending on whether the 'kill' id is present."""

    def __init__(self, toxic_id, fail=False):
        self.toxic_id = toxic_id
        self.fail = fail
        self.calls = 0

    def run(self, input_ids, attention_mask):
        self.calls += 1
        if self.fail:
            raise InferenceError("model exploded")
        if self.toxic_id in set(np.asarray(input_ids).tolist()):
            return np.array([-5.0, 5.0])
        return np.array([5.0, -5.0])


class FakeBackend(NeuralBackend):
    name = "fake"

    def __init__(self, available=True, fail_load=False, fail_run=False, load_delay=None):
        self.available = available
        self.fail_load = fail_load
        self.fail_run = fail_run
        self.load_delay = load_delay
        self.load_calls = 0
        self.runner = None

    def probe(self):
        return self.available

    def load(self, model_path):
        self.load_calls += 1
        if self.load_delay is not None:
            self.load_delay.wait(timeout=5)
        if self.fail_load:
            raise ResourceUnavailableError(f"cannot load {model_path}")
        self.runner = FakeRunner(toxic_id=VOCAB_TOKENS.index("kill"), fail=self.fail_run)
        return self.runner


@pytest.fixture
def vocab_path(tmp_path):
    path = tmp_path / "vocab.txt"
    path.write_text("\n".join(VOCAB_TOKENS) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def model_path(tmp_path):
    path = tmp_path / "model.onnx"
    path.write_bytes(b"fake")
    return path


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def load_gate():
    return threading.Event()


@pytest.fixture(scope="module")
def classifier():
    return CyberbullyClassifier()
