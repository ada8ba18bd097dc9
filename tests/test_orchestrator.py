"""Tests for backend selection, fallback and detector wiring."""

import pytest

from conftest import FakeBackend

from cyberguard.config import DetectorConfig
from cyberguard.detection.types import Severity
from cyberguard.models.pipeline import NeuralPipeline
from cyberguard.orchestrator import Backend, ModelOrchestrator, create_detector


@pytest.fixture
def neural_detector(fake_backend, vocab_path, model_path):
    pipeline = NeuralPipeline(fake_backend, str(vocab_path), str(model_path), max_length=16)
    return ModelOrchestrator(pipeline=pipeline)


def test_heuristic_analysis():
    detector = ModelOrchestrator()
    result = detector.analyze("I will kill you")
    assert result.backend_used is Backend.HEURISTIC
    assert result.fell_back is False
    assert result.is_cyberbullying is True
    assert result.classification is not None
    assert result.neural is None
    assert result.recommendation.severity is Severity.CRITICAL
    assert result.risk_status == "Danger"
    assert result.categories.threat == 1.0
    assert result.risk_level == 100


def test_safe_text():
    result = ModelOrchestrator().analyze("Have a great day!")
    assert result.is_cyberbullying is False
    assert result.risk_level == 0
    assert result.risk_status == "Low Risk"
    assert result.dominant_category == "None"


def test_malformed_input_never_raises():
    result = ModelOrchestrator().analyze(None)
    assert result.is_cyberbullying is False
    assert result.risk_level == 0
    assert result.recommendation is not None


def test_neural_without_pipeline_falls_back():
    detector = ModelOrchestrator()
    assert detector.neural_available is False
    result = detector.analyze("you loser", preferred_backend="neural")
    assert result.backend_used is Backend.HEURISTIC
    assert result.fell_back is True


def test_neural_analysis(neural_detector):
    assert neural_detector.neural_available is True
    result = neural_detector.analyze("Kill yourself", preferred_backend=Backend.NEURAL)
    assert result.backend_used is Backend.NEURAL
    assert result.fell_back is False
    assert result.is_cyberbullying is True
    assert result.risk_level == pytest.approx(100, abs=1)
    assert result.neural is not None
    assert result.classification is None
    assert result.recommendation.severity is Severity.CRITICAL
    assert result.categories.threat > 0


def test_preferred_backend_default(fake_backend, vocab_path, model_path):
    pipeline = NeuralPipeline(fake_backend, str(vocab_path), str(model_path))
    detector = ModelOrchestrator(pipeline=pipeline, preferred_backend="neural")
    assert detector.analyze("Kill yourself").backend_used is Backend.NEURAL
    assert detector.analyze("Kill yourself", preferred_backend="heuristic").backend_used is Backend.HEURISTIC


def test_load_failure_falls_back(vocab_path, model_path):
    pipeline = NeuralPipeline(FakeBackend(fail_load=True), str(vocab_path), str(model_path))
    detector = ModelOrchestrator(pipeline=pipeline)

    result = detector.analyze("I will kill you", preferred_backend="neural")
    assert result.fell_back is True
    assert result.backend_used is Backend.HEURISTIC
    assert result.is_cyberbullying is True
    assert detector.neural_available is False


def test_run_failure_falls_back(vocab_path, model_path):
    pipeline = NeuralPipeline(FakeBackend(fail_run=True), str(vocab_path), str(model_path))
    detector = ModelOrchestrator(pipeline=pipeline)

    first = detector.analyze("you loser", preferred_backend="neural")
    assert first.fell_back is True
    assert pipeline.is_failed

    second = detector.analyze("you loser", preferred_backend="neural")
    assert second.fell_back is True


def test_to_dict(neural_detector):
    data = neural_detector.analyze("Kill yourself", preferred_backend="neural").to_dict()
    assert data["backend_used"] == "neural"
    assert data["classification"] is None
    assert set(data["categories"]) == {"toxicity", "threat", "insult", "identity_hate"}
    assert data["recommendation"]["severity"] == "critical"


def test_create_detector_defaults():
    detector = create_detector()
    assert detector.pipeline is None
    assert detector.classifier.has_ngram_dictionary() is False
    assert detector.preferred_backend is Backend.HEURISTIC


def test_create_detector_with_resources(tmp_path, vocab_path, model_path, fake_backend):
    ngrams = tmp_path / "ngrams.csv"
    ngrams.write_text("ngram,score\nclown,0.9\n", encoding="utf-8")
    config = DetectorConfig(
        vocab_path=str(vocab_path),
        model_path=str(model_path),
        ngram_path=str(ngrams),
        preferred_backend="neural",
        recommendation_ttl_seconds=60,
    )

    detector = create_detector(config, backend=fake_backend)
    assert detector.classifier.ngram_dictionary["clown"] == 0.9
    assert detector.pipeline.state.value == "unloaded"
    assert detector.recommendation_engine.cache.ttl_seconds == 60

    result = detector.analyze("Kill yourself")
    assert result.backend_used is Backend.NEURAL


def test_create_detector_missing_ngram_file(tmp_path):
    config = DetectorConfig(ngram_path=str(tmp_path / "missing.csv"))
    detector = create_detector(config)
    assert detector.classifier.has_ngram_dictionary() is False
