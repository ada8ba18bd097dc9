"""Tests for safety recommendations."""

import pytest

from cyberguard.detection.types import Severity
from cyberguard.recommendation import (
    AWARENESS_PLAN,
    CAUTION_PLAN,
    URGENT_PLAN,
    RecommendationCache,
    RecommendationEngine,
    default_recommendation,
)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(clock):
    return RecommendationEngine(ttl_seconds=300, cache_size=8, clock=clock)


def test_critical_word(engine):
    result = engine.recommend("I will kill you")
    assert result.severity is Severity.CRITICAL
    assert result.recommendation == URGENT_PLAN
    assert result.detected_categories == ["threat", "violence"]


def test_single_medium_word(engine):
    result = engine.recommend("you are stupid")
    assert result.severity is Severity.MEDIUM
    assert result.recommendation == CAUTION_PLAN


def test_two_medium_words_are_high(engine):
    result = engine.recommend("stupid dumb")
    assert result.severity is Severity.HIGH
    assert result.recommendation == URGENT_PLAN


def test_clean_text(engine):
    result = engine.recommend("hello there")
    assert result.severity is Severity.LOW
    assert result.recommendation == AWARENESS_PLAN
    assert result.detected_categories == []


def test_no_context_gating(engine):
    assert engine.recommend("kill the process").severity is Severity.CRITICAL


def test_punctuation_is_stripped(engine):
    analysis = engine.analyze_words("kill!!! you")
    assert [w.word for w in analysis] == ["kill", "you"]
    assert analysis[0].is_toxic is True


def test_first_matching_set_wins(engine):
    trash, nobody = engine.analyze_words("trash nobody")
    assert trash.severity is Severity.HIGH
    assert trash.categories == ["insult", "toxicity"]
    assert nobody.severity is Severity.MEDIUM
    assert nobody.reasons == ['Insulting term: "nobody"']


def test_categories_are_unique_and_ordered(engine):
    result = engine.recommend("kill stab slut")
    assert result.detected_categories == ["threat", "violence", "sexual_harassment"]


def test_cached_by_normalized_input(engine):
    first = engine.recommend("Hello There")
    assert engine.recommend("  hello there ") is first


def test_cache_expires_after_ttl(engine, clock):
    first = engine.recommend("you loser")
    clock.now += 299
    assert engine.recommend("you loser") is first
    clock.now += 1
    assert engine.recommend("you loser") is not first


def test_cache_is_bounded(clock):
    cache = RecommendationCache(ttl_seconds=300, max_size=2, clock=clock)
    for key in ("a", "b", "c"):
        cache.put(key, default_recommendation())
    assert len(cache) == 2
    assert cache.get("a") is None
    assert cache.get("c") is not None


def test_cache_drops_expired_entries(clock):
    cache = RecommendationCache(ttl_seconds=10, max_size=4, clock=clock)
    cache.put("a", default_recommendation())
    clock.now += 5
    cache.put("b", default_recommendation())
    clock.now += 5
    assert cache.get("a") is None
    assert cache.get("b") is not None
    assert len(cache) == 1


def test_failure_returns_default(engine, monkeypatch):
    def boom(text):
        raise RuntimeError("broken")

    monkeypatch.setattr(engine, "_build", boom)
    result = engine.recommend("I will kill you")
    assert result.severity is Severity.LOW
    assert result.recommendation == AWARENESS_PLAN
    assert len(engine.cache) == 0


def test_non_string_input(engine):
    assert engine.recommend(None).severity is Severity.LOW


def test_to_dict(engine):
    data = engine.recommend("you idiot").to_dict()
    assert data["severity"] == "medium"
    assert data["word_analysis"][1]["word"] == "idiot"
    assert data["word_analysis"][1]["severity"] == "medium"
