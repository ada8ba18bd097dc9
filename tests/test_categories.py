"""Tests for category risk analysis."""

import pytest

from cyberguard.detection.categories import (
    CategoryAnalysis,
    CategoryScorer,
    CategoryScores,
    dominant_category,
    risk_status,
)


@pytest.fixture(scope="module")
def scorer():
    return CategoryScorer()


def test_friendly_text_scores_zero(scorer):
    scores = scorer.score_categories("Have a great day!")
    assert scores.values() == [0.0, 0.0, 0.0, 0.0]


def test_direct_threat_categories(scorer):
    scores = scorer.score_categories("i will kill you")
    assert scores.threat == 1.0
    assert scores.toxicity == pytest.approx(0.4 * 1.15)
    assert dominant_category(scores) == "Threatening"


def test_phrases_match_whole_words_only(scorer):
    assert scorer.score_categories("great skill").threat == 0.0


def test_caps_booster(scorer):
    scores = scorer.score_categories("YOU ARE THE WORST")
    assert scores.toxicity == pytest.approx(0.15)
    assert scores.threat == pytest.approx(0.12)


def test_punctuation_booster(scorer):
    scores = scorer.score_categories("stop!!")
    assert scores.toxicity == pytest.approx(0.10)
    assert scores.threat == pytest.approx(0.10)


def test_repeat_and_emoticon_boosters(scorer):
    assert scorer.score_categories("noooooo way").toxicity == pytest.approx(0.08)
    assert scorer.score_categories("ok fine >:(").toxicity == pytest.approx(0.06)


def test_scores_are_capped(scorer):
    scores = scorer.score_categories(
        "kill yourself, go die, you should die, everyone hates you, nobody likes you!!"
    )
    assert all(0.0 <= value <= 1.0 for value in scores.values())


def test_empty_text_returns_default(scorer):
    for text in ("", "   ", None):
        analysis = scorer.analyze(text)
        assert analysis.is_cyberbullying is False
        assert analysis.risk_level == 0
        assert analysis.categories.values() == [0.0, 0.0, 0.0, 0.0]


def test_safe_text_confidence(scorer, classifier):
    text = "Have a great day!"
    analysis = scorer.analyze(text, classifier.classify(text))
    assert analysis.is_cyberbullying is False
    assert analysis.risk_level == 0
    assert analysis.confidence == pytest.approx(0.95)


def test_classifier_verdict_boosts_risk(scorer, classifier):
    text = "I will kill you"
    analysis = scorer.analyze(text, classifier.classify(text))
    assert analysis.is_cyberbullying is True
    assert analysis.risk_level == 100
    assert analysis.confidence <= 0.98
    assert risk_status(analysis.risk_level).text == "Danger"


@pytest.mark.parametrize("level,text,severity", [
    (0, "Low Risk", "low"),
    (33, "Low Risk", "low"),
    (34, "Caution", "medium"),
    (66, "Caution", "medium"),
    (67, "Danger", "high"),
    (100, "Danger", "high"),
])
def test_risk_status_buckets(level, text, severity):
    status = risk_status(level)
    assert status.text == text
    assert status.severity == severity


def test_dominant_category():
    assert dominant_category(CategoryScores()) == "None"
    assert dominant_category(CategoryScores(insult=0.3, threat=0.1)) == "Insulting"
    # Ties go to the first category
    assert dominant_category(CategoryScores(toxicity=0.5, threat=0.5)) == "Toxic Language"
    assert dominant_category(CategoryScores(identity_hate=0.9)) == "Hate Speech"


def test_default_analysis_has_its_own_scores():
    first, second = CategoryAnalysis(), CategoryAnalysis()
    assert isinstance(first.categories, CategoryScores)
    assert first.categories.values() == [0.0, 0.0, 0.0, 0.0]

    first.categories.add("threat", 0.5)
    assert second.categories.threat == 0.0
