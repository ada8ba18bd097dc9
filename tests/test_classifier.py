"""Tests for score fusion and the heuristic classifier."""

import pytest

from cyberguard.detection.classifier import (
    AUTO_FLAG_THRESHOLD,
    BASE_THRESHOLD,
    CRITICAL_ESCALATION_SCORE,
    HIGH_ESCALATION_SCORE,
    CyberbullyClassifier,
    ScoreFusion,
)
from cyberguard.detection.types import (
    Label,
    LexicalScore,
    SemanticMatch,
    Severity,
    WordAnalysis,
)
from cyberguard.preprocessing import NGramDictionary


def words(*severities):
    return [WordAnalysis(word=f"w{i}", is_toxic=s is not Severity.SAFE, severity=s)
            for i, s in enumerate(severities)]


def fuse(word_analysis, token_count=None, personal=False, semantic=(), lexical=None):
    if token_count is None:
        token_count = len(word_analysis)
    return ScoreFusion().fuse(
        list(semantic),
        lexical or LexicalScore(),
        word_analysis,
        token_count=token_count,
        has_personal_context=personal,
    )


# ---------------------------------------------------------------------------
# ScoreFusion
# ---------------------------------------------------------------------------

def test_single_critical_word_auto_flags():
    outcome = fuse(words(Severity.CRITICAL, Severity.SAFE, Severity.SAFE))
    assert outcome.auto_flag is True
    assert outcome.boost == pytest.approx(0.85)
    assert outcome.score == pytest.approx(0.3 + 0.85 * 0.5)
    assert outcome.threshold == AUTO_FLAG_THRESHOLD
    assert outcome.label is Label.CYBERBULLY
    assert "CRITICAL_WORDS:1" in outcome.signals


def test_two_critical_words_escalate():
    outcome = fuse(words(Severity.CRITICAL, Severity.CRITICAL) + words(*[Severity.SAFE] * 20))
    assert outcome.dangerous is True
    assert outcome.high_severity is True
    assert outcome.score >= CRITICAL_ESCALATION_SCORE


def test_critical_and_high_escalate():
    outcome = fuse(words(Severity.CRITICAL, Severity.HIGH) + words(*[Severity.SAFE] * 20))
    assert outcome.dangerous is True
    assert outcome.score >= CRITICAL_ESCALATION_SCORE


def test_two_high_words_escalate():
    outcome = fuse(words(Severity.HIGH, Severity.HIGH) + words(*[Severity.SAFE] * 20))
    assert outcome.dangerous is True
    assert outcome.boost == pytest.approx(0.69)
    assert outcome.score >= HIGH_ESCALATION_SCORE


def test_boosts_are_capped():
    assert fuse(words(*[Severity.CRITICAL] * 5)).boost == pytest.approx(0.95)
    assert fuse(words(*[Severity.HIGH] * 5)).boost == pytest.approx(0.75)
    assert fuse(words(*[Severity.MEDIUM] * 5)).boost == pytest.approx(0.55)


def test_single_medium_word_depends_on_personal_context():
    personal = fuse(words(Severity.MEDIUM, Severity.SAFE, Severity.SAFE), personal=True)
    assert personal.auto_flag is True
    assert personal.boost == pytest.approx(0.25)
    assert personal.label is Label.CYBERBULLY

    impersonal = fuse(words(Severity.MEDIUM, Severity.SAFE, Severity.SAFE), personal=False)
    assert impersonal.auto_flag is False
    assert impersonal.boost == pytest.approx(0.20)
    assert impersonal.score == pytest.approx(0.1 + 0.1)
    assert impersonal.label is Label.NOT_CYBERBULLY


def test_single_medium_word_in_long_text_gets_no_boost():
    outcome = fuse(words(Severity.MEDIUM, *[Severity.SAFE] * 9), personal=True)
    assert outcome.boost == 0.0
    assert outcome.auto_flag is False


def test_low_words_short_text():
    personal = fuse(words(Severity.LOW, Severity.LOW, Severity.SAFE, Severity.SAFE), personal=True)
    assert personal.auto_flag is True
    assert personal.boost == pytest.approx(0.20)

    impersonal = fuse(words(Severity.LOW, Severity.LOW, Severity.SAFE, Severity.SAFE))
    assert impersonal.auto_flag is False
    assert impersonal.boost == pytest.approx(0.10)
    assert impersonal.threshold == pytest.approx(0.25)
    assert impersonal.label is Label.NOT_CYBERBULLY


def test_single_low_word():
    outcome = fuse(words(Severity.LOW, Severity.SAFE))
    assert outcome.boost == pytest.approx(0.08)
    assert outcome.label is Label.NOT_CYBERBULLY


def test_semantic_match_lowers_threshold():
    match = SemanticMatch(pattern="p", meaning="Dismissive", severity=0.4, category="dismissive")
    outcome = fuse([], token_count=4, semantic=[match])
    assert outcome.score == pytest.approx(0.4)
    assert outcome.threshold == pytest.approx(0.35)
    assert outcome.high_severity is False
    assert outcome.label is Label.CYBERBULLY
    assert "SEMANTIC:Dismissive" in outcome.signals


def test_strong_semantic_match_sets_high_severity():
    match = SemanticMatch(pattern="p", meaning="Threat", severity=0.9, category="threat")
    assert fuse([], token_count=3, semantic=[match]).high_severity is True


def test_lexical_signals_are_kept():
    lexical = LexicalScore(raw_score=0.12, matched_signals=["WORD:loser"])
    outcome = fuse(words(Severity.SAFE), lexical=lexical)
    assert outcome.signals == ["WORD:loser"]
    assert outcome.score == pytest.approx(0.12)


@pytest.mark.parametrize("kwargs,expected", [
    (dict(has_semantic=False, high_severity=False, low_count=0, auto_flag=False), BASE_THRESHOLD),
    (dict(has_semantic=True, high_severity=False, low_count=0, auto_flag=False), 0.35),
    (dict(has_semantic=True, high_severity=True, low_count=0, auto_flag=False), 0.3),
    (dict(has_semantic=False, high_severity=False, low_count=2, auto_flag=False), 0.25),
    (dict(has_semantic=True, high_severity=True, low_count=3, auto_flag=True), 0.2),
])
def test_threshold_takes_lowest_candidate(kwargs, expected):
    assert ScoreFusion.threshold(**kwargs) == pytest.approx(expected)


# ---------------------------------------------------------------------------
# CyberbullyClassifier
# ---------------------------------------------------------------------------

SAMPLE_TEXTS = [
    "",
    "Have a great day!",
    "kill the process",
    "I will kill you",
    "kys kys kys you worthless loser, nobody likes you, I will kill you",
    "Your existence is burden",
    "STOP BEING SO STUPID!!!",
    "a" * 5000,
    "you " * 2000,
]


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_score_is_bounded(classifier, text):
    result = classifier.classify(text)
    assert 0.0 <= result.score <= 1.0


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_classify_is_deterministic(classifier, text):
    assert classifier.classify(text).to_dict() == classifier.classify(text).to_dict()


@pytest.mark.parametrize("text", ["", "   ", "\n\t", None, 123])
def test_empty_or_malformed_input(classifier, text):
    result = classifier.classify(text)
    assert result.label is Label.NOT_CYBERBULLY
    assert result.score == 0.0
    assert result.tokens == []


@pytest.mark.parametrize("text", ["have a nice day", "see you tomorrow", "thanks for the help"])
def test_adding_critical_word_is_monotonic(classifier, text):
    before = classifier.classify(text)
    after = classifier.classify(text + " kill")
    assert after.score >= before.score
    assert after.label is Label.CYBERBULLY


def test_technical_context_is_not_bullying(classifier):
    result = classifier.classify("kill the process")
    assert result.label is Label.NOT_CYBERBULLY
    assert result.score < 0.1


def test_direct_death_threat(classifier):
    result = classifier.classify("I will kill you")
    assert result.label is Label.CYBERBULLY
    assert result.is_cyberbullying is True
    assert result.high_severity is True
    assert any(m.category == "death_threat" for m in result.semantic_matches)


def test_friendly_message(classifier):
    result = classifier.classify("Have a great day!")
    assert result.label is Label.NOT_CYBERBULLY
    assert result.score == pytest.approx(0.0, abs=0.05)


def test_existence_attack(classifier):
    result = classifier.classify("Your existence is burden")
    assert result.label is Label.CYBERBULLY
    existential = [m for m in result.semantic_matches if m.category == "existential_threat"]
    assert existential
    assert max(m.severity for m in existential) >= 0.9


def test_shaming(classifier):
    result = classifier.classify("you are embarrassing")
    assert result.label is Label.CYBERBULLY
    assert any(m.category == "shaming" for m in result.semantic_matches)


def test_word_analysis_matches_tokens(classifier):
    result = classifier.classify("you are a worthless loser")
    assert [w.word for w in result.word_analysis] == result.tokens


def test_to_dict_is_json_ready(classifier):
    data = classifier.classify("I will kill you").to_dict()
    assert data["label"] == "CYBERBULLY"
    assert all(isinstance(w["severity"], str) for w in data["word_analysis"])


def test_ngram_dictionary_snapshot():
    classifier = CyberbullyClassifier()
    assert classifier.has_ngram_dictionary() is False

    classifier.set_ngram_dictionary({"clown": 0.9})
    assert classifier.has_ngram_dictionary() is True
    assert isinstance(classifier.ngram_dictionary, NGramDictionary)

    result = classifier.classify("you clown")
    assert "NGRAM:clown(0.90)" in result.matched_signals
    assert result.label is Label.CYBERBULLY


def test_load_missing_ngram_dictionary(tmp_path):
    with pytest.raises(FileNotFoundError):
        CyberbullyClassifier().load_ngram_dictionary(str(tmp_path / "missing.csv"))


def test_classify_batch_and_call(classifier):
    results = classifier.classify_batch(["I will kill you", "Have a great day!"])
    assert [r.label for r in results] == [Label.CYBERBULLY, Label.NOT_CYBERBULLY]
    assert classifier("I will kill you").label is Label.CYBERBULLY
