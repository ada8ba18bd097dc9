"""Tests for lexical scoring."""

import pytest

from cyberguard.detection.lexical import (
    HIGH_SEVERITY_WEIGHT,
    KEYWORD_WEIGHT,
    NGRAM_WEIGHT,
    NON_PERSONAL_KEYWORD_WEIGHT,
    PHRASE_WEIGHT,
    LexicalScorer,
    iter_ngrams,
)
from cyberguard.preprocessing import NGramDictionary, TextNormalizer


@pytest.fixture(scope="module")
def scorer():
    return LexicalScorer()


def score_text(scorer, text, dictionary=None):
    normalized = TextNormalizer().normalize(text)
    if dictionary is None:
        return scorer.score(normalized.normalized, normalized.tokens)
    return scorer.score(normalized.normalized, normalized.tokens, dictionary)


def test_iter_ngrams_order():
    assert list(iter_ngrams(["a", "b", "c"])) == ["a", "b", "c", "a b", "b c", "a b c"]
    assert list(iter_ngrams([])) == []


def test_empty_tokens_score_zero(scorer):
    result = scorer.score("", [])
    assert result.raw_score == 0.0
    assert result.high_severity is False
    assert result.matched_signals == []


def test_high_severity_phrase(scorer):
    result = score_text(scorer, "kys")
    assert result.high_severity is True
    assert "HIGH:kill yourself" in result.matched_signals
    assert "PHRASE:kill yourself" in result.matched_signals
    assert result.raw_score >= HIGH_SEVERITY_WEIGHT + PHRASE_WEIGHT


def test_phrases_deduplicated_after_normalization(scorer):
    result = score_text(scorer, "kill yourself")
    assert result.matched_signals.count("HIGH:kill yourself") == 1


def test_compact_phrase_matches_whole_token(scorer):
    result = scorer.score("killyourself", ["killyourself"])
    assert result.high_severity is True
    assert "HIGH:kill yourself" in result.matched_signals


def test_keyword_weight_personal(scorer):
    result = score_text(scorer, "you are a loser")
    assert result.matched_signals == ["WORD:loser"]
    assert result.raw_score == pytest.approx(KEYWORD_WEIGHT)


def test_keyword_weight_reduced_for_technical_text(scorer):
    result = score_text(scorer, "kill the process")
    assert result.matched_signals == ["WORD:kill"]
    assert result.raw_score == pytest.approx(NON_PERSONAL_KEYWORD_WEIGHT)
    assert result.high_severity is False


def test_ngram_contribution_is_capped(scorer):
    dictionary = NGramDictionary({"loser": 0.4, "you loser": 0.8})
    result = score_text(scorer, "you are a loser", dictionary)
    assert "NGRAM:loser(0.40)" in result.matched_signals
    assert "NGRAM:you loser(0.80)" in result.matched_signals
    assert result.raw_score == pytest.approx(KEYWORD_WEIGHT + 1.0 * NGRAM_WEIGHT)


def test_ngram_matches_without_dictionary():
    assert LexicalScorer.ngram_matches(["you", "loser"], {}) == (0.0, [])
