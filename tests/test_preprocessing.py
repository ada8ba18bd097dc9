"""Tests for text normalization and the n-gram dictionary."""

import time

import pytest

from cyberguard.preprocessing import NGramDictionary, TextNormalizer, normalize_text


@pytest.fixture
def normalizer():
    return TextNormalizer()


def test_slang_and_leetspeak(normalizer):
    result = normalizer.normalize("You're such a n00b lmao")
    assert result.cleaned == "you're such a noob lmao"
    assert result.tokens == ["you", "re", "such", "beginner", "laughing"]
    assert result.normalized == "you re such beginner laughing"


def test_slang_expands_to_multiple_tokens(normalizer):
    assert normalizer.normalize("kys").tokens == ["kill", "yourself"]


def test_obfuscated_words(normalizer):
    assert "fuck" in normalizer.normalize("f*ck off").tokens
    assert "dumb" in normalizer.normalize("so d-u-m-b").tokens
    assert "idiot" in normalizer.normalize("1d10t").tokens


def test_urls_removed(normalizer):
    result = normalizer.normalize("check https://example.com/watch?v=1 now")
    assert result.tokens == ["check", "now"]


def test_bare_domains_removed(normalizer):
    tokens = normalizer.normalize("go to my-site.com/page now").tokens
    assert "com" not in tokens
    assert "mysite" not in tokens
    assert "now" in tokens


def test_long_token_normalizes_quickly(normalizer):
    start = time.perf_counter()
    result = normalizer.normalize("a" * 40000)
    assert time.perf_counter() - start < 1.0
    assert result.tokens == ["aa"]


def test_repeated_characters_collapsed(normalizer):
    assert normalizer.normalize("nooooo").tokens == ["noo"]


def test_stopwords_dropped(normalizer):
    assert normalizer.normalize("this is the end").tokens == ["end"]


def test_caps_emphasis(normalizer):
    assert normalizer.normalize("STOP talking").caps_emphasis is True
    assert normalizer.normalize("Stop Talking").caps_emphasis is False


def test_empty_and_non_string_input(normalizer):
    for value in ("", "   ", None, 42):
        result = normalizer.normalize(value)
        assert result.tokens == []
        assert result.normalized == ""


def test_normalize_text_helper():
    assert normalize_text("ur a loser") == "you loser"


def test_ngram_dictionary_parsing_is_lenient():
    content = "ngram,score\nkill yourself,0.97\nbad row\nfoo,notanumber\n\"KYS\",0.5\n"
    dictionary = NGramDictionary.from_csv_text(content)
    assert dict(dictionary) == {"kill yourself": 0.97, "kys": 0.5}


def test_ngram_dictionary_skips_out_of_range_scores():
    content = "ngram,score\nhello,nan\nfoo,inf\nbar,-0.2\nbaz,1.5\nloser,0.8\n"
    dictionary = NGramDictionary.from_csv_text(content)
    assert dict(dictionary) == {"loser": 0.8}


def test_ngram_dictionary_last_duplicate_wins():
    dictionary = NGramDictionary.from_csv_text("ngram,score\nloser,0.4\nloser,0.6\n")
    assert dictionary["loser"] == 0.6
    assert len(dictionary) == 1


def test_ngram_dictionary_empty_content():
    assert len(NGramDictionary.from_csv_text("")) == 0
    assert len(NGramDictionary.from_csv_text("ngram,score\n")) == 0


def test_ngram_dictionary_is_read_only():
    dictionary = NGramDictionary({"loser": 0.5})
    with pytest.raises(TypeError):
        dictionary["loser"] = 1.0


def test_ngram_dictionary_from_file(tmp_path):
    path = tmp_path / "ngrams.csv"
    path.write_text("ngram,score\nshut up,0.7\n", encoding="utf-8")
    assert NGramDictionary.from_file(str(path))["shut up"] == 0.7

    with pytest.raises(FileNotFoundError):
        NGramDictionary.from_file(str(tmp_path / "missing.csv"))
