"""Tests for the WordPiece tokenizer."""

import numpy as np
import pytest

from conftest import VOCAB_TOKENS

from cyberguard.models.tokenizer import WordPieceTokenizer, parse_vocab


@pytest.fixture
def tokenizer():
    return WordPieceTokenizer.from_vocab_text("\n".join(VOCAB_TOKENS), max_length=8)


def ids(*tokens):
    return [VOCAB_TOKENS.index(t) for t in tokens]


def test_encode_pads_to_max_length(tokenizer):
    encoding = tokenizer.encode("You are a loser")
    assert encoding.input_ids.tolist() == ids("[CLS]", "you", "are", "a", "loser", "[SEP]") + [0, 0]
    assert encoding.attention_mask.tolist() == [1, 1, 1, 1, 1, 1, 0, 0]
    assert encoding.input_ids.dtype == np.int64
    assert encoding.attention_mask.dtype == np.int64


def test_encode_truncates_and_keeps_sep():
    tokenizer = WordPieceTokenizer.from_vocab_text("\n".join(VOCAB_TOKENS), max_length=4)
    encoding = tokenizer.encode("you are a loser")
    assert encoding.input_ids.tolist() == ids("[CLS]", "you", "are", "[SEP]")
    assert encoding.attention_mask.tolist() == [1, 1, 1, 1]


@pytest.mark.parametrize("text", [
    "", "you", "you are a loser " * 50, "x" * 5000, "!!!,,,...", None,
])
def test_length_invariant(tokenizer, text):
    encoding = tokenizer.encode(text)
    assert len(encoding) == tokenizer.max_length
    assert len(encoding.attention_mask) == tokenizer.max_length


def test_empty_text_is_cls_sep(tokenizer):
    assert tokenizer.encode("").input_ids.tolist()[:3] == ids("[CLS]", "[SEP]", "[PAD]")


def test_wordpiece_continuations(tokenizer):
    assert tokenizer.tokenize("unwanted") == ["un", "##want", "##ed"]


def test_unknown_piece_stops_word(tokenizer):
    assert tokenizer.tokenize("unknown") == ["un", "[UNK]"]
    assert tokenizer.tokenize("zzz") == ["[UNK]"]


def test_long_words_become_unk(tokenizer):
    assert tokenizer.wordpiece_tokenize("a" * 101) == ["[UNK]"]


def test_punctuation_split(tokenizer):
    assert tokenizer.basic_tokenize("You're great!") == ["you", "'", "re", "great", "!"]


def test_accents_stripped(tokenizer):
    assert tokenizer.tokenize("Yóu") == ["you"]


def test_unknown_tokens_map_to_unk_id(tokenizer):
    assert tokenizer.convert_tokens_to_ids(["you", "nope"]) == [VOCAB_TOKENS.index("you"), tokenizer.unk_id]


def test_blank_vocab_lines_keep_their_index():
    vocab = parse_vocab("[PAD]\n\nhello\n  world  \n")
    assert vocab == {"[PAD]": 0, "hello": 2, "world": 3}


def test_special_token_fallbacks():
    tokenizer = WordPieceTokenizer({"hello": 0})
    assert (tokenizer.pad_id, tokenizer.unk_id, tokenizer.cls_id, tokenizer.sep_id) == (0, 100, 101, 102)


def test_from_file(vocab_path):
    tokenizer = WordPieceTokenizer.from_file(str(vocab_path), max_length=16)
    assert tokenizer.vocab["loser"] == VOCAB_TOKENS.index("loser")
    assert len(tokenizer.encode("you loser")) == 16


def test_from_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        WordPieceTokenizer.from_file(str(tmp_path / "vocab.txt"))


def test_max_length_must_fit_specials():
    with pytest.raises(ValueError):
        WordPieceTokenizer({}, max_length=1)
