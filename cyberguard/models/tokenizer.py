"""
WordPiece tokenizer for the neural backend.

Reads a BERT-style ``vocab.txt`` (one token per line, line index = id) and
produces fixed-length ``input_ids`` / ``attention_mask`` arrays, so the neural
path has no dependency on the HuggingFace tokenizers at inference time.
"""

import logging
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

import numpy as np

logger = logging.getLogger(__name__)

PAD_TOKEN = "[PAD]"
UNK_TOKEN = "[UNK]"
CLS_TOKEN = "[CLS]"
SEP_TOKEN = "[SEP]"

# Fallback ids (bert-base-uncased layout) when a special token is missing
SPECIAL_TOKEN_FALLBACKS = {
    PAD_TOKEN: 0,
    UNK_TOKEN: 100,
    CLS_TOKEN: 101,
    SEP_TOKEN: 102,
}

CONTINUATION_PREFIX = "##"
MAX_WORD_CHARS = 100
DEFAULT_MAX_LENGTH = 128


def is_punctuation(char: str) -> bool:
    """ASCII punctuation ranges used by BERT's basic tokenizer."""
    cp = ord(char)
    return (33 <= cp <= 47) or (58 <= cp <= 64) or (91 <= cp <= 96) or (123 <= cp <= 126)


def strip_accents(text: str) -> str:
    text = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in text if unicodedata.category(ch) != "Mn")


@dataclass
class Encoding:
    input_ids: np.ndarray
    attention_mask: np.ndarray

    def __len__(self) -> int:
        return len(self.input_ids)


class WordPieceTokenizer:
    """
    Greedy longest-match-first WordPiece tokenizer.

    Args:
        vocab: token -> id mapping
        max_length: Encoded sequence length (including [CLS]/[SEP])
        do_lower_case: Lowercase input before tokenizing
    """

    def __init__(
        self,
        vocab: Mapping[str, int],
        max_length: int = DEFAULT_MAX_LENGTH,
        do_lower_case: bool = True,
    ):
        if max_length < 2:
            raise ValueError(f"max_length must be at least 2, got {max_length}")
        self.vocab = dict(vocab)
        self.max_length = max_length
        self.do_lower_case = do_lower_case

        self.pad_id = self.vocab.get(PAD_TOKEN, SPECIAL_TOKEN_FALLBACKS[PAD_TOKEN])
        self.unk_id = self.vocab.get(UNK_TOKEN, SPECIAL_TOKEN_FALLBACKS[UNK_TOKEN])
        self.cls_id = self.vocab.get(CLS_TOKEN, SPECIAL_TOKEN_FALLBACKS[CLS_TOKEN])
        self.sep_id = self.vocab.get(SEP_TOKEN, SPECIAL_TOKEN_FALLBACKS[SEP_TOKEN])

    @classmethod
    def from_vocab_text(cls, content: str, **kwargs) -> "WordPieceTokenizer":
        """Build from newline-delimited vocabulary text."""
        return cls(parse_vocab(content), **kwargs)

    @classmethod
    def from_file(cls, vocab_path: str, **kwargs) -> "WordPieceTokenizer":
        path = Path(vocab_path)
        if not path.exists():
            raise FileNotFoundError(f"Vocabulary not found: {path}")
        tokenizer = cls.from_vocab_text(path.read_text(encoding="utf-8"), **kwargs)
        logger.info("Loaded vocabulary with %d tokens from %s", len(tokenizer.vocab), path)
        return tokenizer

    def basic_tokenize(self, text: str) -> List[str]:
        """Split on whitespace, then split punctuation into separate tokens."""
        text = text.strip()
        if self.do_lower_case:
            text = text.lower()
        text = strip_accents(text)

        tokens: List[str] = []
        for word in text.split():
            current = []
            for char in word:
                if is_punctuation(char):
                    if current:
                        tokens.append("".join(current))
                        current = []
                    tokens.append(char)
                else:
                    current.append(char)
            if current:
                tokens.append("".join(current))
        return tokens

    def wordpiece_tokenize(self, word: str) -> List[str]:
        """
        Split one word into vocabulary pieces.

        On a position where no piece matches, [UNK] is emitted and the rest of
        the word is dropped.
        """
        if word in self.vocab:
            return [word]
        if len(word) > MAX_WORD_CHARS:
            return [UNK_TOKEN]

        pieces: List[str] = []
        start = 0
        while start < len(word):
            end = len(word)
            piece = None
            while start < end:
                candidate = word[start:end]
                if start > 0:
                    candidate = CONTINUATION_PREFIX + candidate
                if candidate in self.vocab:
                    piece = candidate
                    break
                end -= 1
            if piece is None:
                pieces.append(UNK_TOKEN)
                break
            pieces.append(piece)
            start = end
        return pieces

    def tokenize(self, text: str) -> List[str]:
        pieces: List[str] = []
        for word in self.basic_tokenize(text):
            pieces.extend(self.wordpiece_tokenize(word))
        return pieces

    def convert_tokens_to_ids(self, tokens: Sequence[str]) -> List[int]:
        return [self.vocab.get(token, self.unk_id) for token in tokens]

    def encode(self, text: str) -> Encoding:
        """
        Encode text to exactly ``max_length`` ids.

        Returns:
            Encoding with int64 ``input_ids`` and ``attention_mask``
        """
        if not isinstance(text, str):
            text = ""

        ids = [self.cls_id] + self.convert_tokens_to_ids(self.tokenize(text)) + [self.sep_id]
        if len(ids) > self.max_length:
            ids = ids[:self.max_length - 1] + [self.sep_id]

        mask = [1] * len(ids)
        padding = self.max_length - len(ids)
        ids.extend([self.pad_id] * padding)
        mask.extend([0] * padding)

        return Encoding(
            input_ids=np.asarray(ids, dtype=np.int64),
            attention_mask=np.asarray(mask, dtype=np.int64),
        )

    def __call__(self, text: str) -> Encoding:
        return self.encode(text)


def parse_vocab(content: str) -> Dict[str, int]:
    """
    Parse vocabulary text. Lines are stripped; blank lines are skipped but
    still consume their id.
    """
    vocab: Dict[str, int] = {}
    for index, line in enumerate(content.splitlines()):
        token = line.strip()
        if token:
            vocab[token] = index
    return vocab
