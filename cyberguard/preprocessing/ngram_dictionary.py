"""
N-gram toxicity dictionary.

Maps lowercase 1-3 token n-grams to an empirically derived toxicity score in
[0, 1]. The dictionary is built by ``scripts/data_pipeline/build_ngram_dictionary.py``
and shipped as a small CSV:

    ngram,score
    kill yourself,0.97
    ...

Parsing is lenient: rows whose score is not a number in [0, 1] are skipped and
a partially readable file still yields a usable dictionary.
"""

import logging
import math
from pathlib import Path
from types import MappingProxyType
from collections.abc import Mapping
from typing import Dict, Iterator, Optional

logger = logging.getLogger(__name__)


class NGramDictionary(Mapping):
    """Immutable n-gram -> score mapping."""

    def __init__(self, scores: Optional[Mapping[str, float]] = None):
        self._scores = MappingProxyType(dict(scores or {}))

    @classmethod
    def from_csv_text(cls, content: str, delimiter: str = ",") -> "NGramDictionary":
        """
        Parse dictionary CSV content.

        The first line is a header and is skipped. Each following row needs an
        n-gram key and a finite score in [0, 1]; other rows are skipped and duplicate
        keys resolve to the last occurrence.

        Args:
            content: Raw CSV text
            delimiter: Field delimiter

        Returns:
            NGramDictionary
        """
        scores: Dict[str, float] = {}
        if not content:
            logger.warning("N-gram dictionary content is empty")
            return cls(scores)

        skipped = 0
        for raw in content.splitlines()[1:]:
            line = raw.strip()
            if not line:
                continue
            parts = line.split(delimiter)
            if len(parts) < 2:
                skipped += 1
                continue
            key = parts[0].strip().strip('"').lower()
            try:
                score = float(parts[1])
            except ValueError:
                skipped += 1
                continue
            if not math.isfinite(score) or not 0.0 <= score <= 1.0:
                skipped += 1
                continue
            if key:
                scores[key] = score

        logger.info("Loaded %d n-grams (%d malformed rows skipped)", len(scores), skipped)
        return cls(scores)

    @classmethod
    def from_file(cls, path: str) -> "NGramDictionary":
        """Load a dictionary CSV from disk."""
        csv_path = Path(path)
        if not csv_path.exists():
            raise FileNotFoundError(f"N-gram dictionary not found: {csv_path}")
        return cls.from_csv_text(csv_path.read_text(encoding="utf-8"))

    def __getitem__(self, key: str) -> float:
        return self._scores[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._scores)

    def __len__(self) -> int:
        return len(self._scores)

    def __repr__(self) -> str:
        return f"NGramDictionary({len(self)} entries)"


EMPTY_DICTIONARY = NGramDictionary()
