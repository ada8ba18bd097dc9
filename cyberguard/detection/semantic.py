"""
Semantic pattern matching.

Runs the whole pattern catalog against de-obfuscated text and memoizes the
result per text in a bounded, insertion-ordered cache.
"""

import logging
import threading
from typing import List, Optional, Sequence, Tuple

from cachetools import FIFOCache

from .patterns import (
    CAPS_EMPHASIS,
    CAPS_EMPHASIS_MEANING,
    CAPS_EMPHASIS_SEVERITY,
    SEMANTIC_PATTERNS,
)
from .types import SemanticMatch, SemanticPattern

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 1000


class PatternCache:
    """
    Bounded FIFO cache of text -> matched patterns.

    When full, inserting a new key evicts the oldest-inserted key. Reads do
    not refresh an entry's position and re-inserting a cached key keeps it
    where it was. Safe for concurrent use.
    """

    def __init__(self, capacity: int = DEFAULT_CACHE_SIZE):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries = FIFOCache(maxsize=capacity)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Tuple[SemanticMatch, ...]]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, matches: Sequence[SemanticMatch]) -> None:
        with self._lock:
            if key not in self._entries:
                self._entries[key] = tuple(matches)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class SemanticPatternMatcher:
    """Evaluates the semantic pattern catalog against a text."""

    def __init__(
        self,
        patterns: Sequence[SemanticPattern] = SEMANTIC_PATTERNS,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        self.patterns = patterns
        self.cache = PatternCache(cache_size)

    def match(self, text: str, caps_emphasis: bool = False) -> List[SemanticMatch]:
        """
        Return every catalog match for ``text``.

        Args:
            text: Lowercased, de-obfuscated text with punctuation intact
            caps_emphasis: Whether the raw input had aggressive capitals

        Returns:
            Matches in catalog order, plus a CAPS_EMPHASIS match if flagged.
            A fresh list is returned on every call.
        """
        if not isinstance(text, str):
            text = ""

        cached = self.cache.get(text)
        if cached is None:
            cached = tuple(self._evaluate(text))
            self.cache.put(text, cached)

        matches = list(cached)
        if caps_emphasis:
            matches.append(SemanticMatch(
                pattern=CAPS_EMPHASIS,
                meaning=CAPS_EMPHASIS_MEANING,
                severity=CAPS_EMPHASIS_SEVERITY,
                category="aggression",
            ))
        return matches

    def _evaluate(self, text: str) -> List[SemanticMatch]:
        if not text.strip():
            return []
        found = []
        for rule in self.patterns:
            if rule.pattern.search(text):
                found.append(SemanticMatch(
                    pattern=rule.pattern.pattern,
                    meaning=rule.meaning,
                    severity=rule.severity,
                    category=rule.category,
                ))
        logger.debug("%d semantic patterns matched", len(found))
        return found
