#!/usr/bin/env python3
"""Build the n-gram toxicity dictionary from a labeled tweet dataset.

Expects the Davidson et al. hate-speech CSV layout: a ``class`` column
(0 = hate speech, 1 = offensive, 2 = neither) and a ``tweet`` column. Each
1-3 gram gets a weighted toxic ratio (hate counts 1.0, offensive 0.6); the
most toxic frequent n-grams are written as ``ngram,score`` CSV.

Usage:
    python -m scripts.data_pipeline.build_ngram_dictionary --input data/raw/labeled_data.csv
    python -m scripts.data_pipeline.build_ngram_dictionary --input data/raw/labeled_data.csv --top-k 5000
"""
from __future__ import annotations

import argparse
import re
import sys
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import pandas as pd
from tqdm import tqdm

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))
from scripts import ASSETS_DIR

CLASS_WEIGHTS = {0: 1.0, 1: 0.6, 2: 0.0}

STOPWORDS = frozenset([
    "a", "an", "the", "is", "are", "was", "were", "to", "in", "on", "at",
    "it", "that", "this", "of", "for", "with", "and", "or", "as", "i", "my",
    "you", "your", "we", "our", "he", "she", "they", "them", "rt", "http", "https", "co",
])

URL_PATTERN = re.compile(r"https?://\S+")
NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9\s]")
NUMERIC_PATTERN = re.compile(r"^\d+$")

MIN_OCCURRENCES = 3
MIN_TOXIC_RATIO = 0.65
DEFAULT_TOP_K = 2000


def tokenize(text: str | None) -> List[str]:
    """Lowercase, drop URLs and punctuation, keep tokens longer than 2 chars."""
    if not isinstance(text, str):
        return []
    text = URL_PATTERN.sub("", text.lower())
    text = NON_ALNUM_PATTERN.sub(" ", text)
    return [t for t in text.split() if len(t) > 2 and t not in STOPWORDS]


def iter_ngrams(tokens: List[str], max_n: int = 3) -> Iterable[str]:
    for n in range(1, max_n + 1):
        for i in range(len(tokens) - n + 1):
            yield " ".join(tokens[i:i + n])


def count_ngrams(df: pd.DataFrame, text_column: str, label_column: str) -> Dict[str, List[float]]:
    """Return n-gram -> [weighted toxic count, total count]."""
    counts: Dict[str, List[float]] = defaultdict(lambda: [0.0, 0])
    rows = zip(df[text_column], df[label_column])
    for text, label in tqdm(rows, total=len(df), desc="Counting n-grams"):
        weight = CLASS_WEIGHTS.get(int(label))
        if weight is None:
            continue
        for gram in iter_ngrams(tokenize(text)):
            entry = counts[gram]
            entry[0] += weight
            entry[1] += 1
    return counts


def select_ngrams(
    counts: Dict[str, List[float]],
    min_occurrences: int = MIN_OCCURRENCES,
    min_ratio: float = MIN_TOXIC_RATIO,
    top_k: int = DEFAULT_TOP_K,
) -> List[Tuple[str, float]]:
    """Keep frequent, highly toxic, non-numeric n-grams; best first."""
    selected = []
    for gram, (toxic, total) in counts.items():
        if NUMERIC_PATTERN.match(gram) or total < min_occurrences:
            continue
        ratio = toxic / total
        if ratio > min_ratio:
            selected.append((gram, round(ratio, 2)))
    selected.sort(key=lambda item: item[1], reverse=True)
    return selected[:top_k]


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Build the n-gram toxicity dictionary used by the heuristic detector."
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Labeled CSV with 'class' and 'tweet' columns.",
    )
    parser.add_argument(
        "--output",
        default=str(ASSETS_DIR / "ngram_dict.csv"),
        help="Destination CSV path (default: assets/ngram_dict.csv).",
    )
    parser.add_argument("--text-column", default="tweet", help="Text column name.")
    parser.add_argument("--label-column", default="class", help="Class column name.")
    parser.add_argument("--top-k", type=int, default=DEFAULT_TOP_K, help="Maximum n-grams kept.")
    parser.add_argument("--min-count", type=int, default=MIN_OCCURRENCES, help="Minimum occurrences.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: input not found: {input_path}")
        sys.exit(1)

    df = pd.read_csv(input_path)
    missing = {args.text_column, args.label_column} - set(df.columns)
    if missing:
        print(f"Error: missing columns {sorted(missing)} in {input_path}")
        sys.exit(1)

    df = df.dropna(subset=[args.text_column, args.label_column])
    print(f"Loaded {len(df):,} rows from {input_path}")

    counts = count_ngrams(df, args.text_column, args.label_column)
    print(f"Found {len(counts):,} unique n-grams")

    selected = select_ngrams(counts, min_occurrences=args.min_count, top_k=args.top_k)
    print(f"Selected {len(selected):,} toxic n-grams")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(selected, columns=["ngram", "score"]).to_csv(output_path, index=False)
    print(f"Saved dictionary to {output_path}")


if __name__ == "__main__":
    main()
