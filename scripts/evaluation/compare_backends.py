#!/usr/bin/env python3
"""
Cyberguard Backend Comparison

Scores a labeled CSV with the heuristic and neural backends and reports
accuracy, precision, recall and F1 for each.

Usage:
    python -m scripts.evaluation.compare_backends --input data/eval.csv
    python -m scripts.evaluation.compare_backends --input data/eval.csv --backends heuristic
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List

import numpy as np
import pandas as pd
from sklearn.metrics import (
    accuracy_score,
    classification_report,
    confusion_matrix,
    f1_score,
    precision_score,
    recall_score,
)
from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))
from scripts import CONFIGS_DIR, OUTPUTS_DIR

from cyberguard.config import BACKENDS, DetectorConfig, load_config
from cyberguard.orchestrator import ModelOrchestrator, create_detector


def predict(detector: ModelOrchestrator, texts: List[str], backend: str) -> Dict[str, np.ndarray]:
    """Run one backend over all texts."""
    preds, risks, fallbacks = [], [], 0
    for text in tqdm(texts, desc=backend):
        result = detector.analyze(text, preferred_backend=backend)
        preds.append(int(result.is_cyberbullying))
        risks.append(result.risk_level)
        fallbacks += int(result.fell_back)
    return {
        "preds": np.asarray(preds),
        "risk": np.asarray(risks),
        "fallbacks": fallbacks,
    }


def compute_metrics(y_true: np.ndarray, y_pred: np.ndarray) -> Dict[str, float]:
    return {
        "accuracy": accuracy_score(y_true, y_pred),
        "precision": precision_score(y_true, y_pred, zero_division=0),
        "recall": recall_score(y_true, y_pred, zero_division=0),
        "f1": f1_score(y_true, y_pred, zero_division=0),
    }


def main():
    """CLI interface."""
    parser = argparse.ArgumentParser(description="Compare cyberguard backends on labeled data")
    parser.add_argument("--input", type=str, required=True, help="CSV with 'text' and 'label' columns")
    parser.add_argument("--config", type=str, default=str(CONFIGS_DIR / "detector.yaml"))
    parser.add_argument("--backends", nargs="+", choices=BACKENDS, default=list(BACKENDS))
    parser.add_argument("--output", type=str, default=str(OUTPUTS_DIR / "reports" / "backend_comparison.json"))
    parser.add_argument("--max-samples", type=int, default=None, help="Evaluate only the first N rows")

    args = parser.parse_args()

    df = pd.read_csv(args.input)
    missing = {"text", "label"} - set(df.columns)
    if missing:
        print(f"Error: missing columns {sorted(missing)}")
        sys.exit(1)
    df = df.dropna(subset=["text", "label"])
    if args.max_samples:
        df = df.head(args.max_samples)

    texts = df["text"].astype(str).tolist()
    y_true = df["label"].astype(int).to_numpy()
    print(f"Loaded {len(texts):,} samples ({y_true.mean():.1%} positive)")

    config = load_config(args.config) if Path(args.config).exists() else DetectorConfig()
    detector = create_detector(config)

    report = {}
    for backend in args.backends:
        if backend == "neural" and not detector.initialize_neural():
            print("Neural backend unavailable; skipping")
            continue

        output = predict(detector, texts, backend)
        metrics = compute_metrics(y_true, output["preds"])
        metrics["fallbacks"] = output["fallbacks"]
        metrics["mean_risk"] = float(output["risk"].mean()) if len(texts) else 0.0
        report[backend] = metrics

        print(f"\n{backend.upper()}")
        print(classification_report(
            y_true, output["preds"],
            labels=[0, 1],
            target_names=["not_cyberbullying", "cyberbullying"],
            zero_division=0,
        ))
        print("Confusion matrix:")
        print(confusion_matrix(y_true, output["preds"], labels=[0, 1]))

    print("\n" + "=" * 60)
    print(f"{'backend':12s} {'acc':>8s} {'prec':>8s} {'recall':>8s} {'f1':>8s}")
    for backend, m in report.items():
        print(f"{backend:12s} {m['accuracy']:8.4f} {m['precision']:8.4f} {m['recall']:8.4f} {m['f1']:8.4f}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\nSaved to {output_path}")


if __name__ == "__main__":
    main()
