#!/usr/bin/env python3
"""
Cyberguard: Command-line Inference

Usage:
    cyberguard --text "You're such a noob!"
    cyberguard --text "Kill yourself" --backend neural --config configs/detector.yaml
    cyberguard --file comments.txt --output predictions.json
    cyberguard --interactive
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List

from tqdm import tqdm

from .config import BACKENDS, DetectorConfig, load_config
from .orchestrator import ModelOrchestrator, create_detector


def summarize(result: Dict, text: str) -> Dict:
    """Compact per-text record for batch output."""
    return {
        "text": text[:100] + "..." if len(text) > 100 else text,
        "is_cyberbullying": result["is_cyberbullying"],
        "risk_level": result["risk_level"],
        "risk_status": result["risk_status"],
        "dominant_category": result["dominant_category"],
        "backend_used": result["backend_used"],
        "fell_back": result["fell_back"],
        "categories": result["categories"],
    }


def analyze_texts(
    detector: ModelOrchestrator,
    texts: List[str],
    backend: str,
    show_progress: bool = True,
) -> List[Dict]:
    iterator = tqdm(texts, desc="Analyzing") if show_progress else texts
    results = []
    for text in iterator:
        result = detector.analyze(text, preferred_backend=backend).to_dict()
        results.append(summarize(result, text))
    return results


def print_result(result: Dict) -> None:
    print(f"\n  Cyberbullying: {result['is_cyberbullying']}")
    print(f"  Risk level:    {result['risk_level']} ({result['risk_status']})")
    print(f"  Dominant:      {result['dominant_category']}")
    backend = result["backend_used"]
    if result["fell_back"]:
        backend += " (fallback)"
    print(f"  Backend:       {backend}")
    print("  Categories:")
    for name, score in result["categories"].items():
        bar = "█" * int(score * 20)
        print(f"    {name:15s}: {score:.3f} {bar}")
    classification = result.get("classification")
    if classification and classification["semantic_matches"]:
        print("  Patterns:")
        for match in classification["semantic_matches"]:
            print(f"    - {match['meaning']} ({match['severity']:.2f})")
    recommendation = result.get("recommendation")
    if recommendation:
        print(f"\n{recommendation['recommendation']}")
    print()


def main(argv=None):
    """CLI interface."""
    parser = argparse.ArgumentParser(description="Cyberguard cyberbullying detection")
    parser.add_argument("--config", type=str, help="Detector YAML config")
    parser.add_argument("--text", type=str, help="Single text to analyze")
    parser.add_argument("--file", type=str, help="File with texts (one per line)")
    parser.add_argument("--output", type=str, help="Output JSON file")
    parser.add_argument("--backend", type=str, choices=BACKENDS, default=None,
                        help="Backend to try first (default: from config)")
    parser.add_argument("--interactive", action="store_true", help="Interactive mode")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        config = load_config(args.config) if args.config else DetectorConfig()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    detector = create_detector(config)
    backend = args.backend or config.preferred_backend

    if args.text:
        result = detector.analyze(args.text, preferred_backend=backend).to_dict()
        print("\nAnalysis:")
        print(json.dumps(result, indent=2))

    elif args.file:
        path = Path(args.file)
        if not path.exists():
            print(f"Error: file not found: {path}")
            sys.exit(1)
        texts = [line for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]
        print(f"Processing {len(texts)} texts...")
        results = analyze_texts(detector, texts, backend)

        flagged = sum(1 for r in results if r["is_cyberbullying"])
        print(f"Flagged {flagged}/{len(results)} texts")

        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                json.dump(results, f, indent=2)
            print(f"Saved to {args.output}")
        else:
            for r in results[:5]:
                print(json.dumps(r, indent=2))
            if len(results) > 5:
                print(f"... and {len(results) - 5} more")

    elif args.interactive:
        print("\n" + "=" * 60)
        print("Cyberguard Interactive Mode")
        print(f"Backend: {backend} (neural available: {detector.neural_available})")
        print("Type 'quit' to exit")
        print("=" * 60 + "\n")

        while True:
            try:
                text = input("Enter text: ").strip()
                if text.lower() in ("quit", "exit", "q"):
                    break
                if not text:
                    continue
                print_result(detector.analyze(text, preferred_backend=backend).to_dict())

            except (KeyboardInterrupt, EOFError):
                print("\nExiting...")
                break

    else:
        parser.print_help()


if __name__ == "__main__":
    main()
