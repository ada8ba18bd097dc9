"""
Latency benchmark for the cyberguard detector.
Measures per-text classification time, including multi-kilobyte inputs that
exercise the pattern catalog's worst-case paths.
"""
import argparse
import json
import time
import numpy as np
from pathlib import Path
from tqdm import tqdm

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))
from scripts import CONFIGS_DIR, OUTPUTS_DIR

from cyberguard.config import DetectorConfig, load_config
from cyberguard.orchestrator import create_detector

# Sample texts for benchmarking
BENCHMARK_TEXTS = [
    "You're such a noob, uninstall the game",
    "Have a great day!",
    "I will kill you",
    "Your existence is burden",
    "you are embarrassing",
    "kill the process on the server",
    "Nobody asked for your opinion, loser",
    "Thanks for the help yesterday, you're amazing!",
    "why are you even talking lol",
    "This movie was trash but the food was good",
    "g0 k1ll y0urs3lf",
    "STOP BEING SO STUPID",
]


def long_texts(sizes=(1024, 4096, 16384)):
    """Adversarial long inputs: repeated characters, mixed words, no spaces."""
    texts = {}
    for size in sizes:
        texts[f"repeat_{size}"] = "a" * size
        texts[f"words_{size}"] = ("you are so " * (size // 11 + 1))[:size]
        texts[f"nospace_{size}"] = ("abcdefghij" * (size // 10 + 1))[:size]
        texts[f"punct_{size}"] = ("you're!? " * (size // 9 + 1))[:size]
    return texts


def latency_stats(times):
    return {
        'mean_ms': float(np.mean(times)),
        'std_ms': float(np.std(times)),
        'p50_ms': float(np.percentile(times, 50)),
        'p95_ms': float(np.percentile(times, 95)),
        'p99_ms': float(np.percentile(times, 99)),
        'max_ms': float(np.max(times)),
    }


def benchmark_classify(classifier, texts, n_runs=1000, fresh_cache=True):
    """Benchmark CyberbullyClassifier.classify on random sample texts."""
    times = []
    rng = np.random.default_rng(0)
    for i in tqdm(range(n_runs), desc="classify"):
        text = texts[rng.integers(len(texts))]
        if fresh_cache:
            # Defeat the pattern cache so every call does full matching
            text = f"{text} {i}"
        start = time.perf_counter()
        classifier.classify(text)
        times.append((time.perf_counter() - start) * 1000)
    return latency_stats(times)


def benchmark_long_inputs(classifier, n_runs=5):
    results = {}
    for name, text in tqdm(long_texts().items(), desc="long inputs"):
        times = []
        for _ in range(n_runs):
            classifier.semantic_matcher.cache.clear()
            start = time.perf_counter()
            classifier.classify(text)
            times.append((time.perf_counter() - start) * 1000)
        results[name] = latency_stats(times)
    return results


def benchmark_analyze(detector, texts, backend, n_runs=200):
    """End-to-end ModelOrchestrator.analyze latency."""
    times = []
    for i in tqdm(range(n_runs), desc=f"analyze[{backend}]"):
        text = f"{texts[i % len(texts)]} {i}"
        start = time.perf_counter()
        detector.analyze(text, preferred_backend=backend)
        times.append((time.perf_counter() - start) * 1000)
    return latency_stats(times)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--config', type=str, default=str(CONFIGS_DIR / "detector.yaml"))
    parser.add_argument('--n-runs', type=int, default=1000, help='Number of benchmark runs')
    parser.add_argument('--neural', action='store_true', help='Also benchmark the neural backend')
    parser.add_argument('--output', type=str, default=str(OUTPUTS_DIR / "reports" / "detector_benchmark.json"))
    args = parser.parse_args()

    config = load_config(args.config) if Path(args.config).exists() else DetectorConfig()
    detector = create_detector(config)
    classifier = detector.classifier

    print(f"N-gram dictionary entries: {len(classifier.ngram_dictionary)}")

    # Warmup
    for text in BENCHMARK_TEXTS:
        classifier.classify(text)

    print("\nRunning classify benchmark...")
    classify_results = benchmark_classify(classifier, BENCHMARK_TEXTS, n_runs=args.n_runs)

    print("\nRunning long-input benchmark...")
    long_results = benchmark_long_inputs(classifier)

    print("\nRunning end-to-end benchmark...")
    analyze_results = {'heuristic': benchmark_analyze(detector, BENCHMARK_TEXTS, "heuristic")}
    if args.neural:
        if detector.initialize_neural():
            analyze_results['neural'] = benchmark_analyze(detector, BENCHMARK_TEXTS, "neural")
        else:
            print("Neural backend unavailable; skipping")

    results = {
        'ngram_entries': len(classifier.ngram_dictionary),
        'classify': classify_results,
        'long_inputs': long_results,
        'analyze': analyze_results,
    }

    print("\n" + "=" * 60)
    print("DETECTOR BENCHMARK RESULTS")
    print("=" * 60)
    print(f"\nclassify ({args.n_runs} runs):")
    print(f"  Mean: {classify_results['mean_ms']:.3f} ms")
    print(f"  P50:  {classify_results['p50_ms']:.3f} ms")
    print(f"  P95:  {classify_results['p95_ms']:.3f} ms")
    print(f"  P99:  {classify_results['p99_ms']:.3f} ms")
    print("\nLong inputs (max ms):")
    for name, stats in long_results.items():
        print(f"  {name:16s}: {stats['max_ms']:.2f} ms")
    for backend, stats in analyze_results.items():
        print(f"\nanalyze[{backend}]: mean {stats['mean_ms']:.3f} ms, p95 {stats['p95_ms']:.3f} ms")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(results, f, indent=2)
    print(f"\nResults saved to {output_path}")


if __name__ == "__main__":
    main()
