"""
Evaluation Scripts

- compare_backends.py: Accuracy/precision/recall/F1 of heuristic vs neural
- benchmark_detector.py: Classification latency, including long inputs
"""
