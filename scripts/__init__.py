"""
Cyberguard Scripts Package

Standalone scripts for:
- Data pipeline (n-gram dictionary construction)
- Neural backend export
- Backend evaluation and latency benchmarks
"""

from pathlib import Path

# Project root directory (parent of scripts/)
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Common paths
ASSETS_DIR = PROJECT_ROOT / "assets"
OUTPUTS_DIR = PROJECT_ROOT / "outputs"
CONFIGS_DIR = PROJECT_ROOT / "configs"
