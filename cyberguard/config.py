"""
Cyberguard configuration.

Deployment tunables for the detector live in a single dataclass that can be
populated from a YAML file (see ``configs/detector.yaml``). Scoring policy
constants live next to the code that applies them.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Optional

import yaml

BACKENDS = ("heuristic", "neural")

# Keys whose values are filesystem paths (resolved against the YAML location)
PATH_KEYS = ("vocab_path", "model_path", "ngram_path")


@dataclass
class DetectorConfig:
    """Configuration for a cyberguard detector instance."""

    max_length: int = 128
    pattern_cache_size: int = 1000
    recommendation_ttl_seconds: float = 300.0
    recommendation_cache_size: int = 512
    vocab_path: Optional[str] = None
    model_path: Optional[str] = None
    ngram_path: Optional[str] = None
    preferred_backend: str = "heuristic"

    def __post_init__(self):
        if self.preferred_backend not in BACKENDS:
            raise ValueError(
                f"preferred_backend must be one of {BACKENDS}, got {self.preferred_backend!r}"
            )
        if self.max_length < 2:
            raise ValueError("max_length must leave room for [CLS] and [SEP]")
        if self.pattern_cache_size < 1 or self.recommendation_cache_size < 1:
            raise ValueError("cache sizes must be positive")
        if self.recommendation_ttl_seconds <= 0:
            raise ValueError("recommendation_ttl_seconds must be positive")

    @classmethod
    def from_dict(cls, data: Dict, base_dir: Optional[Path] = None) -> "DetectorConfig":
        """
        Build a config from a plain mapping.

        Args:
            data: Mapping of field name to value
            base_dir: Directory that relative resource paths are resolved against

        Returns:
            DetectorConfig
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}")

        values = dict(data)
        for key in PATH_KEYS:
            value = values.get(key)
            if value and base_dir is not None and not Path(value).is_absolute():
                values[key] = str(base_dir / value)
        return cls(**values)


def load_config(config_path: str) -> DetectorConfig:
    """Load configuration from YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return DetectorConfig.from_dict(data, base_dir=path.resolve().parent)
