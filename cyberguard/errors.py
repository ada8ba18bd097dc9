"""
Cyberguard error taxonomy.

Only the neural backend raises these, and only internally: the pipeline
converts them into its Failed state and the orchestrator falls back to the
heuristic detector, so callers of ``ModelOrchestrator.analyze`` never see them.
"""


class CyberguardError(Exception):
    """Base class for all cyberguard errors."""


class ResourceUnavailableError(CyberguardError):
    """A vocabulary/model asset is missing or the inference runtime is absent."""


class InferenceError(CyberguardError):
    """A loaded model failed while running."""
