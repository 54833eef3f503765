"""
Public API for the mettanorm package.
"""

from typing import Optional

from .config import InferenceConfig, load_config
from .logging import configure_logging
from .models import (
    AnalysisResult,
    ComplianceRelation,
    Contradiction,
    Diagnostic,
    Metrics,
    NecessaryViolation,
    Proposition,
    RegulatoryConflict,
)
from .semantic import SemanticClassifier, to_metrics


def analyze(text: str, config: Optional[InferenceConfig] = None) -> AnalysisResult:
    """Classify one reasoning-engine output buffer."""
    return SemanticClassifier.from_config(config or InferenceConfig()).classify(text)


def analyze_metrics(text: str, config: Optional[InferenceConfig] = None) -> Metrics:
    classifier = SemanticClassifier.from_config(config or InferenceConfig())
    return to_metrics(classifier.classify(text), classifier.resolver, classifier.templates)


__all__ = [
    "analyze",
    "analyze_metrics",
    "configure_logging",
    "load_config",
    "AnalysisResult",
    "ComplianceRelation",
    "Contradiction",
    "Diagnostic",
    "InferenceConfig",
    "Metrics",
    "NecessaryViolation",
    "Proposition",
    "RegulatoryConflict",
    "SemanticClassifier",
]
