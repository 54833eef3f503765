from .classifier import SemanticClassifier, base_action_key
from .metrics import to_metrics
from .patterns import PatternType, detect_pattern, find_patterns_of_type

__all__ = [
    "PatternType",
    "SemanticClassifier",
    "base_action_key",
    "detect_pattern",
    "find_patterns_of_type",
    "to_metrics",
]
