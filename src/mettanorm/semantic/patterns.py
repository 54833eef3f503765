"""
Top-level shape detection for engine output expressions.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from ..sexpr import Expr, matches


class PatternType(Enum):
    STATE_OF_AFFAIRS_ASSERTION = "state_of_affairs_assertion"
    CONTRADICTION_DETECTION = "contradiction_detection"
    CONFLICT_IDENTIFICATION = "conflict_identification"
    VIOLATION_NECESSITY = "violation_necessity"
    COMPLIANCE_FULFILLMENT = "compliance_fulfillment"
    UNKNOWN = "unknown"


# Checked in order; first match wins
PATTERNS: list[tuple[PatternType, tuple[str, ...]]] = [
    (PatternType.STATE_OF_AFFAIRS_ASSERTION, ("triple", "?", "type", "rexist")),
    (PatternType.CONTRADICTION_DETECTION, ("id_not_not_false", "?")),
    (PatternType.CONFLICT_IDENTIFICATION, ("conflict", "?", "?")),
    (PatternType.VIOLATION_NECESSITY, ("quote", "?")),
    (PatternType.COMPLIANCE_FULFILLMENT, ("is_complied_with_by", "?", "?")),
]


def detect_pattern(expr: Expr) -> PatternType:
    for pattern_type, pattern in PATTERNS:
        if matches(expr, pattern):
            return pattern_type
    return PatternType.UNKNOWN


def find_patterns_of_type(exprs: Iterable[Expr], pattern_type: PatternType) -> list[Expr]:
    return [expr for expr in exprs if detect_pattern(expr) is pattern_type]
