from .analysis import (
    AnalysisResult,
    ComplianceRelation,
    Contradiction,
    ContradictionKind,
    NecessaryViolation,
    Proposition,
    RegulatoryConflict,
)
from .diagnostics import Diagnostic, DiagnosticKind, Severity
from .metrics import (
    ComplianceDetail,
    ConflictDetail,
    ContradictionDetail,
    Metrics,
    ViolationDetail,
)

__all__ = [
    "AnalysisResult",
    "ComplianceDetail",
    "ComplianceRelation",
    "ConflictDetail",
    "Contradiction",
    "ContradictionDetail",
    "ContradictionKind",
    "Diagnostic",
    "DiagnosticKind",
    "Metrics",
    "NecessaryViolation",
    "Proposition",
    "RegulatoryConflict",
    "Severity",
    "ViolationDetail",
]
