"""
Structured diagnostics reported by recovering parsers and validation.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DiagnosticKind(str, Enum):
    PARSE_ERROR = "parse_error"
    VALIDATION_ERROR = "validation_error"
    UNKNOWN_TYPE = "unknown_type"
    UNKNOWN_ROLE = "unknown_role"
    UNKNOWN_PREDICATE = "unknown_predicate"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """
    One problem found while reading or validating input. Never raised.
    """

    kind: DiagnosticKind = Field(description="Category of the problem.")
    message: str = Field(description="Human-readable explanation.")
    severity: Severity = Field(
        default=Severity.ERROR,
        description="error for skipped or invalid input, warning for accepted-but-unknown input.",
    )
    line: Optional[int] = Field(default=None, description="1-based source line when known.")
