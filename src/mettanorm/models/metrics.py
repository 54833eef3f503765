"""
Metrics projection consumed by result formatters.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ContradictionDetail(BaseModel):
    entity1: str
    entity2: str
    description: str


class ConflictDetail(BaseModel):
    entity1: str
    entity2: str
    description: str


class ViolationDetail(BaseModel):
    violator: str
    violated_rule: str
    description: str


class ComplianceDetail(BaseModel):
    entity: str
    obligation: str
    description: str


class Metrics(BaseModel):
    """
    Counts plus one human-readable detail per classified item.
    """

    inferred_facts: int = Field(default=0, description="Number of inferred propositions.")
    contradictions: int = 0
    contradiction_pairs: int = Field(default=0, description="Distinct (positive, negative) pairs.")
    conflicts: int = 0
    violations: int = 0
    compliances: int = 0
    inferred_state_of_affairs: list[str] = Field(default_factory=list)
    contradiction_details: list[ContradictionDetail] = Field(default_factory=list)
    conflict_details: list[ConflictDetail] = Field(default_factory=list)
    violation_details: list[ViolationDetail] = Field(default_factory=list)
    compliance_details: list[ComplianceDetail] = Field(default_factory=list)

    def total(self) -> int:
        return (
            self.inferred_facts
            + self.contradiction_pairs
            + self.conflicts
            + self.violations
            + self.compliances
        )

    def has_positive_inferences(self) -> bool:
        return self.inferred_facts > 0 or self.compliances > 0

    def has_negative_inferences(self) -> bool:
        return self.contradictions > 0 or self.conflicts > 0 or self.violations > 0
