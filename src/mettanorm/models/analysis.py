"""
Public models for semantic classification results.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .diagnostics import Diagnostic


class ContradictionKind(str, Enum):
    EXISTENCE = "existence"
    ACTION = "action"
    PAYMENT_METHOD = "payment_method"


class Proposition(BaseModel):
    """
    One inferred real-world statement (not a document fact).
    """

    entity: str = Field(description="Eventuality or entity identifier the statement is about.")
    action: str = Field(default="", description="Action verb, for example 'pay'.")
    agent: str = Field(default="", description="Resolved agent name.")
    instrument: str = Field(default="", description="Resolved instrument name.")
    exists: bool = Field(default=True, description="False for negated statements.")
    properties: dict[str, str] = Field(default_factory=dict)

    def describe(self) -> str:
        """``agent action using instrument (negated)``, omitting empty parts.

        The entity stands in for the agent when no agent is known.
        """
        parts = [part for part in (self.agent or self.entity, self.action) if part]
        text = " ".join(parts)
        if self.instrument:
            text += f" using {self.instrument}"
        if not self.exists:
            text += " (negated)"
        return text


class Contradiction(BaseModel):
    positive: Proposition = Field(description="The asserted side.")
    negative: Proposition = Field(description="The denied side.")
    kind: ContradictionKind = Field(description="existence, action or payment_method.")


class RegulatoryConflict(BaseModel):
    regulation1: str = Field(description="Description of the first regulation.")
    regulation2: str = Field(description="Description of the second regulation.")
    requirement: str = Field(description="What the two regulations disagree about.")
    affected_entity: str = Field(default="", description="Resolved entity caught by the conflict.")


class NecessaryViolation(BaseModel):
    violated_rule: str = Field(description="Rule that must be broken.")
    violator: str = Field(description="Regulation that forces the violation.")
    reason: str = Field(description="Why the violation is unavoidable.")


class ComplianceRelation(BaseModel):
    entity: str = Field(description="Resolved entity that complies.")
    obligation: str = Field(description="Resolved obligation being met.")
    fulfilled_by: str = Field(description="Identifier of the eventuality that fulfils it.")


class AnalysisResult(BaseModel):
    """
    Everything the classifier found in one engine output.
    """

    propositions: list[Proposition] = Field(default_factory=list)
    contradictions: list[Contradiction] = Field(default_factory=list)
    conflicts: list[RegulatoryConflict] = Field(default_factory=list)
    violations: list[NecessaryViolation] = Field(default_factory=list)
    compliances: list[ComplianceRelation] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(
        default_factory=list,
        description="Input lines that could not be parsed and were skipped.",
    )

    def is_empty(self) -> bool:
        return not (
            self.propositions
            or self.contradictions
            or self.conflicts
            or self.violations
            or self.compliances
        )
