"""
Data models for normative knowledge documents.

A knowledge document has two parts:
- Norms: named rules whose body binds condition variables with ``let*``.
- State of affairs: facts (triples), negations, logical expressions and the
  eventualities / entities assembled from those facts.

Every model renders back to MeTTa text with ``to_metta()``. Rendering then
parsing gives back an equal value for triples, negations and logical
expressions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

EVENTUALITY_PREFIX = "soa_e"
SOA_PREFIX = "soa_"
AGENT_ROLE = "soaHas_agent"
ROLE_PREFIX = "soaHas_"
TYPE_PREDICATE = "type"
EXISTENCE_MODALITY = "rexist"


class TripleKind(Enum):
    FACT = "ct-triple"
    META = "meta-triple"


class LogicalOperator(Enum):
    AND = "ct-and"
    OR = "ct-or"
    NOT = "ct-not"
    EQUAL = "="


@dataclass
class Triple:
    subject: str
    predicate: str
    object: str
    kind: TripleKind = TripleKind.FACT
    # True when the object was a list; ``object`` then holds its canonical text
    object_is_nested: bool = False

    def __post_init__(self) -> None:
        if not self.subject or not self.predicate or not self.object:
            raise ValueError("Triple requires non-empty subject, predicate and object")

    def to_metta(self) -> str:
        return f"({self.kind.value} {self.subject} {self.predicate} {self.object})"


@dataclass
class Negation:
    name: str
    negation_id: str

    def to_metta(self) -> str:
        return f"(ct-simple-not {self.name} {self.negation_id})"

    def existence_fact(self) -> Triple | None:
        """The ``rexist`` fact that usually accompanies a negation."""
        if not self.name:
            return None
        return Triple(self.name, TYPE_PREDICATE, EXISTENCE_MODALITY)


@dataclass
class LogicalExpression:
    operator: LogicalOperator
    name: str
    operands: list[str] = field(default_factory=list)

    def to_metta(self) -> str:
        if self.operator is LogicalOperator.EQUAL:
            # EQUAL keeps its first operand inside the header: (= (name op0) (rest...))
            header_items = [self.name, *self.operands[:1]]
            rest = self.operands[1:]
        else:
            header_items = [self.operator.value, self.name]
            rest = self.operands
        text = f"(= ({' '.join(header_items)})"
        if rest:
            text += f" ({' '.join(rest)})"
        return text + ")"


@dataclass
class MetaExpression:
    id: str
    type: str = ""
    property: str = ""
    value: str = ""

    def to_metta(self) -> str:
        parts = ["meta-id", self.id] + [p for p in (self.type, self.property, self.value) if p]
        return f"({' '.join(parts)})"


@dataclass
class Condition:
    variable: str
    # Inner text of the bound expression, outer parentheses removed
    expression: str

    def to_metta(self) -> str:
        return f"({self.variable} ({self.expression}))"


@dataclass
class Norm:
    name: str
    parameters: list[str] = field(default_factory=list)
    conditions: list[Condition] = field(default_factory=list)
    consequences: list[Triple] = field(default_factory=list)
    description: str = ""

    def header(self) -> str:
        return f"({' '.join([self.name, *self.parameters])})"

    def to_metta(self) -> str:
        lines: list[str] = []
        if self.description:
            lines.append(f"; {self.description}")
        lines.append(f"(= {self.header()}")
        lines.append("   (let* (")
        for condition in self.conditions:
            lines.append(f"     {condition.to_metta()}")
        lines.append("   ) True))")
        for consequence in self.consequences:
            lines.append(
                f"(= (ct-triple-for-add {consequence.subject} {consequence.predicate} "
                f"{consequence.object}) (let* ((True {self.header()})) True))"
            )
        return "\n".join(lines)


def derive_expected_name(eventuality_type: str, agent: str) -> str:
    """Build the conventional eventuality name from its type and agent.

    ``soa_e`` + one letter for the type + the initials of the agent words,
    e.g. ``("soaMoor", "soa_ALEXANDRA_MAERSK") -> "soa_emam"``.
    """
    if not eventuality_type or not agent:
        return ""

    if eventuality_type.startswith("soa") and len(eventuality_type) > 3:
        type_initial = eventuality_type[3].lower()
    else:
        type_initial = eventuality_type[0].lower()

    agent_base = agent[len(SOA_PREFIX):] if agent.startswith(SOA_PREFIX) else agent
    initials = ""
    for word in re.split(r"[_-]", agent_base):
        for ch in word:
            if ch.isalpha():
                initials += ch.lower()
                break
    return EVENTUALITY_PREFIX + type_initial + initials


@dataclass
class Eventuality:
    name: str
    type: str = ""
    agent: str = ""
    modality: str = ""
    roles: dict[str, str] = field(default_factory=dict)

    def is_valid(self) -> bool:
        return bool(
            self.name and self.type and self.agent and self.modality == EXISTENCE_MODALITY
        )

    @property
    def expected_name(self) -> str:
        return derive_expected_name(self.type, self.agent)

    def triples(self) -> list[Triple]:
        result: list[Triple] = []
        if self.type:
            result.append(Triple(self.name, TYPE_PREDICATE, self.type))
        if self.modality:
            result.append(Triple(self.name, TYPE_PREDICATE, self.modality))
        if self.agent:
            result.append(Triple(self.name, AGENT_ROLE, self.agent))
        for role, value in self.roles.items():
            result.append(Triple(self.name, role, value))
        return result


@dataclass
class Entity:
    name: str
    type: str = ""
    properties: dict[str, str] = field(default_factory=dict)

    def triples(self) -> list[Triple]:
        result: list[Triple] = []
        if self.type:
            result.append(Triple(self.name, TYPE_PREDICATE, self.type))
        for predicate, value in self.properties.items():
            result.append(Triple(self.name, predicate, value))
        return result


@dataclass
class KnowledgeSet:
    facts: list[Triple] = field(default_factory=list)
    negations: list[Negation] = field(default_factory=list)
    logical_expressions: list[LogicalExpression] = field(default_factory=list)
    eventualities: dict[str, Eventuality] = field(default_factory=dict)
    entities: dict[str, Entity] = field(default_factory=dict)
    description: str = ""

    def is_empty(self) -> bool:
        return not (self.facts or self.negations or self.logical_expressions)

    def to_metta(self) -> str:
        lines: list[str] = []
        if self.description:
            lines.append(f"; State of Affairs ({self.description})")
        lines.extend(expr.to_metta() for expr in self.logical_expressions)
        lines.extend(fact.to_metta() for fact in self.facts)
        lines.extend(negation.to_metta() for negation in self.negations)

        # Entities and eventualities added programmatically have no backing facts yet
        known = {(f.subject, f.predicate, f.object) for f in self.facts}
        derived: list[Triple] = []
        for item in [*self.entities.values(), *self.eventualities.values()]:
            derived.extend(item.triples())
        for triple in derived:
            key = (triple.subject, triple.predicate, triple.object)
            if key not in known:
                known.add(key)
                lines.append(triple.to_metta())
        return "\n".join(lines)


@dataclass
class KnowledgeDocument:
    """A norms file: header comment, norms and the state of affairs."""

    header: list[str] = field(default_factory=list)
    norms: list[Norm] = field(default_factory=list)
    knowledge: KnowledgeSet = field(default_factory=KnowledgeSet)

    def to_metta(self) -> str:
        blocks: list[str] = []
        if self.header:
            blocks.append("\n".join(f"; {line}" for line in self.header))
        blocks.extend(norm.to_metta() for norm in self.norms)
        state = self.knowledge.to_metta()
        if state:
            blocks.append(state)
        return "\n\n".join(blocks) + "\n"
