"""
Descriptions for the regulation calls that appear in conflicts and violations.

The engine reports regulations as calls such as ``(inrs-prohibited-id soa_X)``.
Known call heads get a fixed description; unknown heads pass through as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..resolution import EntityResolver
from ..sexpr import Atom, SList

NOT_OPTIONAL_ATOM = "not_opt"
NOT_OPTIONAL_DESCRIPTION = "Not optional (prohibited)"
PORT_TREASURY_ID = "soa_sptMICT"


@dataclass
class RegulationCall:
    head: str
    operands: list[str] = field(default_factory=list)

    @property
    def entity(self) -> str:
        return self.operands[0] if self.operands else ""


def read_call(expr: SList) -> RegulationCall | None:
    head = expr.head()
    if head is None:
        return None
    operands = [item.text for item in expr.items[1:] if isinstance(item, Atom)]
    return RegulationCall(head, operands)


def describe_conflict_call(call: RegulationCall, resolver: EntityResolver) -> str:
    if call.head == "inrs-prohibited-id":
        return "EU MiCA regulation (INRS prohibition)"
    if call.head == "mod-not-id":
        modality = call.operands[1] if len(call.operands) > 1 else ""
        return f"{resolver.resolve_entity(call.entity)} is not {modality}".rstrip()
    if call.head == "pay-obligatory-id":
        if len(call.operands) > 1 and call.operands[1] == PORT_TREASURY_ID:
            return "MICT Smart Port payment obligation"
        return "Payment obligation"
    if call.head == "inrs-only-id":
        return "INRS-only requirement"
    return call.head


def describe_violator_call(call: RegulationCall, resolver: EntityResolver) -> str:
    if call.head == "inrs-prohibited-id":
        if call.entity:
            entity = resolver.resolve_entity(call.entity)
            return f"EU MiCA regulation prohibiting {entity} from using INRS"
        return "EU MiCA regulation (INRS prohibition)"
    return call.head


def describe_rule_call(call: RegulationCall) -> str:
    if call.head == "inrs-only-id":
        return "MICT port INRS-only payment requirement"
    if call.head == "pay-obligatory-id":
        return "Port payment obligation"
    return call.head


def describe_conflict_atom(atom: str, resolver: EntityResolver) -> str:
    if atom == NOT_OPTIONAL_ATOM:
        return NOT_OPTIONAL_DESCRIPTION
    return resolver.resolve_entity(atom)
