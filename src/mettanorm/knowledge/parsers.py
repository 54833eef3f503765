"""
Structural parsers from expressions to knowledge models.

Each parser returns ``None`` when the expression does not have the expected
shape. Callers treat that as "not this kind of expression", never as an error.
"""

from __future__ import annotations

from enum import Enum

from ..sexpr import Atom, Expr, ParseError, SList, atom_text, parse_one
from .models import (
    EVENTUALITY_PREFIX,
    TYPE_PREDICATE,
    Condition,
    Entity,
    LogicalExpression,
    LogicalOperator,
    MetaExpression,
    Negation,
    Norm,
    Triple,
    TripleKind,
)

NEGATION_HEAD = "ct-simple-not"
EQUALS_HEAD = "="
LET_HEAD = "let*"
CONSEQUENCE_HEAD = "ct-triple-for-add"
META_HEAD = "meta-id"

_TRIPLE_KINDS = {kind.value: kind for kind in TripleKind}
_LOGICAL_HEADS = {
    LogicalOperator.AND.value: LogicalOperator.AND,
    LogicalOperator.OR.value: LogicalOperator.OR,
    LogicalOperator.NOT.value: LogicalOperator.NOT,
}


class ExpressionKind(Enum):
    TRIPLE = "triple"
    NEGATION = "negation"
    LOGICAL_OR = "logical_or"
    LOGICAL_AND = "logical_and"
    LOGICAL_EQUAL = "logical_equal"
    UNKNOWN = "unknown"


def _inner_text(expr: Expr) -> str:
    if isinstance(expr, SList):
        return " ".join(item.to_metta() for item in expr)
    return expr.to_metta()


def parse_triple(expr: Expr) -> Triple | None:
    if not isinstance(expr, SList) or len(expr) != 4:
        return None
    kind = _TRIPLE_KINDS.get(expr.head() or "")
    subject = atom_text(expr[1])
    predicate = atom_text(expr[2])
    if kind is None or subject is None or predicate is None:
        return None

    obj = expr[3]
    if isinstance(obj, SList):
        return Triple(subject, predicate, obj.to_metta(), kind, object_is_nested=True)
    return Triple(subject, predicate, obj.text, kind)


def parse_triple_text(text: str) -> Triple | None:
    try:
        return parse_triple(parse_one(text))
    except ParseError:
        return None


def parse_negation(expr: Expr) -> Negation | None:
    if not isinstance(expr, SList) or len(expr) != 3 or expr.head() != NEGATION_HEAD:
        return None
    name = atom_text(expr[1])
    negation_id = atom_text(expr[2])
    if name is None or negation_id is None:
        return None
    return Negation(name, negation_id)


def parse_logical_expression(expr: Expr) -> LogicalExpression | None:
    if not isinstance(expr, SList) or len(expr) < 2 or expr.head() != EQUALS_HEAD:
        return None
    header = expr[1]
    if not isinstance(header, SList):
        return None
    head = header.head()
    if head is None:
        return None

    operands: list[str] = []
    operator = _LOGICAL_HEADS.get(head)
    if operator is not None:
        name = atom_text(header[1]) if len(header) > 1 else None
        if name is None:
            return None
    else:
        operator = LogicalOperator.EQUAL
        name = head
        first = atom_text(header[1]) if len(header) > 1 else None
        if first is not None:
            operands.append(first)

    if len(expr) > 2 and isinstance(expr[2], SList):
        operands.extend(item.text for item in expr[2] if isinstance(item, Atom))
    return LogicalExpression(operator, name, operands)


def parse_entity(triple: Triple) -> Entity | None:
    if triple.predicate != TYPE_PREDICATE or triple.subject.startswith(EVENTUALITY_PREFIX):
        return None
    return Entity(triple.subject, triple.object)


def parse_meta_expression(expr: Expr) -> MetaExpression | None:
    if not isinstance(expr, SList) or len(expr) < 2 or expr.head() != META_HEAD:
        return None
    meta_id = atom_text(expr[1])
    if meta_id is None:
        return None
    extra = [_inner_text(item) if isinstance(item, SList) else item.text for item in expr.items[2:5]]
    extra += [""] * (3 - len(extra))
    return MetaExpression(meta_id, *extra)


def expression_kind(expr: Expr) -> ExpressionKind:
    if not isinstance(expr, SList) or not expr.items:
        return ExpressionKind.UNKNOWN
    head = expr.head()
    if head in _TRIPLE_KINDS:
        return ExpressionKind.TRIPLE
    if head == NEGATION_HEAD:
        return ExpressionKind.NEGATION
    if head == EQUALS_HEAD and len(expr) > 1 and isinstance(expr[1], SList):
        inner_head = expr[1].head()
        if inner_head == LogicalOperator.OR.value:
            return ExpressionKind.LOGICAL_OR
        if inner_head == LogicalOperator.AND.value:
            return ExpressionKind.LOGICAL_AND
        return ExpressionKind.LOGICAL_EQUAL
    return ExpressionKind.UNKNOWN


def parse_expression(expr: Expr) -> Triple | Negation | LogicalExpression | None:
    kind = expression_kind(expr)
    if kind is ExpressionKind.TRIPLE:
        return parse_triple(expr)
    if kind is ExpressionKind.NEGATION:
        return parse_negation(expr)
    if kind is ExpressionKind.UNKNOWN:
        return None
    return parse_logical_expression(expr)


def parse_norm(expr: Expr, description: str = "") -> Norm | None:
    """Parse ``(= (name params...) (let* ((var (expr))...) True))``."""
    if not isinstance(expr, SList) or len(expr) < 3 or expr.head() != EQUALS_HEAD:
        return None
    header = expr[1]
    if not isinstance(header, SList):
        return None
    name = header.head()
    if name is None or name in _LOGICAL_HEADS or name == CONSEQUENCE_HEAD:
        return None

    parameters = [item.text for item in header.items[1:] if isinstance(item, Atom)]
    norm = Norm(name, parameters, description=description)

    body = expr[2]
    if isinstance(body, SList) and body.head() == LET_HEAD and len(body) > 1:
        bindings = body[1]
        if isinstance(bindings, SList):
            for binding in bindings:
                if not isinstance(binding, SList) or len(binding) < 2:
                    continue
                variable = atom_text(binding[0])
                if variable is None:
                    continue
                norm.conditions.append(Condition(variable, _inner_text(binding[1])))
    return norm


def parse_norm_text(text: str) -> Norm | None:
    try:
        return parse_norm(parse_one(text))
    except ParseError:
        return None


def parse_consequence(expr: Expr) -> tuple[str, Triple] | None:
    """Parse a ``ct-triple-for-add`` rule into (norm name, added triple)."""
    if not isinstance(expr, SList) or len(expr) < 3 or expr.head() != EQUALS_HEAD:
        return None
    header = expr[1]
    if not isinstance(header, SList) or len(header) != 4 or header.head() != CONSEQUENCE_HEAD:
        return None
    fields = [atom_text(item) for item in header.items[1:]]
    if any(value is None for value in fields):
        return None

    body = expr[2]
    if not isinstance(body, SList) or body.head() != LET_HEAD or len(body) < 2:
        return None
    bindings = body[1]
    if not isinstance(bindings, SList) or not bindings.items:
        return None
    binding = bindings[0]
    if not isinstance(binding, SList) or len(binding) < 2 or not isinstance(binding[1], SList):
        return None
    norm_name = binding[1].head()
    if norm_name is None:
        return None
    return norm_name, Triple(*fields)
