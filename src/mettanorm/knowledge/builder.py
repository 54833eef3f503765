"""
Knowledge set builder for MeTTa state-of-affairs and norms documents.

Assembly rules
--------------
- Every triple is kept as a fact, in document order.
- ``(T S type O)`` with S outside the ``soa_e`` namespace defines an entity.
  Later non-type triples on a known entity become its properties.
- Subjects starting with ``soa_e`` are eventualities:
  - ``type`` with a modality object sets the modality, any other object sets
    the type (unknown types are accepted with a warning);
  - ``soaHas_agent`` sets the agent;
  - other ``soaHas_*`` predicates become roles.
- ``ct-simple-not`` gives negations and ``(= (...) ...)`` logical expressions.
- The description comes from a ``State of Affairs (...)`` comment.

Input is read as bracket-balanced segments; a segment that fails to parse is
skipped and reported as a diagnostic, so a malformed expression never hides
the rest of the document.
"""

from __future__ import annotations

import re

from loguru import logger

from ..models.diagnostics import Diagnostic, DiagnosticKind, Severity
from ..sexpr import Expr, Segment, SList, parse_segments
from .models import (
    AGENT_ROLE,
    EVENTUALITY_PREFIX,
    ROLE_PREFIX,
    TYPE_PREDICATE,
    Eventuality,
    KnowledgeDocument,
    KnowledgeSet,
    LogicalExpression,
    Negation,
    Norm,
    Triple,
)
from .parsers import LET_HEAD, parse_consequence, parse_entity, parse_expression, parse_norm
from .validation import check_predicate, is_valid_eventuality_type, is_valid_modality

DESCRIPTION_PATTERN = re.compile(r"State of Affairs\s*\((.*)\)")


def extract_description(text: str) -> str:
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped.startswith(";"):
            continue
        match = DESCRIPTION_PATTERN.search(stripped)
        if match:
            return match.group(1).strip()
    return ""


def extract_header(text: str) -> list[str]:
    """Leading comment block of a document, up to the first blank or code line."""
    header: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped.startswith(";"):
            break
        header.append(stripped.lstrip(";").strip())
    return header


def _is_norm_rule(expr: Expr) -> bool:
    if not isinstance(expr, SList) or len(expr) < 3:
        return False
    body = expr[2]
    return isinstance(body, SList) and body.head() == LET_HEAD


class KnowledgeSetBuilder:
    """
    Build a KnowledgeSet (and norms) from MeTTa text.
    """

    def build(self, text: str) -> KnowledgeSet:
        knowledge, _ = self.build_with_diagnostics(text)
        return knowledge

    def build_with_diagnostics(self, text: str) -> tuple[KnowledgeSet, list[Diagnostic]]:
        parsed, diagnostics = self._read(text)
        knowledge = KnowledgeSet(description=extract_description(text))
        for expr, _segment in parsed:
            self._add_expression(knowledge, expr, diagnostics)

        logger.debug(
            f"KnowledgeSetBuilder: {len(knowledge.facts)} facts, "
            f"{len(knowledge.eventualities)} eventualities, {len(knowledge.entities)} entities"
        )
        return knowledge, diagnostics

    def build_from_expressions(self, exprs: list[Expr]) -> KnowledgeSet:
        knowledge = KnowledgeSet()
        diagnostics: list[Diagnostic] = []
        for expr in exprs:
            self._add_expression(knowledge, expr, diagnostics)
        return knowledge

    def extract_norms(self, text: str) -> list[Norm]:
        document, _ = self.build_document(text)
        return document.norms

    def build_document(self, text: str) -> tuple[KnowledgeDocument, list[Diagnostic]]:
        """Split a norms document into header, norms and state of affairs.

        ``(= (name ...) (let* ...))`` rules are norms. ``ct-triple-for-add``
        rules are attached to the norm they reference as consequences.
        Everything else goes to the state of affairs.
        """
        parsed, diagnostics = self._read(text)
        document = KnowledgeDocument(header=extract_header(text))
        document.knowledge.description = extract_description(text)
        norms_by_name: dict[str, Norm] = {}

        for expr, seg in parsed:
            consequence = parse_consequence(expr)
            if consequence is not None:
                norm_name, triple = consequence
                norm = norms_by_name.get(norm_name)
                if norm is None:
                    diagnostics.append(
                        Diagnostic(
                            kind=DiagnosticKind.VALIDATION_ERROR,
                            severity=Severity.WARNING,
                            message=f"Consequence refers to unknown norm '{norm_name}'",
                            line=seg.line,
                        )
                    )
                    continue
                norm.consequences.append(triple)
                continue

            if _is_norm_rule(expr):
                norm = parse_norm(expr, description=seg.comments[-1] if seg.comments else "")
                if norm is not None:
                    document.norms.append(norm)
                    norms_by_name[norm.name] = norm
                    continue

            self._add_expression(document.knowledge, expr, diagnostics)

        logger.debug(f"KnowledgeSetBuilder: {len(document.norms)} norms read")
        return document, diagnostics

    def _read(self, text: str) -> tuple[list[tuple[Expr, Segment]], list[Diagnostic]]:
        parsed, diagnostics = parse_segments(text)
        if diagnostics:
            logger.warning(f"Skipped {len(diagnostics)} malformed expression(s) while reading document")
        return parsed, diagnostics

    def _add_expression(
        self, knowledge: KnowledgeSet, expr: Expr, diagnostics: list[Diagnostic]
    ) -> None:
        item = parse_expression(expr)
        if isinstance(item, Triple):
            self._add_triple(knowledge, item, diagnostics)
        elif isinstance(item, Negation):
            knowledge.negations.append(item)
        elif isinstance(item, LogicalExpression):
            knowledge.logical_expressions.append(item)

    def _add_triple(
        self, knowledge: KnowledgeSet, triple: Triple, diagnostics: list[Diagnostic]
    ) -> None:
        knowledge.facts.append(triple)
        subject = triple.subject

        if subject.startswith(EVENTUALITY_PREFIX):
            self._add_eventuality_fact(knowledge, triple, diagnostics)
            return

        entity = parse_entity(triple)
        if entity is not None:
            knowledge.entities[subject] = entity
            return

        if subject in knowledge.entities:
            knowledge.entities[subject].properties[triple.predicate] = triple.object
            return

        if not check_predicate(triple.predicate):
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.UNKNOWN_PREDICATE,
                    severity=Severity.WARNING,
                    message=f"Unknown predicate '{triple.predicate}' on '{subject}'",
                )
            )

    def _add_eventuality_fact(
        self, knowledge: KnowledgeSet, triple: Triple, diagnostics: list[Diagnostic]
    ) -> None:
        eventuality = knowledge.eventualities.setdefault(
            triple.subject, Eventuality(name=triple.subject)
        )
        predicate = triple.predicate

        if predicate == TYPE_PREDICATE:
            if is_valid_modality(triple.object):
                eventuality.modality = triple.object
                return
            if not is_valid_eventuality_type(triple.object):
                logger.warning(
                    f"Eventuality '{triple.subject}' has unknown type '{triple.object}'"
                )
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.UNKNOWN_TYPE,
                        severity=Severity.WARNING,
                        message=f"Unknown eventuality type '{triple.object}' on '{triple.subject}'",
                    )
                )
            eventuality.type = triple.object
        elif predicate == AGENT_ROLE:
            eventuality.agent = triple.object
        elif predicate.startswith(ROLE_PREFIX):
            if not check_predicate(predicate):
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.UNKNOWN_ROLE,
                        severity=Severity.WARNING,
                        message=f"Unknown role '{predicate}' on '{triple.subject}'",
                    )
                )
            eventuality.roles[predicate] = triple.object
        elif not check_predicate(predicate):
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.UNKNOWN_PREDICATE,
                    severity=Severity.WARNING,
                    message=f"Unknown predicate '{predicate}' on '{triple.subject}'",
                )
            )

